"""
Pytest 公共配置和 Fixtures

提供测试所需的公共资源：
- 内存数据库与请求作用域 session
- 内容库（内存实现 / SQL 实现）
- FastAPI 应用与测试客户端
- JWT 管理器
"""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from folio.auth import JWTManager, TokenPayload
from folio.config import AppSettings, DatabaseSettings, JWTSettings, LoggingSettings, UploadSettings
from folio.content import MemoryContentStore, SqlContentStore
from folio.orm import Base, db_manager, init_database
from tests.helpers import auth_headers, register_and_login


# ==================== 基础 Fixtures ====================

@pytest.fixture(scope="session")
def temp_dir():
    """创建临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def jwt_secret_key():
    return "test-secret-key-for-folio"


@pytest.fixture
def jwt_manager(jwt_secret_key):
    return JWTManager(
        secret_key=jwt_secret_key,
        access_token_expire_minutes=30,
        refresh_token_expire_days=7,
        refresh_token_sliding_days=2,
    )


@pytest.fixture
def sample_token_payload():
    return TokenPayload(
        sub="owner@example.com",
        user_id=1,
        email="owner@example.com",
        display_name="Owner",
        roles=["admin"],
    )


# ==================== 数据库 Fixtures ====================

@pytest.fixture
def memory_engine():
    """独立的内存数据库引擎（不经过 db_manager）"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session():
    """初始化 db_manager 并返回当前作用域的 session，CoreModel.query 可用"""
    engine, _ = init_database("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    session = db_manager.get_session()
    yield session
    db_manager.cleanup()
    engine.dispose()


# ==================== 内容库 Fixtures ====================

@pytest.fixture
def memory_store():
    return MemoryContentStore()


@pytest.fixture
def sql_store(memory_engine):
    return SqlContentStore(sessionmaker(bind=memory_engine))


# ==================== FastAPI Fixtures ====================

@pytest.fixture
def settings(temp_dir, jwt_secret_key):
    return AppSettings(
        database=DatabaseSettings(url="sqlite:///:memory:"),
        jwt=JWTSettings(secret_key=jwt_secret_key),
        logging=LoggingSettings(level="WARNING"),
        upload=UploadSettings(root_dir=os.path.join(temp_dir, "uploads")),
        allow_registration=True,
    )


@pytest.fixture
def app(settings, memory_store):
    """使用内存内容库的测试应用"""
    from folio.app import create_app

    return create_app(settings, store=memory_store, setup_logging=False)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
    db_manager.engine.dispose()


@pytest.fixture
def admin_headers(client):
    """第一个注册的账号是管理员"""
    return auth_headers(register_and_login(client))
