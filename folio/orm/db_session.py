"""
数据库会话管理模块

公开 API:
- db_manager: 数据库管理器单例
- init_database(): 初始化数据库连接
- get_engine(): 获取数据库引擎
- get_db(): FastAPI 依赖注入用的生成器
- db_session_scope(): 非 HTTP 场景的上下文管理器
- on_request_end(): 请求结束清理

会话按请求ID隔离（scoped_session + ContextVar），内容库的批量写入另外通过
db_manager.session_maker 创建独立 session，每次操作一个事务。
"""

import os
import time
import logging
from typing import Optional, Callable, Any, Generator
from uuid import uuid4
from contextlib import contextmanager
from contextvars import ContextVar

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, scoped_session, Session
from sqlalchemy.pool import QueuePool, StaticPool

from folio.log import get_logger

_logger = get_logger("folio.orm.session")

__all__ = [
    'db_manager',
    'init_database',
    'get_engine',
    'get_db',
    'db_session_scope',
    'on_request_end',
]


class DatabaseManager:
    """数据库管理器（单例）

    使用示例:
        from folio.orm import db_manager

        db_manager.init(database_url="sqlite:///./portfolio.db")
        engine = db_manager.engine
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._engine = None
        self._session_scope = None
        self._session_maker = None
        self._request_id_var: ContextVar[str] = ContextVar('request_id', default='')
        # request_id 锁定标记，防止同一请求内被覆盖导致 session 泄漏
        self._request_id_explicit: ContextVar[bool] = ContextVar('request_id_explicit', default=False)
        self._initialized = True

    # ==================== 属性访问 ====================

    @property
    def engine(self):
        if self._engine is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._engine

    @property
    def session_scope(self):
        if self._session_scope is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._session_scope

    @property
    def session_maker(self) -> sessionmaker:
        """独立 session 工厂，不受请求作用域管理"""
        if self._session_maker is None:
            raise RuntimeError("数据库未初始化，请先调用 init_database()")
        return self._session_maker

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None and self._session_scope is not None

    # ==================== 核心方法 ====================

    def init(
        self,
        database_url: str = None,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        sql_log_enabled: bool = False,
        scopefunc: Callable = None,
        config: Any = None,
        logging_config: Any = None,
        auto_setup_query: bool = True
    ):
        """初始化数据库连接

        Args:
            database_url: 数据库连接URL（如果提供 config 则忽略）
            echo: 是否输出SQL语句
            sql_log_enabled: 是否记录SQL执行耗时
            scopefunc: session作用域函数，默认使用当前请求ID
            config: DatabaseSettings，提供后自动提取配置
            logging_config: LoggingSettings，提供后自动提取 sql_log_enabled
            auto_setup_query: 是否自动设置 CoreModel.query 属性

        Returns:
            tuple: (engine, session_scope)

        使用示例:
            engine, session = init_database(config=settings.database)

            @app.get("/messages")
            def list_messages(db: Session = Depends(get_db)):
                ...
        """
        if config is not None:
            database_url = getattr(config, "url", database_url)
            echo = getattr(config, "echo", echo)
            pool_size = getattr(config, "pool_size", pool_size)
            max_overflow = getattr(config, "max_overflow", max_overflow)
            pool_timeout = getattr(config, "pool_timeout", pool_timeout)
            pool_recycle = getattr(config, "pool_recycle", pool_recycle)
            pool_pre_ping = getattr(config, "pool_pre_ping", pool_pre_ping)

        if logging_config is not None:
            sql_log_enabled = getattr(logging_config, "sql_log_enabled", sql_log_enabled)

        if not database_url:
            raise ValueError("database_url 是必需的，请通过参数或 config 提供")

        _logger.info(f"数据库配置URL: {database_url}")

        if database_url.startswith("sqlite:///"):
            db_path = database_url[len("sqlite:///"):]
            if db_path in ("", ":memory:"):
                # 内存数据库：单连接共享
                self._engine = create_engine(
                    database_url,
                    echo=echo,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                )
                _logger.info("SQLite内存数据库引擎创建成功（StaticPool）")
            else:
                _logger.info(f"SQLite文件数据库路径: {os.path.abspath(db_path)}")
                self._engine = create_engine(
                    database_url,
                    echo=echo,
                    connect_args={"check_same_thread": False, "timeout": pool_timeout},
                    poolclass=QueuePool,
                    pool_size=pool_size,
                    max_overflow=max_overflow,
                    pool_timeout=pool_timeout,
                    pool_pre_ping=pool_pre_ping,
                    pool_recycle=pool_recycle
                )
        else:
            self._engine = create_engine(
                database_url,
                echo=echo,
                pool_pre_ping=pool_pre_ping,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=pool_recycle
            )
            _logger.info("数据库引擎创建成功")

        if sql_log_enabled:
            sql_logger = logging.getLogger("sqlalchemy.engine")

            @event.listens_for(self._engine, "before_cursor_execute")
            def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
                conn.info.setdefault('query_start_time', []).append(time.time())

            @event.listens_for(self._engine, "after_cursor_execute")
            def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
                total_time = time.time() - conn.info['query_start_time'].pop()
                sql_logger.info(f"[执行耗时: {total_time*1000:.2f}ms] {statement}")

        self._session_maker = sessionmaker(autocommit=False, autoflush=True, bind=self._engine)
        self._session_scope = scoped_session(self._session_maker, scopefunc=scopefunc or self._get_request_id)

        if auto_setup_query:
            from .core_model import CoreModel
            CoreModel.query = self._session_scope.query_property()

        _logger.info("数据库session创建成功")
        return self._engine, self._session_scope

    def get_session(self) -> Session:
        """获取当前请求作用域的 session（低级 API，优先使用 get_db / db_session_scope）"""
        session = self.session_scope()
        if not self._request_id_explicit.get():
            self._request_id_explicit.set(True)
        return session

    def cleanup(self):
        """请求结束时提交未保存的更改并移除 session（幂等）"""
        request_id = self._get_request_id()

        if self._session_scope and self._session_scope.registry.has():
            session = self._session_scope()
            if session.dirty or session.new or session.deleted:
                try:
                    session.commit()
                    _logger.debug(f"[request_id={request_id}] 自动提交成功")
                except Exception as e:
                    _logger.warning(f"[request_id={request_id}] 自动提交失败，回滚: {e}")
                    session.rollback()
            self._session_scope.remove()

        self._request_id_var.set('')
        self._request_id_explicit.set(False)

    # ==================== 请求ID管理 ====================

    def _set_request_id(self, request_id: str = None) -> str:
        """设置当前请求ID，已锁定时返回已有的值"""
        if self._request_id_explicit.get():
            return self._request_id_var.get()

        if not request_id:
            request_id = uuid4().hex[:8]

        self._request_id_var.set(request_id)
        self._request_id_explicit.set(True)
        return request_id

    def _get_request_id(self) -> str:
        value = self._request_id_var.get()
        if not value:
            value = uuid4().hex[:8]
            self._request_id_var.set(value)
        return value


# ==================== 全局单例 ====================

db_manager = DatabaseManager()


def init_database(
    database_url: str = None,
    echo: bool = False,
    config: Any = None,
    logging_config: Any = None,
    **kwargs
):
    """初始化数据库连接，参数说明见 DatabaseManager.init()"""
    return db_manager.init(
        database_url=database_url,
        echo=echo,
        config=config,
        logging_config=logging_config,
        **kwargs
    )


def get_engine():
    return db_manager.engine


def on_request_end():
    """请求结束时提交并清理 session（幂等）"""
    db_manager.cleanup()


def get_db() -> Generator[Session, None, None]:
    """获取数据库 session（FastAPI 依赖注入）

    使用示例:
        @router.get("/messages")
        def list_messages(db: Session = Depends(get_db)):
            return ContactMessage.query.all()
    """
    with db_session_scope() as session:
        yield session


@contextmanager
def db_session_scope(
    request_id: Optional[str] = None,
    auto_commit: bool = True
) -> Generator[Session, None, None]:
    """非 HTTP 场景的 session 上下文管理器

    使用示例:
        with db_session_scope(request_id="seed") as session:
            session.add(AdminUser(email="me@example.com"))
        # 自动提交并清理
    """
    db_manager._set_request_id(request_id)
    session = db_manager.get_session()
    try:
        yield session
        if auto_commit:
            session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        on_request_end()
