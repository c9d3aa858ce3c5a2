"""应用工厂

使用示例:
    from folio.app import create_app
    from folio.config import AppSettings, load_yaml_config

    app = create_app(load_yaml_config("config/settings.yaml", AppSettings))

    # uvicorn "folio.app:create_app" --factory
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from folio.aggregator import ContentAggregator
from folio.api import create_admin_router, create_auth_router, create_public_router
from folio.auth import AuthService, JWTManager
from folio.config import AppSettings
from folio.content import ContentStore, SqlContentStore, seed_store
from folio.exceptions import register_exception_handlers
from folio.log import get_logger, setup_root_logger
from folio.middleware import RequestIDMiddleware
from folio.orm import Base, db_manager, init_database
from folio.response import Resp
from folio.uploads import LocalUploadStorage

logger = get_logger()


def create_app(
    settings: Optional[AppSettings] = None,
    store: Optional[ContentStore] = None,
    setup_logging: bool = True,
) -> FastAPI:
    """创建 FastAPI 应用

    Args:
        settings: 应用配置，默认从环境变量读取
        store: 内容库，不传时使用数据库内容库；
            settings.content.use_sample_data 为 True 时不使用内容库
        setup_logging: 是否按 settings.logging 配置根日志器
    """
    settings = settings or AppSettings()
    if setup_logging:
        setup_root_logger(config=settings.logging)

    engine, _ = init_database(config=settings.database, logging_config=settings.logging)
    Base.metadata.create_all(engine)

    if settings.content.use_sample_data:
        store = None
    elif store is None:
        store = SqlContentStore(db_manager.session_maker)

    if store is not None and settings.content.seed_sample_data:
        written = seed_store(store)
        logger.info(f"示例内容写入完成: {written}")

    app = FastAPI(title=settings.app_name, debug=settings.debug)

    jwt_manager = JWTManager.from_settings(settings.jwt)
    app.state.settings = settings
    app.state.jwt_manager = jwt_manager
    app.state.auth_service = AuthService(jwt_manager)
    app.state.store = store
    app.state.aggregator = ContentAggregator(
        store,
        sample_fallback=settings.content.sample_fallback,
        cache_ttl=settings.content.cache_ttl_seconds,
    )
    app.state.upload_storage = LocalUploadStorage.from_settings(settings.upload)
    app.state.reorder_controllers = {}

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)

    app.include_router(create_public_router())
    app.include_router(create_auth_router())
    app.include_router(create_admin_router())

    if settings.upload.base_url.startswith("/"):
        app.mount(
            settings.upload.base_url,
            StaticFiles(directory=settings.upload.root_dir, check_dir=False),
            name="uploads",
        )

    @app.get("/health", tags=["public"], summary="健康检查")
    def health():
        return Resp.OK({
            "status": "ok",
            "using_sample_data": app.state.aggregator.is_using_sample_data,
        })

    logger.info(f"{settings.app_name} 应用已创建 (store={type(store).__name__ if store else None})")
    return app
