"""日志模块

使用示例:
    from folio.log import setup_root_logger, get_logger

    setup_root_logger(config=settings.logging)
    logger = get_logger()
"""

from .logger import (
    setup_logger,
    setup_root_logger,
    setup_sql_logger,
    create_formatter,
    get_logger,
    MicrosecondFormatter,
    DEFAULT_LOG_FORMAT,
    api_logger,
    auth_logger,
    orm_logger,
    logger,
)

__all__ = [
    "setup_logger",
    "setup_root_logger",
    "setup_sql_logger",
    "create_formatter",
    "get_logger",
    "MicrosecondFormatter",
    "DEFAULT_LOG_FORMAT",
    "api_logger",
    "auth_logger",
    "orm_logger",
    "logger",
]
