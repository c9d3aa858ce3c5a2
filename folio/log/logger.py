"""
日志工具模块
提供简化的日志配置功能
"""

import inspect
import logging
import os
import time
from logging.handlers import RotatingFileHandler
from typing import Any, Optional


class MicrosecondFormatter(logging.Formatter):
    """支持微秒精度的日志格式化器"""

    def formatTime(self, record, datefmt=None):
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return "%s.%06d" % (s, (record.created - int(record.created)) * 1000000)


# 默认日志格式
DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"
SQL_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def create_formatter(
    log_format: str = None,
    datefmt: str = "%Y-%m-%d %H:%M:%S",
    use_microseconds: bool = True
) -> logging.Formatter:
    """创建日志格式化器"""
    fmt = log_format or DEFAULT_LOG_FORMAT
    if use_microseconds:
        return MicrosecondFormatter(fmt=fmt, datefmt=datefmt)
    return logging.Formatter(fmt, datefmt=datefmt)


def _extract_file_handler_options(config: Any) -> dict:
    return {
        "maxBytes": getattr(config, "parsed_file_max_bytes", 10 * 1024 * 1024),
        "backupCount": getattr(config, "file_backup_count", 5),
        "encoding": getattr(config, "file_encoding", "utf-8"),
    }


def setup_logger(
    name: str = None,
    level: str = "INFO",
    log_file: str = None,
    log_format: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    propagate: bool = True,
    file_handler_options: dict = None
) -> logging.Logger:
    """设置并返回配置好的日志记录器

    Args:
        name: 日志记录器名称，默认为root logger
        level: 日志级别，可选：DEBUG, INFO, WARNING, ERROR, CRITICAL
        log_file: 日志文件路径，如果不指定则不写入文件
        log_format: 日志格式，如果不指定则使用默认格式
        console: 是否输出到控制台
        use_microseconds: 是否使用微秒精度时间戳
        propagate: 是否传播到父日志器
        file_handler_options: 轮转文件处理器选项
            - maxBytes: 文件最大大小
            - backupCount: 备份文件数量
            - encoding: 文件编码

    使用示例:
        from folio.log import setup_logger

        logger = setup_logger("folio", level="DEBUG", log_file="logs/folio.log")
    """
    _logger = logging.getLogger(name) if name else logging.getLogger()
    _logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    _logger.propagate = propagate
    _logger.handlers.clear()

    formatter = create_formatter(log_format, use_microseconds=use_microseconds)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        _logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        if file_handler_options:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=file_handler_options.get("maxBytes", 10 * 1024 * 1024),
                backupCount=file_handler_options.get("backupCount", 5),
                encoding=file_handler_options.get("encoding", "utf-8"),
            )
        else:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')

        file_handler.setFormatter(formatter)
        _logger.addHandler(file_handler)

    return _logger


def setup_sql_logger(level: str = "INFO", console: bool = True) -> logging.Logger:
    """设置 SQLAlchemy engine 日志记录器"""
    return setup_logger(
        name="sqlalchemy.engine",
        level=level,
        log_format=SQL_LOG_FORMAT,
        console=console,
        propagate=False,
    )


def setup_root_logger(
    level: str = "INFO",
    log_file: str = None,
    console: bool = True,
    use_microseconds: bool = True,
    file_handler_options: dict = None,
    config: Any = None,
) -> logging.Logger:
    """设置根日志记录器

    子日志器会自动继承根日志器的处理器配置。

    使用示例:
        logger = setup_root_logger(level="INFO", log_file="logs/folio.log")
        logger = setup_root_logger(config=settings.logging)
    """
    if config is not None:
        level = getattr(config, "level", level)
        log_file = getattr(config, "file_path", log_file) or None
        console = getattr(config, "enable_console", console)
        use_microseconds = getattr(config, "use_microseconds", use_microseconds)
        file_handler_options = _extract_file_handler_options(config)

        if getattr(config, "sql_log_enabled", False):
            setup_sql_logger(getattr(config, "sql_log_level", "INFO"), console=console)

    return setup_logger(
        name=None,
        level=level,
        log_file=log_file,
        console=console,
        use_microseconds=use_microseconds,
        propagate=False,
        file_handler_options=file_handler_options
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """获取日志记录器，支持自动推断模块名

    无参数调用时，自动从调用栈获取模块的 __name__ 作为日志器名称。
    简写名称（不含点号）自动添加 'folio.' 前缀。

    使用示例:
        logger = get_logger()                     # 在 folio/reorder/controller.py 中 -> "folio.reorder.controller"
        logger = get_logger("api")                # -> "folio.api"
        logger = get_logger("sqlalchemy.engine")  # -> "sqlalchemy.engine"
    """
    if name is None:
        frame = inspect.currentframe()
        if frame is not None and frame.f_back is not None:
            name = frame.f_back.f_globals.get('__name__', 'folio')
        else:
            name = 'folio'
    elif name != 'folio' and '.' not in name:
        name = f"folio.{name}"

    return logging.getLogger(name)


api_logger = get_logger("api")
auth_logger = get_logger("auth")
orm_logger = get_logger("orm")

logger = logging.getLogger("folio")
