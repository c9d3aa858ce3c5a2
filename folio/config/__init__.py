"""配置模块

- AppSettings: 应用配置，支持 YAML + 环境变量
- 子配置类: JWTSettings, DatabaseSettings, LoggingSettings, ContentSettings, UploadSettings
- ConfigLoader: YAML 配置加载器

快速开始:
    from folio.config import AppSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)
"""

from .settings import (
    AppSettings,
    JWTSettings,
    DatabaseSettings,
    LoggingSettings,
    ContentSettings,
    UploadSettings,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
    load_env_file,
    set_env_from_file,
)

__all__ = [
    "AppSettings",
    "JWTSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "ContentSettings",
    "UploadSettings",
    "ConfigLoader",
    "load_yaml_config",
    "load_env_file",
    "set_env_from_file",
]
