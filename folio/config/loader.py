"""配置加载器模块

提供从 YAML 文件加载配置的功能。

使用示例:
    from folio.config import ConfigLoader, load_yaml_config, AppSettings

    config = ConfigLoader.load("config/settings.yaml")
    settings = load_yaml_config("config/settings.yaml", AppSettings, debug=True)
"""

import os
from typing import Dict, Any, Optional, Type, TypeVar

import yaml


T = TypeVar("T")


def _resolve_path(config_path: str, base_dir: Optional[str] = None) -> str:
    if os.path.isabs(config_path):
        return config_path
    if base_dir:
        return os.path.join(base_dir, config_path)
    return os.path.abspath(config_path)


class ConfigLoader:
    """配置加载器

    从 YAML 文件加载配置，按绝对路径缓存。

    使用示例:
        config = ConfigLoader.load("config/settings.yaml")
        db_url = config.get("database", {}).get("url")

        config = ConfigLoader.reload("config/settings.yaml")
        ConfigLoader.clear_cache()
    """

    _cache: Dict[str, Dict[str, Any]] = {}

    @classmethod
    def load(
        cls,
        config_path: str,
        base_dir: Optional[str] = None,
        use_cache: bool = True
    ) -> Dict[str, Any]:
        """加载配置文件

        Raises:
            FileNotFoundError: 配置文件不存在
            yaml.YAMLError: YAML 解析错误
        """
        abs_path = _resolve_path(config_path, base_dir)

        if use_cache and abs_path in cls._cache:
            return cls._cache[abs_path]

        if not os.path.exists(abs_path):
            raise FileNotFoundError(f"配置文件不存在: {abs_path}")

        with open(abs_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if use_cache:
            cls._cache[abs_path] = config

        return config

    @classmethod
    def reload(cls, config_path: str, base_dir: Optional[str] = None) -> Dict[str, Any]:
        """重新加载配置文件（忽略缓存）"""
        cls._cache.pop(_resolve_path(config_path, base_dir), None)
        return cls.load(config_path, base_dir, use_cache=True)

    @classmethod
    def clear_cache(cls):
        cls._cache.clear()

    @classmethod
    def get_cached_paths(cls) -> list:
        return list(cls._cache.keys())


def load_yaml_config(
    config_path: str,
    settings_class: Type[T],
    base_dir: Optional[str] = None,
    **overrides
) -> T:
    """加载 YAML 配置并创建 Settings 实例

    缓存中的配置字典不会被 overrides 修改。
    """
    config = dict(ConfigLoader.load(config_path, base_dir))
    config.update(overrides)
    return settings_class(**config)


def load_env_file(env_path: str = ".env") -> Dict[str, str]:
    """解析 .env 文件，返回键值字典（文件不存在时返回空字典）"""
    env_vars = {}

    if not os.path.exists(env_path):
        return env_vars

    with open(env_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            value = value.strip()
            if value and value[0] in ('"', "'") and value[-1] == value[0]:
                value = value[1:-1]
            env_vars[key.strip()] = value

    return env_vars


def set_env_from_file(env_path: str = ".env", override: bool = False):
    """从 .env 文件设置环境变量"""
    for key, value in load_env_file(env_path).items():
        if override or key not in os.environ:
            os.environ[key] = value
