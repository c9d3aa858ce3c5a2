"""界面文案多语言字典

每种语言一个 YAML 文件（locales/<locale>.yaml），按需加载并缓存。

使用示例:
    from folio.i18n import translate, get_dictionary

    translate("nav.home", "de")        # "Startseite"
    translate("nav.missing", "de")     # 回退到 en，仍找不到时返回 "nav.missing"
"""

import os
from typing import Any, Dict, Optional

from folio.config import ConfigLoader
from folio.exceptions import Err

SUPPORTED_LOCALES = ("en", "es", "fr", "bn", "de")
DEFAULT_LOCALE = "en"

LOCALES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "locales")


def get_dictionary(locale: str) -> Dict[str, Any]:
    """获取某种语言的完整字典

    Raises:
        ResourceNotFoundException: 不支持的语言
    """
    if locale not in SUPPORTED_LOCALES:
        raise Err.not_found(f"不支持的语言: {locale}", resource_type="locale", resource_id=locale)
    return ConfigLoader.load(f"{locale}.yaml", base_dir=LOCALES_DIR)


def _lookup(dictionary: Dict[str, Any], key: str) -> Optional[str]:
    node: Any = dictionary
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node if isinstance(node, str) else None


def translate(key: str, locale: str = DEFAULT_LOCALE) -> str:
    """按点分隔的 key 取文案，依次回退到默认语言和 key 本身"""
    if locale in SUPPORTED_LOCALES:
        value = _lookup(get_dictionary(locale), key)
        if value is not None:
            return value
    value = _lookup(get_dictionary(DEFAULT_LOCALE), key)
    return value if value is not None else key


__all__ = [
    "SUPPORTED_LOCALES",
    "DEFAULT_LOCALE",
    "LOCALES_DIR",
    "get_dictionary",
    "translate",
]
