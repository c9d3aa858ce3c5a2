"""测试辅助工具模块"""

from .auth_helpers import register_and_login, auth_headers

__all__ = [
    "register_and_login",
    "auth_headers",
]
