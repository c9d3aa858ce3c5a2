"""认证模块

使用示例:
    from folio.auth import JWTManager, AuthService, require_admin

    jwt_manager = JWTManager.from_settings(settings.jwt)
    auth_service = AuthService(jwt_manager)
"""

from .schemas import (
    TokenPayload,
    TokenData,
    TokenPair,
    LoginRequest,
    RegisterRequest,
    RefreshRequest,
    AdminUserOut,
)
from .jwt import JWTManager
from .password import PasswordHelper, PasswordTooShortError, PasswordTooLongError
from .models import AdminUser, ROLE_ADMIN, ROLE_USER
from .service import AuthService, get_auth_error_message, normalize_email, EMAIL_PATTERN
from .session import AdminSession, AuthEvent
from .dependencies import (
    get_jwt_manager,
    get_auth_service,
    get_admin_session,
    get_current_user,
    require_admin,
)

__all__ = [
    "TokenPayload",
    "TokenData",
    "TokenPair",
    "LoginRequest",
    "RegisterRequest",
    "RefreshRequest",
    "AdminUserOut",
    "JWTManager",
    "PasswordHelper",
    "PasswordTooShortError",
    "PasswordTooLongError",
    "AdminUser",
    "ROLE_ADMIN",
    "ROLE_USER",
    "AuthService",
    "get_auth_error_message",
    "normalize_email",
    "EMAIL_PATTERN",
    "AdminSession",
    "AuthEvent",
    "get_jwt_manager",
    "get_auth_service",
    "get_admin_session",
    "get_current_user",
    "require_admin",
]
