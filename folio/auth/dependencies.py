"""FastAPI 认证依赖

使用示例:
    @router.get("/api/admin/content/{category}")
    def list_items(category: str, session: AdminSession = Depends(require_admin)):
        ...
"""

from typing import Generator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from folio.exceptions import Err, ErrorCode
from folio.orm import get_db
from .jwt import JWTManager
from .models import AdminUser
from .service import AuthService
from .session import AdminSession

_bearer = HTTPBearer(auto_error=False)


def get_jwt_manager(request: Request) -> JWTManager:
    return request.app.state.jwt_manager


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_admin_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    jwt_manager: JWTManager = Depends(get_jwt_manager),
    db: Session = Depends(get_db),
) -> Generator[AdminSession, None, None]:
    """每个请求一个 AdminSession，请求结束时 teardown"""
    session = AdminSession(jwt_manager).init(credentials.credentials if credentials else None)
    try:
        yield session
    finally:
        session.teardown()


def _raise_unauthenticated(session: AdminSession):
    code = session.error_code or ErrorCode.AUTHENTICATION_FAILED
    message = "访问令牌已过期" if code == ErrorCode.TOKEN_EXPIRED else "请先登录"
    raise Err.auth(message, code=code)


def get_current_user(session: AdminSession = Depends(get_admin_session)) -> AdminUser:
    """已登录账号，匿名时 401"""
    if not session.is_authenticated:
        _raise_unauthenticated(session)
    return session.user


def require_admin(session: AdminSession = Depends(get_admin_session)) -> AdminSession:
    """管理员会话，匿名时 401，非管理员 403"""
    if not session.is_authenticated:
        _raise_unauthenticated(session)
    if not session.is_admin:
        raise Err.forbidden("需要管理员权限", code=ErrorCode.ADMIN_REQUIRED)
    return session
