"""认证路由

端点列表：
    POST /api/auth/login      - 邮箱密码登录
    POST /api/auth/register   - 注册账号（第一个账号成为管理员）
    POST /api/auth/refresh    - 刷新访问令牌
    POST /api/auth/logout     - 退出登录
    GET  /api/auth/me         - 当前账号
"""

from fastapi import APIRouter, Depends

from folio.auth import (
    AdminSession,
    AdminUser,
    AdminUserOut,
    AuthEvent,
    AuthService,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    get_admin_session,
    get_auth_service,
    get_current_user,
)
from folio.config import AppSettings
from folio.exceptions import Err, ErrorCode
from folio.log import auth_logger as logger
from folio.orm import get_db
from folio.response import Resp
from .dependencies import get_settings


def create_auth_router() -> APIRouter:
    """创建认证路由"""
    router = APIRouter(prefix="/api/auth", tags=["auth"], dependencies=[Depends(get_db)])

    @router.post("/login", summary="登录")
    def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
        tokens = service.sign_in(body.email, body.password)
        return Resp.OK(tokens, message="登录成功")

    @router.post("/register", summary="注册")
    def register(
        body: RegisterRequest,
        service: AuthService = Depends(get_auth_service),
        settings: AppSettings = Depends(get_settings),
    ):
        # 还没有任何账号时总是允许注册，用于创建第一个管理员
        if not settings.allow_registration and AdminUser.query.first() is not None:
            raise Err.forbidden("注册未开放", code=ErrorCode.REGISTRATION_DISABLED)
        user = service.create_account(body.email, body.password, body.display_name)
        return Resp.Created(AdminUserOut.model_validate(user), message="注册成功")

    @router.post("/refresh", summary="刷新令牌")
    def refresh(body: RefreshRequest, service: AuthService = Depends(get_auth_service)):
        return Resp.OK(service.refresh(body.refresh_token))

    @router.post("/logout", summary="退出登录")
    def logout(session: AdminSession = Depends(get_admin_session)):
        """令牌无状态，服务端只通知会话订阅者；客户端丢弃令牌"""
        email = session.user.email if session.user else None
        session.update(AuthEvent.SIGNED_OUT)
        logger.info(f"退出登录: {email}")
        return Resp.OK(message="已退出登录")

    @router.get("/me", summary="当前账号")
    def me(user: AdminUser = Depends(get_current_user)):
        return Resp.OK(AdminUserOut.model_validate(user))

    return router
