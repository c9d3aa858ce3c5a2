"""认证服务

登录、注册、刷新令牌和管理员判断。失败时抛出带用户可读提示的业务异常，
提示文案由 get_auth_error_message() 统一给出。

使用示例:
    auth_service = AuthService(jwt_manager)

    tokens = auth_service.sign_in("me@example.com", "secret123")
    auth_service.is_admin("me@example.com")
    tokens = auth_service.refresh(tokens.refresh_token)
"""

import re
import threading
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Optional

from folio.exceptions import Err, ErrorCode
from folio.log import auth_logger as logger
from .jwt import JWTManager
from .models import AdminUser, ROLE_ADMIN, ROLE_USER
from .password import PasswordHelper, PasswordTooLongError, PasswordTooShortError
from .schemas import TokenPair, TokenPayload

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

AUTH_ERROR_MESSAGES = {
    "user-not-found": "No account found with this email address.",
    "wrong-password": "Incorrect password. Please try again.",
    "invalid-email": "Invalid email address format.",
    "user-disabled": "This account has been disabled.",
    "email-already-in-use": "An account with this email already exists.",
    "weak-password": "Password should be at least 6 characters.",
    "operation-not-allowed": "Email/password accounts are not enabled.",
    "too-many-requests": "Too many failed attempts. Please try again later.",
    "network-request-failed": "Network error. Please check your connection.",
    "invalid-credential": "Invalid email or password.",
}
DEFAULT_AUTH_ERROR_MESSAGE = "An error occurred. Please try again."


def get_auth_error_message(reason: str) -> str:
    """失败原因 -> 提示文案，接受带或不带 "auth/" 前缀的原因"""
    if reason.startswith("auth/"):
        reason = reason[len("auth/"):]
    return AUTH_ERROR_MESSAGES.get(reason, DEFAULT_AUTH_ERROR_MESSAGE)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthService:
    """认证服务

    Args:
        jwt_manager: JWT 管理器
        max_failed_attempts: 窗口期内允许的连续失败次数
        lockout_seconds: 失败计数窗口
        clock: 时间函数，默认 time.monotonic
    """

    def __init__(
        self,
        jwt_manager: JWTManager,
        max_failed_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.jwt_manager = jwt_manager
        self.max_failed_attempts = max_failed_attempts
        self.lockout_seconds = lockout_seconds
        self._clock = clock
        self._failures: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = threading.Lock()

    # ==================== 失败计数 ====================

    def _recent_failures(self, email: str) -> int:
        cutoff = self._clock() - self.lockout_seconds
        attempts = self._failures[email]
        while attempts and attempts[0] < cutoff:
            attempts.popleft()
        return len(attempts)

    def _record_failure(self, email: str) -> None:
        with self._lock:
            self._failures[email].append(self._clock())

    def _reset_failures(self, email: str) -> None:
        with self._lock:
            self._failures.pop(email, None)

    def _fail(self, reason: str, code: ErrorCode, email: str):
        self._record_failure(email)
        logger.info(f"登录失败: {email} ({reason})")
        return Err.auth(get_auth_error_message(reason), code=code)

    # ==================== 令牌 ====================

    @staticmethod
    def build_payload(user: AdminUser) -> TokenPayload:
        return TokenPayload(
            sub=user.email,
            user_id=user.id,
            email=user.email,
            display_name=user.display_name,
            roles=[user.role],
        )

    def issue_tokens(self, user: AdminUser) -> TokenPair:
        payload = self.build_payload(user)
        return TokenPair(
            access_token=self.jwt_manager.create_access_token(payload),
            refresh_token=self.jwt_manager.create_refresh_token(payload),
            expires_in=self.jwt_manager.access_token_expire_seconds,
        )

    # ==================== 认证操作 ====================

    def sign_in(self, email: str, password: str) -> TokenPair:
        """邮箱密码登录

        Raises:
            AuthenticationException: 邮箱格式错误、账号不存在、已禁用、密码错误或失败次数过多
        """
        email = normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise Err.auth(get_auth_error_message("invalid-email"), code=ErrorCode.INVALID_CREDENTIALS)

        with self._lock:
            too_many = self._recent_failures(email) >= self.max_failed_attempts
        if too_many:
            raise Err.auth(get_auth_error_message("too-many-requests"), code=ErrorCode.TOO_MANY_ATTEMPTS)

        user = AdminUser.get_by_email(email)
        if user is None:
            raise self._fail("user-not-found", ErrorCode.INVALID_CREDENTIALS, email)
        if not user.is_active:
            raise self._fail("user-disabled", ErrorCode.ACCOUNT_DISABLED, email)
        if not PasswordHelper.verify(password, user.password_hash):
            raise self._fail("wrong-password", ErrorCode.INVALID_CREDENTIALS, email)

        self._reset_failures(email)
        if PasswordHelper.needs_rehash(user.password_hash):
            user.update(password_hash=PasswordHelper.hash(password, validate=False), commit=True)

        logger.info(f"登录成功: {email}")
        return self.issue_tokens(user)

    def create_account(self, email: str, password: str, display_name: Optional[str] = None) -> AdminUser:
        """创建账号，库中还没有管理员时创建的账号成为管理员

        Raises:
            ValidationException: 邮箱格式错误或密码太短
            ResourceConflictException: 邮箱已注册
        """
        email = normalize_email(email)
        if not EMAIL_PATTERN.match(email):
            raise Err.invalid(get_auth_error_message("invalid-email"), code=ErrorCode.INVALID_PARAMETER)
        try:
            password_hash = PasswordHelper.hash(password)
        except (PasswordTooShortError, PasswordTooLongError) as e:
            raise Err.invalid(get_auth_error_message("weak-password"), code=ErrorCode.WEAK_PASSWORD, details=[str(e)])

        if AdminUser.get_by_email(email) is not None:
            raise Err.conflict(get_auth_error_message("email-already-in-use"), code=ErrorCode.EMAIL_EXISTS)

        has_admin = AdminUser.query.filter(AdminUser.role == ROLE_ADMIN).first() is not None
        user = AdminUser(
            email=email,
            display_name=display_name,
            password_hash=password_hash,
            role=ROLE_USER if has_admin else ROLE_ADMIN,
        )
        user.save(commit=True)
        logger.info(f"账号已创建: {email} (role={user.role})")
        return user

    def is_admin(self, email: str) -> bool:
        user = AdminUser.get_by_email(normalize_email(email))
        return user is not None and user.is_admin

    def refresh(self, refresh_token: str) -> TokenPair:
        """用 refresh token 换取新的 access token

        Raises:
            AuthenticationException: refresh token 无效或账号已禁用
        """
        token_data = self.jwt_manager.verify_token(refresh_token)
        if token_data is None or token_data.token_type != "refresh" or not token_data.user_id:
            raise Err.auth("刷新令牌无效", code=ErrorCode.INVALID_TOKEN)

        user = AdminUser.get(token_data.user_id)
        if user is None:
            raise Err.auth(get_auth_error_message("user-not-found"), code=ErrorCode.INVALID_TOKEN)
        if not user.is_active:
            raise Err.auth(get_auth_error_message("user-disabled"), code=ErrorCode.ACCOUNT_DISABLED)

        result = self.jwt_manager.refresh_tokens(refresh_token, self.build_payload(user))
        return TokenPair(
            access_token=result["access_token"],
            refresh_token=result["refresh_token"] or refresh_token,
            expires_in=self.jwt_manager.access_token_expire_seconds,
        )
