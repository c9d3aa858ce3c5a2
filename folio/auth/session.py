"""管理端会话

AdminSession 是显式传递的认证状态对象，不使用模块级全局变量。生命周期:
    init(token)       请求开始或登录时，根据 access token 解析用户
    update(event)     登录、刷新令牌、登出事件到达时更新状态并通知订阅者
    teardown()        请求结束或登出时清理

使用示例:
    session = AdminSession(jwt_manager)
    session.init(access_token)
    unsubscribe = session.subscribe(lambda event, s: print(event, s.is_admin))
    session.update(AuthEvent.SIGNED_OUT)
    unsubscribe()
    session.teardown()
"""

from enum import Enum
from typing import Callable, List, Optional

from folio.exceptions import AuthenticationException, ErrorCode
from folio.log import auth_logger as logger
from .jwt import JWTManager
from .models import AdminUser


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    SIGNED_OUT = "SIGNED_OUT"


Listener = Callable[[AuthEvent, "AdminSession"], None]


class AdminSession:
    """认证状态

    Args:
        jwt_manager: 用于校验 access token
        user_loader: 按 id 加载账号，默认 AdminUser.get
    """

    def __init__(self, jwt_manager: JWTManager, user_loader: Optional[Callable[[int], Optional[AdminUser]]] = None):
        self.jwt_manager = jwt_manager
        self._user_loader = user_loader or AdminUser.get
        self._listeners: List[Listener] = []
        self.user: Optional[AdminUser] = None
        self.token: Optional[str] = None
        self.error_code: Optional[ErrorCode] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    def _resolve(self, token: Optional[str]) -> None:
        self.user = None
        self.token = None
        self.error_code = None
        if not token:
            return

        try:
            data = self.jwt_manager.verify_token(token, raise_on_expired=True)
        except AuthenticationException as e:
            self.error_code = e.code
            return
        if data is None or data.token_type != "access" or not data.user_id:
            self.error_code = ErrorCode.INVALID_TOKEN
            return

        user = self._user_loader(data.user_id)
        if user is None or not user.is_active:
            self.error_code = ErrorCode.ACCOUNT_DISABLED if user is not None else ErrorCode.INVALID_TOKEN
            return

        self.user = user
        self.token = token

    def init(self, token: Optional[str]) -> "AdminSession":
        """根据 access token 初始化，token 无效时保持匿名并记录 error_code"""
        self._resolve(token)
        return self

    def update(self, event: AuthEvent, token: Optional[str] = None) -> None:
        """处理认证事件并通知订阅者"""
        event = AuthEvent(event)
        if event is AuthEvent.SIGNED_OUT:
            self._resolve(None)
        else:
            self._resolve(token)
        logger.debug(f"会话事件 {event.value}: authenticated={self.is_authenticated}")

        for listener in list(self._listeners):
            listener(event, self)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """订阅认证事件，返回取消订阅函数"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def teardown(self) -> None:
        self._listeners.clear()
        self._resolve(None)
