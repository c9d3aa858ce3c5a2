"""JWT 工具模块

使用示例:
    from folio.auth import JWTManager, TokenPayload

    jwt_manager = JWTManager(secret_key="change-me", access_token_expire_minutes=60)

    payload = TokenPayload(sub="me@example.com", user_id=1, roles=["admin"])
    access_token = jwt_manager.create_access_token(payload)
    refresh_token = jwt_manager.create_refresh_token(payload)

    data = jwt_manager.verify_token(access_token)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from jose import ExpiredSignatureError, JWTError, jwt

from folio.exceptions import AuthenticationException, ErrorCode
from .schemas import TokenData, TokenPayload


class JWTManager:
    """JWT 管理器

    Args:
        secret_key: 签名密钥
        algorithm: 签名算法，默认 HS256
        access_token_expire_minutes: access token 有效分钟数
        refresh_token_expire_days: refresh token 有效天数
        refresh_token_sliding_days: refresh token 剩余天数少于此值时，刷新会同时签发新的 refresh token，
            0 表示不续期
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
        refresh_token_expire_days: int = 7,
        refresh_token_sliding_days: int = 2,
    ):
        if access_token_expire_minutes <= 0:
            raise ValueError("access_token_expire_minutes 必须大于 0")
        if refresh_token_expire_days <= 0:
            raise ValueError("refresh_token_expire_days 必须大于 0")
        if not 0 <= refresh_token_sliding_days < refresh_token_expire_days:
            raise ValueError(
                f"refresh_token_sliding_days ({refresh_token_sliding_days}) 必须在 0 和 "
                f"refresh_token_expire_days ({refresh_token_expire_days}) 之间"
            )

        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self.refresh_token_expire_days = refresh_token_expire_days
        self.refresh_token_sliding_days = refresh_token_sliding_days

    @classmethod
    def from_settings(cls, settings) -> "JWTManager":
        """从 JWTSettings 创建"""
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            access_token_expire_minutes=settings.access_token_expire_minutes,
            refresh_token_expire_days=settings.refresh_token_expire_days,
        )

    @property
    def access_token_expire_seconds(self) -> int:
        return self.access_token_expire_minutes * 60

    def _encode(self, data: Dict[str, Any], lifetime: timedelta) -> str:
        now = datetime.now(timezone.utc)
        data["exp"] = now + lifetime
        data["iat"] = now
        return jwt.encode(data, self.secret_key, algorithm=self.algorithm)

    def create_access_token(
        self,
        payload: Union[TokenPayload, Dict[str, Any]],
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        if isinstance(payload, TokenPayload):
            data = {
                "sub": payload.sub,
                "user_id": payload.user_id,
                "email": payload.email,
                "display_name": payload.display_name,
                "roles": payload.roles,
            }
        else:
            data = payload.copy()
        data["token_type"] = "access"
        return self._encode(data, expires_delta or timedelta(minutes=self.access_token_expire_minutes))

    def create_refresh_token(
        self,
        payload: Union[TokenPayload, Dict[str, Any]],
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """refresh token 只携带 sub 和 user_id"""
        if isinstance(payload, TokenPayload):
            data = {"sub": payload.sub, "user_id": payload.user_id}
        else:
            data = {"sub": payload.get("sub"), "user_id": payload.get("user_id")}
        data["token_type"] = "refresh"
        return self._encode(data, expires_delta or timedelta(days=self.refresh_token_expire_days))

    def decode_token(self, token: str) -> Optional[Dict[str, Any]]:
        """解码令牌，校验失败返回 None"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

    def verify_token(self, token: str, raise_on_expired: bool = False) -> Optional[TokenData]:
        """验证令牌

        Args:
            raise_on_expired: 为 True 时过期抛出 AuthenticationException(TOKEN_EXPIRED)，
                用于区分“过期”和“无效”

        Returns:
            TokenData，无效时返回 None
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            if raise_on_expired:
                raise AuthenticationException("访问令牌已过期", code=ErrorCode.TOKEN_EXPIRED)
            return None
        except JWTError:
            return None

        return TokenData(
            sub=payload.get("sub"),
            user_id=payload.get("user_id"),
            email=payload.get("email"),
            display_name=payload.get("display_name"),
            roles=payload.get("roles") or [],
            token_type=payload.get("token_type", "access"),
            exp=payload.get("exp"),
            iat=payload.get("iat"),
        )

    def get_remaining_seconds(self, token: str) -> Optional[int]:
        payload = self.decode_token(token)
        if not payload or "exp" not in payload:
            return None
        remaining = payload["exp"] - datetime.now(timezone.utc).timestamp()
        return int(remaining) if remaining > 0 else None

    def should_renew_refresh_token(self, refresh_token: str) -> bool:
        """refresh token 剩余时间少于 sliding_days 时需要续期"""
        if self.refresh_token_sliding_days <= 0:
            return False
        remaining = self.get_remaining_seconds(refresh_token)
        if remaining is None:
            return False
        return remaining / 86400 < self.refresh_token_sliding_days

    def refresh_tokens(self, refresh_token: str, payload: TokenPayload) -> Optional[Dict[str, Any]]:
        """用 refresh token 换取新的 access token

        Args:
            refresh_token: 客户端持有的 refresh token
            payload: 调用方按最新用户信息构造的载荷

        Returns:
            {"access_token", "refresh_token" (仅续期时有值), "token_type", "refresh_token_renewed"}，
            refresh token 无效时返回 None
        """
        token_data = self.verify_token(refresh_token)
        if token_data is None or token_data.token_type != "refresh":
            return None
        if token_data.user_id != payload.user_id:
            return None

        renew = self.should_renew_refresh_token(refresh_token)
        return {
            "access_token": self.create_access_token(payload),
            "refresh_token": self.create_refresh_token(payload) if renew else None,
            "token_type": "bearer",
            "refresh_token_renewed": renew,
        }
