"""认证相关 Schema

Token 载荷、解析结果以及登录/注册接口的请求响应模型。
"""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, Field


@dataclass
class TokenPayload:
    """Token 载荷

    使用示例:
        payload = TokenPayload(sub="me@example.com", user_id=1, email="me@example.com", roles=["admin"])
    """
    sub: str
    user_id: int
    email: Optional[str] = None
    display_name: Optional[str] = None
    roles: List[str] = field(default_factory=list)


class TokenData(BaseModel):
    """从 Token 中解析出的数据"""
    sub: Optional[str] = None
    user_id: Optional[int] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    roles: List[str] = []
    token_type: str = "access"
    exp: Optional[int] = None
    iat: Optional[int] = None


class TokenPair(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    expires_in: int = Field(description="access token 有效秒数")


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    email: str
    password: str
    display_name: Optional[str] = None


class RefreshRequest(BaseModel):
    refresh_token: str


class AdminUserOut(BaseModel):
    id: int
    email: str
    display_name: Optional[str] = None
    role: str
    is_active: bool

    model_config = {"from_attributes": True}
