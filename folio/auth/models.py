"""管理员账号模型"""

from typing import Optional

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from folio.orm import CoreModel

ROLE_ADMIN = "admin"
ROLE_USER = "user"


class AdminUser(CoreModel):
    """登录账号

    role 为 admin 的账号可以访问管理接口，其他已登录账号只能使用留言板等公开功能。
    """
    __tablename__ = "admins"

    email: Mapped[str] = mapped_column(String(200), unique=True, index=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default=ROLE_USER)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    @property
    def is_admin(self) -> bool:
        return self.is_active and self.role == ROLE_ADMIN

    @classmethod
    def get_by_email(cls, email: str) -> Optional["AdminUser"]:
        return cls.query.filter(cls.email == email.strip().lower()).first()
