"""留言板

登录用户可以留言，所有人可以查看最近的留言，管理员可以删除留言。
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.exceptions import Err
from folio.log import get_logger
from folio.orm import CoreModel

logger = get_logger()

MAX_MESSAGE_LENGTH = 500
DEFAULT_USER_NAME = "Anonymous"


class GuestbookMessage(CoreModel):
    __tablename__ = "guestbook_messages"

    user_id: Mapped[Optional[int]] = mapped_column(nullable=True, index=True)
    user_name: Mapped[str] = mapped_column(String(200), default=DEFAULT_USER_NAME)
    user_avatar: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    message: Mapped[str] = mapped_column(Text)


class GuestbookEntry(BaseModel):
    message: str = Field(description=f"留言内容，不超过 {MAX_MESSAGE_LENGTH} 字")
    user_avatar: Optional[str] = None

    @field_validator("message")
    @classmethod
    def _trim(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("留言内容不能为空")
        if len(value) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"留言内容不能超过 {MAX_MESSAGE_LENGTH} 字")
        return value


def post_message(user, entry: GuestbookEntry) -> GuestbookMessage:
    """以已登录账号的身份留言

    Args:
        user: 已登录账号，需要 id 和 display_name 属性
    """
    if user is None:
        raise Err.auth("请先登录再留言")
    msg = GuestbookMessage(
        user_id=user.id,
        user_name=user.display_name or DEFAULT_USER_NAME,
        user_avatar=entry.user_avatar,
        message=entry.message,
    )
    msg.save(commit=True)
    logger.info(f"新留言 #{msg.id} from user_id={user.id}")
    return msg


def list_messages(limit: int = 50) -> List[GuestbookMessage]:
    """最近的留言，最新的在前"""
    return (
        GuestbookMessage.query
        .order_by(GuestbookMessage.created_at.desc(), GuestbookMessage.id.desc())
        .limit(limit)
        .all()
    )


def delete_message(message_id: int) -> None:
    msg = GuestbookMessage.get(message_id)
    if msg is None:
        raise Err.not_found("留言不存在", resource_type="guestbook_messages", resource_id=message_id)
    msg.delete(commit=True)
    logger.info(f"留言 #{message_id} 已删除")
