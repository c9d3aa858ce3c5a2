"""联系表单留言

公开接口提交留言，管理端按时间倒序查看并标记已读。
"""

import re
from typing import Optional

from pydantic import BaseModel, field_validator
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.exceptions import Err
from folio.log import get_logger
from folio.orm import CoreModel, Page

logger = get_logger()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CONTACT_SUCCESS_MESSAGE = "Message sent successfully! I'll get back to you soon."

STATUS_UNREAD = "unread"
STATUS_READ = "read"


class ContactMessage(CoreModel):
    __tablename__ = "contact_messages"

    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(200))
    subject: Mapped[str] = mapped_column(String(300))
    message: Mapped[str] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default=STATUS_UNREAD, index=True)


class ContactForm(BaseModel):
    """联系表单，所有字段必填"""
    name: str
    email: str
    subject: str
    message: str

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def _required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("All fields are required")
        return value

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email address")
        return value


def submit_contact_message(form: ContactForm) -> ContactMessage:
    msg = ContactMessage(**form.model_dump(), status=STATUS_UNREAD)
    msg.save(commit=True)
    logger.info(f"收到联系留言 #{msg.id}: {form.email}")
    return msg


def list_contact_messages(page: int = 1, page_size: int = 20, status: Optional[str] = None) -> Page:
    """留言列表，最新的在前"""
    query = ContactMessage.query
    if status:
        query = query.filter(ContactMessage.status == status)
    query = query.order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
    return ContactMessage.paginate(query, page=page, page_size=page_size)


def mark_read(message_id: int) -> ContactMessage:
    msg = ContactMessage.get(message_id)
    if msg is None:
        raise Err.not_found("留言不存在", resource_type="contact_messages", resource_id=message_id)
    msg.update(status=STATUS_READ, commit=True)
    return msg
