"""联系留言与留言板测试"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from folio.contact import (
    STATUS_READ,
    STATUS_UNREAD,
    ContactForm,
    list_contact_messages,
    mark_read,
    submit_contact_message,
)
from folio.exceptions import AuthenticationException, ResourceNotFoundException
from folio.guestbook import (
    DEFAULT_USER_NAME,
    MAX_MESSAGE_LENGTH,
    GuestbookEntry,
    delete_message,
    list_messages,
    post_message,
)


def _form(**overrides):
    data = {"name": "Ada", "email": "ada@example.com", "subject": "Hi", "message": "Let's talk"}
    data.update(overrides)
    return ContactForm(**data)


class TestContactForm:
    """表单校验测试"""

    def test_trims_fields(self):
        form = _form(name="  Ada  ")
        assert form.name == "Ada"

    @pytest.mark.parametrize("field", ["name", "email", "subject", "message"])
    def test_required(self, field):
        with pytest.raises(ValidationError):
            _form(**{field: "   "})

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            _form(email="ada@localhost")


class TestContactMessages:
    """留言存储测试"""

    def test_submit_is_unread(self, db_session):
        msg = submit_contact_message(_form())
        assert msg.id is not None
        assert msg.status == STATUS_UNREAD

    def test_list_newest_first(self, db_session):
        first = submit_contact_message(_form(subject="first"))
        second = submit_contact_message(_form(subject="second"))
        page = list_contact_messages()
        assert [m.id for m in page.rows] == [second.id, first.id]
        assert page.total_records == 2

    def test_mark_read_and_filter(self, db_session):
        """测试标记已读后按状态筛选"""
        msg = submit_contact_message(_form())
        submit_contact_message(_form(subject="other"))
        mark_read(msg.id)
        assert [m.id for m in list_contact_messages(status=STATUS_READ).rows] == [msg.id]
        assert list_contact_messages(status=STATUS_UNREAD).total_records == 1

    def test_mark_read_missing(self, db_session):
        with pytest.raises(ResourceNotFoundException):
            mark_read(404)


class TestGuestbook:
    """留言板测试"""

    def test_entry_validation(self):
        assert GuestbookEntry(message="  hello ").message == "hello"
        with pytest.raises(ValidationError):
            GuestbookEntry(message="   ")
        with pytest.raises(ValidationError):
            GuestbookEntry(message="x" * (MAX_MESSAGE_LENGTH + 1))

    def test_post_requires_user(self, db_session):
        with pytest.raises(AuthenticationException):
            post_message(None, GuestbookEntry(message="hello"))

    def test_post_and_list(self, db_session):
        """测试留言使用账号显示名，未设置时为 Anonymous"""
        post_message(SimpleNamespace(id=1, display_name="Ada"), GuestbookEntry(message="first"))
        post_message(SimpleNamespace(id=2, display_name=None), GuestbookEntry(message="second"))

        messages = list_messages()
        assert [m.message for m in messages] == ["second", "first"]
        assert messages[0].user_name == DEFAULT_USER_NAME
        assert messages[1].user_name == "Ada"
        assert len(list_messages(limit=1)) == 1

    def test_delete(self, db_session):
        msg_id = post_message(SimpleNamespace(id=1, display_name="Ada"), GuestbookEntry(message="bye")).id
        delete_message(msg_id)
        assert list_messages() == []
        with pytest.raises(ResourceNotFoundException):
            delete_message(msg_id)
