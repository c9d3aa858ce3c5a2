"""
ORM基础模型

提供时间戳字段、常用CRUD操作和分页查询
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional, ClassVar, TYPE_CHECKING

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.orm import Mapped, mapped_column, Session, Query

if TYPE_CHECKING:
    from typing_extensions import Self

from .base_schemas import Page
from .id_model import IdModel


class CoreModel(IdModel):
    """ORM基础模型类

    使用示例:
        from folio.orm import CoreModel, init_database

        init_database("sqlite:///./portfolio.db")

        class ContactMessage(CoreModel):
            __tablename__ = "contact_messages"
            name: Mapped[str] = mapped_column(String(200))

        msg = ContactMessage(name="Ada")
        msg.save(commit=True)
    """
    __abstract__ = True

    # query 属性由 init_database() 通过 scoped_session.query_property() 设置
    if TYPE_CHECKING:
        query: ClassVar[Query[Self]]

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        server_default=func.now(),
        comment="创建时间"
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=False),
        nullable=True,
        onupdate=func.now(),
        comment="更新时间"
    )

    # 系统字段，构造和更新时忽略
    _system_fields: ClassVar[set] = {'id', 'created_at', 'updated_at'}

    def __init__(self, **kwargs):
        for field in self._system_fields:
            kwargs.pop(field, None)
        super().__init__(**kwargs)

    def __repr__(self):
        return f"<{self.__class__.__name__} id={self.id}>"

    @property
    def session(self) -> Session:
        """当前对象所属 session，未绑定时使用请求作用域的 session"""
        return inspect(self).session or self.__class__.query.session

    # ==================== CRUD 操作方法 ====================

    def save(self, commit: bool = False) -> Self:
        """保存对象（新增或更新），commit=False 时只 flush"""
        session = self.session
        session.add(self)
        self._commit_or_flush(session, commit)
        return self

    def update(self, commit: bool = False, **kwargs) -> Self:
        """批量更新属性，忽略系统字段和不存在的属性"""
        column_keys = {c.key for c in inspect(self.__class__).column_attrs}
        for key, value in kwargs.items():
            if key in self._system_fields or key not in column_keys:
                continue
            setattr(self, key, value)
        return self.save(commit)

    def delete(self, commit: bool = False):
        session = self.session
        session.delete(self)
        self._commit_or_flush(session, commit)

    @classmethod
    def get(cls, id: int):
        """根据ID获取对象，不存在返回None"""
        return cls.query.session.get(cls, id)

    @classmethod
    def get_all(cls):
        return cls.query.all()

    def to_dict(self, exclude: set = None) -> dict:
        """转换为字典（只包含列属性）"""
        exclude = exclude or set()
        return {
            c.key: getattr(self, c.key)
            for c in inspect(self).mapper.column_attrs
            if c.key not in exclude
        }

    @classmethod
    def paginate(cls, query: Query, page: int = 1, page_size: int = 20, max_page_size: int = 100) -> Page:
        """Query 对象分页

        使用示例:
            page = ContactMessage.paginate(
                ContactMessage.query.order_by(ContactMessage.created_at.desc()),
                page=1, page_size=20,
            )
        """
        page = max(page, 1)
        page_size = max(1, min(page_size, max_page_size))

        total = query.order_by(None).count()
        total_pages = math.ceil(total / page_size) if total > 0 else 0
        items = query.offset((page - 1) * page_size).limit(page_size).all()

        return Page(
            rows=items,
            total_records=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages
        )

    @staticmethod
    def _commit_or_flush(session: Session, commit: bool):
        if commit:
            session.commit()
        else:
            session.flush()
