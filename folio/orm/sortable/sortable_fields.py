"""排序字段定义

使用示例:
    class Hobby(CoreModel, SortFieldMixin, SortableMixin):
        __tablename__ = "hobbies"
        title: Mapped[str] = mapped_column(String(200))
        # order 字段由 SortFieldMixin 提供
"""

from sqlalchemy import Integer
from sqlalchemy.orm import Mapped, mapped_column


class SortFieldMixin:
    """排序字段 Mixin

    字段说明:
        - order: 显示位置，从 0 开始，值越小越靠前。
          规范化之前允许重复或不连续。
    """

    order: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        index=True,
        comment="排序序号"
    )


__all__ = [
    "SortFieldMixin",
]
