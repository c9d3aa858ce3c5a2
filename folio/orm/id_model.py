"""ID模型基类

所有表使用整数自增主键。
"""

from sqlalchemy import Integer
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """声明基类"""
    pass


class IdModel(Base):
    """ID模型基类

    使用示例:
        class Hobby(IdModel):
            __tablename__ = "hobbies"
            title: Mapped[str] = mapped_column(String(200))
    """
    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True, comment="主键")
