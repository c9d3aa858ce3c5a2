from dataclasses import dataclass
from typing import TypeVar, Generic, List

from pydantic import BaseModel as PydanticBaseModel, Field, model_validator

T = TypeVar("T")


# 统一分页响应
@dataclass
class Page(Generic[T]):
    rows: List[T]  # 当前页数据
    total_records: int  # 总条数
    page: int  # 当前页码
    page_size: int  # 每页条数
    total_pages: int  # 总页数

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    def to_dict(self):
        return {
            "rows": self.rows,
            "total_records": self.total_records,
            "page": self.page,
            "page_size": self.page_size,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev
        }


class BaseSchemas(PydanticBaseModel):
    """基础参数"""
    model_config = {"from_attributes": True, "populate_by_name": True}


class PaginationField(BaseSchemas):
    """分页参数"""
    page: int = Field(default=1, description="页码")
    page_size: int = Field(default=20, description="每页数量")

    @model_validator(mode='after')
    def validate_pagination(self):
        self.page = max(self.page, 1)
        self.page_size = max(self.page_size, 1)
        return self
