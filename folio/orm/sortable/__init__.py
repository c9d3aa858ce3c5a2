"""排序管理模块

导出:
    - SortFieldMixin: 排序字段 Mixin（提供 order 字段）
    - SortableMixin: 排序管理 Mixin（提供排序操作方法）
"""

from .sortable_fields import SortFieldMixin
from .sortable_mixin import SortableMixin

__all__ = [
    "SortFieldMixin",
    "SortableMixin",
]
