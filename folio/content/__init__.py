"""内容库模块

使用示例:
    from folio.content import Category, SqlContentStore, MemoryContentStore

    store = SqlContentStore(db_manager.session_maker)
    items = store.fetch_items(Category.PROJECTS)
"""

from .categories import (
    Category,
    SINGLETON_CATEGORIES,
    LIST_CATEGORIES,
    resolve_category,
)
from .store import ContentStore, Record, CategoryLike
from .sql_store import SqlContentStore
from .memory_store import MemoryContentStore
from .sample_data import sample_items, sample_singleton, seed_store
from .schemas import MoveRequest, OrderAssignment, PortfolioContent

__all__ = [
    "Category",
    "SINGLETON_CATEGORIES",
    "LIST_CATEGORIES",
    "resolve_category",
    "ContentStore",
    "Record",
    "CategoryLike",
    "SqlContentStore",
    "MemoryContentStore",
    "sample_items",
    "sample_singleton",
    "seed_store",
    "MoveRequest",
    "OrderAssignment",
    "PortfolioContent",
]
