"""ORM 模块

使用示例:
    from folio.orm import CoreModel, SortFieldMixin, SortableMixin, init_database, get_db

    init_database(config=settings.database)
"""

from .id_model import Base, IdModel
from .core_model import CoreModel
from .base_schemas import Page, BaseSchemas, PaginationField
from .db_session import (
    db_manager,
    init_database,
    get_engine,
    get_db,
    db_session_scope,
    on_request_end,
)
from .sortable import SortFieldMixin, SortableMixin

__all__ = [
    "Base",
    "IdModel",
    "CoreModel",
    "Page",
    "BaseSchemas",
    "PaginationField",
    "db_manager",
    "init_database",
    "get_engine",
    "get_db",
    "db_session_scope",
    "on_request_end",
    "SortFieldMixin",
    "SortableMixin",
]
