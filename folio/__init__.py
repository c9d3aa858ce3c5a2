"""
Folio - 个人作品集内容服务

提供内容管理、排序、公开内容聚合、认证、简历生成等功能
"""

__version__ = "0.1.0"

# 导出响应模块
from .response import Resp

# 导出异常处理模块
from .exceptions import (
    Err,
    ErrorCode,
    BusinessException,
    ReorderInProgressException,
    PersistenceException,
    register_exception_handlers,
)

# 导出内容模块
from .content import (
    Category,
    ContentStore,
    SqlContentStore,
    MemoryContentStore,
    PortfolioContent,
)

# 导出排序与聚合
from .reorder import ReorderController
from .aggregator import ContentAggregator

# 导出应用工厂
from .app import create_app

__all__ = [
    "__version__",
    "Resp",
    "Err",
    "ErrorCode",
    "BusinessException",
    "ReorderInProgressException",
    "PersistenceException",
    "register_exception_handlers",
    "Category",
    "ContentStore",
    "SqlContentStore",
    "MemoryContentStore",
    "PortfolioContent",
    "ReorderController",
    "ContentAggregator",
    "create_app",
]
