"""排序控制器"""

from .controller import ReorderController

__all__ = [
    "ReorderController",
]
