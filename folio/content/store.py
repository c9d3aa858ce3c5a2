"""内容库接口

ContentStore 定义排序控制器、聚合器和管理接口依赖的全部操作，
SqlContentStore 和 MemoryContentStore 是两种实现。

记录统一以字典形式传递:
    {"id": 1, "order": 0, "title": "...", ...}
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import ValidationError

from folio.exceptions import Err
from folio.utils import generate_slug
from .categories import Category, resolve_category

Record = Dict[str, Any]
CategoryLike = Union[str, Category]

# 需要 slug 的分类，slug 为空时由标题生成
_SLUG_CATEGORIES = {Category.PROJECTS, Category.BLOG_POSTS}


class ContentStore(ABC):
    """内容库抽象接口

    读操作出错时抛出原始异常，由调用方决定是否回退；
    写操作出错时统一抛出 PersistenceException（记录不存在时为 ResourceNotFoundException）。
    """

    # ==================== 列表内容 ====================

    @abstractmethod
    def fetch_items(self, category: CategoryLike) -> List[Record]:
        """按 (order, id) 升序返回分类下的全部记录"""

    @abstractmethod
    def persist_order(self, category: CategoryLike, assignments: Sequence[Dict[str, Any]]) -> None:
        """原子地写入一批 {id, order}，任何一条失败则全部不生效"""

    @abstractmethod
    def get_item(self, category: CategoryLike, item_id: int) -> Record:
        """获取单条记录，不存在时抛出 ResourceNotFoundException"""

    @abstractmethod
    def create_item(self, category: CategoryLike, data: Dict[str, Any]) -> Record:
        """创建记录，未指定 order 时追加到末尾"""

    @abstractmethod
    def update_item(self, category: CategoryLike, item_id: int, data: Dict[str, Any]) -> Record:
        """部分更新记录"""

    @abstractmethod
    def delete_item(self, category: CategoryLike, item_id: int) -> None:
        """删除记录，不重新编号"""

    @abstractmethod
    def normalize_order(self, category: CategoryLike) -> int:
        """按当前顺序重新编号为 0..N-1，返回更新条数"""

    # ==================== 单例内容 ====================

    @abstractmethod
    def get_singleton(self, category: CategoryLike) -> Optional[Record]:
        """获取单例记录，未设置时返回 None"""

    @abstractmethod
    def upsert_singleton(self, category: CategoryLike, data: Dict[str, Any]) -> Record:
        """创建或部分更新单例记录"""

    # ==================== 博客 ====================

    @abstractmethod
    def list_blog_posts(self, published_only: bool = True) -> List[Record]:
        """博客列表，按创建时间倒序"""

    @abstractmethod
    def get_blog_post_by_slug(self, slug: str) -> Optional[Record]:
        """按 slug 查找博客"""

    # ==================== 共用校验 ====================

    @staticmethod
    def _list_category(category: CategoryLike) -> Category:
        return resolve_category(category, singleton=False)

    @staticmethod
    def _singleton_category(category: CategoryLike) -> Category:
        return resolve_category(category, singleton=True)

    @staticmethod
    def validate_record(category: Category, data: Dict[str, Any], existing: Optional[Record] = None) -> Record:
        """合并已有记录后用分类的 schema 校验，返回可写入的字段

        Raises:
            ValidationException: 字段校验失败
        """
        merged = dict(existing or {})
        merged.update({k: v for k, v in data.items() if k not in ("id", "created_at", "updated_at")})

        try:
            validated = category.schema.model_validate(merged)
        except ValidationError as e:
            details = [
                f"{'.'.join(str(p) for p in err['loc']) or category.value}: {err['msg']}"
                for err in e.errors()
            ]
            raise Err.invalid(f"{category.value} 数据校验失败", details=details)

        values = validated.model_dump()
        if category in _SLUG_CATEGORIES and not values.get("slug"):
            values["slug"] = generate_slug(values["title"])
        return values
