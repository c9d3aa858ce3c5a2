"""进程内内容库

用于测试和无数据库的演示环境。所有操作在一把锁内完成，
persist_order 先校验整批再写入，保证批量写入要么全部生效要么全部不生效。
"""

import copy
import threading
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from folio.exceptions import Err
from folio.log import get_logger
from .categories import Category, LIST_CATEGORIES, SINGLETON_CATEGORIES
from .store import CategoryLike, ContentStore, Record

logger = get_logger()


class MemoryContentStore(ContentStore):
    """进程内内容库

    使用示例:
        store = MemoryContentStore()
        store.create_item("hobbies", {"title": "Photography"})
        store.fetch_items("hobbies")
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: Dict[Category, Dict[int, Record]] = {c: {} for c in LIST_CATEGORIES}
        self._singletons: Dict[Category, Optional[Record]] = {c: None for c in SINGLETON_CATEGORIES}
        self._next_id = 1

    def _new_id(self) -> int:
        item_id = self._next_id
        self._next_id += 1
        return item_id

    @staticmethod
    def _sorted(records) -> List[Record]:
        return sorted(records, key=lambda r: (r.get("order") or 0, r["id"]))

    def _get_or_404(self, category: Category, item_id: int) -> Record:
        record = self._items[category].get(item_id)
        if record is None:
            raise Err.not_found(f"{category.value} 记录不存在", resource_type=category.value, resource_id=item_id)
        return record

    def _check_slug(self, category: Category, values: Record, item_id: int = None) -> None:
        if category is not Category.BLOG_POSTS:
            return
        for record in self._items[category].values():
            if record["slug"] == values["slug"] and record["id"] != item_id:
                raise Err.conflict(f"slug 已存在: {values['slug']}", resource_type=category.value)

    # ==================== 列表内容 ====================

    def fetch_items(self, category: CategoryLike) -> List[Record]:
        category = self._list_category(category)
        with self._lock:
            return copy.deepcopy(self._sorted(self._items[category].values()))

    def persist_order(self, category: CategoryLike, assignments: Sequence[Dict[str, Any]]) -> None:
        category = self._list_category(category)
        with self._lock:
            table = self._items[category]
            try:
                wanted = {a["id"]: int(a["order"]) for a in assignments}
            except (KeyError, TypeError, ValueError) as e:
                raise Err.persistence(f"{category.value} 排序数据无效", details=[str(e)], category=category.value)

            missing = [item_id for item_id in wanted if item_id not in table]
            if missing:
                logger.error(f"排序保存失败 [{category.value}]: 记录不存在 {missing}")
                raise Err.persistence(
                    f"{category.value} 排序保存失败",
                    details=[f"记录不存在: {missing}"],
                    category=category.value,
                )

            for item_id, order in wanted.items():
                table[item_id]["order"] = order
        logger.info(f"排序已保存 [{category.value}]: {len(wanted)} 条")

    def get_item(self, category: CategoryLike, item_id: int) -> Record:
        category = self._list_category(category)
        with self._lock:
            return copy.deepcopy(self._get_or_404(category, item_id))

    def create_item(self, category: CategoryLike, data: Dict[str, Any]) -> Record:
        category = self._list_category(category)
        values = self.validate_record(category, data)
        with self._lock:
            table = self._items[category]
            self._check_slug(category, values)
            if values.get("order") is None:
                orders = [r.get("order") or 0 for r in table.values()]
                values["order"] = max(orders) + 1 if orders else 0
            values["id"] = self._new_id()
            values["created_at"] = datetime.now()
            values["updated_at"] = None
            table[values["id"]] = values
            return copy.deepcopy(values)

    def update_item(self, category: CategoryLike, item_id: int, data: Dict[str, Any]) -> Record:
        category = self._list_category(category)
        with self._lock:
            record = self._get_or_404(category, item_id)
            values = self.validate_record(category, data, existing=record)
            self._check_slug(category, values, item_id)
            if values.get("order") is None:
                values["order"] = record.get("order") or 0
            record.update(values)
            record["updated_at"] = datetime.now()
            return copy.deepcopy(record)

    def delete_item(self, category: CategoryLike, item_id: int) -> None:
        category = self._list_category(category)
        with self._lock:
            self._get_or_404(category, item_id)
            del self._items[category][item_id]

    def normalize_order(self, category: CategoryLike) -> int:
        category = self._list_category(category)
        count = 0
        with self._lock:
            for i, record in enumerate(self._sorted(self._items[category].values())):
                if record.get("order") != i:
                    record["order"] = i
                    count += 1
        return count

    # ==================== 单例内容 ====================

    def get_singleton(self, category: CategoryLike) -> Optional[Record]:
        category = self._singleton_category(category)
        with self._lock:
            return copy.deepcopy(self._singletons[category])

    def upsert_singleton(self, category: CategoryLike, data: Dict[str, Any]) -> Record:
        category = self._singleton_category(category)
        with self._lock:
            current = self._singletons[category]
            values = self.validate_record(category, data, existing=current)
            if current is None:
                values.update(id=self._new_id(), created_at=datetime.now(), updated_at=None)
                self._singletons[category] = values
            else:
                current.update(values)
                current["updated_at"] = datetime.now()
            return copy.deepcopy(self._singletons[category])

    # ==================== 博客 ====================

    def list_blog_posts(self, published_only: bool = True) -> List[Record]:
        with self._lock:
            posts = [
                r for r in self._items[Category.BLOG_POSTS].values()
                if r.get("published") or not published_only
            ]
            posts.sort(key=lambda r: (r["created_at"], r["id"]), reverse=True)
            return copy.deepcopy(posts)

    def get_blog_post_by_slug(self, slug: str) -> Optional[Record]:
        with self._lock:
            for record in self._items[Category.BLOG_POSTS].values():
                if record.get("slug") == slug:
                    return copy.deepcopy(record)
        return None
