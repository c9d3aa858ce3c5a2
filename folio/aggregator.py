"""公开内容聚合

把所有公开分类读成一个 PortfolioContent。内容库未配置或读取出错时，
按配置回退到示例内容；结果放在 TTLCache 里，管理端写入后调用 clear_cache() 刷新。
读取出错后回退得到的示例内容不进缓存，内容库恢复后下一次请求即可读到真实数据。

使用示例:
    aggregator = ContentAggregator(store, sample_fallback=True, cache_ttl=300)
    content = aggregator.get_cached_content()
    content.projects[0]["title"]
"""

import threading
import time
from typing import Any, Callable, Optional, Tuple

from cachetools import TTLCache

from folio.content import (
    Category,
    CategoryLike,
    ContentStore,
    PortfolioContent,
    resolve_category,
    sample_items,
    sample_singleton,
)
from folio.exceptions import Err
from folio.log import get_logger

logger = get_logger()

# PortfolioContent 字段 -> 列表分类
_LIST_FIELDS = {
    "skill_categories": Category.SKILLS,
    "education": Category.EDUCATION,
    "experience": Category.EXPERIENCE,
    "projects": Category.PROJECTS,
    "achievements": Category.ACHIEVEMENTS,
    "certificates": Category.CERTIFICATES,
    "gallery": Category.GALLERY,
    "hobbies": Category.HOBBIES,
    "future_goals": Category.FUTURE_GOALS,
    "testimonials": Category.TESTIMONIALS,
}

CATEGORY_FIELDS = {category: field for field, category in _LIST_FIELDS.items()}
CATEGORY_FIELDS.update({
    Category.BLOG_POSTS: "blog_posts",
    Category.PERSONAL_INFO: "personal_info",
    Category.CONTACT_INFO: "contact_info",
})


def build_sample_content() -> PortfolioContent:
    """示例内容组成的 PortfolioContent"""
    data = {field: sample_items(category) for field, category in _LIST_FIELDS.items()}
    data["blog_posts"] = [p for p in sample_items(Category.BLOG_POSTS) if p["published"]]
    data["personal_info"] = sample_singleton(Category.PERSONAL_INFO)
    data["contact_info"] = sample_singleton(Category.CONTACT_INFO)
    return PortfolioContent(**data)


class ContentAggregator:
    """公开内容聚合器

    Args:
        store: 内容库，None 表示未配置
        sample_fallback: 未配置或出错时是否回退到示例内容
        cache_ttl: 缓存秒数，小于等于 0 时不缓存
        clock: TTLCache 使用的时间函数，默认 time.monotonic
    """

    _CACHE_KEY = "public_content"

    def __init__(
        self,
        store: Optional[ContentStore],
        sample_fallback: bool = True,
        cache_ttl: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.sample_fallback = sample_fallback
        self.cache_ttl = cache_ttl
        self._lock = threading.RLock()
        self._cache: Optional[TTLCache] = (
            TTLCache(maxsize=1, ttl=cache_ttl, timer=clock) if cache_ttl > 0 else None
        )

    @property
    def is_using_sample_data(self) -> bool:
        return self.store is None

    def get_all_public_content(self) -> PortfolioContent:
        """读取全部公开内容，博客只包含已发布的文章"""
        content, _ = self._load()
        return content

    def _load(self) -> Tuple[PortfolioContent, bool]:
        """读取内容，第二个返回值表示是否因读取出错回退到了示例内容"""
        if self.store is None:
            if not self.sample_fallback:
                raise Err.unavailable("内容库未配置")
            logger.warning("内容库未配置，使用示例内容")
            return build_sample_content(), False

        try:
            return self._fetch(self.store), False
        except Exception as e:
            if not self.sample_fallback:
                raise
            logger.error(f"读取作品集内容失败: {e}")
            logger.warning("读取出错，回退到示例内容")
            return build_sample_content(), True

    @staticmethod
    def _fetch(store: ContentStore) -> PortfolioContent:
        data = {field: store.fetch_items(category) for field, category in _LIST_FIELDS.items()}
        data["blog_posts"] = store.list_blog_posts(published_only=True)
        data["personal_info"] = store.get_singleton(Category.PERSONAL_INFO)
        data["contact_info"] = store.get_singleton(Category.CONTACT_INFO)
        return PortfolioContent(**data)

    def get_cached_content(self, force_refresh: bool = False) -> PortfolioContent:
        """带 TTL 缓存的 get_all_public_content"""
        with self._lock:
            if self._cache is not None and not force_refresh:
                cached = self._cache.get(self._CACHE_KEY)
                if cached is not None:
                    return cached

            content, fell_back = self._load()
            if self._cache is not None:
                if fell_back:
                    self._cache.pop(self._CACHE_KEY, None)
                else:
                    self._cache[self._CACHE_KEY] = content
            return content

    def clear_cache(self) -> None:
        if self._cache is None:
            return
        with self._lock:
            self._cache.clear()

    def get_category_content(self, category: CategoryLike) -> Any:
        """缓存内容中某个分类的数据（列表或单例）"""
        category = resolve_category(category)
        return getattr(self.get_cached_content(), CATEGORY_FIELDS[category])
