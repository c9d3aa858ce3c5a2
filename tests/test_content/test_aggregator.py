"""公开内容聚合与示例数据测试"""

import pytest

from folio.aggregator import ContentAggregator, build_sample_content
from folio.content import Category, LIST_CATEGORIES, MemoryContentStore, sample_items, seed_store
from folio.exceptions import PersistenceException, ServiceUnavailableException


class BrokenStore(MemoryContentStore):
    """读取总是失败"""

    def fetch_items(self, category):
        raise PersistenceException("连接失败")


class FlakyStore(MemoryContentStore):
    """前几次读取失败，之后恢复"""

    def __init__(self, failures=1):
        super().__init__()
        self.failures = failures

    def fetch_items(self, category):
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceException("连接超时")
        return super().fetch_items(category)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestSampleData:
    """示例数据测试"""

    def test_sample_items_numbered_from_zero(self):
        """测试示例记录带 id 和从 0 开始的 order"""
        items = sample_items(Category.PROJECTS)
        assert [i["order"] for i in items] == list(range(len(items)))
        assert [i["id"] for i in items] == list(range(1, len(items) + 1))
        assert items[0]["slug"]

    def test_sample_content_only_published_posts(self):
        """测试示例内容只包含已发布博客"""
        content = build_sample_content()
        assert content.personal_info["name"] == "Your Name"
        assert content.blog_posts
        assert all(p["published"] for p in content.blog_posts)

    def test_seed_store(self):
        """测试向空库写入示例内容"""
        store = MemoryContentStore()
        written = seed_store(store)
        assert written["projects"] == len(sample_items(Category.PROJECTS))
        assert written["personal_info"] == 1
        assert store.get_singleton("personal_info")["name"] == "Your Name"
        for category in LIST_CATEGORIES:
            assert [i["order"] for i in store.fetch_items(category)] == list(range(written[category.value]))

    def test_seed_store_skips_existing(self):
        """测试已有数据的分类跳过"""
        store = MemoryContentStore()
        store.create_item("hobbies", {"title": "Chess"})
        written = seed_store(store)
        assert written["hobbies"] == 0
        assert [h["title"] for h in store.fetch_items("hobbies")] == ["Chess"]


class TestAggregator:
    """聚合器测试"""

    def test_reads_store(self):
        """测试从内容库读取全部公开内容"""
        store = MemoryContentStore()
        store.upsert_singleton("personal_info", {"name": "Ada"})
        store.create_item("projects", {"title": "Engine"})
        store.create_item("blog_posts", {"title": "Draft"})
        store.create_item("blog_posts", {"title": "Live", "published": True})

        content = ContentAggregator(store).get_all_public_content()
        assert content.personal_info["name"] == "Ada"
        assert [p["title"] for p in content.projects] == ["Engine"]
        assert [p["title"] for p in content.blog_posts] == ["Live"]
        assert content.contact_info is None

    def test_no_store_uses_sample(self):
        """测试未配置内容库时使用示例内容"""
        aggregator = ContentAggregator(None)
        assert aggregator.is_using_sample_data is True
        assert aggregator.get_all_public_content().projects

    def test_no_store_without_fallback(self):
        """测试未配置内容库且不回退时抛出异常"""
        with pytest.raises(ServiceUnavailableException):
            ContentAggregator(None, sample_fallback=False).get_all_public_content()

    def test_store_error_falls_back(self):
        """测试读取出错时回退到示例内容"""
        aggregator = ContentAggregator(BrokenStore())
        assert aggregator.is_using_sample_data is False
        assert aggregator.get_all_public_content().personal_info["name"] == "Your Name"

    def test_store_error_without_fallback(self):
        """测试不回退时原样抛出"""
        with pytest.raises(PersistenceException):
            ContentAggregator(BrokenStore(), sample_fallback=False).get_all_public_content()

    def test_cache_ttl(self):
        """测试缓存在 TTL 内复用，过期后重新读取"""
        store = MemoryContentStore()
        clock = FakeClock()
        aggregator = ContentAggregator(store, cache_ttl=300, clock=clock)

        first = aggregator.get_cached_content()
        store.create_item("hobbies", {"title": "Chess"})
        clock.now = 100
        assert aggregator.get_cached_content() is first

        clock.now = 301
        assert [h["title"] for h in aggregator.get_cached_content().hobbies] == ["Chess"]

    def test_clear_cache_and_force_refresh(self):
        """测试清空缓存与强制刷新"""
        store = MemoryContentStore()
        aggregator = ContentAggregator(store, clock=FakeClock())
        first = aggregator.get_cached_content()
        assert aggregator.get_cached_content(force_refresh=True) is not first

        store.create_item("hobbies", {"title": "Chess"})
        aggregator.clear_cache()
        assert aggregator.get_cached_content().hobbies[0]["title"] == "Chess"

    def test_get_category_content(self):
        """测试按分类读取缓存内容"""
        store = MemoryContentStore()
        store.create_item("hobbies", {"title": "Chess"})
        aggregator = ContentAggregator(store)
        assert aggregator.get_category_content("hobbies")[0]["title"] == "Chess"
        assert aggregator.get_category_content("skills") == []
        assert aggregator.get_category_content("personal_info") is None

    def test_fallback_result_is_not_cached(self):
        """测试读取出错回退的示例内容不进缓存，内容库恢复后立即读到真实数据"""
        store = FlakyStore(failures=1)
        store.upsert_singleton("personal_info", {"name": "Ada"})
        aggregator = ContentAggregator(store, cache_ttl=300, clock=FakeClock())

        assert aggregator.get_cached_content().personal_info["name"] == "Your Name"
        assert aggregator.get_cached_content().personal_info["name"] == "Ada"

    def test_zero_ttl_disables_cache(self):
        """测试 TTL 为 0 时每次都重新读取"""
        store = MemoryContentStore()
        aggregator = ContentAggregator(store, cache_ttl=0)
        aggregator.get_cached_content()
        store.create_item("hobbies", {"title": "Chess"})
        assert aggregator.get_cached_content().hobbies[0]["title"] == "Chess"
        aggregator.clear_cache()
