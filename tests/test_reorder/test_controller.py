"""排序控制器测试

测试 ReorderController 的上移/下移、乐观更新与失败回滚。
"""

import asyncio

import pytest

from folio.content import MemoryContentStore
from folio.exceptions import (
    ErrorCode,
    PersistenceException,
    ReorderInProgressException,
    ValidationException,
)
from folio.reorder import ReorderController


def _seed(store, titles):
    return [store.create_item("projects", {"title": t}) for t in titles]


def _titles(items):
    return [item["title"] for item in items]


class FailingStore(MemoryContentStore):
    """persist_order 总是失败"""

    def __init__(self):
        super().__init__()
        self.persist_calls = 0

    def persist_order(self, category, assignments):
        self.persist_calls += 1
        raise PersistenceException("写入失败")


class RecordingStore(MemoryContentStore):
    """记录每次 persist_order 的参数"""

    def __init__(self):
        super().__init__()
        self.calls = []

    def persist_order(self, category, assignments):
        self.calls.append((category, list(assignments)))
        super().persist_order(category, assignments)


class BlockingAsyncStore(MemoryContentStore):
    """异步 persist_order，等待外部放行"""

    def __init__(self):
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def persist_order(self, category, assignments):
        self.started.set()
        await self.release.wait()
        MemoryContentStore.persist_order(self, category, assignments)


class SlowFetchStore(MemoryContentStore):
    """异步 fetch_items，等待外部放行"""

    def __init__(self):
        super().__init__()
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def fetch_items(self, category):
        self.started.set()
        await self.release.wait()
        return MemoryContentStore.fetch_items(self, category)


class TestMove:
    """上移/下移测试"""

    @pytest.mark.asyncio
    async def test_move_up_swaps_and_renumbers(self):
        """测试上移后本地与远端顺序一致"""
        store = MemoryContentStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()

        assert await controller.move_up(2) is True
        assert _titles(controller.items) == ["A", "C", "B"]
        assert [i["order"] for i in controller.items] == [0, 1, 2]
        assert _titles(store.fetch_items("projects")) == ["A", "C", "B"]

    @pytest.mark.asyncio
    async def test_move_down(self):
        """测试下移"""
        store = MemoryContentStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()

        assert await controller.move_down(0) is True
        assert _titles(controller.items) == ["B", "A", "C"]
        assert _titles(store.fetch_items("projects")) == ["B", "A", "C"]

    @pytest.mark.asyncio
    async def test_boundary_moves_are_noops(self):
        """测试边界移动不改变列表也不写入"""
        store = RecordingStore()
        _seed(store, ["A", "B"])
        controller = ReorderController(store, "projects")
        await controller.load()

        assert await controller.move_up(0) is False
        assert await controller.move_down(1) is False
        assert _titles(controller.items) == ["A", "B"]
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_single_persist_call_with_full_batch(self):
        """测试每次移动只写入一次，包含整组 {id, order}"""
        store = RecordingStore()
        items = _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()

        await controller.move_up(1)
        assert len(store.calls) == 1
        _, assignments = store.calls[0]
        assert assignments == [
            {"id": items[1]["id"], "order": 0},
            {"id": items[0]["id"], "order": 1},
            {"id": items[2]["id"], "order": 2},
        ]

    @pytest.mark.asyncio
    async def test_index_out_of_range(self):
        """测试位置超出范围"""
        store = MemoryContentStore()
        _seed(store, ["A"])
        controller = ReorderController(store, "projects")
        await controller.load()

        with pytest.raises(ValidationException) as exc_info:
            await controller.move_up(5)
        assert exc_info.value.code == ErrorCode.INDEX_OUT_OF_RANGE

    @pytest.mark.asyncio
    async def test_items_without_ids_move_locally(self):
        """测试没有 id 的列表只在本地移动"""
        store = RecordingStore()
        updates = []
        controller = ReorderController(
            store, "hobbies",
            items=[{"title": "A", "order": 0}, {"title": "B", "order": 1}],
            on_update=lambda: updates.append(1),
        )

        assert await controller.move_down(0) is True
        assert _titles(controller.items) == ["B", "A"]
        assert store.calls == []
        assert updates == []

    def test_singleton_category_rejected(self):
        """测试单例分类不能排序"""
        with pytest.raises(ValidationException):
            ReorderController(MemoryContentStore(), "personal_info")


class TestRollback:
    """失败回滚测试"""

    @pytest.mark.asyncio
    async def test_failure_restores_snapshot(self):
        """测试写入失败时恢复到移动前的列表"""
        store = FailingStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()
        before = [dict(i) for i in controller.items]

        with pytest.raises(PersistenceException):
            await controller.move_up(1)

        assert controller.items == before
        assert controller.pending is False
        assert store.persist_calls == 1

    @pytest.mark.asyncio
    async def test_failure_skips_on_update(self):
        """测试失败时不调用 on_update"""
        store = FailingStore()
        _seed(store, ["A", "B"])
        updates = []
        controller = ReorderController(store, "projects", on_update=lambda: updates.append(1))
        await controller.load()

        with pytest.raises(PersistenceException):
            await controller.move_down(0)
        assert updates == []


class TestCallbacks:
    """回调测试"""

    @pytest.mark.asyncio
    async def test_sync_on_update(self):
        """测试成功后调用同步回调一次"""
        store = MemoryContentStore()
        _seed(store, ["A", "B"])
        updates = []
        controller = ReorderController(store, "projects", on_update=lambda: updates.append(1))
        await controller.load()

        await controller.move_down(0)
        assert updates == [1]

    @pytest.mark.asyncio
    async def test_async_on_update(self):
        """测试异步回调被 await"""
        store = MemoryContentStore()
        _seed(store, ["A", "B"])
        updates = []

        async def refresh():
            updates.append("refreshed")

        controller = ReorderController(store, "projects", on_update=refresh)
        await controller.load()

        await controller.move_up(1)
        assert updates == ["refreshed"]


class TestConcurrency:
    """重叠调用测试"""

    @pytest.mark.asyncio
    async def test_overlapping_move_rejected(self):
        """测试写入进行中时再次移动抛出 ReorderInProgressException"""
        store = BlockingAsyncStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()

        first = asyncio.create_task(controller.move_up(2))
        await store.started.wait()
        assert controller.pending is True

        with pytest.raises(ReorderInProgressException):
            await controller.move_up(1)

        store.release.set()
        assert await first is True
        assert controller.pending is False
        assert _titles(store.fetch_items("projects")) == ["A", "C", "B"]

    @pytest.mark.asyncio
    async def test_reload_and_move_holds_slot_while_loading(self):
        """测试读取最新列表期间控制器已被占用，重叠的移动被拒绝而不是覆盖前一次"""
        store = SlowFetchStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")

        first = asyncio.create_task(controller.reload_and_move(2, "up"))
        await store.started.wait()
        assert controller.pending is True

        with pytest.raises(ReorderInProgressException):
            await controller.reload_and_move(1, "up")

        store.release.set()
        assert await first is True
        assert _titles(MemoryContentStore.fetch_items(store, "projects")) == ["A", "C", "B"]
        assert _titles(controller.items) == ["A", "C", "B"]

    @pytest.mark.asyncio
    async def test_load_rejected_while_write_pending(self):
        """测试写入进行中时不允许重新读取，成功后本地与远端一致"""
        store = BlockingAsyncStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()

        first = asyncio.create_task(controller.move_up(2))
        await store.started.wait()
        with pytest.raises(ReorderInProgressException):
            await controller.load()

        store.release.set()
        await first
        persisted = store.fetch_items("projects")
        assert [(i["title"], i["order"]) for i in controller.items] == [
            (i["title"], i["order"]) for i in persisted
        ]
        assert _titles(persisted) == ["A", "C", "B"]


class TestCancellation:
    """取消测试"""

    @pytest.mark.asyncio
    async def test_cancel_during_write_restores_snapshot(self):
        """测试写入过程中被取消时恢复到移动前的列表"""
        store = BlockingAsyncStore()
        _seed(store, ["A", "B", "C"])
        controller = ReorderController(store, "projects")
        await controller.load()
        before = [dict(i) for i in controller.items]

        task = asyncio.create_task(controller.move_up(2))
        await store.started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.items == before
        assert controller.pending is False


class TestCallbackErrors:
    """回调出错测试"""

    @pytest.mark.asyncio
    async def test_on_update_error_does_not_fail_move(self):
        """测试写入成功后回调出错，移动仍然算成功"""
        store = MemoryContentStore()
        _seed(store, ["A", "B"])

        def broken():
            raise RuntimeError("缓存服务不可用")

        controller = ReorderController(store, "projects", on_update=broken)
        await controller.load()

        assert await controller.move_down(0) is True
        assert _titles(controller.items) == ["B", "A"]
        assert _titles(store.fetch_items("projects")) == ["B", "A"]


class TestOrderProperties:
    """排序性质测试"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [1, 2, 3])
    async def test_move_up_then_down_restores_sequence(self, index):
        """测试 move_up(i) 之后 move_down(i-1) 恢复原顺序"""
        store = MemoryContentStore()
        _seed(store, ["A", "B", "C", "D"])
        controller = ReorderController(store, "projects")
        await controller.load()
        before = _titles(controller.items)

        await controller.move_up(index)
        await controller.move_down(index - 1)

        assert _titles(controller.items) == before
        assert _titles(store.fetch_items("projects")) == before
        assert [i["order"] for i in controller.items] == [0, 1, 2, 3]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("orders", [[5, 5, 20], [3, 9, 100], [0, 0, 0]])
    async def test_non_contiguous_orders_renumbered(self, orders):
        """测试原 order 有间隔或重复时，移动后 order 等于位置"""
        store = MemoryContentStore()
        seeded = _seed(store, ["A", "B", "C"])
        items = [dict(item, order=order) for item, order in zip(seeded, orders)]
        controller = ReorderController(store, "projects", items=items)

        await controller.move_down(0)

        assert _titles(controller.items) == ["B", "A", "C"]
        assert [i["order"] for i in controller.items] == [0, 1, 2]
        persisted = store.fetch_items("projects")
        assert _titles(persisted) == ["B", "A", "C"]
        assert [i["order"] for i in persisted] == [0, 1, 2]
