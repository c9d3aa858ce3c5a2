"""列表排序控制器

持有某个分类的本地列表，提供上移/下移操作。每次移动先乐观地更新本地列表，
再用一次 persist_order 把整组 {id, order} 写回内容库；写入失败时恢复到移动前的快照。
on_update 在写入成功后调用，它抛出的异常只记录日志，不影响移动结果。

使用示例:
    controller = ReorderController(store, "projects", on_update=aggregator.clear_cache)
    await controller.load()
    await controller.move_up(2)
    controller.items[1]["order"]   # 1
"""

import asyncio
import copy
import inspect
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

from starlette.concurrency import run_in_threadpool

from folio.content import Category, ContentStore, CategoryLike, resolve_category
from folio.exceptions import ErrorCode, Err, ReorderInProgressException
from folio.log import get_logger

logger = get_logger()

Item = Dict[str, Any]


async def _call(func: Callable, *args) -> Any:
    """异步函数直接 await，同步函数放到线程池执行"""
    if inspect.iscoroutinefunction(func):
        return await func(*args)
    return await run_in_threadpool(func, *args)


class ReorderController:
    """有序列表的上移/下移控制器

    Args:
        store: 内容库，同步或异步实现均可
        category: 列表分类
        items: 初始列表，不传时需先调用 load()
        on_update: 写入成功后调用一次的回调（同步或异步），用于重新同步数据

    状态:
        items: 当前列表
        pending: 移动进行中（包括 reload_and_move 的读取和远端写入）
    """

    def __init__(
        self,
        store: ContentStore,
        category: CategoryLike,
        items: Optional[Sequence[Item]] = None,
        on_update: Optional[Callable[[], Any]] = None,
    ):
        self.store = store
        self.category: Category = resolve_category(category, singleton=False)
        self.items: List[Item] = [dict(item) for item in items] if items else []
        self.on_update = on_update
        self.pending = False

    async def load(self) -> List[Item]:
        """从内容库重新读取列表，移动进行中时不允许读取"""
        if self.pending:
            raise ReorderInProgressException(category=self.category.value)
        return await self._fetch()

    async def _fetch(self) -> List[Item]:
        self.items = list(await _call(self.store.fetch_items, self.category))
        return self.items

    async def move_up(self, index: int) -> bool:
        """与前一项交换位置，index 为 0 时不做任何事

        Returns:
            是否发生了移动
        """
        return await self._run(lambda: self._move(index, index - 1))

    async def move_down(self, index: int) -> bool:
        """与后一项交换位置，index 为最后一项时不做任何事"""
        return await self._run(lambda: self._move(index, index + 1))

    async def reload_and_move(self, index: int, direction: str) -> bool:
        """读取最新列表后移动一位，读取和写入期间一直占用控制器

        Args:
            index: 列表中的位置
            direction: "up" 或 "down"
        """
        target = index - 1 if direction == "up" else index + 1

        async def operation():
            await self._fetch()
            return await self._move(index, target)

        return await self._run(operation)

    async def _run(self, operation: Callable[[], Awaitable[Tuple[bool, bool]]]) -> bool:
        # 检查与置位之间没有 await，同一事件循环内的重叠调用一定会被拒绝
        if self.pending:
            raise ReorderInProgressException(category=self.category.value)
        self.pending = True
        try:
            moved, written = await operation()
        finally:
            self.pending = False

        if written:
            await self._notify()
        return moved

    async def _move(self, index: int, target: int) -> Tuple[bool, bool]:
        """返回 (是否移动, 是否写入了内容库)"""
        size = len(self.items)
        if not 0 <= index < size:
            raise Err.invalid(
                f"位置超出范围: {index}",
                code=ErrorCode.INDEX_OUT_OF_RANGE,
                details=[f"index 必须在 0 到 {size - 1} 之间"],
            )
        if not 0 <= target < size:
            return False, False

        snapshot = copy.deepcopy(self.items)

        reordered = [dict(item) for item in self.items]
        reordered[index], reordered[target] = reordered[target], reordered[index]
        for position, item in enumerate(reordered):
            item["order"] = position
        self.items = reordered

        assignments = [
            {"id": item["id"], "order": item["order"]}
            for item in reordered
            if item.get("id") is not None
        ]
        if not assignments:
            return True, False

        try:
            await _call(self.store.persist_order, self.category, assignments)
        except (Exception, asyncio.CancelledError) as e:
            self.items = snapshot
            logger.warning(f"排序保存失败，已恢复 [{self.category.value}]: {e!r}")
            raise

        logger.info(f"排序已更新 [{self.category.value}]: {index} -> {target}")
        return True, True

    async def _notify(self) -> None:
        """调用 on_update；写入已经成功，回调出错只记录日志"""
        if self.on_update is None:
            return
        try:
            result = self.on_update()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"排序更新回调失败 [{self.category.value}]: {e}")
