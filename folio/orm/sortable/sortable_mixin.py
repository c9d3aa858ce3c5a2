"""排序管理 Mixin

在同一张表内维护显示顺序。排序号从 0 开始，同序号时按 id 排序。
所有类方法都接收显式 session，调用方负责事务边界。

使用示例:
    with session.begin():
        items = Hobby.get_sorted(session)
        Hobby.apply_order(session, [{"id": 3, "order": 0}, {"id": 1, "order": 1}])
        Hobby.normalize_sort_order(session)
"""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session


class SortableMixin:
    """排序管理 Mixin

    字段要求（使用者需定义或使用 SortFieldMixin）:
        - order: int

    可配置属性:
        - __sort_field__: 排序字段名，默认 "order"
    """

    __sort_field__: str = "order"

    # ==================== 内部方法 ====================

    @classmethod
    def _sort_column(cls):
        return getattr(cls, getattr(cls, '__sort_field__', 'order'))

    def _get_sort_value(self) -> int:
        return getattr(self, self.__class__.__sort_field__, 0) or 0

    def _set_sort_value(self, value: int) -> None:
        setattr(self, self.__class__.__sort_field__, value)

    # ==================== 实例方法 ====================

    def init_sort_order(self, session: Session) -> None:
        """新记录放到最后"""
        self._set_sort_value(self.__class__.get_next_sort_order(session))

    # ==================== 类方法 ====================

    @classmethod
    def get_max_sort_order(cls, session: Session) -> Optional[int]:
        """最大排序号，无记录返回 None"""
        return session.scalar(select(func.max(cls._sort_column())))

    @classmethod
    def get_next_sort_order(cls, session: Session) -> int:
        """追加到末尾时使用的排序号"""
        max_order = cls.get_max_sort_order(session)
        return 0 if max_order is None else max_order + 1

    @classmethod
    def get_sorted(cls, session: Session) -> List[Any]:
        """按 (order, id) 排序的全部记录"""
        stmt = select(cls).order_by(cls._sort_column(), cls.id)
        return list(session.scalars(stmt).all())

    @classmethod
    def apply_order(cls, session: Session, assignments: Sequence[Dict[str, Any]]) -> int:
        """批量写入排序号

        Args:
            assignments: [{"id": ..., "order": ...}, ...]

        Returns:
            更新的记录数

        Raises:
            LookupError: 有 id 不存在，此时不修改任何记录
        """
        if not assignments:
            return 0

        wanted = {a["id"]: int(a["order"]) for a in assignments}
        items = session.scalars(select(cls).where(cls.id.in_(list(wanted)))).all()
        found = {item.id: item for item in items}

        missing = [item_id for item_id in wanted if item_id not in found]
        if missing:
            raise LookupError(f"{cls.__name__} 记录不存在: {missing}")

        count = 0
        for item_id, order in wanted.items():
            item = found[item_id]
            if item._get_sort_value() != order:
                item._set_sort_value(order)
                count += 1
        return count

    @classmethod
    def normalize_sort_order(cls, session: Session) -> int:
        """规范化排序号，按当前 (order, id) 顺序重新编号为 0..N-1

        Returns:
            更新的记录数
        """
        count = 0
        for i, item in enumerate(cls.get_sorted(session)):
            if item._get_sort_value() != i:
                item._set_sort_value(i)
                count += 1
        return count


__all__ = [
    "SortableMixin",
]
