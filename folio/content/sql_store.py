"""基于 SQLAlchemy 的内容库

每个操作使用独立 session 和独立事务，不依赖请求作用域，
可以在线程池中被排序控制器调用。

使用示例:
    from folio.orm import init_database, db_manager
    from folio.content import SqlContentStore

    init_database(config=settings.database)
    store = SqlContentStore(db_manager.session_maker)

    store.persist_order("projects", [{"id": 3, "order": 0}, {"id": 1, "order": 1}])
"""

from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from folio.exceptions import BusinessException, Err
from folio.log import get_logger
from .categories import Category
from .store import CategoryLike, ContentStore, Record

logger = get_logger()


class SqlContentStore(ContentStore):
    """SQLAlchemy 内容库

    Args:
        session_factory: 返回新 Session 的可调用对象，通常是 db_manager.session_maker
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    @contextmanager
    def _transaction(self, action: str, category: Category):
        """写事务：业务异常原样抛出，数据库异常包装为 PersistenceException"""
        session = self._session_factory()
        try:
            with session.begin():
                yield session
        except BusinessException:
            raise
        except (SQLAlchemyError, LookupError) as e:
            logger.error(f"{action} 失败 [{category.value}]: {e}")
            raise Err.persistence(f"{category.value} {action}失败", details=[str(e)], category=category.value) from e
        finally:
            session.close()

    @contextmanager
    def _read(self):
        session = self._session_factory()
        try:
            yield session
        finally:
            session.close()

    @staticmethod
    def _get_or_404(session: Session, category: Category, item_id: int):
        obj = session.get(category.model, item_id)
        if obj is None:
            raise Err.not_found(f"{category.value} 记录不存在", resource_type=category.value, resource_id=item_id)
        return obj

    @staticmethod
    def _check_slug(session: Session, category: Category, values: Record, item_id: int = None) -> None:
        if category is not Category.BLOG_POSTS:
            return
        model = category.model
        stmt = select(model.id).where(model.slug == values["slug"])
        if item_id is not None:
            stmt = stmt.where(model.id != item_id)
        if session.scalar(stmt) is not None:
            raise Err.conflict(f"slug 已存在: {values['slug']}", resource_type=category.value)

    # ==================== 列表内容 ====================

    def fetch_items(self, category: CategoryLike) -> List[Record]:
        category = self._list_category(category)
        with self._read() as session:
            return [obj.to_dict() for obj in category.model.get_sorted(session)]

    def persist_order(self, category: CategoryLike, assignments: Sequence[Dict[str, Any]]) -> None:
        category = self._list_category(category)
        with self._transaction("排序保存", category) as session:
            count = category.model.apply_order(session, assignments)
        logger.info(f"排序已保存 [{category.value}]: {len(assignments)} 条，变更 {count} 条")

    def get_item(self, category: CategoryLike, item_id: int) -> Record:
        category = self._list_category(category)
        with self._read() as session:
            return self._get_or_404(session, category, item_id).to_dict()

    def create_item(self, category: CategoryLike, data: Dict[str, Any]) -> Record:
        category = self._list_category(category)
        values = self.validate_record(category, data)
        order = values.pop("order", None)

        with self._transaction("创建", category) as session:
            self._check_slug(session, category, values)
            obj = category.model(**values)
            if order is None:
                obj.init_sort_order(session)
            else:
                obj.order = order
            session.add(obj)
            session.flush()
            session.refresh(obj)
            record = obj.to_dict()
        return record

    def update_item(self, category: CategoryLike, item_id: int, data: Dict[str, Any]) -> Record:
        category = self._list_category(category)
        with self._transaction("更新", category) as session:
            obj = self._get_or_404(session, category, item_id)
            values = self.validate_record(category, data, existing=obj.to_dict())
            self._check_slug(session, category, values, item_id)
            if values.get("order") is None:
                values.pop("order", None)
            for key, value in values.items():
                setattr(obj, key, value)
            session.flush()
            record = obj.to_dict()
        return record

    def delete_item(self, category: CategoryLike, item_id: int) -> None:
        category = self._list_category(category)
        with self._transaction("删除", category) as session:
            session.delete(self._get_or_404(session, category, item_id))

    def normalize_order(self, category: CategoryLike) -> int:
        category = self._list_category(category)
        with self._transaction("重新编号", category) as session:
            return category.model.normalize_sort_order(session)

    # ==================== 单例内容 ====================

    def get_singleton(self, category: CategoryLike) -> Optional[Record]:
        category = self._singleton_category(category)
        with self._read() as session:
            obj = session.scalars(select(category.model).order_by(category.model.id).limit(1)).first()
            return obj.to_dict() if obj is not None else None

    def upsert_singleton(self, category: CategoryLike, data: Dict[str, Any]) -> Record:
        category = self._singleton_category(category)
        with self._transaction("保存", category) as session:
            obj = session.scalars(select(category.model).order_by(category.model.id).limit(1)).first()
            values = self.validate_record(category, data, existing=obj.to_dict() if obj else None)
            if obj is None:
                obj = category.model(**values)
                session.add(obj)
            else:
                for key, value in values.items():
                    setattr(obj, key, value)
            session.flush()
            session.refresh(obj)
            record = obj.to_dict()
        return record

    # ==================== 博客 ====================

    def list_blog_posts(self, published_only: bool = True) -> List[Record]:
        model = Category.BLOG_POSTS.model
        stmt = select(model).order_by(model.created_at.desc(), model.id.desc())
        if published_only:
            stmt = stmt.where(model.published.is_(True))
        with self._read() as session:
            return [obj.to_dict() for obj in session.scalars(stmt).all()]

    def get_blog_post_by_slug(self, slug: str) -> Optional[Record]:
        model = Category.BLOG_POSTS.model
        with self._read() as session:
            obj = session.scalars(select(model).where(model.slug == slug)).first()
            return obj.to_dict() if obj is not None else None
