"""管理端路由（需要管理员令牌）

端点列表：
    GET    /api/admin/content/{category}             - 分类列表（按 order）
    POST   /api/admin/content/{category}             - 新建
    POST   /api/admin/content/{category}/move        - 上移/下移一位
    PUT    /api/admin/content/{category}/order       - 批量写入排序
    POST   /api/admin/content/{category}/normalize   - 排序号重新编号
    GET    /api/admin/content/{category}/{id}        - 详情
    PUT    /api/admin/content/{category}/{id}        - 更新
    DELETE /api/admin/content/{category}/{id}        - 删除
    GET    /api/admin/singletons/{category}          - 单例内容
    PUT    /api/admin/singletons/{category}          - 写入单例内容
    GET    /api/admin/contact-messages               - 联系留言分页
    POST   /api/admin/contact-messages/{id}/read     - 标记已读
    DELETE /api/admin/guestbook/{id}                 - 删除留言
    POST   /api/admin/uploads/{path_key}             - 上传文件

所有写操作成功后清空公开内容缓存。
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from folio import contact, guestbook
from folio.aggregator import ContentAggregator
from folio.auth import require_admin
from folio.config import AppSettings
from folio.content import ContentStore, MoveRequest, OrderAssignment, resolve_category
from folio.log import api_logger as logger
from folio.orm import get_db
from folio.reorder import ReorderController
from folio.response import Resp
from folio.uploads import LocalUploadStorage, validate_upload
from .dependencies import get_aggregator, get_settings, get_store, get_upload_storage


def _controller_for(request: Request, store: ContentStore, aggregator: ContentAggregator, category) -> ReorderController:
    """每个分类一个常驻控制器，同一分类的移动请求不能重叠"""
    controllers: Dict[Any, ReorderController] = request.app.state.reorder_controllers
    controller = controllers.get(category)
    if controller is None or controller.store is not store:
        controller = ReorderController(store, category, on_update=aggregator.clear_cache)
        controllers[category] = controller
    return controller


def create_admin_router() -> APIRouter:
    """创建管理端路由"""
    router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])

    # ==================== 列表内容 ====================

    @router.get("/content/{category}", summary="分类列表")
    def list_items(category: str, store: ContentStore = Depends(get_store)):
        return Resp.OK(store.fetch_items(resolve_category(category, singleton=False)))

    @router.post("/content/{category}", summary="新建")
    def create_item(
        category: str,
        data: Dict[str, Any],
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        item = store.create_item(resolve_category(category, singleton=False), data)
        aggregator.clear_cache()
        return Resp.Created(item)

    @router.post("/content/{category}/move", summary="上移/下移一位")
    async def move_item(
        category: str,
        body: MoveRequest,
        request: Request,
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        category = resolve_category(category, singleton=False)
        controller = _controller_for(request, store, aggregator, category)
        moved = await controller.reload_and_move(body.index, body.direction)
        return Resp.OK({"moved": moved, "items": controller.items})

    @router.put("/content/{category}/order", summary="批量写入排序")
    def save_order(
        category: str,
        assignments: List[OrderAssignment],
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        category = resolve_category(category, singleton=False)
        store.persist_order(category, [a.model_dump() for a in assignments])
        aggregator.clear_cache()
        return Resp.OK(store.fetch_items(category))

    @router.post("/content/{category}/normalize", summary="排序号重新编号")
    def normalize_order(
        category: str,
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        count = store.normalize_order(resolve_category(category, singleton=False))
        aggregator.clear_cache()
        return Resp.OK({"updated": count})

    @router.get("/content/{category}/{item_id:int}", summary="详情")
    def get_item(category: str, item_id: int, store: ContentStore = Depends(get_store)):
        return Resp.OK(store.get_item(resolve_category(category, singleton=False), item_id))

    @router.put("/content/{category}/{item_id:int}", summary="更新")
    def update_item(
        category: str,
        item_id: int,
        data: Dict[str, Any],
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        item = store.update_item(resolve_category(category, singleton=False), item_id, data)
        aggregator.clear_cache()
        return Resp.OK(item, message="更新成功")

    @router.delete("/content/{category}/{item_id:int}", summary="删除")
    def delete_item(
        category: str,
        item_id: int,
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        store.delete_item(resolve_category(category, singleton=False), item_id)
        aggregator.clear_cache()
        return Resp.OK({"id": item_id}, message="删除成功")

    # ==================== 单例内容 ====================

    @router.get("/singletons/{category}", summary="单例内容")
    def get_singleton(category: str, store: ContentStore = Depends(get_store)):
        return Resp.OK(store.get_singleton(resolve_category(category, singleton=True)))

    @router.put("/singletons/{category}", summary="写入单例内容")
    def upsert_singleton(
        category: str,
        data: Dict[str, Any],
        store: ContentStore = Depends(get_store),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        record = store.upsert_singleton(resolve_category(category, singleton=True), data)
        aggregator.clear_cache()
        return Resp.OK(record, message="保存成功")

    # ==================== 联系留言与留言板 ====================

    @router.get("/contact-messages", summary="联系留言分页", dependencies=[Depends(get_db)])
    def list_contact_messages(
        page: int = Query(1, ge=1),
        page_size: int = Query(20, ge=1, le=100),
        status: Optional[str] = Query(None, description="unread / read"),
    ):
        result = contact.list_contact_messages(page=page, page_size=page_size, status=status)
        return Resp.OK(result.to_dict())

    @router.post("/contact-messages/{message_id}/read", summary="标记已读", dependencies=[Depends(get_db)])
    def mark_contact_read(message_id: int):
        return Resp.OK(contact.mark_read(message_id))

    @router.delete("/guestbook/{message_id}", summary="删除留言", dependencies=[Depends(get_db)])
    def delete_guestbook_message(message_id: int):
        guestbook.delete_message(message_id)
        return Resp.OK({"id": message_id}, message="删除成功")

    # ==================== 上传 ====================

    @router.post("/uploads/{path_key}", summary="上传文件")
    async def upload_file(
        path_key: str,
        file: UploadFile = File(...),
        kind: str = Query("all", description="image / document / all"),
        storage: LocalUploadStorage = Depends(get_upload_storage),
        settings: AppSettings = Depends(get_settings),
    ):
        data = await file.read()
        validate_upload(
            file.content_type or "",
            len(data),
            kind,
            max_sizes={
                "image": settings.upload.parsed_max_image_size,
                "document": settings.upload.parsed_max_document_size,
            },
            filename=file.filename or "",
        )
        url = storage.save(path_key, file.filename, data)
        logger.info(f"上传完成: {url}")
        return Resp.Created({"url": url, "size": len(data), "content_type": file.content_type})

    return router
