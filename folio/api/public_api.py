"""公开路由

端点列表：
    GET  /api/content              - 全部公开内容（带缓存）
    GET  /api/content/{category}   - 单个分类
    GET  /api/blog                 - 博客列表
    GET  /api/blog/{slug}          - 博客详情
    POST /api/chat                 - 聊天机器人
    GET  /api/skills/stats         - 技能统计
    GET  /api/i18n/{locale}        - 界面文案字典
    GET  /api/generate-cv          - 下载 PDF 简历
    POST /api/contact              - 提交联系表单
    GET  /api/guestbook            - 留言列表
    POST /api/guestbook            - 发表留言（需登录）
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from pydantic import BaseModel, Field

from folio import chatbot, contact, guestbook
from folio.aggregator import ContentAggregator
from folio.auth import AdminUser, get_current_user
from folio.config import AppSettings
from folio.cv import build_resume_pdf, resume_filename
from folio.exceptions import Err
from folio.i18n import get_dictionary
from folio.log import api_logger as logger
from folio.orm import get_db
from folio.response import Resp
from folio.skills import get_skill_stats
from .dependencies import get_aggregator, get_settings


class ChatRequest(BaseModel):
    message: str = Field(max_length=1000)


def create_public_router() -> APIRouter:
    """创建公开路由"""
    router = APIRouter(prefix="/api", tags=["public"])

    # ==================== 内容 ====================

    @router.get("/content", summary="全部公开内容")
    def get_content(
        refresh: bool = Query(False, description="忽略缓存重新读取"),
        aggregator: ContentAggregator = Depends(get_aggregator),
    ):
        content = aggregator.get_cached_content(force_refresh=refresh)
        return Resp.OK(content)

    @router.get("/content/{category}", summary="单个分类的公开内容")
    def get_category(category: str, aggregator: ContentAggregator = Depends(get_aggregator)):
        return Resp.OK(aggregator.get_category_content(category))

    # ==================== 博客 ====================

    @router.get("/blog", summary="博客列表")
    def list_blog_posts(
        published_only: bool = Query(True, description="只返回已发布的文章"),
        aggregator: ContentAggregator = Depends(get_aggregator),
        settings: AppSettings = Depends(get_settings),
    ):
        published_only = published_only or settings.content.blog_published_only
        if aggregator.store is None:
            return Resp.OK(aggregator.get_cached_content().blog_posts)
        return Resp.OK(aggregator.store.list_blog_posts(published_only=published_only))

    @router.get("/blog/{slug}", summary="博客详情")
    def get_blog_post(
        slug: str,
        aggregator: ContentAggregator = Depends(get_aggregator),
        settings: AppSettings = Depends(get_settings),
    ):
        if aggregator.store is None:
            posts = aggregator.get_cached_content().blog_posts
            post = next((p for p in posts if p.get("slug") == slug), None)
        else:
            post = aggregator.store.get_blog_post_by_slug(slug)

        if post is None or (settings.content.blog_published_only and not post.get("published")):
            raise Err.not_found("Blog post not found", resource_type="blog_posts", slug=slug)
        return Resp.OK(post)

    # ==================== 聊天与技能 ====================

    @router.post("/chat", summary="聊天机器人")
    def chat(body: ChatRequest, aggregator: ContentAggregator = Depends(get_aggregator)):
        reply = chatbot.generate_bot_response(body.message, aggregator.get_cached_content())
        return Resp.OK({"reply": reply})

    @router.get("/skills/stats", summary="技能统计")
    def skill_stats(aggregator: ContentAggregator = Depends(get_aggregator)):
        return Resp.OK(get_skill_stats(aggregator.get_cached_content().skill_categories))

    @router.get("/i18n/{locale}", summary="界面文案字典")
    def i18n_dictionary(locale: str):
        return Resp.OK(get_dictionary(locale))

    # ==================== 简历 ====================

    @router.get("/generate-cv", summary="下载 PDF 简历")
    def generate_cv(aggregator: ContentAggregator = Depends(get_aggregator)):
        content = aggregator.get_cached_content()
        pdf = build_resume_pdf(content)
        filename = resume_filename(content.personal_info.get("name", "Portfolio"))
        logger.info(f"下载简历: {filename}")
        return Response(
            content=pdf,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    # ==================== 联系与留言 ====================

    @router.post("/contact", summary="提交联系表单", dependencies=[Depends(get_db)])
    def submit_contact(form: contact.ContactForm):
        msg = contact.submit_contact_message(form)
        return Resp.OK({"id": msg.id}, message=contact.CONTACT_SUCCESS_MESSAGE)

    @router.get("/guestbook", summary="留言列表", dependencies=[Depends(get_db)])
    def list_guestbook(limit: int = Query(50, ge=1, le=200)):
        return Resp.OK(guestbook.list_messages(limit=limit))

    @router.post("/guestbook", summary="发表留言")
    def post_guestbook(entry: guestbook.GuestbookEntry, user: AdminUser = Depends(get_current_user)):
        msg = guestbook.post_message(user, entry)
        return Resp.Created(msg)

    return router
