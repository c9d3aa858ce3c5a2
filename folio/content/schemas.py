"""内容数据校验模型

每个分类一个输入模型，创建和更新共用（更新时先与已有记录合并再校验）。
"""

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from folio.orm import BaseSchemas


class SocialLink(BaseSchemas):
    platform: str
    url: str
    icon: Optional[str] = None
    username: Optional[str] = None


class Skill(BaseSchemas):
    name: str = Field(min_length=1)
    level: Optional[int] = Field(default=None, ge=0, le=100, description="熟练度 0-100")
    years_of_experience: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    icon: Optional[str] = None
    is_primary: bool = False
    project_ids: List[str] = Field(default_factory=list)


class StackDetail(BaseSchemas):
    name: str
    usage: str


class ContentSchema(BaseSchemas):
    """列表内容基类，order 缺省时追加到末尾"""
    order: Optional[int] = Field(default=None, ge=0, description="显示位置")


# ==================== 单例内容 ====================

class PersonalInfoIn(BaseSchemas):
    name: str = Field(min_length=1)
    headline: str = ""
    short_bio: str = ""
    long_bio: str = ""
    profile_image_url: str = ""
    resume_url: Optional[str] = None
    location: str = ""
    email: str = ""
    phone: Optional[str] = None
    current_status: Optional[str] = None
    social_links: List[SocialLink] = Field(default_factory=list)


class ContactInfoIn(BaseSchemas):
    email: str = ""
    phone: Optional[str] = None
    location: str = ""
    availability: Optional[str] = None
    preferred_contact_method: Optional[str] = None
    response_time: Optional[str] = None
    social_links: List[SocialLink] = Field(default_factory=list)
    enable_contact_form: bool = True
    form_success_message: Optional[str] = None
    form_error_message: Optional[str] = None


# ==================== 列表内容 ====================

class SkillCategoryIn(ContentSchema):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    skills: List[Skill] = Field(default_factory=list)
    color: Optional[str] = None


class EducationIn(ContentSchema):
    institution: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    field: Optional[str] = None
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    is_current: bool = False
    description: Optional[str] = None
    grade: Optional[str] = None
    location: Optional[str] = None
    logo_url: Optional[str] = None


class ExperienceIn(ContentSchema):
    role: str = Field(min_length=1)
    company: str = Field(min_length=1)
    company_url: Optional[str] = None
    location: str = ""
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    is_current: bool = False
    description: str = ""
    technologies: List[str] = Field(default_factory=list)
    type: Optional[str] = None
    logo_url: Optional[str] = None


class ProjectIn(ContentSchema):
    title: str = Field(min_length=1)
    slug: str = ""
    summary: str = ""
    description: str = ""
    image_url: str = ""
    tech_stack: List[str] = Field(default_factory=list)
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    featured: bool = False
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    category: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    problem: Optional[str] = None
    solution: Optional[str] = None
    challenges: Optional[str] = None
    stack_details: List[StackDetail] = Field(default_factory=list)


class AchievementIn(ContentSchema):
    title: str = Field(min_length=1)
    organization: str = ""
    date: Optional[dt.date] = None
    description: Optional[str] = None
    category: Optional[str] = None
    icon_url: Optional[str] = None
    certificate_url: Optional[str] = None
    file_url: Optional[str] = None
    file_type: Optional[str] = Field(default=None, pattern="^(image|pdf)$")


class CertificateIn(ContentSchema):
    title: str = Field(min_length=1)
    issuer: str = ""
    issued_date: Optional[dt.date] = None
    expiry_date: Optional[dt.date] = None
    file_url: str = ""
    preview_image_url: Optional[str] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    description: Optional[str] = None
    skills: List[str] = Field(default_factory=list)


class GalleryItemIn(ContentSchema):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    image_url: str = ""
    category: Optional[str] = None
    date: Optional[dt.date] = None


class HobbyIn(ContentSchema):
    title: str = Field(min_length=1)
    description: str = ""
    icon: Optional[str] = None
    image_url: Optional[str] = None


class FutureGoalIn(ContentSchema):
    title: str = Field(min_length=1)
    description: str = ""
    target_date: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None


class TestimonialIn(ContentSchema):
    name: str = Field(min_length=1)
    role: str = ""
    company: Optional[str] = None
    avatar_url: Optional[str] = None
    quote: str = ""
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    date: Optional[dt.date] = None
    linkedin_url: Optional[str] = None


class BlogPostIn(ContentSchema):
    title: str = Field(min_length=1)
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    cover_image_url: Optional[str] = None
    author: Optional[str] = None
    published_date: Optional[dt.date] = None
    updated_date: Optional[dt.date] = None
    tags: List[str] = Field(default_factory=list)
    read_time: Optional[int] = Field(default=None, ge=0)
    published: bool = False
    views: int = Field(default=0, ge=0)


# ==================== 排序与聚合 ====================

class OrderAssignment(BaseSchemas):
    """单条排序写入 {id, order}"""
    id: int
    order: int = Field(ge=0)


class MoveRequest(BaseSchemas):
    """上移/下移请求"""
    index: int = Field(description="列表中的位置（从 0 开始）")
    direction: str = Field(pattern="^(up|down)$", description="up 或 down")

    @field_validator("direction", mode="before")
    @classmethod
    def _lower(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class PortfolioContent(BaseSchemas):
    """公开内容聚合结果，记录以字典形式保存"""
    personal_info: Optional[Dict[str, Any]] = None
    skill_categories: List[Dict[str, Any]] = Field(default_factory=list)
    education: List[Dict[str, Any]] = Field(default_factory=list)
    experience: List[Dict[str, Any]] = Field(default_factory=list)
    projects: List[Dict[str, Any]] = Field(default_factory=list)
    achievements: List[Dict[str, Any]] = Field(default_factory=list)
    certificates: List[Dict[str, Any]] = Field(default_factory=list)
    gallery: List[Dict[str, Any]] = Field(default_factory=list)
    hobbies: List[Dict[str, Any]] = Field(default_factory=list)
    future_goals: List[Dict[str, Any]] = Field(default_factory=list)
    testimonials: List[Dict[str, Any]] = Field(default_factory=list)
    blog_posts: List[Dict[str, Any]] = Field(default_factory=list)
    contact_info: Optional[Dict[str, Any]] = None
