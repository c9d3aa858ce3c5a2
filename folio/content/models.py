"""内容库 ORM 模型

每个列表类内容一张表，带 order 排序字段；个人信息、联系方式为单例表。
列表型字段（技能、技术栈、社交链接等）使用 JSON 列存储。
"""

import datetime as dt
from typing import Any, List, Optional

from sqlalchemy import JSON, Boolean, Date, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from folio.orm import CoreModel, SortFieldMixin, SortableMixin


class OrderableModel(CoreModel, SortFieldMixin, SortableMixin):
    """可排序内容基类"""
    __abstract__ = True


# ==================== 单例内容 ====================

class PersonalInfo(CoreModel):
    __tablename__ = "personal_info"

    name: Mapped[str] = mapped_column(String(200), comment="姓名")
    headline: Mapped[str] = mapped_column(String(300), default="", comment="一句话介绍")
    short_bio: Mapped[str] = mapped_column(Text, default="", comment="简短介绍")
    long_bio: Mapped[str] = mapped_column(Text, default="", comment="详细介绍")
    profile_image_url: Mapped[str] = mapped_column(String(500), default="")
    resume_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location: Mapped[str] = mapped_column(String(200), default="")
    email: Mapped[str] = mapped_column(String(200), default="")
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    current_status: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    social_links: Mapped[List[Any]] = mapped_column(JSON, default=list)


class ContactInfo(CoreModel):
    __tablename__ = "contact_info"

    email: Mapped[str] = mapped_column(String(200), default="")
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    location: Mapped[str] = mapped_column(String(200), default="")
    availability: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    preferred_contact_method: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    response_time: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    social_links: Mapped[List[Any]] = mapped_column(JSON, default=list)
    enable_contact_form: Mapped[bool] = mapped_column(Boolean, default=True)
    form_success_message: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    form_error_message: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


# ==================== 列表内容 ====================

class SkillCategory(OrderableModel):
    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(String(100), comment="分类名称")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    skills: Mapped[List[Any]] = mapped_column(JSON, default=list, comment="技能列表")
    color: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class Education(OrderableModel):
    __tablename__ = "education"

    institution: Mapped[str] = mapped_column(String(200))
    degree: Mapped[str] = mapped_column(String(200))
    field: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    start_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    grade: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class Experience(OrderableModel):
    __tablename__ = "experience"

    role: Mapped[str] = mapped_column(String(200))
    company: Mapped[str] = mapped_column(String(200))
    company_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location: Mapped[str] = mapped_column(String(200), default="")
    start_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False)
    description: Mapped[str] = mapped_column(Text, default="")
    technologies: Mapped[List[Any]] = mapped_column(JSON, default=list)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    logo_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class Project(OrderableModel):
    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(200), index=True)
    summary: Mapped[str] = mapped_column(String(500), default="")
    description: Mapped[str] = mapped_column(Text, default="")
    image_url: Mapped[str] = mapped_column(String(500), default="")
    tech_stack: Mapped[List[Any]] = mapped_column(JSON, default=list)
    github_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    live_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    start_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    end_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    problem: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    solution: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    challenges: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    stack_details: Mapped[List[Any]] = mapped_column(JSON, default=list)


class Achievement(OrderableModel):
    __tablename__ = "achievements"

    title: Mapped[str] = mapped_column(String(200))
    organization: Mapped[str] = mapped_column(String(200), default="")
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    icon_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    certificate_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    file_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)


class Certificate(OrderableModel):
    __tablename__ = "certificates"

    title: Mapped[str] = mapped_column(String(200))
    issuer: Mapped[str] = mapped_column(String(200), default="")
    issued_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    file_url: Mapped[str] = mapped_column(String(500), default="")
    preview_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    credential_id: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    credential_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    skills: Mapped[List[Any]] = mapped_column(JSON, default=list)


class GalleryItem(OrderableModel):
    __tablename__ = "gallery"

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(String(500), default="")
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)


class Hobby(OrderableModel):
    __tablename__ = "hobbies"

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    icon: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class FutureGoal(OrderableModel):
    __tablename__ = "future_goals"

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    target_date: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)


class Testimonial(OrderableModel):
    __tablename__ = "testimonials"

    name: Mapped[str] = mapped_column(String(200))
    role: Mapped[str] = mapped_column(String(200), default="")
    company: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    quote: Mapped[str] = mapped_column(Text, default="")
    rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    linkedin_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)


class BlogPost(OrderableModel):
    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(String(300))
    slug: Mapped[str] = mapped_column(String(300), unique=True, index=True)
    excerpt: Mapped[str] = mapped_column(Text, default="")
    content: Mapped[str] = mapped_column(Text, default="")
    cover_image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    author: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    published_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    updated_date: Mapped[Optional[dt.date]] = mapped_column(Date, nullable=True)
    tags: Mapped[List[Any]] = mapped_column(JSON, default=list)
    read_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    published: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    views: Mapped[int] = mapped_column(Integer, default=0)
