"""内容分类注册表

分类值即表名。列表分类可排序，单例分类只有一条记录。

使用示例:
    from folio.content import Category, resolve_category

    category = resolve_category("projects")
    category.model      # Project
    category.schema     # ProjectIn
    category.is_singleton
"""

from enum import Enum
from typing import Type, Union

from pydantic import BaseModel

from folio.exceptions import Err, ErrorCode
from . import models, schemas


class Category(str, Enum):
    SKILLS = "skills"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    ACHIEVEMENTS = "achievements"
    CERTIFICATES = "certificates"
    GALLERY = "gallery"
    HOBBIES = "hobbies"
    FUTURE_GOALS = "future_goals"
    TESTIMONIALS = "testimonials"
    BLOG_POSTS = "blog_posts"

    PERSONAL_INFO = "personal_info"
    CONTACT_INFO = "contact_info"

    @property
    def model(self) -> Type[models.CoreModel]:
        return _MODELS[self]

    @property
    def schema(self) -> Type[BaseModel]:
        return _SCHEMAS[self]

    @property
    def is_singleton(self) -> bool:
        return self in SINGLETON_CATEGORIES


_MODELS = {
    Category.SKILLS: models.SkillCategory,
    Category.EDUCATION: models.Education,
    Category.EXPERIENCE: models.Experience,
    Category.PROJECTS: models.Project,
    Category.ACHIEVEMENTS: models.Achievement,
    Category.CERTIFICATES: models.Certificate,
    Category.GALLERY: models.GalleryItem,
    Category.HOBBIES: models.Hobby,
    Category.FUTURE_GOALS: models.FutureGoal,
    Category.TESTIMONIALS: models.Testimonial,
    Category.BLOG_POSTS: models.BlogPost,
    Category.PERSONAL_INFO: models.PersonalInfo,
    Category.CONTACT_INFO: models.ContactInfo,
}

_SCHEMAS = {
    Category.SKILLS: schemas.SkillCategoryIn,
    Category.EDUCATION: schemas.EducationIn,
    Category.EXPERIENCE: schemas.ExperienceIn,
    Category.PROJECTS: schemas.ProjectIn,
    Category.ACHIEVEMENTS: schemas.AchievementIn,
    Category.CERTIFICATES: schemas.CertificateIn,
    Category.GALLERY: schemas.GalleryItemIn,
    Category.HOBBIES: schemas.HobbyIn,
    Category.FUTURE_GOALS: schemas.FutureGoalIn,
    Category.TESTIMONIALS: schemas.TestimonialIn,
    Category.BLOG_POSTS: schemas.BlogPostIn,
    Category.PERSONAL_INFO: schemas.PersonalInfoIn,
    Category.CONTACT_INFO: schemas.ContactInfoIn,
}

SINGLETON_CATEGORIES = frozenset({Category.PERSONAL_INFO, Category.CONTACT_INFO})
LIST_CATEGORIES = tuple(c for c in Category if c not in SINGLETON_CATEGORIES)


def resolve_category(value: Union[str, Category], singleton: bool = None) -> Category:
    """解析分类名

    Args:
        value: 分类名或 Category
        singleton: True 只接受单例分类，False 只接受列表分类，None 不限制

    Raises:
        ValidationException: 未知分类或分类类型不匹配
    """
    try:
        category = Category(value)
    except ValueError:
        raise Err.invalid(f"未知的内容分类: {value}", code=ErrorCode.UNKNOWN_CATEGORY, category=str(value))

    if singleton is True and not category.is_singleton:
        raise Err.invalid(f"{category.value} 不是单例内容", code=ErrorCode.UNKNOWN_CATEGORY)
    if singleton is False and category.is_singleton:
        raise Err.invalid(f"{category.value} 不是列表内容", code=ErrorCode.UNKNOWN_CATEGORY)
    return category
