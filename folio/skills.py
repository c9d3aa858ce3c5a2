"""技能统计与筛选

技能分类以字典形式传入（即内容库返回的 skills 记录）:
    {"name": "Frontend", "skills": [{"name": "React", "level": 90, "is_primary": True}, ...]}
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

SkillCategoryRecord = Dict[str, Any]
SkillRecord = Dict[str, Any]


@dataclass(frozen=True)
class ProficiencyBand:
    label: str
    min: int
    max: int
    description: str


PROFICIENCY_BANDS = (
    ProficiencyBand("Expert", 85, 100, "Deep expertise, can teach others"),
    ProficiencyBand("Advanced", 70, 84, "Highly proficient, production-ready"),
    ProficiencyBand("Intermediate", 50, 69, "Comfortable working independently"),
    ProficiencyBand("Beginner", 0, 49, "Learning and building foundational knowledge"),
)

SOFT_SKILL_CATEGORIES = ("soft skills", "professional skills", "interpersonal")


def _all_skills(categories: Optional[Sequence[SkillCategoryRecord]]) -> List[SkillRecord]:
    if not categories:
        return []
    return [skill for cat in categories for skill in (cat.get("skills") or []) if skill]


def get_proficiency_band(level: float) -> ProficiencyBand:
    """熟练度所在区间，不在任何区间时返回 Beginner"""
    for band in PROFICIENCY_BANDS:
        if band.min <= level <= band.max:
            return band
    return PROFICIENCY_BANDS[-1]


def get_proficiency_label(level: float) -> str:
    return get_proficiency_band(level).label


def get_primary_skills(categories: Optional[Sequence[SkillCategoryRecord]]) -> List[SkillRecord]:
    return [skill for skill in _all_skills(categories) if skill.get("is_primary")]


def get_projects_for_skill(skill_name: str, projects: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """技术栈中包含该技能的项目（不区分大小写）"""
    wanted = skill_name.lower()
    return [
        project for project in projects
        if any(tech.lower() == wanted for tech in project.get("tech_stack") or [])
    ]


def get_total_experience(categories: Optional[Sequence[SkillCategoryRecord]]) -> float:
    """所有技能中最长的经验年数"""
    years = [s.get("years_of_experience") or 0 for s in _all_skills(categories)]
    years = [y for y in years if y > 0]
    return max(years) if years else 0


def get_total_skill_count(categories: Optional[Sequence[SkillCategoryRecord]]) -> int:
    return sum(len(cat.get("skills") or []) for cat in categories or [])


def group_skills_by_proficiency(
    categories: Optional[Sequence[SkillCategoryRecord]],
) -> Dict[str, List[SkillRecord]]:
    """按熟练度区间分组，没有 level 的技能不参与分组"""
    grouped = {band.label: [] for band in PROFICIENCY_BANDS}
    for skill in _all_skills(categories):
        if skill.get("level") is not None:
            grouped[get_proficiency_band(skill["level"]).label].append(skill)
    return grouped


def filter_skills(categories: Optional[Sequence[SkillCategoryRecord]], query: str) -> List[SkillCategoryRecord]:
    """按名称或描述搜索技能，去掉没有匹配技能的分类"""
    if not categories:
        return []
    if not query.strip():
        return list(categories)

    q = query.lower()
    result = []
    for cat in categories:
        skills = [
            s for s in cat.get("skills") or []
            if q in s["name"].lower() or q in (s.get("description") or "").lower()
        ]
        if skills:
            result.append({**cat, "skills": skills})
    return result


def filter_by_category(
    categories: Optional[Sequence[SkillCategoryRecord]],
    category_filter: Optional[str],
) -> List[SkillCategoryRecord]:
    """按分类筛选

    Args:
        category_filter: "All" 或空表示不过滤，"Core" 只保留主要技能，其他值按分类名匹配
    """
    if not categories:
        return []
    if not category_filter or category_filter == "All":
        return list(categories)

    if category_filter == "Core":
        result = []
        for cat in categories:
            skills = [s for s in cat.get("skills") or [] if s.get("is_primary")]
            if skills:
                result.append({**cat, "skills": skills})
        return result

    return [cat for cat in categories if cat["name"].lower() == category_filter.lower()]


def _is_soft(category: SkillCategoryRecord) -> bool:
    name = category["name"].lower()
    return any(soft in name for soft in SOFT_SKILL_CATEGORIES)


def separate_hard_and_soft_skills(
    categories: Optional[Sequence[SkillCategoryRecord]],
) -> Dict[str, List[SkillCategoryRecord]]:
    categories = categories or []
    return {
        "hard": [cat for cat in categories if not _is_soft(cat)],
        "soft": [cat for cat in categories if _is_soft(cat)],
    }


def get_skill_stats(categories: Optional[Sequence[SkillCategoryRecord]]) -> Dict[str, Any]:
    """技能概况: 总数、主要技能数、分类数、最长经验、Expert/Advanced 数量"""
    skills = _all_skills(categories)
    grouped = group_skills_by_proficiency(categories)
    return {
        "total": len(skills),
        "primary": sum(1 for s in skills if s.get("is_primary")),
        "categories": len(categories or []),
        "max_experience": get_total_experience(categories),
        "expert_count": len(grouped["Expert"]),
        "advanced_count": len(grouped["Advanced"]),
    }


def format_experience(years: float) -> str:
    if years == 0:
        return "Less than 1 year"
    if years == 1:
        return "1 year"
    return f"{years:g}+ years"
