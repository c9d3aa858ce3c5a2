"""技能统计与筛选测试"""

import pytest

from folio.skills import (
    filter_by_category,
    filter_skills,
    format_experience,
    get_primary_skills,
    get_proficiency_label,
    get_projects_for_skill,
    get_skill_stats,
    get_total_experience,
    get_total_skill_count,
    group_skills_by_proficiency,
    separate_hard_and_soft_skills,
)


@pytest.fixture
def categories():
    return [
        {"name": "Frontend", "skills": [
            {"name": "React", "level": 90, "years_of_experience": 3, "is_primary": True},
            {"name": "CSS", "level": 72, "years_of_experience": 4, "description": "Layouts and animation"},
        ]},
        {"name": "Backend", "skills": [
            {"name": "Python", "level": 55, "years_of_experience": 2.5, "is_primary": True},
            {"name": "Go", "level": 30},
        ]},
        {"name": "Soft Skills", "skills": [
            {"name": "Communication"},
        ]},
    ]


class TestProficiency:
    """熟练度区间测试"""

    @pytest.mark.parametrize("level, label", [
        (100, "Expert"),
        (85, "Expert"),
        (84, "Advanced"),
        (70, "Advanced"),
        (50, "Intermediate"),
        (49, "Beginner"),
        (0, "Beginner"),
    ])
    def test_labels(self, level, label):
        """测试区间边界"""
        assert get_proficiency_label(level) == label

    def test_out_of_range_is_beginner(self):
        """测试区间外的值"""
        assert get_proficiency_label(84.5) == "Beginner"

    def test_group_skips_missing_level(self, categories):
        """测试没有 level 的技能不参与分组"""
        grouped = group_skills_by_proficiency(categories)
        assert [s["name"] for s in grouped["Expert"]] == ["React"]
        assert [s["name"] for s in grouped["Advanced"]] == ["CSS"]
        assert [s["name"] for s in grouped["Intermediate"]] == ["Python"]
        assert [s["name"] for s in grouped["Beginner"]] == ["Go"]


class TestQueries:
    """查询与统计测试"""

    def test_primary_skills(self, categories):
        assert [s["name"] for s in get_primary_skills(categories)] == ["React", "Python"]

    def test_total_experience_is_max(self, categories):
        """测试总经验取最大值"""
        assert get_total_experience(categories) == 4
        assert get_total_experience([]) == 0

    def test_total_skill_count(self, categories):
        assert get_total_skill_count(categories) == 5
        assert get_total_skill_count(None) == 0

    def test_projects_for_skill_case_insensitive(self):
        """测试按技术栈匹配项目，不区分大小写"""
        projects = [
            {"title": "A", "tech_stack": ["react", "Node.js"]},
            {"title": "B", "tech_stack": ["Vue"]},
            {"title": "C"},
        ]
        assert [p["title"] for p in get_projects_for_skill("React", projects)] == ["A"]

    def test_skill_stats(self, categories):
        """测试技能概况"""
        assert get_skill_stats(categories) == {
            "total": 5,
            "primary": 2,
            "categories": 3,
            "max_experience": 4,
            "expert_count": 1,
            "advanced_count": 1,
        }


class TestFilters:
    """筛选测试"""

    def test_filter_skills_by_name_or_description(self, categories):
        """测试按名称或描述搜索"""
        result = filter_skills(categories, "layout")
        assert [c["name"] for c in result] == ["Frontend"]
        assert [s["name"] for s in result[0]["skills"]] == ["CSS"]

    def test_filter_skills_blank_query(self, categories):
        """测试空搜索返回全部"""
        assert filter_skills(categories, "  ") == categories

    def test_filter_by_category_all(self, categories):
        assert filter_by_category(categories, "All") == categories
        assert filter_by_category(categories, None) == categories

    def test_filter_by_category_core(self, categories):
        """测试 Core 只保留主要技能"""
        result = filter_by_category(categories, "Core")
        assert [c["name"] for c in result] == ["Frontend", "Backend"]
        assert [s["name"] for s in result[1]["skills"]] == ["Python"]

    def test_filter_by_category_name(self, categories):
        assert [c["name"] for c in filter_by_category(categories, "backend")] == ["Backend"]

    def test_separate_hard_and_soft(self, categories):
        """测试软技能分类"""
        result = separate_hard_and_soft_skills(categories)
        assert [c["name"] for c in result["hard"]] == ["Frontend", "Backend"]
        assert [c["name"] for c in result["soft"]] == ["Soft Skills"]


class TestFormatExperience:
    """经验年数格式化测试"""

    @pytest.mark.parametrize("years, text", [
        (0, "Less than 1 year"),
        (1, "1 year"),
        (2.5, "2.5+ years"),
        (3, "3+ years"),
    ])
    def test_format(self, years, text):
        assert format_experience(years) == text
