"""聊天助手规则测试"""

import pytest

from folio.chatbot import FALLBACK_REPLY, generate_bot_response
from folio.content import PortfolioContent


@pytest.fixture
def content():
    return PortfolioContent(
        personal_info={
            "name": "Ada",
            "headline": "Systems Engineer",
            "short_bio": "I build analytical engines.",
            "email": "ada@example.com",
            "location": "London",
            "resume_url": "/uploads/resumes/ada.pdf",
            "social_links": [{"platform": "GitHub", "url": "https://github.com/ada"}],
        },
        skill_categories=[
            {"name": "Languages", "skills": [
                {"name": "Python", "is_primary": True, "description": "Daily driver."},
                {"name": "Rust", "is_primary": False},
            ]},
        ],
        projects=[{"title": "Engine"}, {"title": "Loom"}],
        experience=[{"role": "Lead", "company": "Babbage Ltd"}, {"role": "Intern", "company": "Mill"}],
        education=[{"degree": "BSc Mathematics", "institution": "UCL"}],
        certificates=[{"title": "AWS"}],
        achievements=[{"title": "Hackathon Winner"}],
        hobbies=[{"title": "Chess"}, {"title": "Poetry"}],
        blog_posts=[{"title": "Notes on the Engine"}],
        testimonials=[{"name": "Charles"}],
        future_goals=[{"title": "Ship v2"}],
    )


class TestGenerateBotResponse:
    """规则匹配测试"""

    def test_greeting(self, content):
        """测试问候"""
        reply = generate_bot_response("Hello there", content)
        assert reply.startswith("Hello! I'm Ada's AI assistant.")

    def test_skills_lists_primary(self, content):
        """测试技能问题列出主要技能"""
        reply = generate_bot_response("What is your tech stack?", content)
        assert reply == (
            "My technical expertise includes: Python, and more. "
            "You can check the Skills section for a full breakdown!"
        )

    def test_skills_take_priority_over_about(self, content):
        """测试同时包含 about 和 skill 时优先回答技能"""
        reply = generate_bot_response("tell me about your skills", content)
        assert reply.startswith("My technical expertise includes")

    def test_about_uses_short_bio(self, content):
        """测试 about 返回简介"""
        assert generate_bot_response("Who are you?", content) == "I build analytical engines."

    def test_specific_skill(self, content):
        """测试提到具体技能"""
        reply = generate_bot_response("do you know rust?", content)
        assert reply == "Yes, I have experience with Rust.  It's one of my secondary skills."

    def test_projects(self, content):
        """测试项目"""
        reply = generate_bot_response("show me your projects", content)
        assert "Engine, Loom" in reply

    def test_experience(self, content):
        """测试经历"""
        reply = generate_bot_response("what's your career like?", content)
        assert "Lead at Babbage Ltd" in reply
        assert "2 roles" in reply

    def test_contact(self, content):
        """测试联系方式"""
        assert "ada@example.com" in generate_bot_response("how can I reach you", content)

    def test_location(self, content):
        """测试所在地"""
        assert generate_bot_response("where are you based", content) == "I am currently based in London."

    def test_education(self, content):
        """测试教育背景"""
        reply = generate_bot_response("which university?", content)
        assert reply.startswith("I studied BSc Mathematics at UCL.")

    def test_hobbies(self, content):
        """测试爱好"""
        assert generate_bot_response("any hobbies?", content) == "When I'm not coding, I enjoy: Chess, Poetry."

    def test_blog(self, content):
        """测试博客"""
        assert '"Notes on the Engine"' in generate_bot_response("do you blog?", content)

    def test_resume(self, content):
        """测试简历"""
        assert "download my Resume/CV" in generate_bot_response("can I see your resume", content)

    def test_goals(self, content):
        """测试目标"""
        assert "Ship v2" in generate_bot_response("what are your goals", content)

    def test_fallback(self, content):
        """测试没有匹配规则"""
        assert generate_bot_response("qwerty", content) == FALLBACK_REPLY

    def test_empty_content(self):
        """测试空内容时的默认回答"""
        empty = PortfolioContent()
        assert generate_bot_response("hi", empty).startswith("Hello! I'm the developer's AI assistant.")
        assert generate_bot_response("projects?", empty) == (
            "I have worked on various projects. Check out the Projects section for details."
        )
