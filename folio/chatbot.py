"""作品集聊天助手

基于关键词规则的问答：把问题转成小写后按固定优先级匹配规则，
回答内容来自 PortfolioContent。
"""

import re
from typing import Any, Dict, List

from folio.content import PortfolioContent

_GREETING = re.compile(r"^(hi|hello|hey|greetings|sup|yo)")

FALLBACK_REPLY = (
    "That's an interesting question! While I'm just a simple AI, you can find more detailed "
    "information by exploring the different sections of this portfolio. Try asking about my skills, "
    "projects, or experience!"
)


def _has(query: str, *words: str) -> bool:
    return any(word in query for word in words)


def _all_skills(content: PortfolioContent) -> List[Dict[str, Any]]:
    return [
        skill
        for category in content.skill_categories or []
        for skill in category.get("skills") or []
        if skill
    ]


def generate_bot_response(query: str, content: PortfolioContent) -> str:
    """根据问题生成回答

    Args:
        query: 用户输入
        content: 公开内容

    Returns:
        回答文本，没有匹配的规则时返回 FALLBACK_REPLY
    """
    q = query.lower()
    info = content.personal_info or {}
    name = info.get("name") or "the developer"

    if _GREETING.match(q):
        return (
            f"Hello! I'm {name}'s AI assistant. I can tell you about their skills, projects, "
            f"experience, and more. What would you like to know?"
        )

    # 技能优先于泛泛的 about
    if _has(q, "skill", "stack", "technology", "technologies", "coding", "programming", "languages"):
        skills = _all_skills(content)
        names = [s["name"] for s in skills if s.get("is_primary")]
        if not names:
            names = [s["name"] for s in skills[:8]]
        if not names:
            return (
                "I have experience with various technologies, but I can't list them right now. "
                "Please check the Skills section for the full list."
            )
        return (
            f"My technical expertise includes: {', '.join(names)}, and more. "
            f"You can check the Skills section for a full breakdown!"
        )

    if _has(q, "about", "who are you", "who is", "tell me"):
        return info.get("short_bio") or (
            f"I am an AI assistant for {name}, a {info.get('headline') or 'developer'}."
        )

    for skill in _all_skills(content):
        if skill.get("name") and skill["name"].lower() in q:
            kind = "primary" if skill.get("is_primary") else "secondary"
            return (
                f"Yes, I have experience with {skill['name']}. {skill.get('description') or ''} "
                f"It's one of my {kind} skills."
            )

    if _has(q, "project", "work", "portfolio", "built", "created", "developed"):
        if content.projects:
            titles = ", ".join(p["title"] for p in content.projects[:5])
            return (
                f"I've worked on several exciting projects, including: {titles}. "
                f"Would you like to know details about a specific one?"
            )
        return "I have worked on various projects. Check out the Projects section for details."

    if _has(q, "experience", "job", "company", "companies", "career", "history"):
        if content.experience:
            latest = content.experience[0]
            return (
                f"Currently (or most recently), I worked as a {latest['role']} at {latest['company']}. "
                f"I have {len(content.experience)} roles in my history. "
                f"Check out the Experience section for the full timeline."
            )
        return "I have worked in various roles in the tech industry. Check out the Experience section for details."

    if _has(q, "contact", "email", "reach", "hire", "touch", "message"):
        return (
            f"You can reach me at {info.get('email') or 'my email'}. "
            f"I'm always open to discussing new opportunities!"
        )

    if _has(q, "location", "where are you", "live"):
        return f"I am currently based in {info.get('location') or 'an undisclosed location'}."

    if _has(q, "education", "study", "university", "college", "degree", "qualification", "background", "school"):
        if content.education:
            latest = content.education[0]
            return (
                f"I studied {latest['degree']} at {latest['institution']}. "
                f"You can see my full academic background in the Education section."
            )
        return "I have a background in computer science and technology. Check out the Education section for details."

    if _has(q, "certificate", "certification", "certified"):
        if content.certificates:
            titles = ", ".join(c["title"] for c in content.certificates[:3])
            return f"I hold certifications in: {titles}. Check the Certificates section to see them all!"
        return "I am constantly learning and upgrading my skills. Check the Certificates section for my credentials."

    if _has(q, "achievement", "award", "winning", "won"):
        if content.achievements:
            return (
                f"One of my proudest achievements is: {content.achievements[0]['title']}. "
                f"I have listed more in the Achievements section."
            )
        return "I strive for excellence in my work. You can view my accomplishments in the Achievements section."

    if _has(q, "hobby", "hobbies", "fun", "interest", "free time"):
        if content.hobbies:
            return f"When I'm not coding, I enjoy: {', '.join(h['title'] for h in content.hobbies)}."
        return "I enjoy exploring new technologies and creative pursuits in my free time."

    if _has(q, "blog", "article", "write", "writing", "post"):
        if content.blog_posts:
            return (
                f"Yes, I write about tech! My latest post is titled \"{content.blog_posts[0]['title']}\". "
                f"You can read it in the Blog section."
            )
        return "I haven't published any blog posts yet, but stay tuned!"

    if _has(q, "github", "linkedin", "twitter", "social", "instagram"):
        links = info.get("social_links") or []
        if links:
            platforms = ", ".join(link["platform"] for link in links)
            return f"You can find me on: {platforms}. The links are in the Hero section and Footer."
        return "You can find my social media links in the contact section."

    if _has(q, "resume", "cv", "download"):
        if info.get("resume_url"):
            return "Yes, you can download my Resume/CV from the Hero section at the top of the page."
        return "My resume is available upon request. Please contact me via email."

    if _has(q, "testimonial", "reference", "recommendation", "review"):
        if content.testimonials:
            return (
                f"I have received {len(content.testimonials)} testimonials from colleagues and clients. "
                f"You can read them in the Testimonials section."
            )
        return "I value feedback from my peers and clients. Check out the Testimonials section."

    if _has(q, "goal", "future", "plan", "aim"):
        if content.future_goals:
            return (
                f"I am currently working towards: {content.future_goals[0]['title']}. "
                f"Check the Goals section to see my roadmap!"
            )
        return "I am always setting new goals for my professional growth."

    return FALLBACK_REPLY
