"""PDF 简历生成

根据公开内容生成单页 A4 简历（ReportLab platypus）。

使用示例:
    from folio.cv import build_resume_pdf, resume_filename

    pdf_bytes = build_resume_pdf(content)
    filename = resume_filename(content.personal_info["name"])
"""

import io
import re
from datetime import date
from typing import Any, Dict, List, Optional
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from folio.content import PortfolioContent
from folio.exceptions import Err, ErrorCode
from folio.log import get_logger
from folio.utils.text import format_month, parse_date

logger = get_logger()

ACCENT_COLOR = HexColor("#3B82F6")
TEXT_COLOR = HexColor("#1F2937")
MUTED_COLOR = HexColor("#6B7280")

MAX_SKILL_CATEGORIES = 5
MAX_EXPERIENCE = 4
MAX_EDUCATION = 3
MAX_PROJECTS = 3
MAX_ACHIEVEMENTS = 5
MAX_CERTIFICATES = 5
MAX_TECHNOLOGIES = 6

BULLET = "•"


def resume_filename(name: str) -> str:
    """简历文件名，空白替换为下划线"""
    return re.sub(r"\s+", "_", name.strip()) + "_Resume.pdf"


def _styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "name": ParagraphStyle(
            "ResumeName", parent=base["Heading1"], fontSize=22, leading=26,
            textColor=TEXT_COLOR, spaceAfter=2,
        ),
        "headline": ParagraphStyle(
            "ResumeHeadline", parent=base["Normal"], fontSize=12, leading=15,
            textColor=ACCENT_COLOR, spaceAfter=4,
        ),
        "contact": ParagraphStyle(
            "ResumeContact", parent=base["Normal"], fontSize=9, leading=12,
            textColor=MUTED_COLOR,
        ),
        "section": ParagraphStyle(
            "ResumeSection", parent=base["Heading2"], fontSize=13, leading=16,
            textColor=ACCENT_COLOR, spaceBefore=10, spaceAfter=4,
        ),
        "item_title": ParagraphStyle(
            "ResumeItemTitle", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=10.5, leading=13, textColor=TEXT_COLOR,
        ),
        "item_meta": ParagraphStyle(
            "ResumeItemMeta", parent=base["Normal"], fontSize=9, leading=11,
            textColor=MUTED_COLOR, spaceAfter=2,
        ),
        "body": ParagraphStyle(
            "ResumeBody", parent=base["Normal"], fontSize=9.5, leading=12.5,
            textColor=TEXT_COLOR, spaceAfter=4,
        ),
        "footer": ParagraphStyle(
            "ResumeFooter", parent=base["Normal"], fontSize=8, leading=10,
            textColor=MUTED_COLOR, alignment=1, spaceBefore=12,
        ),
    }


def _p(text: Any, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(str(text)), style)


def _year(value: Any) -> str:
    parsed = parse_date(value)
    return str(parsed.year) if parsed else ""


def _month_range(item: Dict[str, Any]) -> str:
    start = format_month(item.get("start_date")) or ""
    if item.get("is_current"):
        return f"{start} - Present"
    end = format_month(item.get("end_date")) or ""
    return f"{start} - {end}"


def _year_range(item: Dict[str, Any]) -> str:
    start = _year(item.get("start_date"))
    if item.get("is_current"):
        return f"{start} - Present"
    return f"{start} - {_year(item.get('end_date'))}"


def contact_line(info: Dict[str, Any]) -> str:
    """头部联系方式行：email | phone | location | • status"""
    parts = [info.get("email") or ""]
    if info.get("phone"):
        parts.append(info["phone"])
    parts.append(info.get("location") or "")
    if info.get("current_status"):
        parts.append(f"{BULLET} {info['current_status']}")
    return "  |  ".join(part for part in parts if part)


def _section(story: List[Any], title: str, styles: Dict[str, ParagraphStyle]) -> None:
    story.append(_p(title, styles["section"]))
    story.append(HRFlowable(width="100%", thickness=0.8, color=ACCENT_COLOR, spaceAfter=4))


def _technologies(values: Optional[List[str]]) -> str:
    return f" {BULLET} ".join((values or [])[:MAX_TECHNOLOGIES])


def build_story(content: PortfolioContent, today: Optional[date] = None) -> List[Any]:
    """生成简历的 flowable 列表

    Raises:
        ResourceNotFoundException: 缺少个人信息
    """
    info = content.personal_info
    if not info:
        raise Err.not_found("Personal information not found", code=ErrorCode.PROFILE_MISSING)

    styles = _styles()
    today = today or date.today()
    story: List[Any] = [
        _p(info.get("name", ""), styles["name"]),
        _p(info.get("headline", ""), styles["headline"]),
        _p(contact_line(info), styles["contact"]),
        Spacer(1, 4 * mm),
    ]

    if info.get("long_bio"):
        _section(story, "About Me", styles)
        story.append(_p(info["long_bio"], styles["body"]))

    if content.skill_categories:
        _section(story, "Technical Skills", styles)
        for category in content.skill_categories[:MAX_SKILL_CATEGORIES]:
            names = f" {BULLET} ".join(skill.get("name", "") for skill in category.get("skills") or [])
            story.append(_p(f"{BULLET} {category.get('name', '')}", styles["item_title"]))
            story.append(_p(names, styles["body"]))

    if content.experience:
        _section(story, "Experience", styles)
        for exp in content.experience[:MAX_EXPERIENCE]:
            story.append(_p(exp.get("role", ""), styles["item_title"]))
            story.append(_p(f"{exp.get('company', '')}  |  {_month_range(exp)}", styles["item_meta"]))
            if exp.get("description"):
                story.append(_p(exp["description"], styles["body"]))
            techs = _technologies(exp.get("technologies"))
            if techs:
                story.append(_p(techs, styles["item_meta"]))

    if content.education:
        _section(story, "Education", styles)
        for edu in content.education[:MAX_EDUCATION]:
            story.append(_p(edu.get("degree", ""), styles["item_title"]))
            story.append(_p(f"{edu.get('institution', '')}  |  {_year_range(edu)}", styles["item_meta"]))
            if edu.get("description"):
                story.append(_p(edu["description"], styles["body"]))

    if content.projects:
        _section(story, "Key Projects", styles)
        for project in content.projects[:MAX_PROJECTS]:
            story.append(_p(project.get("title", ""), styles["item_title"]))
            if project.get("summary"):
                story.append(_p(project["summary"], styles["body"]))
            techs = _technologies(project.get("tech_stack"))
            if techs:
                story.append(_p(techs, styles["item_meta"]))

    if content.achievements:
        _section(story, "Achievements", styles)
        for achievement in content.achievements[:MAX_ACHIEVEMENTS]:
            line = f"{BULLET} {achievement.get('title', '')} - {achievement.get('description') or ''}"
            story.append(_p(line, styles["body"]))

    if content.certificates:
        _section(story, "Certifications", styles)
        for cert in content.certificates[:MAX_CERTIFICATES]:
            story.append(_p(cert.get("title", ""), styles["item_title"]))
            issued = format_month(cert.get("issued_date")) or ""
            story.append(_p(f"{cert.get('issuer', '')}  |  {issued}", styles["item_meta"]))

    story.append(_p(
        f"Generated from portfolio website {BULLET} {today.strftime('%B %Y')}",
        styles["footer"],
    ))
    return story


def build_resume_pdf(content: PortfolioContent, today: Optional[date] = None) -> bytes:
    """生成 PDF 简历字节流

    Raises:
        ResourceNotFoundException: 缺少个人信息
    """
    story = build_story(content, today=today)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=15 * mm,
        leftMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{content.personal_info.get('name', '')} Resume",
    )
    doc.build(story)
    data = buffer.getvalue()
    buffer.close()

    logger.info(f"简历已生成: {len(data)} bytes")
    return data


__all__ = [
    "ACCENT_COLOR",
    "TEXT_COLOR",
    "build_story",
    "build_resume_pdf",
    "contact_line",
    "resume_filename",
]
