"""文本与日期格式化工具

使用示例:
    from folio.utils import format_date, format_date_range, generate_slug

    format_date("2020-01-05")                    # "January 5, 2020"
    format_date_range("2021-06-01", None, True)  # "Jun 2021 - Present"
    generate_slug("Hello, World!")               # "hello-world"
"""

import re
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[str, date, datetime, None]


def parse_date(value: DateLike) -> Optional[date]:
    """将字符串/日期对象解析为 date，无效时返回 None

    支持 ISO 格式（``2020-01-05``、``2020-01-05T10:00:00``、``2020-01``）。
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    for fmt in ("%Y-%m", "%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: DateLike) -> str:
    """格式化为 "January 5, 2020"，无效日期返回 "N/A" """
    d = parse_date(value)
    if d is None:
        return "N/A"
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def format_month(value: DateLike) -> Optional[str]:
    """格式化为 "Jan 2020"，无效日期返回 None"""
    d = parse_date(value)
    if d is None:
        return None
    return d.strftime("%b %Y")


def format_date_range(
    start: DateLike,
    end: DateLike = None,
    is_current: bool = False,
) -> str:
    """格式化日期区间

    - 起始日期缺失或无效: "Present"
    - 当前进行中: "Jan 2020 - Present"
    - 无结束日期或结束日期无效: "Jan 2020"
    - 其他: "Jan 2020 - Mar 2022"
    """
    start_formatted = format_month(start)
    if start_formatted is None:
        return "Present"
    if is_current:
        return f"{start_formatted} - Present"

    end_formatted = format_month(end)
    if end_formatted is None:
        return start_formatted
    return f"{start_formatted} - {end_formatted}"


def truncate_text(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].strip() + "..."


def generate_slug(text: str) -> str:
    """生成 URL slug：小写、去除标点、空白转连字符"""
    slug = text.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()
