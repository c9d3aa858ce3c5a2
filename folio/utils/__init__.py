"""工具模块"""

from .files import parse_file_size, format_file_size
from .text import (
    parse_date,
    format_date,
    format_month,
    format_date_range,
    truncate_text,
    generate_slug,
)

__all__ = [
    "parse_file_size",
    "format_file_size",
    "parse_date",
    "format_date",
    "format_month",
    "format_date_range",
    "truncate_text",
    "generate_slug",
]
