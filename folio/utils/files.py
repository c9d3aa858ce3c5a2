"""文件大小解析工具

使用示例:
    from folio.utils import parse_file_size

    parse_file_size("5MB")    # 5242880
    parse_file_size("512KB")  # 524288
"""

from typing import Union


SIZE_UNITS = [
    ('GB', 1024 ** 3),
    ('MB', 1024 ** 2),
    ('KB', 1024),
    ('B', 1),
]

SIZE_UNIT_ALIASES = {
    'G': 'GB',
    'M': 'MB',
    'K': 'KB',
}


def parse_file_size(size_str: Union[str, int, float]) -> int:
    """解析文件大小字符串为字节数

    Raises:
        ValueError: 格式无效
    """
    if isinstance(size_str, (int, float)):
        return int(size_str)

    size_str = str(size_str).strip().upper()
    if not size_str:
        raise ValueError("文件大小字符串不能为空")

    for alias, unit in SIZE_UNIT_ALIASES.items():
        if size_str.endswith(alias):
            size_str = size_str[:-len(alias)] + unit
            break

    for unit, multiplier in SIZE_UNITS:
        if size_str.endswith(unit):
            number_str = size_str[:-len(unit)].strip()
            try:
                return int(float(number_str) * multiplier)
            except ValueError:
                raise ValueError(f"无法解析文件大小: {size_str}")

    try:
        return int(float(size_str))
    except ValueError:
        raise ValueError(f"无法解析文件大小: {size_str}")


def format_file_size(size_bytes: Union[int, float], precision: int = 1) -> str:
    """格式化字节数，如 5242880 -> '5.0 MB'"""
    for unit in ('B', 'KB', 'MB', 'GB'):
        if abs(size_bytes) < 1024 or unit == 'GB':
            return f"{size_bytes:.{precision}f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.{precision}f} GB"
