"""
格式化工具 - 日期/数值

规则：
- 日期输出 DD-MON-YY（两位日、三位大写英文月、两位年），无效/缺失输出空串
- 数值宽松解析：非数值/缺失按0处理
- 汇总 = 对货物列表某字段求和
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date, datetime
from typing import Any

logger = logging.getLogger(__name__)

MONTH_NAMES = ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def parse_date(value: Any) -> date | None:
    """解析日期（ISO字符串/date/datetime），失败返回None"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug(f"无法解析日期: {value!r}")
        return None


def format_date(value: Any) -> str:
    """格式化为 DD-MON-YY"""
    parsed = parse_date(value)
    if parsed is None:
        return ""
    return f"{parsed.day:02d}-{MONTH_NAMES[parsed.month - 1]}-{parsed.year % 100:02d}"


def to_number(value: Any) -> float:
    """宽松数值解析（取字符串开头的数字部分，其余按0）"""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if value == value else 0.0
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return 0.0
    return float(match.group(0))


def sum_field(records: Iterable[Any], field: str) -> float:
    """对记录列表的指定字段求和"""
    total = 0.0
    for record in records:
        if isinstance(record, dict):
            raw = record.get(field)
        else:
            raw = getattr(record, field, None)
        total += to_number(raw)
    return total


def format_number(value: float) -> str:
    """数值显示：整数不带小数点，小数最多保留3位"""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def display_value(value: Any) -> str:
    """原样展示REST字段（数字去掉多余的 .0）"""
    if value is None:
        return ""
    if isinstance(value, float):
        return format_number(value)
    return str(value).strip()


def is_present(value: Any) -> bool:
    """字段是否有值（0 视为有值）"""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    return True


def is_truthy(value: Any) -> bool:
    """字段是否为非零/非空值"""
    if not is_present(value):
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip() not in ("0", "0.0")
