"""
格式化工具单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_formatting.py -v
"""

from datetime import date, datetime

import pytest

from bol_layout.doc_gen.formatting import (
    display_value,
    format_date,
    format_number,
    is_present,
    is_truthy,
    parse_date,
    sum_field,
    to_number,
)
from bol_layout.models import CargoDetail


class TestFormatDate:
    """日期格式化测试"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-03-05", "05-MAR-24"),
            ("2024-03-05T10:30:00Z", "05-MAR-24"),
            ("2023-12-31T23:59:59+05:30", "31-DEC-23"),
            (date(2025, 1, 9), "09-JAN-25"),
            (datetime(2001, 7, 4, 8, 0), "04-JUL-01"),
        ],
    )
    def test_valid_dates(self, value, expected):
        assert format_date(value) == expected

    @pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-45", 12345])
    def test_invalid_dates_render_empty(self, value):
        """无效/缺失日期输出空串而不是报错"""
        assert format_date(value) == ""

    def test_parse_date_prefix_fallback(self):
        """带非标准后缀的时间戳取前10位"""
        assert parse_date("2024-03-05 garbage") == date(2024, 3, 5)


class TestNumbers:
    """数值解析/求和/显示测试"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (12, 12.0),
            (2.5, 2.5),
            ("7500.25", 7500.25),
            ("12.5kg", 12.5),
            ("  -3", -3.0),
            ("abc", 0.0),
            ("", 0.0),
            (None, 0.0),
            (True, 0.0),
        ],
    )
    def test_to_number(self, value, expected):
        assert to_number(value) == pytest.approx(expected)

    def test_sum_field_treats_invalid_as_zero(self):
        records = [
            CargoDetail(gross_weight="100.5"),
            CargoDetail(gross_weight=None),
            CargoDetail(gross_weight="n/a"),
            CargoDetail(gross_weight=49.5),
        ]
        assert sum_field(records, "gross_weight") == pytest.approx(150.0)

    def test_sum_field_dicts(self):
        assert sum_field([{"volume": 1}, {"volume": "2"}, {}], "volume") == pytest.approx(3.0)

    @pytest.mark.parametrize(
        "value,expected",
        [(3.0, "3"), (120, "120"), (2.5, "2.5"), (1.23456, "1.235"), (0.1 + 0.2, "0.3")],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_display_value(self):
        assert display_value(None) == ""
        assert display_value(25) == "25"
        assert display_value(30.0) == "30"
        assert display_value(" 7500.25 ") == "7500.25"


class TestPresence:
    """字段有值判断测试"""

    def test_zero_is_present_but_not_truthy(self):
        assert is_present(0)
        assert not is_truthy(0)
        assert not is_truthy("0")

    def test_blank_is_absent(self):
        assert not is_present(None)
        assert not is_present("   ")
        assert not is_truthy("")

    def test_values_are_truthy(self):
        assert is_truthy(5)
        assert is_truthy("60")
