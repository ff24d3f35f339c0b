"""
字体度量 - 标准PDF字体名映射与文字宽度测量

使用 ReportLab 内置的 Type1 标准字体度量（无需嵌入字体文件），
录制绘图面与PDF绘图面共用同一套度量，保证两者换行结果一致。
"""

from __future__ import annotations

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics

from ..models import FontSpec, FontStyle

STANDARD_FONTS: dict[str, dict[FontStyle, str]] = {
    "Helvetica": {
        FontStyle.NORMAL: "Helvetica",
        FontStyle.BOLD: "Helvetica-Bold",
        FontStyle.ITALIC: "Helvetica-Oblique",
    },
    "Times": {
        FontStyle.NORMAL: "Times-Roman",
        FontStyle.BOLD: "Times-Bold",
        FontStyle.ITALIC: "Times-Italic",
    },
    "Courier": {
        FontStyle.NORMAL: "Courier",
        FontStyle.BOLD: "Courier-Bold",
        FontStyle.ITALIC: "Courier-Oblique",
    },
}


def font_name(font: FontSpec) -> str:
    """FontSpec -> ReportLab字体名（未知字体族按Helvetica处理）"""
    family = STANDARD_FONTS.get(font.family, STANDARD_FONTS["Helvetica"])
    return family[font.style]


def string_width_mm(text: str, font: FontSpec) -> float:
    """文字宽度(mm)"""
    if not text:
        return 0.0
    return pdfmetrics.stringWidth(text, font_name(font), font.size) / mm
