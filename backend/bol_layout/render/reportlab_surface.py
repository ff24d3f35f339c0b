"""
PDF绘图面 - 基于 ReportLab 画布

职责：
1. 把版面坐标（mm，左上原点，Y向下）换算为PDF坐标（pt，左下原点）
2. 绘制矩形/直线/文字/图片，同时保留录制结果
3. 输出PDF字节（invariant模式，同一输入产出逐字节相同的PDF）

依赖：
- reportlab: 画布与标准字体
"""

from __future__ import annotations

import io
from collections.abc import Sequence

from reportlab.lib.utils import ImageReader
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas

from ..interfaces import AssetError
from ..models import FontSpec, RenderedDocument
from .metrics import font_name
from .recording import RecordingSurface


class ReportLabSurface(RecordingSurface):
    """ReportLab PDF绘图面"""

    def __init__(
        self,
        page_width: float = 210.0,
        page_height: float = 297.0,
        line_width: float = 0.3,
    ):
        super().__init__(page_width, page_height)
        self._line_width = line_width
        self._buffer = io.BytesIO()
        self._canvas = Canvas(
            self._buffer,
            pagesize=(page_width * mm, page_height * mm),
            invariant=1,
        )

    def set_metadata(self, title: str, subject: str, author: str) -> None:
        super().set_metadata(title, subject, author)
        self._canvas.setTitle(title)
        self._canvas.setSubject(subject)
        self._canvas.setAuthor(author)

    def new_page(self) -> int:
        if self.page_count > 0:
            self._canvas.showPage()
        page_number = super().new_page()
        # showPage 会重置图形状态
        self._canvas.setLineWidth(self._line_width * mm)
        self._canvas.setStrokeColorRGB(0, 0, 0)
        self._canvas.setFillColorRGB(0, 0, 0)
        return page_number

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        super().draw_rect(x, y, width, height)
        self._canvas.rect(x * mm, self._flip(y + height), width * mm, height * mm, stroke=1, fill=0)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        super().draw_line(x1, y1, x2, y2)
        self._canvas.line(x1 * mm, self._flip(y1), x2 * mm, self._flip(y2))

    def draw_text(
        self,
        lines: Sequence[str],
        x: float,
        y: float,
        font: FontSpec,
        line_height: float = 0.0,
        align: str = "left",
    ) -> None:
        if isinstance(lines, str):
            lines = [lines]
        super().draw_text(lines, x, y, font, line_height, align)
        self._canvas.setFont(font_name(font), font.size)
        for index, text in enumerate(lines):
            baseline = self._flip(y + index * line_height)
            if align == "center":
                self._canvas.drawCentredString(x * mm, baseline, text)
            else:
                self._canvas.drawString(x * mm, baseline, text)

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        # getSize 只读文件头，getRGBData 才会解码像素（截断的图片在这里失败）
        try:
            image = ImageReader(io.BytesIO(data))
            image.getSize()
            image.getRGBData()
            self._canvas.drawImage(
                image,
                x * mm,
                self._flip(y + height),
                width=width * mm,
                height=height * mm,
                preserveAspectRatio=True,
                mask="auto",
            )
        except Exception as e:
            raise AssetError(f"图片无法解析: {e}") from e
        super().draw_image(data, x, y, width, height)

    def finish(self) -> RenderedDocument:
        document = super().finish()
        self._canvas.save()
        return document.model_copy(update={"pdf": self._buffer.getvalue()})

    def _flip(self, y: float) -> float:
        """版面Y(mm, 向下) -> PDF Y(pt, 向上)"""
        return (self.page_height - y) * mm
