"""
录制绘图面 - 把图元按页记录到内存

用途：
1. 单元测试中逐页检查绘制结果（文字/边框/页数）
2. 作为PDF绘图面的基类（PDF绘图面在记录的同时落到画布上）
"""

from __future__ import annotations

from collections.abc import Sequence

from ..interfaces import IDrawingSurface, RenderError
from ..models import (
    FontSpec,
    ImageOp,
    LineOp,
    RectOp,
    RenderedDocument,
    RenderedPage,
    TextOp,
)
from .metrics import string_width_mm


class RecordingSurface(IDrawingSurface):
    """内存录制绘图面"""

    def __init__(self, page_width: float = 210.0, page_height: float = 297.0):
        self._page_width = page_width
        self._page_height = page_height
        self._pages: list[RenderedPage] = []
        self._title = ""
        self._subject = ""
        self._author = ""
        self._finished = False

    @property
    def page_width(self) -> float:
        return self._page_width

    @property
    def page_height(self) -> float:
        return self._page_height

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def pages(self) -> list[RenderedPage]:
        """已绘制的页（只读检查用）"""
        return list(self._pages)

    def set_metadata(self, title: str, subject: str, author: str) -> None:
        self._title = title
        self._subject = subject
        self._author = author

    def new_page(self) -> int:
        self._check_open()
        self._pages.append(RenderedPage(page_number=len(self._pages) + 1))
        return len(self._pages)

    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._current().ops.append(RectOp(x=x, y=y, width=width, height=height))

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._current().ops.append(LineOp(x1=x1, y1=y1, x2=x2, y2=y2))

    def draw_text(
        self,
        lines: Sequence[str],
        x: float,
        y: float,
        font: FontSpec,
        line_height: float = 0.0,
        align: str = "left",
    ) -> None:
        if align not in ("left", "center"):
            raise RenderError(f"不支持的对齐方式: {align}")
        if isinstance(lines, str):
            lines = [lines]
        page = self._current()
        for index, text in enumerate(lines):
            page.ops.append(
                TextOp(x=x, y=y + index * line_height, text=text, font=font, align=align)
            )

    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        self._current().ops.append(ImageOp(x=x, y=y, width=width, height=height))

    def measure_text(self, text: str, font: FontSpec) -> float:
        return string_width_mm(text, font)

    def finish(self) -> RenderedDocument:
        self._check_open()
        self._finished = True
        return RenderedDocument(
            title=self._title,
            subject=self._subject,
            author=self._author,
            pages=list(self._pages),
        )

    def _current(self) -> RenderedPage:
        self._check_open()
        if not self._pages:
            raise RenderError("尚未创建页面，无法绘制")
        return self._pages[-1]

    def _check_open(self) -> None:
        if self._finished:
            raise RenderError("绘图面已结束，不能继续绘制")
