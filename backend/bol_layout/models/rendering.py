"""
渲染产物模型 - 字体、绘图图元、成品文档

RecordingSurface 把每个图元记录为一个 op，测试和调用方都可以逐页检查
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FontStyle(str, Enum):
    """字形"""
    NORMAL = "normal"
    BOLD = "bold"
    ITALIC = "italic"


class FontSpec(BaseModel):
    """字体（族/字形/字号pt）"""
    model_config = ConfigDict(frozen=True)

    family: str = "Helvetica"
    style: FontStyle = FontStyle.NORMAL
    size: float = 7.0


class RectOp(BaseModel):
    kind: Literal["rect"] = "rect"
    x: float
    y: float
    width: float
    height: float


class LineOp(BaseModel):
    kind: Literal["line"] = "line"
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def is_vertical(self) -> bool:
        return self.x1 == self.x2

    @property
    def is_horizontal(self) -> bool:
        return self.y1 == self.y2


class TextOp(BaseModel):
    kind: Literal["text"] = "text"
    x: float
    y: float
    text: str
    font: FontSpec
    align: str = "left"


class ImageOp(BaseModel):
    kind: Literal["image"] = "image"
    x: float
    y: float
    width: float
    height: float


DrawOp = Annotated[Union[RectOp, LineOp, TextOp, ImageOp], Field(discriminator="kind")]


class RenderedPage(BaseModel):
    """单页图元序列（按绘制顺序）"""
    page_number: int
    ops: list[DrawOp] = Field(default_factory=list)

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, TextOp)]

    def text_ops(self) -> list[TextOp]:
        return [op for op in self.ops if isinstance(op, TextOp)]

    def lines(self) -> list[LineOp]:
        return [op for op in self.ops if isinstance(op, LineOp)]

    def rects(self) -> list[RectOp]:
        return [op for op in self.ops if isinstance(op, RectOp)]


class RenderedDocument(BaseModel):
    """成品多页文档（交给调用方的不透明句柄）"""
    title: str = ""
    subject: str = ""
    author: str = ""
    pages: list[RenderedPage] = Field(default_factory=list)
    pdf: bytes | None = None

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def save(self, path: str | Path) -> Path:
        """写出PDF（仅PDF后端产出的文档可用）"""
        if self.pdf is None:
            raise ValueError("该文档没有PDF数据（非PDF绘图面产出）")
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(self.pdf)
        return out
