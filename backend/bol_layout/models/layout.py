"""
排版状态模型 - 分区、栏界、页游标

PageState 不在组件之间共享可变引用：每个排版步骤接收一个 PageState，
返回新的 PageState；换页时由分页控制器创建全新实例。
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .document import ContainerEntry


class Column(str, Enum):
    """分区所在栏"""
    LEFT = "left"
    RIGHT = "right"


class ColumnBounds(BaseModel):
    """栏的左右边界及内边距"""
    model_config = ConfigDict(frozen=True)

    left: float
    right: float
    padding: float = 0.0

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def content_x(self) -> float:
        return self.left + self.padding

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.padding


class Section(BaseModel):
    """顶部框中的一个分区"""
    model_config = ConfigDict(frozen=True)

    name: str
    column: Column
    start_y: float
    end_y: float
    bordered: bool = True
    dividers: list[float] = Field(default_factory=list, description="分区内竖线X坐标")

    @property
    def height(self) -> float:
        return self.end_y - self.start_y


class TopBoxLayout(BaseModel):
    """顶部固定框的排版结果"""
    model_config = ConfigDict(frozen=True)

    box_top: float
    bottom_y: float
    left_end_y: float
    right_end_y: float
    sections: list[Section] = Field(default_factory=list)

    def column_sections(self, column: Column) -> list[Section]:
        return [s for s in self.sections if s.column == column]


class PageState(BaseModel):
    """当前页的排版游标"""
    model_config = ConfigDict(frozen=True)

    page_number: int
    box_top: float
    box_bottom: float
    cursor_y: float
    header_bottom: float | None = None

    def moved_to(self, y: float) -> PageState:
        return self.model_copy(update={"cursor_y": y})

    def with_header(self, header_bottom: float, data_top: float) -> PageState:
        return self.model_copy(update={"header_bottom": header_bottom, "cursor_y": data_top})


class PageFill(BaseModel):
    """一页内各栏能放下多少内容"""
    model_config = ConfigDict(frozen=True)

    entries: int = 0
    description_lines: int = 0
    aggregate_lines: int = 0
    entries_height: float = 0.0
    description_height: float = 0.0


class PendingContent(BaseModel):
    """尚未绘制的分页内容（条目 + 描述行 + 汇总栏溢出行）"""
    model_config = ConfigDict(frozen=True)

    entries: list[ContainerEntry] = Field(default_factory=list)
    description_lines: list[str] = Field(default_factory=list)
    aggregates: dict[int, list[str]] = Field(
        default_factory=dict, description="唛头/毛重/体积栏未绘制的行，按明细栏下标"
    )

    @property
    def has_content(self) -> bool:
        return (
            bool(self.entries)
            or bool(self.description_lines)
            or any(self.aggregates.values())
        )

    def consume(self, fill: PageFill) -> PendingContent:
        aggregates = {
            index: lines[fill.aggregate_lines:]
            for index, lines in self.aggregates.items()
            if lines[fill.aggregate_lines:]
        }
        return PendingContent(
            entries=self.entries[fill.entries:],
            description_lines=self.description_lines[fill.description_lines:],
            aggregates=aggregates,
        )
