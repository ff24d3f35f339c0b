"""
集装箱明细分页器 - 明细区五栏（箱号/唛头/货物描述/毛重/体积）

分页算法：
1. 条目高度在模型构建时已算好（行数*行高 + 条目间距）
2. 首页预算 = 页脚顶边 - 数据区顶 - 安全边距；续页预算 = 页框底边 - 数据区顶
3. 条目栏贪心累加，遇到第一个放不下的条目即停止
4. 首页：描述栏（件数汇总 + 箱型 + 换行后的货名）用同一预算独立累加，两栏互不影响
5. 续页：先排剩余条目，剩余描述行接在条目下方，用剩下的预算
6. 唛头/毛重/体积是文档级汇总，写在首页数据区顶部；首页放不下的行在续页同一栏继续
7. 每页的栏间竖线只画到本页的底边（首页到页脚顶边，续页到页框底边），不跨页

分页器只报告"放不下"，换页由控制器决定。

测试要点：
- test_fill_page_greedy: 贪心累加在第一个放不下的条目处停止
- test_columns_independent: 首页两栏独立耗尽
- test_sequential_fill: 续页描述行排在条目之后
- test_header_repeated: 续页先画表头再画数据
- test_force_progress: 续页至少推进一个条目/一行
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import FormSpec, LayoutConfig
from ..interfaces import IDrawingSurface
from ..models import (
    ContainerEntry,
    DocumentModel,
    FontStyle,
    PageFill,
    PageState,
    PendingContent,
)
from .text_wrap import TextWrapper

logger = logging.getLogger(__name__)

# 浮点累加误差容限(mm)
_EPSILON = 1e-6

# 明细区各栏下标
CONTAINER_COL, MARKS_COL, DESCRIPTION_COL, WEIGHT_COL, MEASUREMENT_COL = range(5)

# 表头居中的栏
_CENTERED_HEADERS = {MARKS_COL}


class ContainerEntryPaginator:
    """集装箱条目与货物描述分页器"""

    def __init__(
        self,
        surface: IDrawingSurface,
        layout: LayoutConfig,
        form: FormSpec,
        wrapper: TextWrapper | None = None,
    ):
        self.surface = surface
        self.layout = layout
        self.form = form
        self.wrapper = wrapper or TextWrapper(surface)
        self.columns = layout.table_columns()

        self.header_font = layout.font(layout.value_font_size, FontStyle.BOLD)
        self.body_font = layout.font(layout.body_font_size)

    # ------------------------------------------------------------------
    # 对外接口
    # ------------------------------------------------------------------

    def description_lines(self, model: DocumentModel) -> list[str]:
        """描述栏全部行：前缀行 + 换行后的货名"""
        column = self.columns[DESCRIPTION_COL]
        lines = model.description_prefix()
        lines.extend(
            self.wrapper.wrap(model.commodity_description, self.body_font, column.content_width)
        )
        return lines

    def aggregate_lines(self, model: DocumentModel) -> dict[int, list[str]]:
        """唛头/毛重/体积各栏换行后的内容（空栏省略）"""
        aggregates = {}
        for index, text in (
            (MARKS_COL, model.marks_and_numbers),
            (WEIGHT_COL, model.gross_weight_text),
            (MEASUREMENT_COL, model.measurement_text),
        ):
            lines = self.wrapper.wrap(text, self.body_font, self.columns[index].content_width)
            if lines:
                aggregates[index] = lines
        return aggregates

    def draw_header(self, top: float) -> float:
        """
        绘制五栏表头及其底边线

        Returns:
            表头底边Y
        """
        L = self.layout
        baseline = top + L.header_offset
        rows = 1
        for index, (column, title) in enumerate(zip(self.columns, self.form.column_headers)):
            lines = self.wrapper.wrap(title, self.header_font, column.content_width)
            if lines:
                if index in _CENTERED_HEADERS:
                    center_x = column.left + column.width / 2
                    self.surface.draw_text(
                        lines, center_x, baseline, self.header_font, L.line_height, align="center"
                    )
                else:
                    self.surface.draw_text(lines, column.content_x, baseline, self.header_font, L.line_height)
            rows = max(rows, len(lines))

        header_bottom = top + max(L.header_min_height, L.header_offset + rows * L.line_height)
        self.surface.draw_line(L.inner_margin, header_bottom, L.inner_right, header_bottom)
        return header_bottom

    def fill_page(
        self,
        entries: Sequence[ContainerEntry],
        lines: Sequence[str],
        budget: float,
        force_progress: bool = False,
        sequential: bool = False,
    ) -> PageFill:
        """
        计算一页内条目栏与描述栏各能放下多少内容

        Args:
            entries: 待绘制的集装箱条目
            lines: 待绘制的描述行
            budget: 可用高度(mm)
            force_progress: 续页时为True，保证每页至少推进一个条目或一行
            sequential: 续页时为True，描述行只能用条目之后剩下的高度
        """
        line_height = self.layout.line_height

        count = 0
        used = 0.0
        for entry in entries:
            if used + entry.height > budget + _EPSILON:
                break
            used += entry.height
            count += 1

        if force_progress and entries and count == 0:
            logger.warning(
                f"集装箱条目高度{entries[0].height:.1f}mm超过整页预算{budget:.1f}mm，强制绘制"
            )
            count = 1
            used = entries[0].height

        line_budget = budget - used if sequential else budget
        line_count = self._rows_within(line_budget, len(lines))

        if force_progress and lines and line_count == 0 and count == 0:
            logger.warning(f"描述行超过整页预算{budget:.1f}mm，强制绘制一行")
            line_count = 1

        return PageFill(
            entries=count,
            description_lines=line_count,
            entries_height=used,
            description_height=line_count * line_height,
        )

    def draw_first_page(
        self, state: PageState, model: DocumentModel
    ) -> tuple[PageState, PendingContent]:
        """首页明细区：表头 + 汇总列 + 能放下的条目/描述行"""
        pending = PendingContent(
            entries=model.container_entries,
            description_lines=self.description_lines(model),
            aggregates=self.aggregate_lines(model),
        )
        return self._draw_page(state, pending, safety_margin=self.layout.safety_margin, continuation=False)

    def draw_continuation_page(
        self, state: PageState, pending: PendingContent
    ) -> tuple[PageState, PendingContent]:
        """续页：重画表头后先绘制剩余条目，再在其下方绘制剩余描述行，不含页脚"""
        return self._draw_page(state, pending, safety_margin=0.0, continuation=True)

    # ------------------------------------------------------------------
    # 内部实现
    # ------------------------------------------------------------------

    def _draw_page(
        self,
        state: PageState,
        pending: PendingContent,
        safety_margin: float,
        continuation: bool,
    ) -> tuple[PageState, PendingContent]:
        L = self.layout
        header_top = state.cursor_y
        header_bottom = self.draw_header(header_top)
        data_top = header_bottom + L.row_gap
        state = state.with_header(header_bottom, data_top)

        budget = state.box_bottom - data_top - safety_margin
        fill = self.fill_page(
            pending.entries,
            pending.description_lines,
            budget,
            force_progress=continuation,
            sequential=continuation,
        )
        aggregate_rows = self._draw_aggregates(data_top, pending.aggregates, budget, continuation)
        fill = fill.model_copy(update={"aggregate_lines": aggregate_rows})

        description_top = data_top + fill.entries_height if continuation else data_top
        self._draw_entries(data_top, pending.entries[:fill.entries])
        self._draw_description(description_top, pending.description_lines[:fill.description_lines])
        self._draw_separators(header_top, header_bottom, state.box_bottom)

        remaining = pending.consume(fill)
        logger.debug(
            f"第{state.page_number}页: 条目{fill.entries}个, 描述{fill.description_lines}行, "
            f"剩余条目{len(remaining.entries)}个, 剩余描述{len(remaining.description_lines)}行"
        )
        cursor = max(
            description_top + fill.description_height,
            data_top + fill.entries_height,
            data_top + aggregate_rows * L.line_height,
        )
        return state.moved_to(cursor), remaining

    def _rows_within(self, budget: float, available: int) -> int:
        """预算内能放下的行数（不超过 available）"""
        if budget <= 0:
            return 0
        return min(available, int((budget + _EPSILON) // self.layout.line_height))

    def _draw_entries(self, top: float, entries: Sequence[ContainerEntry]) -> None:
        column = self.columns[CONTAINER_COL]
        y = top
        for entry in entries:
            if entry.lines:
                self.surface.draw_text(
                    entry.lines, column.content_x, y, self.body_font, self.layout.line_height
                )
            y += entry.height

    def _draw_description(self, top: float, lines: Sequence[str]) -> None:
        if not lines:
            return
        column = self.columns[DESCRIPTION_COL]
        self.surface.draw_text(
            list(lines), column.content_x, top, self.body_font, self.layout.line_height
        )

    def _draw_aggregates(
        self,
        top: float,
        aggregates: dict[int, list[str]],
        budget: float,
        force_progress: bool,
    ) -> int:
        """
        唛头/毛重/体积栏：从数据区顶部写起，放不下的行留到下一页同一栏

        Returns:
            本页每栏最多消耗的行数
        """
        longest = max((len(lines) for lines in aggregates.values()), default=0)
        rows = self._rows_within(budget, longest)
        if force_progress and longest and rows == 0:
            rows = 1

        for index, lines in aggregates.items():
            if rows < len(lines):
                logger.warning(
                    f"{self.form.column_headers[index]}栏内容超出本页可用高度，"
                    f"{len(lines) - rows}行在下一页继续"
                )
            if lines[:rows]:
                self.surface.draw_text(
                    lines[:rows], self.columns[index].content_x, top, self.body_font, self.layout.line_height
                )
        return rows

    def _draw_separators(self, header_top: float, header_bottom: float, body_bottom: float) -> None:
        """栏间竖线：表头段 + 数据段，均止于本页"""
        for column in self.columns[1:]:
            self.surface.draw_line(column.left, header_top, column.left, header_bottom)
            self.surface.draw_line(column.left, header_bottom, column.left, body_bottom)
