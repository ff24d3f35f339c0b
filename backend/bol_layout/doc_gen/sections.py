"""
顶部框排版 - 标题 + 左右两栏顺序分区

职责：
1. 每个分区：粗体标签 -> 换行后的值 -> 推进游标 -> 画本栏宽度的底边线（即下一分区的顶边线）
2. 多字段行按等宽子栏排版，竖线在上下两条横线都确定后再画
3. 两栏都排完后取 max(左栏底, 右栏底) - 修边 作为顶部框与明细区的共同分界线
4. 各栏最后一个分区不画自己的底边线，只画全宽的共同分界线（避免双线）

测试要点：
- test_border_continuity: 同栏相邻分区 end_y == 下一分区 start_y
- test_dividers_span_section: 竖线恰好覆盖 [start_y, end_y]
- test_reconcile_bottom: 共同分界线位置
- test_broken_logo_non_fatal: logo解析失败不中断
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from functools import partial

from ..config import FormSpec, LayoutConfig
from ..interfaces import AssetError, IDrawingSurface
from ..models import (
    BranchInfo,
    Column,
    ColumnBounds,
    DocumentModel,
    FontSpec,
    FontStyle,
    PageState,
    PartyBlock,
    Section,
    TopBoxLayout,
)
from .text_wrap import TextWrapper

logger = logging.getLogger(__name__)

# 分区绘制函数：(栏界, 顶边Y) -> (底边Y, 竖线X列表)
SectionDrawer = Callable[[ColumnBounds, float], tuple[float, list[float]]]


class SectionLayoutEngine:
    """顶部框排版引擎"""

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

        self.title_font = layout.font(layout.title_font_size, FontStyle.BOLD)
        self.doc_title_font = layout.font(layout.doc_title_font_size, FontStyle.BOLD)
        self.label_font = layout.font(layout.label_font_size, FontStyle.BOLD)
        self.number_font = layout.font(layout.label_font_size)
        self.field_label_font = layout.font(layout.value_font_size, FontStyle.BOLD)
        self.value_font = layout.font(layout.value_font_size)
        self.small_font = layout.font(layout.small_font_size)

    def layout_top_box(self, state: PageState, model: DocumentModel) -> tuple[PageState, TopBoxLayout]:
        """排版顶部框，返回游标位于共同分界线处的新 PageState"""
        L = self.layout
        self.surface.draw_text(
            [self.form.document_title], L.mid_x, L.title_y, self.title_font, align="center"
        )
        box_top = L.title_y + L.title_gap

        left_sections = self._layout_column(
            Column.LEFT, L.left_column(), self._left_blocks(model), box_top
        )
        right_sections = self._layout_column(
            Column.RIGHT, L.right_column(), self._right_blocks(model), box_top
        )

        left_end = left_sections[-1].end_y
        right_end = right_sections[-1].end_y
        bottom_y = max(left_end, right_end) - L.reconcile_trim

        # 两栏末分区统一延伸到共同分界线
        left_sections[-1] = left_sections[-1].model_copy(update={"end_y": bottom_y})
        right_sections[-1] = right_sections[-1].model_copy(update={"end_y": bottom_y})
        sections = left_sections + right_sections

        for section in sections:
            for x in section.dividers:
                self.surface.draw_line(x, section.start_y, x, section.end_y)

        self.surface.draw_line(L.mid_x, box_top, L.mid_x, bottom_y)
        self.surface.draw_line(L.inner_margin, bottom_y, L.inner_right, bottom_y)

        top_box = TopBoxLayout(
            box_top=box_top,
            bottom_y=bottom_y,
            left_end_y=left_end,
            right_end_y=right_end,
            sections=sections,
        )
        new_state = state.model_copy(update={"box_top": box_top, "cursor_y": bottom_y})
        return new_state, top_box

    # ------------------------------------------------------------------
    # 栏内容定义
    # ------------------------------------------------------------------

    def _left_blocks(self, model: DocumentModel) -> list[tuple[str, SectionDrawer]]:
        form = self.form
        return [
            (form.consignor_label, partial(self._party_section, form.consignor_label, model.consignor)),
            (form.consignee_label, partial(self._party_section, form.consignee_label, model.consignee)),
            (form.notify_label, partial(self._party_section, form.notify_label, model.notify)),
            ("Acceptance", partial(self._field_row, list(zip(
                form.acceptance_labels,
                [model.place_of_acceptance, model.date_of_acceptance, model.port_of_loading],
            )))),
            ("Discharge", partial(self._field_row, list(zip(
                form.discharge_labels,
                [model.place_of_discharge, model.place_of_delivery],
            )))),
            ("Vessel", partial(self._field_row, list(zip(
                form.vessel_labels,
                [model.vessel_voyage, model.date_of_delivery],
            )))),
        ]

    def _right_blocks(self, model: DocumentModel) -> list[tuple[str, SectionDrawer]]:
        form = self.form
        contact = model.delivery_contact
        contact_lines = [
            contact.company,
            contact.address,
            f"Tel: {contact.tel}" if contact.tel else "",
            f"Email: {contact.email}" if contact.email else "",
        ]
        return [
            ("Bill of Lading", partial(self._title_section, model.bill_of_lading_no)),
            ("Company", partial(self._company_section, model.branch)),
            ("Conditions", self._conditions_section),
            (form.delivery_contact_label, partial(
                self._labeled_section, form.delivery_contact_label, contact_lines
            )),
            ("Transport", partial(self._field_row, list(zip(
                form.transport_labels,
                [model.modes_of_transport, model.route_transhipment],
            )))),
        ]

    def _layout_column(
        self,
        column: Column,
        bounds: ColumnBounds,
        blocks: Sequence[tuple[str, SectionDrawer]],
        top_y: float,
    ) -> list[Section]:
        """顺序排版一栏；非末分区画本栏宽度的底边线"""
        sections = []
        y = top_y
        for index, (name, draw) in enumerate(blocks):
            end_y, dividers = draw(bounds, y)
            last = index == len(blocks) - 1
            if not last:
                self.surface.draw_line(bounds.left, end_y, bounds.right, end_y)
            sections.append(Section(
                name=name,
                column=column,
                start_y=y,
                end_y=end_y,
                bordered=not last,
                dividers=dividers,
            ))
            y = end_y
        return sections

    # ------------------------------------------------------------------
    # 分区绘制
    # ------------------------------------------------------------------

    def _party_section(
        self, label: str, party: PartyBlock, bounds: ColumnBounds, top: float
    ) -> tuple[float, list[float]]:
        return self._labeled_section(label, [party.name, party.address], bounds, top)

    def _labeled_section(
        self, label: str, paragraphs: Sequence[str], bounds: ColumnBounds, top: float
    ) -> tuple[float, list[float]]:
        """标签 + 若干段值"""
        L = self.layout
        y = top + L.box_padding
        self.surface.draw_text([label], bounds.content_x, y, self.label_font)
        y += L.label_height
        y = self._paragraphs(bounds, y, paragraphs, self.value_font)
        return y + L.section_padding, []

    def _field_row(
        self, cells: Sequence[tuple[str, str]], bounds: ColumnBounds, top: float
    ) -> tuple[float, list[float]]:
        """多字段行：等宽子栏，子栏之间画竖线"""
        L = self.layout
        count = len(cells)
        cell_width = (bounds.content_width - L.field_gap * (count - 1)) / count
        xs = [bounds.content_x + i * (cell_width + L.field_gap) for i in range(count)]

        label_lines = [self.wrapper.wrap(label, self.field_label_font, cell_width) for label, _ in cells]
        value_lines = [self.wrapper.wrap(value, self.value_font, cell_width) for _, value in cells]

        label_y = top + L.box_padding
        label_rows = max([len(lines) for lines in label_lines] + [1])
        value_y = label_y + (label_rows - 1) * L.line_height + L.field_label_gap

        for x, labels, values in zip(xs, label_lines, value_lines):
            if labels:
                self.surface.draw_text(labels, x, label_y, self.field_label_font, L.line_height)
            if values:
                self.surface.draw_text(values, x, value_y, self.value_font, L.line_height)

        value_rows = max([len(lines) for lines in value_lines] + [1])
        end_y = value_y + value_rows * L.line_height + L.section_padding
        dividers = [x - L.field_gap / 2 for x in xs[1:]]
        return end_y, dividers

    def _title_section(
        self, bill_no: str, bounds: ColumnBounds, top: float
    ) -> tuple[float, list[float]]:
        """单证标题 + 提单号"""
        L = self.layout
        y = top + L.box_padding
        title = self.form.bill_title
        self.surface.draw_text([title], bounds.content_x, y, self.doc_title_font)

        extra_rows = 0
        if bill_no:
            number_x = bounds.content_x + self.surface.measure_text(title, self.doc_title_font) + 2
            available = bounds.content_x + bounds.content_width - number_x
            lines = self.wrapper.wrap(bill_no, self.number_font, available)
            self.surface.draw_text(lines, number_x, y, self.number_font, L.line_height)
            extra_rows = max(len(lines) - 1, 0)

        y += extra_rows * L.line_height
        return y + L.line_height + L.section_padding, []

    def _company_section(
        self, branch: BranchInfo, bounds: ColumnBounds, top: float
    ) -> tuple[float, list[float]]:
        """分公司抬头：名称 / logo / 地址 / 税号 / 联系方式"""
        L = self.layout
        x = bounds.content_x
        y = top + L.box_padding

        y = self._paragraphs(bounds, y, [branch.name], self.label_font)

        if branch.logo:
            logo_x = x + (bounds.content_width - L.logo_width) / 2
            try:
                self.surface.draw_image(branch.logo, logo_x, y, L.logo_width, L.logo_height)
                y += L.logo_height + 2 * L.logo_padding
            except AssetError as e:
                logger.warning(f"分公司logo无法绘制，继续生成: {e}")

        y = self._paragraphs(bounds, y, [branch.address or ""], self.value_font)

        tax_parts = []
        if branch.pan:
            tax_parts.append(f"PAN: {branch.pan}")
        if branch.gstn:
            tax_parts.append(f"GSTN: {branch.gstn}")
        contact_parts = []
        if branch.tel:
            contact_parts.append(f"Tel: {branch.tel}")
        if branch.email:
            contact_parts.append(f"Email: {branch.email}")

        y = self._paragraphs(
            bounds, y, [" | ".join(tax_parts), " | ".join(contact_parts)], self.small_font
        )
        return y + L.section_padding, []

    def _conditions_section(self, bounds: ColumnBounds, top: float) -> tuple[float, list[float]]:
        """承运条款段落"""
        L = self.layout
        y = top + L.box_padding
        y = self._paragraphs(
            bounds, y, self.form.condition_paragraphs, self.value_font, gap=L.paragraph_gap
        )
        return y + L.section_padding, []

    def _paragraphs(
        self,
        bounds: ColumnBounds,
        y: float,
        paragraphs: Sequence[str],
        font: FontSpec,
        gap: float = 0.0,
    ) -> float:
        """依次换行绘制各段，返回下一行基线Y；空段不占位"""
        for paragraph in paragraphs:
            lines = self.wrapper.wrap(paragraph, font, bounds.content_width)
            if not lines:
                continue
            self.surface.draw_text(lines, bounds.content_x, y, font, self.layout.line_height)
            y += len(lines) * self.layout.line_height + gap
        return y
