"""
页脚 - 运费/签发信息与签字栏（只出现在首页）

布局：
- 外框：页脚顶边到页脚底边，横跨内宽
- 首行四格：Freight Amount / Freight Payable at / Number of Original MTD (s) / Place and Date of issue
- 下半部按 60/40 分左右：左为其他事项与条款提示，右为 "For <分公司>" 与签字
"""

from __future__ import annotations

import logging

from ..config import FormSpec, LayoutConfig
from ..interfaces import IDrawingSurface
from ..models import DocumentModel, FontStyle
from .text_wrap import TextWrapper

logger = logging.getLogger(__name__)


class FooterRenderer:
    """首页页脚"""

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

        self.label_font = layout.font(layout.value_font_size, FontStyle.BOLD)
        self.value_font = layout.font(layout.body_font_size)
        self.italic_font = layout.font(layout.value_font_size, FontStyle.ITALIC)

    def draw(self, footer_top: float, model: DocumentModel) -> float:
        """绘制页脚，返回页脚底边Y"""
        L = self.layout
        left = L.inner_margin
        right = L.inner_right
        bottom = footer_top + L.footer_height
        row_bottom = footer_top + L.footer_top_row_height

        self.surface.draw_rect(left, footer_top, L.inner_width, L.footer_height)
        self._draw_top_row(footer_top, row_bottom, model)
        self.surface.draw_line(left, row_bottom, right, row_bottom)

        split_x = left + L.inner_width * L.footer_left_share
        self.surface.draw_line(split_x, row_bottom, split_x, bottom)

        # 左：其他事项 + 条款提示
        text_y = row_bottom + L.box_padding
        self.surface.draw_text(
            [self.form.other_particulars_label], left + L.box_padding, text_y, self.label_font
        )
        note = self.wrapper.wrap(
            self.form.terms_note, self.value_font, split_x - left - 2 * L.box_padding
        )
        if note:
            self.surface.draw_text(
                note, left + L.box_padding, text_y + L.line_height, self.value_font, L.line_height
            )

        # 右：分公司 + 签字
        self.surface.draw_text(
            [f"For {model.branch_name}"], split_x + L.box_padding, text_y, self.italic_font
        )
        self.surface.draw_text(
            [self.form.signatory_text],
            (split_x + right) / 2,
            bottom - L.line_height,
            self.label_font,
            align="center",
        )
        return bottom

    def _draw_top_row(self, top: float, row_bottom: float, model: DocumentModel) -> None:
        L = self.layout
        values = [
            model.freight_amount,
            model.freight_payable_at,
            model.original_mtd_count,
            model.place_and_date_of_issue,
        ]
        cell_width = L.inner_width / len(values)
        pad = L.box_padding / 2
        label_y = top + L.line_height
        value_y = label_y + L.line_height

        for index, (label, value) in enumerate(zip(self.form.footer_labels, values)):
            x = L.inner_margin + index * cell_width
            if index:
                self.surface.draw_line(x, top, x, row_bottom)
            self.surface.draw_text([label], x + pad, label_y, self.label_font)
            lines = self.wrapper.wrap(value, self.value_font, cell_width - 2 * pad)
            if len(lines) > 1:
                logger.debug(f"页脚 {label} 超出单行宽度，只显示首行")
            if lines:
                self.surface.draw_text(lines[:1], x + pad, value_y, self.value_font)
