"""
提单生成器 - 分页控制器

流程：
1. 构建文档模型（缺少分单记录时在绘制前直接失败）
2. 创建绘图面，写入文档属性，开首页
3. 排版顶部框，画首页外框（框顶到页脚顶边）
4. 首页明细区（预留页脚）
5. 页脚（仅首页）
6. 还有剩余内容时逐页开续页：外框 -> 表头 -> 剩余条目/描述行
7. 结束绘图面，返回成品文档

只有本控制器可以开新页；其他组件只报告"放不下"。
渲染过程中的任何异常在这里统一记录并包装为 RenderError，调用方拿不到半成品。

测试要点：
- test_empty_document_single_page: 无条目无描述 -> 1页，有页脚
- test_multi_page: 条目溢出 -> 续页重画表头、无页脚
- test_missing_logo / test_broken_logo: 照常生成
- test_missing_house: 绘制前抛出 InputValidationError
- test_deterministic: 相同输入相同输出
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..config import FormSpec, LayoutConfig, RuntimeConfig, get_config, load_form_spec
from ..interfaces import IDocumentGenerator, IDrawingSurface, RenderError
from ..models import DocumentInput, DocumentModel, PageState, RenderedDocument
from ..render import ReportLabSurface
from .derivation import DocumentModelBuilder
from .footer import FooterRenderer
from .paginator import ContainerEntryPaginator
from .sections import SectionLayoutEngine
from .text_wrap import TextWrapper

logger = logging.getLogger(__name__)

SurfaceFactory = Callable[[LayoutConfig], IDrawingSurface]


def pdf_surface_factory(layout: LayoutConfig) -> IDrawingSurface:
    """默认绘图面：ReportLab PDF"""
    return ReportLabSurface(layout.page_width, layout.page_height, layout.line_width)


class BillOfLadingGenerator(IDocumentGenerator):
    """提单生成器实现"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        form: FormSpec | None = None,
        builder: DocumentModelBuilder | None = None,
        surface_factory: SurfaceFactory | None = None,
    ):
        self.config = config or get_config()
        self.layout = self.config.layout
        self.form = form or load_form_spec(self.config.form_spec_path)
        self.builder = builder or DocumentModelBuilder(self.layout, self.form)
        self.surface_factory = surface_factory or pdf_surface_factory

    def generate(self, doc_input: DocumentInput) -> RenderedDocument:
        """生成提单"""
        model = self.builder.build(doc_input)
        surface = self.surface_factory(self.layout)
        try:
            return self._render(surface, model)
        except Exception as e:
            logger.exception(f"提单渲染失败: {model.bill_of_lading_no}")
            raise RenderError(f"提单渲染失败: {model.bill_of_lading_no}: {e}") from e

    def _render(self, surface: IDrawingSurface, model: DocumentModel) -> RenderedDocument:
        L = self.layout
        wrapper = TextWrapper(surface)
        sections = SectionLayoutEngine(surface, L, self.form, wrapper)
        paginator = ContainerEntryPaginator(surface, L, self.form, wrapper)
        footer = FooterRenderer(surface, L, self.form, wrapper)

        surface.set_metadata(model.title, model.subject, model.branch_name)

        # === 首页 ===
        page_number = surface.new_page()
        state = PageState(
            page_number=page_number,
            box_top=L.title_y + L.title_gap,
            box_bottom=L.footer_top,
            cursor_y=L.title_y,
        )
        state, top_box = sections.layout_top_box(state, model)
        surface.draw_rect(L.inner_margin, top_box.box_top, L.inner_width, L.footer_top - top_box.box_top)

        state, pending = paginator.draw_first_page(state, model)
        footer.draw(L.footer_top, model)

        # === 续页 ===
        while pending.has_content:
            page_number = surface.new_page()
            state = PageState(
                page_number=page_number,
                box_top=L.continuation_top,
                box_bottom=L.continuation_bottom,
                cursor_y=L.continuation_top,
            )
            surface.draw_rect(L.inner_margin, state.box_top, L.inner_width, state.box_bottom - state.box_top)
            state, pending = paginator.draw_continuation_page(state, pending)

        document = surface.finish()
        logger.info(
            f"提单生成完成: {model.bill_of_lading_no or '(无编号)'}, "
            f"{len(model.container_entries)}个集装箱, 共{document.page_count}页"
        )
        return document
