"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 排版组件只通过绘图面接口（IDrawingSurface）输出图元，不依赖具体绘图库
2. 协作方（分公司信息解析/集装箱元数据关联）以接口注入，便于替换和mock
3. 异常按类型分层：数据缺口不抛出，渲染失败统一包装为 RenderError

使用方式：
    from bol_layout.interfaces import IDrawingSurface

    class SvgSurface(IDrawingSurface):
        def draw_line(self, x1, y1, x2, y2) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import (
        BranchInfo,
        CargoDetail,
        ContainerDetail,
        DocumentInput,
        FontSpec,
        RenderedDocument,
    )


# ============================================================================
# 绘图面接口
# ============================================================================

class IDrawingSurface(ABC):
    """
    绘图面接口 - 矩形/直线/文字/图片/测量

    坐标单位为毫米，原点在页面左上角，Y 轴向下。
    绘图面不含任何排版知识；同一实例只服务于一次生成调用。
    """

    @property
    @abstractmethod
    def page_width(self) -> float:
        """页面宽度(mm)"""
        ...

    @property
    @abstractmethod
    def page_height(self) -> float:
        """页面高度(mm)"""
        ...

    @abstractmethod
    def set_metadata(self, title: str, subject: str, author: str) -> None:
        """设置文档属性"""
        ...

    @abstractmethod
    def new_page(self) -> int:
        """
        开始新的一页

        Returns:
            新页的页码（从1开始）
        """
        ...

    @abstractmethod
    def draw_rect(self, x: float, y: float, width: float, height: float) -> None:
        """绘制矩形边框（不填充）"""
        ...

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        """绘制直线"""
        ...

    @abstractmethod
    def draw_text(
        self,
        lines: Sequence[str],
        x: float,
        y: float,
        font: FontSpec,
        line_height: float = 0.0,
        align: str = "left",
    ) -> None:
        """
        绘制文字

        Args:
            lines: 已换行的文字行
            x: 左对齐时为起点X，居中时为中心X
            y: 首行基线Y
            font: 字体
            line_height: 行距(mm)，第N行基线 = y + N * line_height
            align: "left" 或 "center"
        """
        ...

    @abstractmethod
    def draw_image(self, data: bytes, x: float, y: float, width: float, height: float) -> None:
        """
        绘制图片（x, y 为左上角）

        Raises:
            AssetError: 图片数据无法解析
        """
        ...

    @abstractmethod
    def measure_text(self, text: str, font: FontSpec) -> float:
        """测量文字宽度(mm)"""
        ...

    @abstractmethod
    def finish(self) -> RenderedDocument:
        """结束绘制并返回成品文档"""
        ...


# ============================================================================
# 协作方接口
# ============================================================================

class IBranchResolver(ABC):
    """分公司抬头解析接口"""

    @abstractmethod
    def resolve(self, branch: BranchInfo | None) -> BranchInfo:
        """
        补全分公司信息

        Args:
            branch: 调用方传入的分公司信息（可能为空）

        Returns:
            所有字段都有值（或文档约定默认值）的分公司信息
        """
        ...


class IContainerJoiner(ABC):
    """集装箱元数据关联接口"""

    @abstractmethod
    def join(
        self,
        cargo: Sequence[CargoDetail],
        containers: Sequence[ContainerDetail],
    ) -> list[CargoDetail]:
        """
        按箱号关联集装箱元数据，补全封号和箱型

        Returns:
            补全后的货物明细（顺序与输入一致）
        """
        ...


# ============================================================================
# 文档生成接口
# ============================================================================

class IDocumentGenerator(ABC):
    """单证生成器接口"""

    @abstractmethod
    def generate(self, doc_input: DocumentInput) -> RenderedDocument:
        """
        生成完整的多页单证

        Raises:
            InputValidationError: 输入缺少必需记录（绘制开始前）
            RenderError: 渲染过程失败（不会返回半成品）
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class BolLayoutError(Exception):
    """基础异常"""
    pass


class InputValidationError(BolLayoutError):
    """输入结构错误（绘制开始前抛出）"""
    pass


class AssetError(BolLayoutError):
    """资源错误（图片无法解析等）"""
    pass


class RenderError(BolLayoutError):
    """渲染错误（生成级失败）"""
    pass


class ConfigError(BolLayoutError):
    """配置错误"""
    pass
