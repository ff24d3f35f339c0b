"""
单证生成模块 - 提单排版与分页

子模块：
- formatting: 日期/数值格式化
- resolvers: 分公司抬头解析 / 集装箱元数据关联
- derivation: 文档模型构建
- text_wrap: 文字换行
- sections: 顶部框排版
- paginator: 集装箱明细分页
- footer: 首页页脚
- bill_of_lading: 分页控制器（对外入口）
"""

from .bill_of_lading import BillOfLadingGenerator, pdf_surface_factory
from .derivation import DocumentModelBuilder
from .footer import FooterRenderer
from .paginator import ContainerEntryPaginator
from .resolvers import BranchResolver, ContainerMetadataJoiner
from .sections import SectionLayoutEngine
from .text_wrap import TextWrapper

__all__ = [
    "BillOfLadingGenerator",
    "pdf_surface_factory",
    "DocumentModelBuilder",
    "BranchResolver",
    "ContainerMetadataJoiner",
    "TextWrapper",
    "SectionLayoutEngine",
    "ContainerEntryPaginator",
    "FooterRenderer",
]
