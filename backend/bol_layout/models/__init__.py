"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- DocumentInput: 调用方拼装好的作业/分单/分公司数据（只读）
- DocumentModel: 模型构建器输出的可打印字段
- Section/PageState: 排版过程中的分区与页游标
- RenderedDocument: 成品多页文档
"""

from .document import ContactBlock, ContainerEntry, DocumentModel, PartyBlock
from .layout import (
    Column,
    ColumnBounds,
    PageFill,
    PageState,
    PendingContent,
    Section,
    TopBoxLayout,
)
from .records import (
    BranchInfo,
    CargoDetail,
    CarrierDetails,
    ContainerDetail,
    ContainerTypeDetails,
    CountryRef,
    DocumentInput,
    HouseRecord,
    HouseSummary,
    JobRecord,
    MblDetails,
)
from .rendering import (
    FontSpec,
    FontStyle,
    ImageOp,
    LineOp,
    RectOp,
    RenderedDocument,
    RenderedPage,
    TextOp,
)

__all__ = [
    "DocumentInput",
    "JobRecord",
    "HouseRecord",
    "HouseSummary",
    "CargoDetail",
    "ContainerDetail",
    "ContainerTypeDetails",
    "CarrierDetails",
    "MblDetails",
    "BranchInfo",
    "CountryRef",
    "DocumentModel",
    "ContainerEntry",
    "PartyBlock",
    "ContactBlock",
    "Column",
    "ColumnBounds",
    "Section",
    "TopBoxLayout",
    "PageState",
    "PageFill",
    "PendingContent",
    "FontSpec",
    "FontStyle",
    "RectOp",
    "LineOp",
    "TextOp",
    "ImageOp",
    "RenderedPage",
    "RenderedDocument",
]
