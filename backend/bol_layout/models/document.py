"""
文档模型 - 模型构建器的输出，排版组件的唯一数据来源

所有字段都是可直接打印的字符串/字符串列表，不会出现 None
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field

from .records import BranchInfo


class PartyBlock(BaseModel):
    """发货人/收货人/通知人"""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    address: str = ""


class ContactBlock(BaseModel):
    """提货联系人"""
    model_config = ConfigDict(frozen=True)

    company: str = ""
    address: str = ""
    tel: str = ""
    email: str = ""


class ContainerEntry(BaseModel):
    """单个集装箱/货物行的打印内容"""
    model_config = ConfigDict(frozen=True)

    container_no: str = ""
    lines: list[str] = Field(default_factory=list)
    height: float = 0.0

    @classmethod
    def from_lines(
        cls,
        lines: Sequence[str],
        line_height: float,
        gap: float,
        container_no: str = "",
    ) -> ContainerEntry:
        """按行数计算条目高度：行数*行高 + 条目间距"""
        return cls(
            container_no=container_no,
            lines=list(lines),
            height=len(lines) * line_height + gap,
        )


class DocumentModel(BaseModel):
    """提单渲染字段"""
    model_config = ConfigDict(frozen=True)

    # === 单证编号 ===
    bill_of_lading_no: str = ""

    # === 当事人 ===
    consignor: PartyBlock = Field(default_factory=PartyBlock)
    consignee: PartyBlock = Field(default_factory=PartyBlock)
    notify: PartyBlock = Field(default_factory=PartyBlock)
    delivery_contact: ContactBlock = Field(default_factory=ContactBlock)

    # === 路线与运输方式 ===
    place_of_acceptance: str = ""
    date_of_acceptance: str = ""
    port_of_loading: str = ""
    place_of_discharge: str = ""
    place_of_delivery: str = ""
    vessel_voyage: str = ""
    date_of_delivery: str = ""
    modes_of_transport: str = ""
    route_transhipment: str = ""

    # === 货物 ===
    marks_and_numbers: str = ""
    commodity_description: str = ""
    packages_text: str = ""
    gross_weight_text: str = ""
    measurement_text: str = ""
    container_types: list[str] = Field(default_factory=list)
    container_entries: list[ContainerEntry] = Field(default_factory=list)
    total_packages: float = 0.0
    total_gross_weight: float = 0.0
    total_volume: float = 0.0

    # === 页脚 ===
    freight_amount: str = ""
    freight_payable_at: str = ""
    original_mtd_count: str = ""
    place_and_date_of_issue: str = ""

    # === 抬头 ===
    branch: BranchInfo = Field(default_factory=BranchInfo)

    # === 文档属性 ===
    title: str = ""
    subject: str = ""

    @property
    def branch_name(self) -> str:
        return self.branch.name

    def description_prefix(self) -> list[str]:
        """描述栏在货名之前的行：件数汇总 + 各箱型"""
        prefix = [self.packages_text] if self.packages_text else []
        prefix.extend(t for t in self.container_types if t)
        return prefix
