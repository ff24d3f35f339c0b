"""
表单规范加载器 - 读取 documents/form_spec.yaml

职责：
- 解析YAML并提供类型安全访问
- 提供表单上所有固定文字（标题/条款/表头/页脚）及文档约定默认值
- 缓存加载结果（避免重复解析）

使用方式：
    spec = FormSpecLoader.load("documents/form_spec.yaml")
    headers = spec.column_headers
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..interfaces import ConfigError

_CONDITION_1 = (
    "Taken in charge in apparently good condition here in at the place of receipt for "
    "transport and delivery as mentioned above, unless otherwise stated. The MTO in "
    "accordance with the provisions contained in the MTD undertakes to perform or to "
    "procure the performance of the multimodal transport from the place at which the "
    "goods are taken in charge, to the place designated for delivery and assumes "
    "responsibility for such transport."
)
_CONDITION_2 = (
    "One of the MTD (s) must be surrendered, duly endorsed in exchange for the goods. In "
    "witness where of the original MTD all of this tenure and date have been signed in the "
    "number indicated below one of which being accomplished the other(s) to be void."
)


class FormDefaults(BaseModel):
    """缺失字段的约定默认值"""
    branch_name: str = "CHENNAI"
    marks_and_numbers: str = ""
    modes_of_transport: str = "SEA"
    freight_amount: str = "FREIGHT TO COLLECT"
    freight_payable_at: str = "DESTINATION"
    original_mtd_count: str = "0/ZERO"


class FormSpec(BaseModel):
    """表单文字规范（form_spec.yaml 的结构化表示）"""

    # 标题
    document_title: str = "MULTIMODAL TRANSPORT DOCUMENT"
    bill_title: str = "Bill of Lading:"
    document_subject: str = "Bill Of Lading"

    # 左栏
    consignor_label: str = "CONSIGNOR"
    consignee_label: str = "CONSIGNEE"
    notify_label: str = "NOTIFY ADDRESS"
    acceptance_labels: list[str] = Field(
        default_factory=lambda: ["Place of acceptance:", "Date of acceptance:", "Port of Loading:"]
    )
    discharge_labels: list[str] = Field(
        default_factory=lambda: ["Place of Discharge:", "Place of Delivery:"]
    )
    vessel_labels: list[str] = Field(
        default_factory=lambda: ["Vessel Voy No:", "Date of Period of Delivery:"]
    )

    # 右栏
    condition_paragraphs: list[str] = Field(default_factory=lambda: [_CONDITION_1, _CONDITION_2])
    delivery_contact_label: str = "To Obtain delivery Contact"
    transport_labels: list[str] = Field(
        default_factory=lambda: [
            "Modes/ Means of Transport:",
            "Route/ Place of Transhipments (if any):",
        ]
    )

    # 明细区表头（5栏）
    column_headers: list[str] = Field(
        default_factory=lambda: [
            "Container No. (S)",
            "Marks and Numbers",
            "Number of packages, kinds of packages, general description of goods. (said to contain)",
            "Gross Weight",
            "Measurement",
        ]
    )

    # 页脚
    footer_labels: list[str] = Field(
        default_factory=lambda: [
            "Freight Amount",
            "Freight Payable at",
            "Number of Original MTD (s)",
            "Place and Date of issue",
        ]
    )
    other_particulars_label: str = "Other Particulars (if any)"
    terms_note: str = (
        "Weight and measurement of container not to be included "
        "(TERMS CONTINUED ON BACK HEREOF)"
    )
    signatory_text: str = "AUTHORISED SIGNATORY"

    defaults: FormDefaults = Field(default_factory=FormDefaults)

    @field_validator("column_headers")
    @classmethod
    def _five_columns(cls, v: list[str]) -> list[str]:
        if len(v) != 5:
            raise ValueError(f"明细区表头必须为5栏，实际{len(v)}栏")
        return v

    @field_validator("footer_labels")
    @classmethod
    def _four_footer_cells(cls, v: list[str]) -> list[str]:
        if len(v) != 4:
            raise ValueError(f"页脚首行必须为4栏，实际{len(v)}栏")
        return v


class FormSpecLoader:
    """规范加载器（单例模式+缓存）"""

    _instance: FormSpecLoader | None = None

    def __new__(cls) -> FormSpecLoader:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, spec_path: str | Path = "documents/form_spec.yaml") -> FormSpec:
        """加载并缓存规范"""
        path = Path(spec_path)
        if not path.exists():
            raise FileNotFoundError(f"表单规范文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        try:
            return FormSpec(**data.get("form", data))
        except ValidationError as e:
            raise ConfigError(f"表单规范格式错误: {path}: {e}") from e

    @classmethod
    def reload(cls, spec_path: str | Path = "documents/form_spec.yaml") -> FormSpec:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(spec_path)


# 便捷函数
def load_form_spec(spec_path: str | Path | None = None) -> FormSpec:
    """加载表单规范；不指定路径时返回内置默认值"""
    if spec_path is None:
        return FormSpec()
    return FormSpecLoader.load(spec_path)
