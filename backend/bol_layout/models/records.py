"""
输入记录模型 - 调用方已拼装好的作业/分单/分公司数据

字段名与后端REST返回保持一致，所有模型只读（frozen）；
未声明的字段忽略，缺失字段为 None，由模型构建器统一兜底。
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field

# REST 返回的数值字段可能是数字也可能是字符串
Scalar = Union[int, float, str, None]

_RECORD_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class CarrierDetails(BaseModel):
    """承运人/主单信息"""
    model_config = _RECORD_CONFIG

    mbl_number: str | None = None
    mbl_date: str | None = None
    vessel_name: str | None = None
    voyage_number: str | None = None


class MblDetails(BaseModel):
    """主单起止港"""
    model_config = _RECORD_CONFIG

    origin_name: str | None = None
    destination_name: str | None = None


class ContainerTypeDetails(BaseModel):
    model_config = _RECORD_CONFIG

    container_type_name: str | None = None


class ContainerDetail(BaseModel):
    """作业级集装箱元数据（按箱号关联）"""
    model_config = _RECORD_CONFIG

    container_no: str | None = None
    actual_seal_no: str | None = None
    container_type_details: ContainerTypeDetails | None = None


class CargoDetail(BaseModel):
    """分单货物/集装箱明细行"""
    model_config = _RECORD_CONFIG

    container_no: str | None = None
    container_type_name: str | None = None
    actual_seal_no: str | None = None
    gross_weight: Scalar = None
    volume: Scalar = None
    no_of_packages: Scalar = None


class HouseSummary(BaseModel):
    """分单汇总（后端计算）"""
    model_config = _RECORD_CONFIG

    total_no_of_packages: Scalar = None
    total_gross_weight: Scalar = None
    total_volume: Scalar = None
    container_type: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return (
            self.total_no_of_packages in (None, "")
            and self.total_gross_weight in (None, "")
            and self.total_volume in (None, "")
            and not self.container_type
        )


class HouseRecord(BaseModel):
    """分单记录 - 提单签发的单位"""
    model_config = _RECORD_CONFIG

    id: int | str | None = None
    hbl_number: str | None = None
    shipment_id: str | None = None

    # 发货人/收货人/通知人
    shipper_name: str | None = None
    shipper_address: str | None = None
    shipper_email: str | None = None
    consignee_name: str | None = None
    consignee_address: str | None = None
    consignee_email: str | None = None
    consignee_tel: str | None = None
    notify_customer1_name: str | None = None
    notify_customer1_address: str | None = None

    # 路线
    origin_name: str | None = None
    destination_name: str | None = None

    # 货物
    marks_no: str | None = None
    commodity_description: str | None = None
    cargo_details: list[CargoDetail] = Field(default_factory=list)
    summary: HouseSummary | None = None


class JobRecord(BaseModel):
    """作业记录"""
    model_config = _RECORD_CONFIG

    carrier_details: CarrierDetails | None = Field(None, alias="carrierDetails")
    mbl_details: MblDetails | None = Field(None, alias="mblDetails")
    origin_name: str | None = None
    destination_name: str | None = None
    container_details: list[ContainerDetail] = Field(default_factory=list)
    housing_details: list[HouseRecord] = Field(default_factory=list)

    def find_house(self, house_id: int | str | None) -> HouseRecord | None:
        """按ID查找分单（兼容字符串/数字ID）"""
        if house_id in (None, ""):
            return None
        for house in self.housing_details:
            if house.id is not None and str(house.id) == str(house_id):
                return house
        return None


class BranchInfo(BaseModel):
    """签发分公司抬头"""
    model_config = _RECORD_CONFIG

    branch_title: str | None = None
    branch_name: str | None = None
    address: str | None = None
    tel: str | None = None
    email: str | None = None
    pan: str | None = None
    gstn: str | None = None
    logo_url: str | None = None
    logo: bytes | None = Field(None, description="调用方预先下载好的logo图片数据")

    @property
    def name(self) -> str:
        return self.branch_title or self.branch_name or ""


class CountryRef(BaseModel):
    model_config = _RECORD_CONFIG

    name: str | None = None
    code: str | None = None


class DocumentInput(BaseModel):
    """单份提单的全部输入（生成引擎只读）"""
    model_config = _RECORD_CONFIG

    job: JobRecord = Field(default_factory=JobRecord)
    house: HouseRecord | None = None
    branch: BranchInfo | None = None
    country: CountryRef | None = None
