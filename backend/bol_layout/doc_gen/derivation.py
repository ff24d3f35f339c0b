"""
文档模型构建器 - 把原始作业/分单/分公司记录整理为可打印字段

职责：
1. 日期格式化（DD-MON-YY），无效日期输出空串
2. 汇总件数/毛重/体积（优先分单summary，其次作业housing_details，最后按货物明细求和）
3. 货物明细按箱号关联集装箱元数据，生成集装箱条目
4. 所有缺失字段兜底为空串或表单约定默认值

依赖：
- form_spec.yaml: defaults（默认值）
- runtime.yaml: layout（条目高度计算用的行距/间距）

测试要点：
- test_build_dates: 日期格式化
- test_build_totals: 汇总求和（非数值按0）
- test_build_container_entries: 条目行与高度
- test_build_fallbacks: 缺失字段兜底
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from ..config import FormSpec, LayoutConfig, load_form_spec
from ..interfaces import IBranchResolver, IContainerJoiner, InputValidationError
from ..models import (
    CargoDetail,
    ContactBlock,
    ContainerEntry,
    DocumentInput,
    DocumentModel,
    HouseRecord,
    HouseSummary,
    JobRecord,
    PartyBlock,
)
from .formatting import (
    display_value,
    format_date,
    format_number,
    is_present,
    is_truthy,
    sum_field,
    to_number,
)
from .resolvers import BranchResolver, ContainerMetadataJoiner

logger = logging.getLogger(__name__)


class DocumentModelBuilder:
    """文档模型构建器"""

    def __init__(
        self,
        layout: LayoutConfig | None = None,
        form: FormSpec | None = None,
        branch_resolver: IBranchResolver | None = None,
        container_joiner: IContainerJoiner | None = None,
        clock: Callable[[], date] = date.today,
    ):
        self.layout = layout or LayoutConfig()
        self.form = form or load_form_spec()
        self.defaults = self.form.defaults
        self.branch_resolver = branch_resolver or BranchResolver(self.defaults.branch_name)
        self.container_joiner = container_joiner or ContainerMetadataJoiner()
        self.clock = clock

    def build(self, doc_input: DocumentInput) -> DocumentModel:
        """构建文档模型"""
        house = doc_input.house
        if house is None:
            raise InputValidationError("缺少分单记录，无法生成提单")

        job = doc_input.job
        carrier = job.carrier_details
        mbl = job.mbl_details

        # === 单证编号 ===
        bill_no = (carrier.mbl_number if carrier else None) or house.hbl_number or ""

        # === 路线 ===
        port_of_loading = (mbl.origin_name if mbl else None) or job.origin_name or ""
        place_of_discharge = (mbl.destination_name if mbl else None) or job.destination_name or ""
        date_of_acceptance = format_date(carrier.mbl_date if carrier else None)

        # === 汇总 ===
        summary = self._resolve_summary(job, house)
        cargo = self.container_joiner.join(house.cargo_details, job.container_details)
        total_packages = self._total(summary.total_no_of_packages if summary else None, cargo, "no_of_packages")
        total_weight = self._total(summary.total_gross_weight if summary else None, cargo, "gross_weight")
        total_volume = self._total(summary.total_volume if summary else None, cargo, "volume")

        # === 页脚 ===
        issue_place = port_of_loading or (doc_input.country.name if doc_input.country else None) or ""
        issue_date = date_of_acceptance or format_date(self.clock())
        branch = self.branch_resolver.resolve(doc_input.branch)

        return DocumentModel(
            bill_of_lading_no=bill_no,
            consignor=PartyBlock(
                name=house.shipper_name or "",
                address=house.shipper_address or "",
            ),
            consignee=PartyBlock(
                name=house.consignee_name or "",
                address=house.consignee_address or "",
            ),
            notify=PartyBlock(
                name=house.notify_customer1_name or "",
                address=house.notify_customer1_address or "",
            ),
            delivery_contact=ContactBlock(
                company=house.consignee_name or "",
                address=house.consignee_address or "",
                tel=house.consignee_tel or "",
                email=house.consignee_email or "",
            ),
            place_of_acceptance=house.origin_name or "",
            date_of_acceptance=date_of_acceptance,
            port_of_loading=port_of_loading,
            place_of_discharge=place_of_discharge,
            place_of_delivery=house.destination_name or "",
            vessel_voyage=self._vessel_voyage(job),
            date_of_delivery="",
            modes_of_transport=self.defaults.modes_of_transport,
            route_transhipment="",
            marks_and_numbers=house.marks_no or self.defaults.marks_and_numbers,
            commodity_description=house.commodity_description or "",
            packages_text=f"{format_number(total_packages)} PACKAGE(S)" if total_packages else "",
            gross_weight_text=f"{format_number(total_weight)} KGS" if total_weight else "",
            measurement_text=f"{format_number(total_volume)} CBM" if total_volume else "",
            container_types=[t for t in (summary.container_type if summary else []) if t],
            container_entries=[self._container_entry(row) for row in cargo],
            total_packages=total_packages,
            total_gross_weight=total_weight,
            total_volume=total_volume,
            freight_amount=self.defaults.freight_amount,
            freight_payable_at=self.defaults.freight_payable_at,
            original_mtd_count=self.defaults.original_mtd_count,
            place_and_date_of_issue=f"{issue_place} / {issue_date}",
            branch=branch,
            title=f"Bill Of Lading - {bill_no}",
            subject=self.form.document_subject,
        )

    def _resolve_summary(self, job: JobRecord, house: HouseRecord) -> HouseSummary | None:
        """分单自带summary优先，否则按ID到作业的housing_details中查找"""
        if house.summary is not None and not house.summary.is_empty:
            return house.summary
        matched = job.find_house(house.id)
        if matched is not None and matched.summary is not None and not matched.summary.is_empty:
            return matched.summary
        logger.debug(f"分单无汇总数据，按货物明细求和: {house.hbl_number or house.id}")
        return None

    def _total(self, summary_value, cargo: list[CargoDetail], field: str) -> float:
        if is_present(summary_value):
            return to_number(summary_value)
        return sum_field(cargo, field)

    def _vessel_voyage(self, job: JobRecord) -> str:
        carrier = job.carrier_details
        if carrier is None:
            return ""
        if carrier.vessel_name and carrier.voyage_number:
            return f"{carrier.vessel_name} / {carrier.voyage_number}"
        return carrier.vessel_name or carrier.voyage_number or ""

    def _container_entry(self, cargo: CargoDetail) -> ContainerEntry:
        """单个集装箱条目：缺失字段整行省略"""
        lines = []
        if cargo.container_no:
            lines.append(cargo.container_no)
        if cargo.container_type_name:
            lines.append(cargo.container_type_name)
        if cargo.actual_seal_no:
            lines.append(f"Seal No: {cargo.actual_seal_no}")
        if is_truthy(cargo.gross_weight):
            lines.append(f"Gross Wt: {display_value(cargo.gross_weight)} KGS")
        if is_present(cargo.volume):
            lines.append(f"Volume: {display_value(cargo.volume)} CBM")
        if is_truthy(cargo.no_of_packages):
            lines.append(f"Pkgs: {display_value(cargo.no_of_packages)} PACKAGE(S)")

        return ContainerEntry.from_lines(
            lines,
            line_height=self.layout.line_height,
            gap=self.layout.entry_gap,
            container_no=cargo.container_no or "",
        )
