"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(builder, sample_input):
        model = builder.build(sample_input)
        assert model.bill_of_lading_no == "MBL-2024-0001"
"""

from __future__ import annotations

import io
import tempfile
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Generator

import pytest
from PIL import Image

from bol_layout.config import FormSpec, LayoutConfig, RuntimeConfig
from bol_layout.doc_gen import BillOfLadingGenerator, DocumentModelBuilder
from bol_layout.models import (
    BranchInfo,
    CargoDetail,
    CountryRef,
    DocumentInput,
    HouseRecord,
    HouseSummary,
    JobRecord,
    PageState,
)
from bol_layout.render import RecordingSurface

DOCUMENTS_DIR = Path(__file__).resolve().parents[1] / "documents"

# 固定"今天"，保证签发日期可复现
FIXED_TODAY = date(2024, 3, 15)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def layout() -> LayoutConfig:
    """默认版面配置"""
    return LayoutConfig()


@pytest.fixture
def form() -> FormSpec:
    """内置表单文字"""
    return FormSpec()


@pytest.fixture
def runtime_config(layout: LayoutConfig) -> RuntimeConfig:
    """运行期配置（不读YAML）"""
    return RuntimeConfig(layout=layout)


@pytest.fixture
def documents_dir() -> Path:
    return DOCUMENTS_DIR


# ============================================================================
# 输入数据 Fixtures
# ============================================================================

@pytest.fixture
def sample_job() -> JobRecord:
    """示例作业（字段名与REST返回一致）"""
    return JobRecord.model_validate({
        "carrierDetails": {
            "mbl_number": "MBL-2024-0001",
            "mbl_date": "2024-03-05T00:00:00Z",
            "vessel_name": "MSC AURORA",
            "voyage_number": "V.123E",
        },
        "mblDetails": {
            "origin_name": "NHAVA SHEVA",
            "destination_name": "JEBEL ALI",
        },
        "origin_name": "MUMBAI",
        "destination_name": "DUBAI",
        "container_details": [
            {
                "container_no": "MSCU1234567",
                "actual_seal_no": "SL-001",
                "container_type_details": {"container_type_name": "20GP"},
            },
            {
                "container_no": "MSCU7654321",
                "actual_seal_no": "SL-002",
                "container_type_details": {"container_type_name": "40HC"},
            },
        ],
    })


@pytest.fixture
def sample_house() -> HouseRecord:
    """示例分单（两个集装箱，带汇总）"""
    return HouseRecord(
        id=11,
        hbl_number="HBL-0001",
        shipment_id="SHP-0001",
        shipper_name="ACME EXPORTS PVT LTD",
        shipper_address="Plot 7, MIDC Industrial Area, Pune 411019, India",
        consignee_name="GULF TRADING LLC",
        consignee_address="Warehouse 12, Jebel Ali Free Zone, Dubai, UAE",
        consignee_tel="+971 4 123 4567",
        consignee_email="imports@gulftrading.example",
        notify_customer1_name="SAME AS CONSIGNEE",
        notify_customer1_address="",
        origin_name="PUNE ICD",
        destination_name="DUBAI",
        marks_no="GTL/001-120",
        commodity_description="COTTON YARN 30S COMBED, HS CODE 520512",
        cargo_details=[
            CargoDetail(
                container_no="MSCU1234567",
                gross_weight="7500.25",
                volume=25,
                no_of_packages=60,
            ),
            CargoDetail(
                container_no="MSCU7654321",
                container_type_name="40HC",
                actual_seal_no="OWN-SEAL",
                gross_weight=7500.25,
                volume="30.25",
                no_of_packages="60",
            ),
        ],
        summary=HouseSummary(
            total_no_of_packages=120,
            total_gross_weight=15000.5,
            total_volume=55.25,
            container_type=["1 X 20GP", "1 X 40HC"],
        ),
    )


@pytest.fixture
def sample_branch() -> BranchInfo:
    """示例分公司抬头（无logo）"""
    return BranchInfo(
        branch_title="ACME LOGISTICS CHENNAI",
        branch_name="CHENNAI",
        address="12 Harbour Road, Chennai 600001",
        tel="+91 44 1234 5678",
        email="ops@acme.example",
        pan="AAACA1234A",
        gstn="33AAACA1234A1Z5",
    )


@pytest.fixture
def sample_input(
    sample_job: JobRecord, sample_house: HouseRecord, sample_branch: BranchInfo
) -> DocumentInput:
    """完整输入"""
    return DocumentInput(
        job=sample_job,
        house=sample_house,
        branch=sample_branch,
        country=CountryRef(name="INDIA", code="IN"),
    )


@pytest.fixture
def cargo_factory() -> Callable[..., list[CargoDetail]]:
    """生成N个完整的货物行（每个条目6行）"""
    def make(count: int, prefix: str = "TCNU") -> list[CargoDetail]:
        return [
            CargoDetail(
                container_no=f"{prefix}{index:07d}",
                container_type_name="40HC",
                actual_seal_no=f"SEAL{index:05d}",
                gross_weight=1000 + index,
                volume=20,
                no_of_packages=10,
            )
            for index in range(1, count + 1)
        ]
    return make


@pytest.fixture
def logo_png() -> bytes:
    """40x15像素的PNG logo"""
    buffer = io.BytesIO()
    Image.new("RGB", (40, 15), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def truncated_logo_png() -> bytes:
    """文件头完整、像素数据只剩一半的PNG"""
    width, height = 200, 80
    pixels = bytes((i * 37 + i // 7) % 256 for i in range(width * height * 3))
    buffer = io.BytesIO()
    Image.frombytes("RGB", (width, height), pixels).save(buffer, format="PNG")
    data = buffer.getvalue()
    return data[: len(data) // 2]


# ============================================================================
# 排版组件 Fixtures
# ============================================================================

@pytest.fixture
def builder(layout: LayoutConfig, form: FormSpec) -> DocumentModelBuilder:
    """固定时钟的模型构建器"""
    return DocumentModelBuilder(layout, form, clock=lambda: FIXED_TODAY)


@pytest.fixture
def surface(layout: LayoutConfig) -> RecordingSurface:
    """已开首页的录制绘图面"""
    recording = RecordingSurface(layout.page_width, layout.page_height)
    recording.new_page()
    return recording


@pytest.fixture
def first_page_state(layout: LayoutConfig) -> PageState:
    """首页初始游标"""
    return PageState(
        page_number=1,
        box_top=layout.title_y + layout.title_gap,
        box_bottom=layout.footer_top,
        cursor_y=layout.title_y,
    )


@pytest.fixture
def generator(
    runtime_config: RuntimeConfig, form: FormSpec, builder: DocumentModelBuilder
) -> BillOfLadingGenerator:
    """录制绘图面的生成器（逐页检查图元）"""
    return BillOfLadingGenerator(
        config=runtime_config,
        form=form,
        builder=builder,
        surface_factory=lambda layout: RecordingSurface(layout.page_width, layout.page_height),
    )


@pytest.fixture
def pdf_generator(
    runtime_config: RuntimeConfig, form: FormSpec, builder: DocumentModelBuilder
) -> BillOfLadingGenerator:
    """PDF绘图面的生成器"""
    return BillOfLadingGenerator(config=runtime_config, form=form, builder=builder)


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
