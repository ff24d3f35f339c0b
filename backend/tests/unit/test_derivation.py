"""
文档模型构建单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_derivation.py -v
"""

from datetime import date

import pytest

from bol_layout.doc_gen.derivation import DocumentModelBuilder
from bol_layout.interfaces import InputValidationError
from bol_layout.models import (
    CargoDetail,
    CarrierDetails,
    CountryRef,
    DocumentInput,
    HouseRecord,
    HouseSummary,
    JobRecord,
)


class TestDocumentModelBuilder:
    """模型构建器测试"""

    def test_numbers_and_parties(self, builder: DocumentModelBuilder, sample_input: DocumentInput):
        model = builder.build(sample_input)

        assert model.bill_of_lading_no == "MBL-2024-0001"
        assert model.consignor.name == "ACME EXPORTS PVT LTD"
        assert model.consignee.address == "Warehouse 12, Jebel Ali Free Zone, Dubai, UAE"
        assert model.notify.name == "SAME AS CONSIGNEE"
        assert model.delivery_contact.company == "GULF TRADING LLC"
        assert model.delivery_contact.tel == "+971 4 123 4567"
        assert model.delivery_contact.email == "imports@gulftrading.example"

    def test_route_and_dates(self, builder: DocumentModelBuilder, sample_input: DocumentInput):
        model = builder.build(sample_input)

        assert model.place_of_acceptance == "PUNE ICD"
        assert model.port_of_loading == "NHAVA SHEVA"
        assert model.place_of_discharge == "JEBEL ALI"
        assert model.place_of_delivery == "DUBAI"
        assert model.date_of_acceptance == "05-MAR-24"
        assert model.vessel_voyage == "MSC AURORA / V.123E"
        assert model.date_of_delivery == ""
        assert model.modes_of_transport == "SEA"
        assert model.route_transhipment == ""

    def test_totals_from_summary(self, builder: DocumentModelBuilder, sample_input: DocumentInput):
        model = builder.build(sample_input)

        assert model.total_packages == 120
        assert model.packages_text == "120 PACKAGE(S)"
        assert model.gross_weight_text == "15000.5 KGS"
        assert model.measurement_text == "55.25 CBM"
        assert model.container_types == ["1 X 20GP", "1 X 40HC"]
        assert model.description_prefix() == ["120 PACKAGE(S)", "1 X 20GP", "1 X 40HC"]

    def test_totals_from_housing_details(self, builder: DocumentModelBuilder):
        """分单无summary时按ID到作业housing_details查找"""
        job = JobRecord(housing_details=[
            HouseRecord(id=7, summary=HouseSummary(total_no_of_packages="99", total_gross_weight=10)),
        ])
        house = HouseRecord(id="7", cargo_details=[CargoDetail(no_of_packages=1)])
        model = builder.build(DocumentInput(job=job, house=house))

        assert model.total_packages == 99
        assert model.gross_weight_text == "10 KGS"
        # summary未给体积 -> 按货物明细求和（全为空 -> 0 -> 省略）
        assert model.measurement_text == ""

    def test_totals_from_cargo(self, builder: DocumentModelBuilder):
        """无任何汇总时按货物明细求和，非数值按0"""
        house = HouseRecord(
            id=1,
            cargo_details=[
                CargoDetail(no_of_packages="10", gross_weight="100.5", volume="abc"),
                CargoDetail(no_of_packages=5, gross_weight=None, volume=2.25),
            ],
        )
        model = builder.build(DocumentInput(house=house))

        assert model.total_packages == 15
        assert model.packages_text == "15 PACKAGE(S)"
        assert model.gross_weight_text == "100.5 KGS"
        assert model.measurement_text == "2.25 CBM"

    def test_container_entries(self, builder: DocumentModelBuilder, sample_input: DocumentInput):
        model = builder.build(sample_input)
        first, second = model.container_entries

        assert first.lines == [
            "MSCU1234567",
            "20GP",
            "Seal No: SL-001",
            "Gross Wt: 7500.25 KGS",
            "Volume: 25 CBM",
            "Pkgs: 60 PACKAGE(S)",
        ]
        assert second.lines[1:3] == ["40HC", "Seal No: OWN-SEAL"]
        assert first.height == pytest.approx(6 * 3.5 + 2)

    def test_absent_entry_fields_omitted(self, builder: DocumentModelBuilder):
        """缺失字段整行省略；体积为0仍然打印"""
        house = HouseRecord(cargo_details=[CargoDetail(container_no="ABCU0000001", volume=0)])
        model = builder.build(DocumentInput(house=house))
        entry = model.container_entries[0]

        assert entry.lines == ["ABCU0000001", "Volume: 0 CBM"]
        assert entry.height == pytest.approx(2 * 3.5 + 2)

    def test_footer_values(self, builder: DocumentModelBuilder, sample_input: DocumentInput):
        model = builder.build(sample_input)

        assert model.freight_amount == "FREIGHT TO COLLECT"
        assert model.freight_payable_at == "DESTINATION"
        assert model.original_mtd_count == "0/ZERO"
        assert model.place_and_date_of_issue == "NHAVA SHEVA / 05-MAR-24"

    def test_issue_place_falls_back_to_country(self, builder: DocumentModelBuilder):
        """无装货港时用国家名，无主单日期时用构建器时钟"""
        model = builder.build(DocumentInput(house=HouseRecord(), country=CountryRef(name="INDIA")))
        assert model.place_and_date_of_issue == "INDIA / 15-MAR-24"

    def test_metadata(self, builder: DocumentModelBuilder, sample_input: DocumentInput):
        model = builder.build(sample_input)

        assert model.title == "Bill Of Lading - MBL-2024-0001"
        assert model.subject == "Bill Of Lading"
        assert model.branch_name == "ACME LOGISTICS CHENNAI"

    def test_fallbacks_never_none(self, builder: DocumentModelBuilder):
        """最小输入：所有字段兜底为空串或约定默认值"""
        model = builder.build(DocumentInput(house=HouseRecord()))

        for name, value in model.model_dump().items():
            assert value is not None, name
        assert model.bill_of_lading_no == ""
        assert model.vessel_voyage == ""
        assert model.branch_name == "CHENNAI"
        assert model.container_entries == []
        assert model.description_prefix() == []

    def test_hbl_number_fallbacks(self, builder: DocumentModelBuilder):
        house = HouseRecord(hbl_number="HBL-42")
        job = JobRecord(carrier_details=CarrierDetails(vessel_name="EVER GIVEN"))
        model = builder.build(DocumentInput(job=job, house=house))

        assert model.bill_of_lading_no == "HBL-42"
        assert model.vessel_voyage == "EVER GIVEN"

    def test_missing_house_rejected(self, builder: DocumentModelBuilder, sample_job: JobRecord):
        with pytest.raises(InputValidationError):
            builder.build(DocumentInput(job=sample_job))

    def test_clock_injected(self, layout, form):
        builder = DocumentModelBuilder(layout, form, clock=lambda: date(1999, 11, 2))
        model = builder.build(DocumentInput(house=HouseRecord()))
        assert model.place_and_date_of_issue == " / 02-NOV-99"
