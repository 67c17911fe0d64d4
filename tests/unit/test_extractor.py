from __future__ import annotations

from offer_funnel.excel.header import build_column_map, locate_header
from offer_funnel.models.config_models import SalesPersonSheet
from offer_funnel.models.offer import OfferStatus
from offer_funnel.models.row import RawRow
from offer_funnel.services.extractor import OfferScanner, ScannerState, extract_offers, is_primary_row

YOGESH = SalesPersonSheet("Yogesh", "WEST")


def _extract(raw_rows):
    rows = [RawRow(r) for r in raw_rows]
    loc = locate_header(rows)
    columns = build_column_map(loc.header_row)
    return extract_offers(rows, loc.header_row_index, columns, YOGESH), loc


def test_five_offers_with_continuations_match_expected(data_row):
    """Header at index 3, 5 primary rows with 3 continuation rows between them."""
    raw = [
        ["Yogesh - Offer Funnel"],
        [None, "Total Offers", 5],
        [],
        ["SL", "Reg Date", "Company", "Location", "Machine Serial No", "Product Type",
         "Offer Reference Number", "Offer Value", "Offer Month", "Probabality",
         "PO Number", "PO Value", "Open Funnel", "Remarks"],
        data_row(sl=1, reg_date="2025-01-01", company="A", serial="A-1"),
        data_row(sl=2, reg_date="2025-01-02", company="B"),
        data_row(serial="B-1"),
        data_row(serial="B-2"),
        data_row(sl=3, reg_date="2025-01-03", company="C", serial="C-1"),
        data_row(serial="C-2"),
        data_row(sl=4, reg_date="2025-01-04", company="D"),
        data_row(sl=5, reg_date="2025-01-05", company="E"),
    ]
    offers, loc = _extract(raw)

    assert loc.header_row_index == 3
    assert loc.expected_count == 5
    assert len(offers) == 5
    assert [o.sl_number for o in offers] == [1, 2, 3, 4, 5]
    b = offers[1]
    assert b.machine_serials == ("B-1", "B-2")
    assert b.asset_count == 2
    assert offers[2].machine_serials == ("C-1", "C-2")
    assert offers[3].machine_serials == ()
    assert [o.is_multi_asset for o in offers] == [False, True, True, False, False]


def test_offer_attributes_are_copied_from_primary_row(sheet_rows, data_row):
    raw = sheet_rows(1, [
        data_row(sl=1.0, reg_date="2025-01-01", company="Acme", location="Pune",
                 product_type="SPP", reference="REF-1", offer_value=1000,
                 po_number="PO-100", po_value=50000, probability=90, remarks="ok"),
    ])
    offers, _ = _extract(raw)
    offer = offers[0]
    assert offer.sl_number == 1
    assert isinstance(offer.sl_number, int)
    assert offer.sales_person == "Yogesh"
    assert offer.zone == "WEST"
    assert offer.company == "Acme"
    assert offer.location == "Pune"
    assert offer.offer_reference == "REF-1"
    assert offer.remarks == "ok"
    assert offer.row_index == 3
    # PO evidence wins over probability evidence
    assert offer.status is OfferStatus.PO_RECEIVED


def test_rows_without_positive_sl_are_not_offers(sheet_rows, data_row):
    raw = sheet_rows(0, [
        data_row(sl=0, reg_date="2025-01-01", company="Zero"),
        data_row(sl=-2, reg_date="2025-01-01", company="Negative"),
        data_row(sl="7", reg_date="2025-01-01", company="Text SL"),
        data_row(sl=None, reg_date="2025-01-01", company="No SL"),
    ])
    offers, _ = _extract(raw)
    assert offers == []


def test_rows_without_reg_date_never_start_offers(sheet_rows, data_row):
    raw = sheet_rows(0, [
        data_row(sl=1, company="No reg date", serial="X-1"),
        data_row(sl=2, reg_date="", company="Empty reg date"),
    ])
    offers, _ = _extract(raw)
    assert offers == []


def test_reg_date_row_without_sl_ends_continuation_block(sheet_rows, data_row):
    raw = sheet_rows(1, [
        data_row(sl=1, reg_date="2025-01-01", serial="S-1"),
        data_row(reg_date="2025-01-02", serial="ORPHAN"),
        data_row(serial="S-2"),
    ])
    offers, _ = _extract(raw)
    assert len(offers) == 1
    assert offers[0].machine_serials == ("S-1",)


def test_empty_row_ends_continuation_block(sheet_rows, data_row):
    raw = sheet_rows(1, [
        data_row(sl=1, reg_date="2025-01-01", serial="S-1"),
        data_row(serial="S-2"),
        [],
        data_row(serial="S-3"),
    ])
    offers, _ = _extract(raw)
    assert offers[0].machine_serials == ("S-1", "S-2")


def test_continuation_zero_serial_is_skipped(sheet_rows, data_row):
    raw = sheet_rows(1, [
        data_row(sl=1, reg_date="2025-01-01"),
        data_row(serial=0),
        data_row(serial=12345.0),
    ])
    offers, _ = _extract(raw)
    assert offers[0].machine_serials == ("12345",)


def test_rows_at_or_above_header_are_ignored():
    raw = [
        [1, "2025-01-01", "Before header"],
        ["SL", "Reg Date", "Company"],
        [1, "2025-01-01", "After header"],
    ]
    offers, loc = _extract(raw)
    assert loc.header_row_index == 1
    assert [o.company for o in offers] == ["After header"]


def test_sheet_without_reg_date_column_yields_no_offers():
    offers, _ = _extract([["SL", "Company"], [1, "Acme"]])
    assert offers == []


def test_scanner_states():
    columns = build_column_map(RawRow(["SL", "Reg Date", "Machine Serial"]))
    scanner = OfferScanner(YOGESH, columns)
    assert scanner.state is ScannerState.AWAITING_PRIMARY

    scanner.feed(1, RawRow([None, None, "lonely"]))
    assert scanner.state is ScannerState.AWAITING_PRIMARY

    scanner.feed(2, RawRow([1, "2025-01-01", "S-1"]))
    assert scanner.state is ScannerState.COLLECTING_CONTINUATIONS

    scanner.feed(3, RawRow([None, None, "S-2"]))
    assert scanner.state is ScannerState.COLLECTING_CONTINUATIONS

    scanner.feed(4, None)
    assert scanner.state is ScannerState.AWAITING_PRIMARY
    offers = scanner.finish()
    assert len(offers) == 1
    assert offers[0].machine_serials == ("S-1", "S-2")
    assert offers[0].row_index == 2


def test_is_primary_row():
    columns = build_column_map(RawRow(["SL", "Reg Date", "Company"]))
    assert is_primary_row(RawRow([3, "2025-01-01"]), columns)
    assert not is_primary_row(RawRow([3, None]), columns)
    assert not is_primary_row(RawRow([0, "2025-01-01"]), columns)
