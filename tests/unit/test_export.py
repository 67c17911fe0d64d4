from __future__ import annotations

import json
from pathlib import Path

from offer_funnel.models.offer import Offer, OfferStatus
from offer_funnel.services.export import offers_to_records, write_offers_json


def _offer() -> Offer:
    return Offer(
        sl_number=1,
        sales_person="Yogesh",
        zone="WEST",
        status=OfferStatus.PO_RECEIVED,
        row_index=3,
        reg_date="2025-01-10",
        company="Acme Pvt Ltd",
        product_type="Contract",
        offer_value=100000,
        po_number="PO-9",
        po_value=100000,
        machine_serials=("S-1", "S-2"),
    )


def test_offers_to_records_keys():
    record = offers_to_records([_offer()])[0]
    assert record["slNumber"] == 1
    assert record["salesPersonName"] == "Yogesh"
    assert record["machineSerials"] == ["S-1", "S-2"]
    assert record["assetCount"] == 2
    assert record["status"] == "PO_RECEIVED"
    assert record["productTypeCode"] == "CONTRACT"
    assert record["remarks"] is None


def test_write_offers_json_creates_parent_dirs(tmp_path: Path):
    out = tmp_path / "nested" / "offers.json"
    written = write_offers_json([_offer()], out)
    assert written == out
    data = json.loads(out.read_text(encoding="utf-8"))
    assert isinstance(data, list)
    assert data[0]["company"] == "Acme Pvt Ltd"


def test_write_offers_json_empty(tmp_path: Path):
    out = write_offers_json([], tmp_path / "offers.json")
    assert json.loads(out.read_text(encoding="utf-8")) == []
