# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from pathlib import Path
from typing import Any
import pandas as pd
import pytest
from offer_funnel.logging.init import LOGGER_NAME, reset_logging

# Column layout used by the synthetic sheets below.
HEADER = [
    "SL",
    "Reg Date",
    "Company",
    "Location",
    "Machine Serial No",
    "Product Type",
    "Offer Reference Number",
    "Offer Value",
    "Offer Month",
    "Probabality",
    "PO Number",
    "PO Value",
    "Open Funnel",
    "Remarks",
]


def _data_row(**cells: Any) -> list[Any]:
    """Row in HEADER layout from keyword cells (sl=1, reg_date=..., ...)."""
    keys = {
        "sl": "SL",
        "reg_date": "Reg Date",
        "company": "Company",
        "location": "Location",
        "serial": "Machine Serial No",
        "product_type": "Product Type",
        "reference": "Offer Reference Number",
        "offer_value": "Offer Value",
        "offer_month": "Offer Month",
        "probability": "Probabality",
        "po_number": "PO Number",
        "po_value": "PO Value",
        "open_funnel": "Open Funnel",
        "remarks": "Remarks",
    }
    row: list[Any] = [None] * len(HEADER)
    for k, v in cells.items():
        row[HEADER.index(keys[k])] = v
    return row


def _sheet_rows(total_offers: int | None, body: list[list[Any]]) -> list[list[Any]]:
    """Title row, metadata row, header row, then ``body``."""
    meta: list[Any] = ["Total Offers", total_offers] if total_offers is not None else ["Notes"]
    return [["Offer Funnel"], meta, list(HEADER), *body]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("OFFER_FUNNEL_CONFIG", raising=False)
        monkeypatch.delenv("OFFER_FUNNEL_WORKBOOK", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """workbook: ./data/funnel.xlsx
output_json: ./data/offers-export.json
anomaly_log_dir: ./logs
sheets:
  - name: Yogesh
    zone: WEST
  - name: Sasi
    zone: SOUTH
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "funnel.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def write_workbook(temp_workdir: Path):
    """Factory writing ``{sheet name: rows}`` to data/<name> as xlsx."""
    def _write(sheets: dict[str, list[list[Any]]], name: str = "funnel.xlsx") -> Path:
        path = temp_workdir / "data" / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            for sheet_name, rows in sheets.items():
                pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return path
    return _write


@pytest.fixture()
def two_sheet_workbook(write_workbook) -> Path:
    """Yogesh: 2 offers (one with 3 assets), Sasi: 1 offer."""
    yogesh = _sheet_rows(2, [
        _data_row(sl=1, reg_date="2025-01-10", company="Acme", serial="S-1",
                 reference="REF-1", offer_value=100000, po_number="PO-9", po_value=100000),
        _data_row(serial="S-2"),
        _data_row(serial="S-3"),
        _data_row(sl=2, reg_date="2025-02-11", company="Beta", serial="S-4",
                 reference="REF-2", offer_value=50000, probability=60, offer_month="March"),
    ])
    sasi = _sheet_rows(1, [
        _data_row(sl=1, reg_date="2025-03-01", company="Gamma", serial="S-9",
                 reference="REF-9", offer_value=25000),
    ])
    return write_workbook({"Yogesh": yogesh, "Sasi": sasi})


@pytest.fixture()
def data_row():
    return _data_row


@pytest.fixture()
def sheet_rows():
    return _sheet_rows


@pytest.fixture(autouse=True)
def _detach_log_handlers():
    # ハンドラが capsys の閉じたストリームを掴んだまま次のテストへ残らないようにする
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
