from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from typing import Any

from ..excel.header import SL_COLUMN, ColumnMap
from ..models.config_models import SalesPersonSheet
from ..models.offer import Offer
from ..models.row import RawRow
from .classifier import classify

"""Offer extraction (row-adjacency grouping).

A primary row has a non-empty Reg Date and a positive numeric SL. It opens an
offer; the rows that follow it without a Reg Date are continuation rows and only
contribute machine serials. A continuation block ends at an empty row or at the
next row carrying a Reg Date.

OfferScanner is fed rows one at a time:

    AWAITING_PRIMARY --primary row--> COLLECTING_CONTINUATIONS
    COLLECTING_CONTINUATIONS --row without Reg Date--> (append serial, stay)
    COLLECTING_CONTINUATIONS --empty row--> AWAITING_PRIMARY (offer closed)
    COLLECTING_CONTINUATIONS --row with Reg Date--> offer closed, row re-evaluated
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ScannerState",
    "OfferScanner",
    "extract_offers",
    "is_primary_row",
]

# Offer attribute <- logical column field
_OFFER_FIELDS = (
    "reg_date",
    "company",
    "location",
    "contact_name",
    "contact_number",
    "email",
    "product_type",
    "offer_reference",
    "offer_date",
    "offer_value",
    "offer_month",
    "po_expected_month",
    "probability",
    "po_number",
    "po_date",
    "po_value",
    "po_received_month",
    "open_funnel_note",
    "remarks",
)


class ScannerState(Enum):
    AWAITING_PRIMARY = "awaiting_primary"
    COLLECTING_CONTINUATIONS = "collecting_continuations"


def is_primary_row(row: RawRow, columns: ColumnMap) -> bool:
    """Reg Date (when resolved) is non-empty and SL is a positive number."""
    if not columns.cell(row, "reg_date").is_filled:
        return False
    return row.cell_at(SL_COLUMN).is_positive_number


class _OpenOffer:
    """Offer under construction; only the serial list grows."""

    def __init__(self, row_index: int, row: RawRow, columns: ColumnMap) -> None:
        self.row_index = row_index
        self.sl_number = row.cell_at(SL_COLUMN).value
        self.fields: dict[str, Any] = {f: columns.value(row, f) for f in _OFFER_FIELDS}
        self.serials: list[str] = []

    def add_serial_from(self, row: RawRow, columns: ColumnMap) -> None:
        cell = columns.cell(row, "machine_serial")
        if cell.is_filled:
            self.serials.append(cell.text())  # type: ignore[arg-type]

    def build(self, sheet: SalesPersonSheet) -> Offer:
        status = classify(self.fields["po_number"], self.fields["po_value"], self.fields["probability"])
        sl = self.sl_number
        if isinstance(sl, float) and sl.is_integer():
            sl = int(sl)
        return Offer(
            sl_number=sl,  # type: ignore[arg-type]
            sales_person=sheet.name,
            zone=sheet.zone,
            status=status,
            row_index=self.row_index,
            machine_serials=tuple(self.serials),
            **self.fields,
        )


class OfferScanner:
    """Explicit two-state scanner over the data rows of one sheet."""

    def __init__(self, sheet: SalesPersonSheet, columns: ColumnMap) -> None:
        self.sheet = sheet
        self.columns = columns
        self.state = ScannerState.AWAITING_PRIMARY
        self._open: _OpenOffer | None = None
        self._offers: list[Offer] = []

    @property
    def offers(self) -> list[Offer]:
        return list(self._offers)

    def _close(self) -> None:
        if self._open is not None:
            self._offers.append(self._open.build(self.sheet))
            self._open = None
        self.state = ScannerState.AWAITING_PRIMARY

    def feed(self, row_index: int, row: RawRow | None) -> None:
        if row is None or row.is_empty:
            self._close()
            return

        if self.columns.cell(row, "reg_date").is_filled:
            # Reg Date 行は継続ブロックを必ず終了させる
            self._close()
            if is_primary_row(row, self.columns):
                self._open = _OpenOffer(row_index, row, self.columns)
                self._open.add_serial_from(row, self.columns)
                self.state = ScannerState.COLLECTING_CONTINUATIONS
            return

        if self.state is ScannerState.COLLECTING_CONTINUATIONS and self._open is not None:
            self._open.add_serial_from(row, self.columns)

    def finish(self) -> list[Offer]:
        self._close()
        return self.offers


def extract_offers(
    rows: Sequence[RawRow | None],
    header_row_index: int,
    columns: ColumnMap,
    sheet: SalesPersonSheet,
) -> list[Offer]:
    """Extract offers from the rows strictly after ``header_row_index``."""
    if not columns.is_resolved("reg_date"):
        logger.debug("sheet=%s has no Reg Date column; no primary rows possible", sheet.name)
    scanner = OfferScanner(sheet, columns)
    for idx in range(header_row_index + 1, len(rows)):
        scanner.feed(idx, rows[idx])
    offers = scanner.finish()
    logger.debug(
        "sheet=%s extracted=%d multi_asset=%d",
        sheet.name,
        len(offers),
        sum(1 for o in offers if o.is_multi_asset),
    )
    return offers
