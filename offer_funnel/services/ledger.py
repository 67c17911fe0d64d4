from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Any

from ..excel.header import SL_COLUMN, ColumnMap
from ..models.ledger import LedgerEntry, LedgerReport, LedgerSummary
from ..models.processing_result import SheetResult
from ..models.row import Cell, RawRow

"""Reference-keyed ledger aggregation.

Unlike offer extraction this pass looks at every data row, continuation rows
included. A row takes part when its Offer Value is a positive number; Reg Date
is not required. Rows are grouped by offer reference number (synthesized when
the cell is empty) and money is summed, never overwritten.

The resulting counts are a different view from the extracted offers and are
not reconciled against them.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "synthesize_reference",
    "row_reference",
    "aggregate_ledger",
    "summarize_entries",
    "build_ledger_report",
]


def synthesize_reference(reference_key: str, sl_value: Any, row_index: int) -> str:
    """Reference for a row without an Offer Reference Number.

    ``AUTO-<reference_key>-<SL>``, falling back to the row index when SL is
    empty. ``reference_key`` is opaque configuration (see SalesPersonSheet).
    """
    sl_cell = Cell.of(sl_value)
    suffix = sl_cell.text() if sl_cell.is_filled else str(row_index)
    return f"AUTO-{reference_key}-{suffix}"


def row_reference(row: RawRow, row_index: int, columns: ColumnMap, reference_key: str) -> str:
    ref = columns.cell(row, "offer_reference")
    if ref.is_filled:
        return (ref.text() or "").strip()
    return synthesize_reference(reference_key, row.cell_at(SL_COLUMN).value, row_index)


def _money(cell: Cell) -> Decimal:
    # str 経由で Decimal 化し、行順序に依存しない合計にする
    if cell.is_number and cell.is_filled:
        return Decimal(str(cell.value))
    return Decimal(0)


def aggregate_ledger(
    rows: Sequence[RawRow | None],
    header_row_index: int,
    columns: ColumnMap,
    reference_key: str,
) -> tuple[dict[str, LedgerEntry], int]:
    """Group the sheet's rows by offer reference.

    Returns:
        (reference -> LedgerEntry in first-seen order, participating row count)
    """
    entries: dict[str, LedgerEntry] = {}
    participating = 0
    for idx in range(header_row_index + 1, len(rows)):
        row = rows[idx]
        if row is None or row.is_empty:
            continue
        offer_value = columns.cell(row, "offer_value")
        if not offer_value.is_positive_number:
            continue
        participating += 1

        key = row_reference(row, idx, columns, reference_key)
        entry = entries.get(key)
        if entry is None:
            entry = LedgerEntry(offer_reference=key, first_sl_number=row.cell_at(SL_COLUMN).value)
            entries[key] = entry

        po_number = columns.cell(row, "po_number")
        po_value = columns.cell(row, "po_value")
        entry.offer_value += _money(offer_value)
        entry.po_value += _money(po_value)
        entry.row_count += 1
        if po_number.is_filled and po_value.is_positive_number:
            entry.is_won = True

        serial = columns.cell(row, "machine_serial")
        if serial.is_filled:
            entry.add_serial((serial.text() or "").strip())

    return entries, participating


def summarize_entries(entries: Iterable[LedgerEntry]) -> LedgerSummary:
    offer_count = 0
    won_count = 0
    total_value = Decimal(0)
    won_value = Decimal(0)
    for entry in entries:
        offer_count += 1
        total_value += entry.offer_value
        if entry.is_won:
            won_count += 1
            won_value += entry.po_value
    return LedgerSummary(
        offer_count=offer_count,
        total_offer_value=total_value,
        won_count=won_count,
        won_value=won_value,
    )


def build_ledger_report(results: Sequence[SheetResult]) -> LedgerReport:
    """Per-sheet, per-zone and grand-total rollups over processed sheets.

    Also counts references across sheets: a reference already seen in an
    earlier sheet is not counted again in ``unique_references``.
    """
    sheets: list[tuple[str, str, LedgerSummary]] = []
    zones: dict[str, LedgerSummary] = {}
    total = LedgerSummary.empty()
    seen: set[str] = set()
    row_count = 0

    for result in results:
        summary = summarize_entries(result.ledger.values())
        sheets.append((result.sales_person, result.zone, summary))
        zones[result.zone] = zones.get(result.zone, LedgerSummary.empty()) + summary
        total = total + summary
        row_count += result.ledger_rows
        seen.update(result.ledger.keys())

    logger.debug("ledger rows=%d unique_refs=%d", row_count, len(seen))
    return LedgerReport(
        sheets=sheets,
        zones=zones,
        total=total,
        row_count=row_count,
        unique_references=len(seen),
    )
