from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models.row import RawRow

"""Header row / metadata location and column resolution.

Salesperson sheets carry a few title/metadata rows above the real header row.
The header row is the first row (within the scan window) holding the literal
cells "SL" and "Company". A "Total Offers" cell followed by a number anywhere in
the same window gives the expected offer count used for reconciliation.

Column resolution is substring based, except for "Open Funnel" and "Remarks"
which must match exactly (they would otherwise hit longer unrelated headers).
"""

__all__ = [
    "UNRESOLVED",
    "SL_COLUMN",
    "FIELD_HEADERS",
    "EXACT_MATCH_FIELDS",
    "HeaderLocation",
    "ColumnMap",
    "resolve_column",
    "resolve_column_exact",
    "build_column_map",
    "locate_header",
]

UNRESOLVED = -1
SL_COLUMN = 0  # SL は常に先頭列

HEADER_SENTINELS = ("SL", "Company")
TOTAL_OFFERS_LABEL = "Total Offers"
METADATA_SCAN_COLUMNS = 20

# logical field -> header text. "Probabality" は台帳側の綴りに合わせている
FIELD_HEADERS: dict[str, str] = {
    "reg_date": "Reg Date",
    "company": "Company",
    "location": "Location",
    "contact_name": "Contact Person",
    "contact_number": "Contact Number",
    "email": "E-Mail",
    "machine_serial": "Machine Serial",
    "product_type": "Product Type",
    "offer_reference": "Offer Reference Number",
    "offer_date": "Offer Reference Date",
    "offer_value": "Offer Value",
    "offer_month": "Offer Month",
    "po_expected_month": "PO Expected",
    "probability": "Probabality",
    "po_number": "PO Number",
    "po_date": "PO Date",
    "po_value": "PO Value",
    "po_received_month": "PO Received Month",
    "open_funnel_note": "Open Funnel",
    "remarks": "Remarks",
}

EXACT_MATCH_FIELDS = frozenset({"open_funnel_note", "remarks"})


def resolve_column(header: RawRow, name: str) -> int:
    """Index of the first header cell whose text contains ``name``.

    Empty cells (absent, zero, "") are never matched. Case-sensitive.
    Returns UNRESOLVED (-1) when nothing matches.
    """
    for idx, cell in enumerate(header.cells):
        if not cell.is_filled:
            continue
        text = cell.text()
        if text is not None and name in text:
            return idx
    return UNRESOLVED


def resolve_column_exact(header: RawRow, name: str) -> int:
    """Index of the first header cell whose text equals ``name``."""
    for idx, cell in enumerate(header.cells):
        if cell.is_filled and cell.text() == name:
            return idx
    return UNRESOLVED


class ColumnMap:
    """Logical field name -> column index for one sheet's header row."""

    def __init__(self, indices: dict[str, int]) -> None:
        self._indices = dict(indices)

    def index_of(self, field_name: str) -> int:
        return self._indices.get(field_name, UNRESOLVED)

    def is_resolved(self, field_name: str) -> bool:
        return self.index_of(field_name) != UNRESOLVED

    def unresolved(self) -> list[str]:
        return [f for f, i in self._indices.items() if i == UNRESOLVED]

    def as_dict(self) -> dict[str, int]:
        return dict(self._indices)

    def cell(self, row: RawRow, field_name: str):
        """Cell of ``row`` for ``field_name`` (ABSENT when unresolved)."""
        return row.cell_at(self.index_of(field_name))

    def value(self, row: RawRow, field_name: str):
        return self.cell(row, field_name).value


def build_column_map(header: RawRow, fields: dict[str, str] | None = None) -> ColumnMap:
    """Resolve every logical field against ``header``.

    Must be built per sheet; header layouts differ between salesperson sheets.
    """
    fields = FIELD_HEADERS if fields is None else fields
    indices: dict[str, int] = {}
    for field_name, header_text in fields.items():
        if field_name in EXACT_MATCH_FIELDS:
            indices[field_name] = resolve_column_exact(header, header_text)
        else:
            indices[field_name] = resolve_column(header, header_text)
    return ColumnMap(indices)


@dataclass(frozen=True)
class HeaderLocation:
    """Result of scanning the top of a sheet.

    header_row_index is -1 when no header row was found; expected_count is 0
    when no "Total Offers" metadata was found.
    """
    header_row_index: int
    header_row: RawRow | None
    expected_count: int | float

    @property
    def found(self) -> bool:
        return self.header_row_index >= 0


def _is_header_row(row: RawRow) -> bool:
    texts = {c.value for c in row.cells if c.is_text}
    return all(s in texts for s in HEADER_SENTINELS)


def _expected_count_in(row: RawRow) -> int | float | None:
    limit = min(len(row), METADATA_SCAN_COLUMNS)
    for j in range(limit):
        cell = row.cell_at(j)
        if cell.is_text and cell.value == TOTAL_OFFERS_LABEL:
            nxt = row.cell_at(j + 1)
            if nxt.is_number and nxt.is_filled:
                value = nxt.value
                if isinstance(value, float) and value.is_integer():
                    return int(value)
                return value
    return None


def locate_header(rows: Sequence[RawRow], scan_rows: int = 10) -> HeaderLocation:
    """Find the header row and the expected offer count in the first rows.

    Both scans cover the same window but are independent: the metadata cell
    may sit on a different row than the header. When several rows carry a
    "Total Offers" pair, the last one in the window wins.
    """
    window = rows[:scan_rows]

    expected: int | float = 0
    for row in window:
        found = _expected_count_in(row)
        if found is not None:
            expected = found

    for idx, row in enumerate(window):
        if _is_header_row(row):
            return HeaderLocation(header_row_index=idx, header_row=row, expected_count=expected)
    return HeaderLocation(header_row_index=-1, header_row=None, expected_count=expected)
