from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

"""Ledger models for the reference-keyed aggregation pass.

The ledger groups every row carrying a positive Offer Value by its offer
reference number and sums money across duplicate rows. It is a different
grouping from the Offer extraction and its counts are not expected to match
the extracted offer counts.
"""

__all__ = [
    "LedgerEntry",
    "LedgerSummary",
    "LedgerReport",
]


@dataclass
class LedgerEntry:
    """Aggregate of all rows sharing one offer reference.

    Mutable while the owning sheet is being aggregated; treat as read-only
    afterwards.
    """
    offer_reference: str
    offer_value: Decimal = Decimal(0)
    po_value: Decimal = Decimal(0)
    is_won: bool = False
    row_count: int = 0
    first_sl_number: int | float | str | None = None
    machine_serials: list[str] = field(default_factory=list)

    def add_serial(self, serial: str) -> None:
        if serial and serial not in self.machine_serials:
            self.machine_serials.append(serial)


@dataclass(frozen=True)
class LedgerSummary:
    """Rollup over a set of ledger entries (one sheet, one zone or everything)."""
    offer_count: int
    total_offer_value: Decimal
    won_count: int
    won_value: Decimal

    @property
    def conversion_rate(self) -> float:
        """Won share of offers in percent (0.0 when there are no offers)."""
        if self.offer_count == 0:
            return 0.0
        return self.won_count / self.offer_count * 100

    @staticmethod
    def empty() -> LedgerSummary:
        return LedgerSummary(0, Decimal(0), 0, Decimal(0))

    def __add__(self, other: LedgerSummary) -> LedgerSummary:
        return LedgerSummary(
            offer_count=self.offer_count + other.offer_count,
            total_offer_value=self.total_offer_value + other.total_offer_value,
            won_count=self.won_count + other.won_count,
            won_value=self.won_value + other.won_value,
        )


@dataclass(frozen=True)
class LedgerReport:
    """Per-sheet and per-zone ledger rollups for a whole workbook.

    Attributes:
        sheets: (sheet name, zone, summary) in configured order
        zones: zone -> summary, in first-seen order
        total: grand total over all sheets
        row_count: participating rows (positive Offer Value) across all sheets
        unique_references: references counted once across sheets
    """
    sheets: list[tuple[str, str, LedgerSummary]]
    zones: dict[str, LedgerSummary]
    total: LedgerSummary
    row_count: int = 0
    unique_references: int = 0

    @property
    def duplicate_rows(self) -> int:
        return self.row_count - self.unique_references
