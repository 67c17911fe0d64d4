from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .ledger import LedgerEntry, LedgerReport
from .offer import Offer

"""Processing result models for the offer-funnel reconciliation tool.

SheetResult is the private accumulator one sheet writes into; RunResult is the
merged view over all configured sheets that the CLI renders.
"""

__all__ = [
    "SheetReconciliation",
    "ReconciliationSummary",
    "SheetResult",
    "RunResult",
]


@dataclass(frozen=True)
class SheetReconciliation:
    """Expected vs extracted offer count for one sheet."""
    sales_person: str
    zone: str
    expected_count: int | float
    extracted_count: int

    @property
    def matched(self) -> bool:
        return self.extracted_count == self.expected_count


@dataclass(frozen=True)
class ReconciliationSummary:
    """Cross-sheet rollup of the extracted offer set."""
    sheets: list[SheetReconciliation]
    total_offers: int
    by_zone: dict[str, int]
    by_status: dict[str, int]
    multi_asset_offers: int

    @property
    def matched_sheets(self) -> int:
        return sum(1 for s in self.sheets if s.matched)

    @property
    def mismatched_sheets(self) -> int:
        return sum(1 for s in self.sheets if not s.matched)


@dataclass
class SheetResult:
    """Output of both pipelines for one sheet."""
    sales_person: str
    zone: str
    header_row_index: int
    expected_count: int | float
    offers: list[Offer] = field(default_factory=list)
    ledger: dict[str, LedgerEntry] = field(default_factory=dict)
    ledger_rows: int = 0  # rows with a positive Offer Value


@dataclass(frozen=True)
class RunResult:
    """Aggregated results for one run over a workbook."""
    sheets_configured: int
    sheets_processed: int
    skipped_sheets: int
    offers: list[Offer]
    reconciliation: ReconciliationSummary
    ledger: LedgerReport
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    sheet_results: list[SheetResult] | None = None

    @property
    def ledger_entries(self) -> int:
        if not self.sheet_results:
            return 0
        return sum(len(r.ledger) for r in self.sheet_results)
