from __future__ import annotations

from datetime import UTC, datetime

from offer_funnel.models.ledger import LedgerEntry, LedgerReport, LedgerSummary
from offer_funnel.models.processing_result import (
    ReconciliationSummary,
    RunResult,
    SheetReconciliation,
    SheetResult,
)
from offer_funnel.services.summary import _format_seconds, render_summary_line


def _result(elapsed: float) -> RunResult:
    t = datetime(2025, 1, 1, tzinfo=UTC)
    return RunResult(
        sheets_configured=3,
        sheets_processed=2,
        skipped_sheets=1,
        offers=[],
        reconciliation=ReconciliationSummary(
            sheets=[
                SheetReconciliation("Yogesh", "WEST", 5, 5),
                SheetReconciliation("Sasi", "SOUTH", 4, 3),
            ],
            total_offers=8,
            by_zone={},
            by_status={},
            multi_asset_offers=0,
        ),
        ledger=LedgerReport([], {}, LedgerSummary.empty()),
        start_time=t,
        end_time=t,
        elapsed_seconds=elapsed,
        sheet_results=[
            SheetResult("Yogesh", "WEST", 3, 5, ledger={"A": LedgerEntry("A"), "B": LedgerEntry("B")}),
            SheetResult("Sasi", "SOUTH", 3, 4, ledger={"C": LedgerEntry("C")}),
        ],
    )


def test_render_summary_line_basic():
    line = render_summary_line(_result(1.234))
    assert line == (
        "SUMMARY sheets=2/3 offers=8 matched=1 mismatched=1 "
        "skipped_sheets=1 ledger_entries=3 elapsed_sec=1.234"
    )


def test_format_seconds():
    assert _format_seconds(0) == "0"
    assert _format_seconds(3.0) == "3"
    assert _format_seconds(0.004) == "0.004"
    assert _format_seconds(0.12345) == "0.123"
    assert "e" not in _format_seconds(0.0000012)
