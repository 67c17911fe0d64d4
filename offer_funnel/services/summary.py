from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY sheets={processed}/{configured} offers={n} matched={m} mismatched={x}
skipped_sheets={s} ledger_entries={l} elapsed_sec={e}
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip('0').rstrip('.')
    return str(round(value, 3))


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> from offer_funnel.models.ledger import LedgerReport, LedgerSummary
        >>> from offer_funnel.models.processing_result import ReconciliationSummary
        >>> t = datetime(2025, 1, 1, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     sheets_configured=2, sheets_processed=1, skipped_sheets=1, offers=[],
        ...     reconciliation=ReconciliationSummary([], 0, {}, {}, 0),
        ...     ledger=LedgerReport([], {}, LedgerSummary.empty()),
        ...     start_time=t, end_time=t, elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY sheets=1/2 offers=0 matched=0 mismatched=0 skipped_sheets=1 ledger_entries=0 elapsed_sec=2'
    """
    rec = result.reconciliation
    return (
        f"SUMMARY sheets={result.sheets_processed}/{result.sheets_configured} "
        f"offers={rec.total_offers} "
        f"matched={rec.matched_sheets} "
        f"mismatched={rec.mismatched_sheets} "
        f"skipped_sheets={result.skipped_sheets} "
        f"ledger_entries={result.ledger_entries} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
