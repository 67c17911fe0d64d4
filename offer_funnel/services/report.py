from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..models.ledger import LedgerReport, LedgerSummary
from ..models.processing_result import ReconciliationSummary

"""Text rendering for the ledger report and the reconciliation totals.

Currency uses Indian unit suffixes: Cr (1,00,00,000), L (1,00,000), K (1,000).
"""

__all__ = [
    "format_currency",
    "render_ledger_report",
    "render_reconciliation_totals",
]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _fixed(value: Decimal | float | int, places: int) -> str:
    """Fixed-point text with ties rounded away from zero (``f"{x:.2f}"`` rounds half to even).

    >>> _fixed(2.5, 0), _fixed(1.125, 2)
    ('3', '1.13')
    """
    amount = value if isinstance(value, Decimal) else Decimal(value)
    return str(amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def format_currency(value: Decimal | float | int) -> str:
    """Format an amount with a unit suffix.

    >>> format_currency(12_500_000)
    '1.25 Cr'
    >>> format_currency(250_000)
    '2.50 L'
    >>> format_currency(4_500)
    '4.50 K'
    >>> format_currency(800)
    '800'
    """
    amount = value if isinstance(value, Decimal) else Decimal(value)
    if amount >= CRORE:
        return f"{_fixed(amount / CRORE, 2)} Cr"
    if amount >= LAKH:
        return f"{_fixed(amount / LAKH, 2)} L"
    if amount >= THOUSAND:
        return f"{_fixed(amount / THOUSAND, 2)} K"
    return _fixed(amount, 0)


def _rate(summary: LedgerSummary) -> str:
    return f"{_fixed(summary.conversion_rate, 1)}%"


_USER_HEADER = (
    f"{'User':<10} {'Zone':<6} {'Offers':>7} {'Total Value':>14} "
    f"{'Won':>5} {'Won Value':>14} {'Conv. %':>8}"
)
_ZONE_HEADER = (
    f"{'Zone':<10} {'Offers':>7} {'Total Value':>14} "
    f"{'Won':>5} {'Won Value':>14} {'Conv. %':>8}"
)


def render_ledger_report(report: LedgerReport) -> str:
    """User-wise table, zone-wise table and grand total block."""
    rule = "=" * len(_USER_HEADER)
    lines: list[str] = [rule, "USER-WISE OFFERS BREAKDOWN", rule, _USER_HEADER, "-" * len(_USER_HEADER)]
    for name, zone, s in report.sheets:
        lines.append(
            f"{name:<10} {zone:<6} {s.offer_count:>7} {format_currency(s.total_offer_value):>14} "
            f"{s.won_count:>5} {format_currency(s.won_value):>14} {_rate(s):>8}"
        )

    lines += ["", rule, "ZONE-WISE SUMMARY", rule, _ZONE_HEADER, "-" * len(_ZONE_HEADER)]
    for zone, s in report.zones.items():
        lines.append(
            f"{zone:<10} {s.offer_count:>7} {format_currency(s.total_offer_value):>14} "
            f"{s.won_count:>5} {format_currency(s.won_value):>14} {_rate(s):>8}"
        )

    t = report.total
    lines += [
        "",
        rule,
        "GRAND TOTAL",
        rule,
        f"  Total Offers:      {t.offer_count}",
        f"  Total Offer Value: {format_currency(t.total_offer_value)}",
        f"  Total Won:         {t.won_count}",
        f"  Total Won Value:   {format_currency(t.won_value)}",
        f"  Conversion Rate:   {_rate(t)}",
        f"  Ledger Rows:       {report.row_count}",
        f"  Unique References: {report.unique_references}",
        f"  Duplicate Rows:    {report.duplicate_rows}",
        rule,
    ]
    return "\n".join(lines)


def render_reconciliation_totals(summary: ReconciliationSummary) -> list[str]:
    """Cross-sheet totals for the extracted offers, one log line each."""
    lines = [f"Total Offers Found: {summary.total_offers}", "By Zone:"]
    lines += [f"  {zone}: {count}" for zone, count in summary.by_zone.items()]
    lines.append("By Status:")
    lines += [f"  {status}: {count}" for status, count in summary.by_status.items()]
    lines.append(f"Multi-asset offers: {summary.multi_asset_offers}")
    return lines
