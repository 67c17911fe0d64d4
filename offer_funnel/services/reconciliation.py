from __future__ import annotations

from collections.abc import Sequence

from ..models.config_models import ZONES
from ..models.offer import OfferStatus
from ..models.processing_result import ReconciliationSummary, SheetReconciliation, SheetResult


def reconcile_sheet(result: SheetResult) -> SheetReconciliation:
    return SheetReconciliation(
        sales_person=result.sales_person,
        zone=result.zone,
        expected_count=result.expected_count,
        extracted_count=len(result.offers),
    )


def format_sheet_line(rec: SheetReconciliation) -> str:
    """Per-sheet log line; mismatches carry both counts."""
    head = f"{rec.sales_person} ({rec.zone}): {rec.extracted_count} offers"
    if rec.matched:
        return f"{head} ✓"
    return f"{head} (found: {rec.extracted_count}, expected: {rec.expected_count})"


def summarize(results: Sequence[SheetResult]) -> ReconciliationSummary:
    """Cross-sheet rollups over the extracted offers.

    Pure aggregation: totals, counts per fixed zone and per status, and the
    number of offers spanning more than one asset.
    """
    by_zone = {z: 0 for z in ZONES}
    by_status = {s.value: 0 for s in OfferStatus}
    total = 0
    multi_asset = 0
    for result in results:
        for offer in result.offers:
            total += 1
            if offer.zone in by_zone:
                by_zone[offer.zone] += 1
            by_status[offer.status.value] += 1
            if offer.is_multi_asset:
                multi_asset += 1
    return ReconciliationSummary(
        sheets=[reconcile_sheet(r) for r in results],
        total_offers=total,
        by_zone=by_zone,
        by_status=by_status,
        multi_asset_offers=multi_asset,
    )
