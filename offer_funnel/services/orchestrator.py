from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..excel.header import build_column_map, locate_header
from ..excel.reader import read_workbook
from ..logging.error_log import AnomalyLogBuffer
from ..models.config_models import FunnelConfig, SalesPersonSheet
from ..models.error_record import COUNT_MISMATCH, MISSING_HEADER, MISSING_SHEET, AnomalyRecord
from ..models.processing_result import RunResult, SheetResult
from ..models.row import RawRow
from .extractor import extract_offers
from .ledger import aggregate_ledger, build_ledger_report
from .progress import SheetProgressTracker
from .reconciliation import format_sheet_line, reconcile_sheet, summarize

"""Run orchestration.

For every configured salesperson sheet, in config order:

1. skip (MISSING_SHEET) when the workbook has no such sheet
2. locate header row + expected count; skip (MISSING_HEADER) when not found
3. resolve columns from the header row
4. extract offers (row-adjacency grouping) and aggregate the ledger
   (reference grouping) from the same rows
5. reconcile extracted vs expected; a mismatch is logged and recorded but
   never stops the run

Each sheet writes into its own SheetResult; results are merged at the end.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessingError",
    "process_sheet",
    "process_workbook",
    "run",
]


class ProcessingError(Exception):
    """Unexpected failure while processing a sheet."""


def process_sheet(
    sheet: SalesPersonSheet,
    rows: Sequence[RawRow | None],
    scan_rows: int = 10,
) -> SheetResult | None:
    """Run both pipelines over one sheet. None when no header row is found."""
    location = locate_header(rows, scan_rows=scan_rows)
    if not location.found or location.header_row is None:
        return None

    columns = build_column_map(location.header_row)
    unresolved = columns.unresolved()
    if unresolved:
        logger.debug("sheet=%s unresolved columns=%s", sheet.name, unresolved)

    offers = extract_offers(rows, location.header_row_index, columns, sheet)
    ledger, ledger_rows = aggregate_ledger(rows, location.header_row_index, columns, sheet.ledger_key)
    return SheetResult(
        sales_person=sheet.name,
        zone=sheet.zone,
        header_row_index=location.header_row_index,
        expected_count=location.expected_count,
        offers=offers,
        ledger=ledger,
        ledger_rows=ledger_rows,
    )


def process_workbook(
    config: FunnelConfig,
    workbook: Mapping[str, Sequence[RawRow | None]],
    anomaly_log: AnomalyLogBuffer | None = None,
    workbook_name: str = "",
) -> RunResult:
    """Process every configured sheet of an already decoded workbook."""
    start_time = datetime.now(UTC)
    results: list[SheetResult] = []
    skipped = 0

    def _record(sheet: str, anomaly_type: str, message: str) -> None:
        if anomaly_log is not None:
            anomaly_log.append(AnomalyRecord.create(workbook_name, sheet, -1, anomaly_type, message))

    with SheetProgressTracker(len(config.sheets)) as progress:
        for sheet in config.sheets:
            progress.start_sheet(sheet.name)
            rows = workbook.get(sheet.name)
            if rows is None:
                skipped += 1
                logger.info("sheet not found, skipped: %s", sheet.name)
                _record(sheet.name, MISSING_SHEET, f"sheet '{sheet.name}' not in workbook")
                progress.finish_sheet()
                continue

            try:
                result = process_sheet(sheet, rows, scan_rows=config.header_scan_rows)
            except Exception as e:
                raise ProcessingError(f"sheet '{sheet.name}': {e}") from e

            if result is None:
                skipped += 1
                logger.warning("no header row found in sheet: %s", sheet.name)
                _record(
                    sheet.name,
                    MISSING_HEADER,
                    f"no row with 'SL' and 'Company' in first {config.header_scan_rows} rows",
                )
                progress.finish_sheet()
                continue

            rec = reconcile_sheet(result)
            if rec.matched:
                logger.info(format_sheet_line(rec))
            else:
                logger.warning(format_sheet_line(rec))
                _record(
                    sheet.name,
                    COUNT_MISMATCH,
                    f"extracted {rec.extracted_count} offers, expected {rec.expected_count}",
                )
            results.append(result)
            progress.finish_sheet(offers=len(result.offers))

    end_time = datetime.now(UTC)
    return RunResult(
        sheets_configured=len(config.sheets),
        sheets_processed=len(results),
        skipped_sheets=skipped,
        offers=[o for r in results for o in r.offers],
        reconciliation=summarize(results),
        ledger=build_ledger_report(results),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        sheet_results=results,
    )


def run(config: FunnelConfig, anomaly_log: AnomalyLogBuffer | None = None) -> RunResult:
    """Read the configured workbook and process it.

    Raises:
        WorkbookError: workbook missing or unreadable
        ProcessingError: unexpected failure inside a sheet
    """
    path = Path(config.workbook)
    workbook = read_workbook(path, target_sheets=config.sheet_names)
    logger.debug("workbook=%s sheets_read=%s", path.name, sorted(workbook))
    return process_workbook(config, workbook, anomaly_log=anomaly_log, workbook_name=path.name)
