from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from offer_funnel.config.loader import ConfigError, load_config, resolve_config_path
from offer_funnel.excel.reader import WorkbookError
from offer_funnel.logging.error_log import AnomalyLogBuffer
from offer_funnel.logging.init import log_summary, setup_logging
from offer_funnel.services.export import write_offers_json
from offer_funnel.services.orchestrator import ProcessingError, run
from offer_funnel.services.report import render_ledger_report, render_reconciliation_totals
from offer_funnel.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env, then the YAML config
- read the workbook and run both pipelines over the configured sheets
- write the offer JSON export (skipped with --dry-run)
- print the ledger report and log the SUMMARY line

Exit codes: 0 all processed sheets matched, 2 at least one count mismatch,
1 fatal (config / workbook / processing failure).
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_MISMATCH = 2


def _load_env_file(path: Path) -> None:
    """Load .env via python-dotenv; .env values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=True)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Offer funnel workbook reconciliation")
    p.add_argument("--config", help="Config YAML path (default: config/funnel.yml)")
    p.add_argument("--output", help="Override output_json from config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Do not write the JSON export")
    p.add_argument("--inspect-data", action="store_true", help="Print located headers & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(cfg) -> int:
    from offer_funnel.excel.header import build_column_map, locate_header
    from offer_funnel.excel.reader import read_workbook

    try:
        workbook = read_workbook(Path(cfg.workbook), target_sheets=cfg.sheet_names)
    except WorkbookError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    for sheet in cfg.sheets:
        rows = workbook.get(sheet.name)
        if rows is None:
            print(f"SHEET: {sheet.name} missing")
            continue
        loc = locate_header(rows, scan_rows=cfg.header_scan_rows)
        if not loc.found or loc.header_row is None:
            print(f"SHEET: {sheet.name} header=not-found expected={loc.expected_count}")
            continue
        columns = build_column_map(loc.header_row)
        print(f"SHEET: {sheet.name} ({sheet.zone}) header_row={loc.header_row_index} expected={loc.expected_count}")
        print(f"  columns={columns.as_dict()}")
        start = loc.header_row_index + 1
        for row in rows[start:start + 3]:
            print(f"  row={row.values()}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Reading workbook: {cfg.workbook}")
    anomaly_log = AnomalyLogBuffer(cfg.anomaly_log_dir)
    try:
        result = run(cfg, anomaly_log=anomaly_log)
    except WorkbookError as e:
        logger.error(f"workbook: {e}")
        return EXIT_FATAL
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    finally:
        log_path = anomaly_log.flush()
        if log_path is not None:
            logger.info(f"anomalies written to {log_path}")

    for line in render_reconciliation_totals(result.reconciliation):
        logger.info(line)

    if args.dry_run:
        logger.info(f"dry-run: {len(result.offers)} offers not exported")
    else:
        try:
            out = write_offers_json(result.offers, Path(args.output or cfg.output_json))
        except OSError as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL
        logger.info(f"Exported {len(result.offers)} offers to {out}")

    print(render_ledger_report(result.ledger))

    # "SUMMARY " は log_summary 側で付与される
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.reconciliation.mismatched_sheets > 0:
        return EXIT_MISMATCH
    return EXIT_SUCCESS
