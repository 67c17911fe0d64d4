from __future__ import annotations

from pathlib import Path

from offer_funnel.cli import main as cli_main
from offer_funnel.logging.init import reset_logging


def test_cli_debug_mode(write_config: Path, two_sheet_workbook: Path, capsys):
    """--debug 指定時に DEBUG ログ (列解決・抽出件数) が出力されることを検証。"""
    reset_logging()

    code = cli_main(["--debug", "--dry-run"])
    out = capsys.readouterr().out

    assert code == 0
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG sheet=Yogesh extracted=2 multi_asset=1" in out


def test_cli_without_debug_hides_debug_lines(write_config: Path, two_sheet_workbook: Path, capsys):
    reset_logging()

    code = cli_main(["--dry-run"])
    out = capsys.readouterr().out

    assert code == 0
    assert "DEBUG" not in out
