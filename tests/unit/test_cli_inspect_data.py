from __future__ import annotations

from pathlib import Path

from offer_funnel.cli import main as cli_main
from offer_funnel.logging.init import reset_logging


def test_cli_inspect_data_branch(write_config: Path, two_sheet_workbook: Path, temp_workdir: Path, capsys):
    """--inspect-data は検出したヘッダ位置と先頭行を表示して終了する (エクスポートなし)。"""
    reset_logging()

    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out

    assert code == 0
    assert "SHEET: Yogesh (WEST) header_row=2 expected=2" in out
    assert "SHEET: Sasi (SOUTH) header_row=2 expected=1" in out
    assert "columns={" in out
    assert "row=[1, '2025-01-10', 'Acme'" in out
    assert not (temp_workdir / "data" / "offers-export.json").exists()


def test_cli_inspect_data_missing_sheet_and_header(write_config: Path, write_workbook, temp_workdir: Path, capsys):
    reset_logging()
    write_workbook({"Yogesh": [["Total Offers", 3], ["no header here"]]})

    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out

    assert code == 0
    assert "SHEET: Yogesh header=not-found expected=3" in out
    assert "SHEET: Sasi missing" in out


def test_cli_inspect_data_workbook_missing(write_config: Path, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 1
    assert "inspect: workbook not found" in out
