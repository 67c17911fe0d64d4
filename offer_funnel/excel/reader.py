from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..models.row import RawRow

"""Workbook reader.

Sheets are parsed raw (header=None): the header row position differs per sheet
and is located later by excel.header. Every DataFrame row becomes a RawRow:

- empty cells (NaN / NaT) -> absent; NA-like text ("NA", "N/A", "null") stays text
- numpy scalars -> Python int / float
- date / datetime cells -> ISO date text
- everything else -> text
"""

__all__ = [
    "WorkbookError",
    "read_workbook",
    "dataframe_to_rows",
    "Workbook",
]

Workbook = dict[str, list[RawRow]]

# 空セルのみ NaN 扱い (pandas 既定の "NA" / "null" 等の変換は無効化)
NA_VALUES = [""]


class WorkbookError(Exception):
    """Raised when the workbook is missing or cannot be decoded."""


def _convert_value(val: Any) -> Any:
    if val is None:
        return None
    if isinstance(val, (pd.Timestamp, datetime, date)):
        if pd.isna(val):
            return None
        # 時刻成分が 0 の場合は日付のみ
        if isinstance(val, datetime) and (val.hour, val.minute, val.second) != (0, 0, 0):
            return val.isoformat()
        return val.strftime("%Y-%m-%d")
    if isinstance(val, np.generic):
        val = val.item()
    if isinstance(val, float) and np.isnan(val):
        return None
    if val is pd.NaT:
        return None
    return val


def dataframe_to_rows(df: pd.DataFrame) -> list[RawRow]:
    """Convert a raw (header-less) DataFrame into RawRows, keeping blank rows.

    Blank rows are kept as empty RawRows because row positions matter: the
    extractor treats an empty row as the end of a continuation block.
    """
    rows: list[RawRow] = []
    for raw in df.itertuples(index=False, name=None):
        values = [_convert_value(v) for v in raw]
        # 末尾の空セルを落とす (行長はデータのある最後の列まで)
        while values and values[-1] is None:
            values.pop()
        rows.append(RawRow(values))
    return rows


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> Workbook:
    """Read a workbook returning rows keyed by sheet name.

    Parameters
    ----------
    path: workbook path (.xlsx)
    target_sheets: restrict to these sheet names (None = all sheets)
    """
    if not path.exists():
        raise WorkbookError(f"workbook not found: {path}")
    wanted = set(target_sheets) if target_sheets is not None else None
    try:
        xls = pd.ExcelFile(path, engine="openpyxl")
    except Exception as e:
        raise WorkbookError(f"cannot open workbook {path}: {e}") from e

    sheets: Workbook = {}
    with xls:
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            df = xls.parse(name, header=None, keep_default_na=False, na_values=NA_VALUES)
            sheets[str(name)] = dataframe_to_rows(df)
    return sheets
