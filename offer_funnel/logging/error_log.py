from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from offer_funnel.models.error_record import AnomalyRecord

"""Anomaly log buffering.

- JSON Lines with a fixed key set (see AnomalyRecord)
- one ``anomalies-YYYYMMDD-HHMMSS.log`` (UTC) per run, created on first flush
- records are buffered and written in one go at the end of the run
"""

__all__ = [
    "AnomalyRecord",
    "AnomalyLogBuffer",
]

TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class AnomalyLogBuffer:
    """In-memory buffer for anomaly records. flush() appends JSON Lines.

    Single-threaded use only (sheets are processed sequentially).
    """
    def __init__(self, log_dir: Path | str = Path("./logs")) -> None:
        self.log_dir = Path(log_dir)
        self._records: list[AnomalyRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.log_dir / f"anomalies-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[AnomalyRecord]:
        return list(self._records)

    def append(self, record: AnomalyRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the log path, or None if nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
