from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""AnomalyRecord model for the anomaly log.

Sheet-level anomalies (missing sheet, missing header row, count mismatch) are
recorded as JSON Lines with a fixed key set. ``row=-1`` marks records that are
not tied to a specific row.
"""

__all__ = [
    "AnomalyRecord",
    "MISSING_SHEET",
    "MISSING_HEADER",
    "COUNT_MISMATCH",
]

MISSING_SHEET = "MISSING_SHEET"
MISSING_HEADER = "MISSING_HEADER"
COUNT_MISMATCH = "COUNT_MISMATCH"


@dataclass(frozen=True)
class AnomalyRecord:
    """Structured anomaly record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        workbook: Workbook filename being processed
        sheet: Sheet (salesperson) name
        row: Row index (0-based). Use -1 for sheet-level anomalies
        anomaly_type: Classification in UPPER_SNAKE_CASE format
        message: Human readable description
    """
    timestamp: str  # ISO8601 UTC
    workbook: str
    sheet: str
    row: int  # 不明な場合 -1
    anomaly_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(workbook: str, sheet: str, row: int, anomaly_type: str, message: str) -> AnomalyRecord:
        """Create a new AnomalyRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return AnomalyRecord(
            timestamp=ts,
            workbook=workbook,
            sheet=sheet,
            row=row,
            anomaly_type=anomaly_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON line containing exactly the dataclass fields."""
        return json.dumps(asdict(self), ensure_ascii=False)
