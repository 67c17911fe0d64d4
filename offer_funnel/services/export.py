from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from ..models.offer import Offer
from .normalize import normalized_fields


def offers_to_records(offers: Iterable[Offer]) -> list[dict[str, Any]]:
    """Offer records for the JSON export (raw attributes + normalised keys)."""
    records = []
    for offer in offers:
        record = offer.to_dict()
        record.update(normalized_fields(offer))
        records.append(record)
    return records


def write_offers_json(offers: Iterable[Offer], path: Path) -> Path:
    """Write the full extraction output as a JSON array (UTF-8, indent 2)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    records = offers_to_records(offers)
    path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
    return path
