from __future__ import annotations

import math
from typing import Any

from ..models.offer import OfferStatus

"""Offer status classification.

PO evidence (a PO number together with a positive PO value) wins over
probability evidence; without either the offer stays INITIAL.
"""

__all__ = [
    "classify",
    "is_filled",
    "is_positive_number",
]


def is_filled(value: Any) -> bool:
    """Non-empty test used by the ledgers: None, 0, NaN and "" are empty."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return bool(value)


def is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return value > 0


def classify(po_number: Any, po_value: Any, probability: Any) -> OfferStatus:
    """Derive an OfferStatus from raw PO / probability cell values.

    >>> classify("PO1", 100, 0)
    <OfferStatus.PO_RECEIVED: 'PO_RECEIVED'>
    >>> classify("PO1", 0, 80)
    <OfferStatus.PROPOSAL_SENT: 'PROPOSAL_SENT'>
    >>> classify(None, None, 0)
    <OfferStatus.INITIAL: 'INITIAL'>
    """
    if is_filled(po_number) and is_positive_number(po_value):
        return OfferStatus.PO_RECEIVED
    if is_positive_number(probability):
        return OfferStatus.PROPOSAL_SENT
    return OfferStatus.INITIAL
