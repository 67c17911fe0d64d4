from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..models.offer import Offer
from .classifier import is_filled, is_positive_number

"""Normalisation of free-text ledger values for the JSON export.

The ledgers are typed by hand: product types come with typos and
abbreviations, months are written out (sometimes misspelled), and probability
is entered either as a fraction (0.6) or a percentage (60). Raw Offer
attributes are never changed; normalised values are added next to them.
"""

__all__ = [
    "PRODUCT_TYPE_CODES",
    "normalize_product_type",
    "month_to_key",
    "probability_to_percentage",
    "year_of",
    "normalized_fields",
]

PRODUCT_TYPE_CODES: dict[str, str] = {
    "Contract": "CONTRACT",
    "CONTRACT": "CONTRACT",
    "Contarct": "CONTRACT",
    "Ccontarct": "CONTRACT",
    "MC": "CONTRACT",  # Maintenance Contract
    "SPP": "SPP",
    "spp": "SPP",
    "Relocation": "RELOCATION",
    "RELOCATION": "RELOCATION",
    "Upgrade kit": "UPGRADE_KIT",
    "Upgrade": "UPGRADE_KIT",
    "Software": "SOFTWARE",
    "BD Charges": "BD_CHARGES",
    "BD Spare": "BD_SPARE",
    "Midlife Upgrade": "MIDLIFE_UPGRADE",
    "MLU": "MIDLIFE_UPGRADE",
    "Retrofit kit": "RETROFIT_KIT",
    "RETROFIT": "RETROFIT_KIT",
}

MONTH_NUMBERS: dict[str, int] = {
    "January": 1, "Januray": 1, "Jan": 1,
    "February": 2, "Febraury": 2, "Feb": 2,
    "March": 3, "Mar": 3,
    "April": 4, "Apr": 4,
    "May": 5,
    "June": 6, "Jun": 6,
    "July": 7, "Jul": 7,
    "August": 8, "Aug": 8,
    "September": 9, "Sept": 9, "Sep": 9,
    "October": 10, "Oct": 10,
    "November": 11, "Nov": 11,
    "December": 12, "Dec": 12,
}

# Excel シリアル値の起点 (1900 年うるう年バグ込み)
_EXCEL_EPOCH = datetime(1899, 12, 30)


def normalize_product_type(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return PRODUCT_TYPE_CODES.get(value.strip())


def month_to_key(month_name: Any, year: int | None) -> str | None:
    """``("March", 2025)`` -> ``"2025-03"``; None when either part is unusable."""
    if not is_filled(month_name) or not year:
        return None
    month = MONTH_NUMBERS.get(str(month_name).strip())
    if month is None:
        return None
    return f"{year}-{month:02d}"


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def probability_to_percentage(value: Any) -> int | None:
    """Fractions (<= 1) are scaled to percent; result rounded half up to an int.

    >>> probability_to_percentage(0.125), probability_to_percentage(62.5)
    (13, 63)
    """
    if not is_positive_number(value):
        return None
    if value <= 1:
        return _round_half_up(value * 100)
    return _round_half_up(value)


def _parse_date(value: Any) -> date | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)) and value > 0:
        try:
            return (_EXCEL_EPOCH + timedelta(days=float(value))).date()
        except OverflowError:
            return None
    if isinstance(value, str):
        text = value.strip()
        for fmt in ("%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%d-%m-%Y", "%d/%m/%Y", "%d.%m.%Y"):
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
    return None


def year_of(reg_date: Any) -> int | None:
    parsed = _parse_date(reg_date)
    return parsed.year if parsed else None


def normalized_fields(offer: Offer) -> dict[str, Any]:
    """Export-only keys derived from an Offer's raw attributes."""
    year = year_of(offer.reg_date)
    offer_month_key = month_to_key(offer.offer_month, year)
    if offer_month_key is None and year is not None:
        # Offer Month が読めない場合は登録月で代用
        offer_month_key = f"{year}-{_parse_date(offer.reg_date).month:02d}"
    return {
        "productTypeCode": normalize_product_type(offer.product_type),
        "probabilityPercentage": probability_to_percentage(offer.probability),
        "offerMonthKey": offer_month_key,
    }
