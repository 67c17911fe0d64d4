from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

"""Offer domain model.

An Offer is the canonical commercial record extracted from a salesperson sheet.
It starts at a primary row (positive SL + Reg Date) and may span continuation
rows that only contribute machine serials.
"""

__all__ = [
    "OfferStatus",
    "Offer",
    "CellScalar",
]

CellScalar = int | float | str | None


class OfferStatus(Enum):
    """Lifecycle status derived from PO and probability evidence.

    Precedence: PO_RECEIVED > PROPOSAL_SENT > INITIAL
    """
    INITIAL = "INITIAL"
    PROPOSAL_SENT = "PROPOSAL_SENT"
    PO_RECEIVED = "PO_RECEIVED"


@dataclass(frozen=True)
class Offer:
    """One extracted offer. Identity is (sales_person, sl_number)."""
    sl_number: int | float
    sales_person: str
    zone: str
    status: OfferStatus
    row_index: int  # 0-based index of the primary row in the sheet
    reg_date: CellScalar = None
    company: CellScalar = None
    location: CellScalar = None
    contact_name: CellScalar = None
    contact_number: CellScalar = None
    email: CellScalar = None
    product_type: CellScalar = None
    offer_reference: CellScalar = None
    offer_date: CellScalar = None
    offer_value: CellScalar = None
    offer_month: CellScalar = None
    po_expected_month: CellScalar = None
    probability: CellScalar = None
    po_number: CellScalar = None
    po_date: CellScalar = None
    po_value: CellScalar = None
    po_received_month: CellScalar = None
    open_funnel_note: CellScalar = None
    remarks: CellScalar = None
    machine_serials: tuple[str, ...] = field(default_factory=tuple)

    @property
    def asset_count(self) -> int:
        return len(self.machine_serials)

    @property
    def is_multi_asset(self) -> bool:
        return self.asset_count > 1

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable record with the export's camelCase keys."""
        return {
            "slNumber": self.sl_number,
            "salesPersonName": self.sales_person,
            "zone": self.zone,
            "regDate": self.reg_date,
            "company": self.company,
            "location": self.location,
            "contactName": self.contact_name,
            "contactNumber": self.contact_number,
            "email": self.email,
            "machineSerials": list(self.machine_serials),
            "assetCount": self.asset_count,
            "productType": self.product_type,
            "offerReference": self.offer_reference,
            "offerDate": self.offer_date,
            "offerValue": self.offer_value,
            "offerMonth": self.offer_month,
            "poExpectedMonth": self.po_expected_month,
            "probability": self.probability,
            "poNumber": self.po_number,
            "poDate": self.po_date,
            "poValue": self.po_value,
            "poReceivedMonth": self.po_received_month,
            "openFunnelNote": self.open_funnel_note,
            "remarks": self.remarks,
            "status": self.status.value,
        }
