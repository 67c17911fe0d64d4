"""Domain models for the offer-funnel reconciliation tool."""

from .config_models import ZONES, FunnelConfig, SalesPersonSheet
from .ledger import LedgerEntry, LedgerReport, LedgerSummary
from .offer import Offer, OfferStatus
from .processing_result import ReconciliationSummary, RunResult, SheetReconciliation, SheetResult
from .row import Cell, CellKind, RawRow

__all__ = [
    # Configuration models
    "ZONES",
    "FunnelConfig",
    "SalesPersonSheet",
    # Row models
    "Cell",
    "CellKind",
    "RawRow",
    # Extraction models
    "Offer",
    "OfferStatus",
    "LedgerEntry",
    "LedgerSummary",
    "LedgerReport",
    # Results
    "SheetReconciliation",
    "ReconciliationSummary",
    "SheetResult",
    "RunResult",
]
