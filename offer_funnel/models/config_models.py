from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the offer-funnel reconciliation tool.

These are the domain view of config/funnel.yml. The loader in
offer_funnel/config/loader.py validates the raw YAML and builds them; tests
construct them directly to run the pipeline over synthetic sheet sets.
"""

__all__ = [
    "ZONES",
    "SalesPersonSheet",
    "FunnelConfig",
]

# 集計時の固定ゾーン順
ZONES: tuple[str, ...] = ("WEST", "SOUTH", "NORTH", "EAST")

DEFAULT_HEADER_SCAN_ROWS = 10


@dataclass(frozen=True)
class SalesPersonSheet:
    """One configured salesperson sheet.

    ``name`` is both the salesperson name and the sheet name in the workbook.
    ``reference_key`` is the opaque token used when a ledger reference number
    has to be synthesized; it defaults to the upper-cased sheet name.
    """
    name: str
    zone: str
    reference_key: str | None = None

    @property
    def ledger_key(self) -> str:
        return self.reference_key or self.name.upper()


@dataclass(frozen=True)
class FunnelConfig:
    """Root configuration object for a reconciliation run."""
    workbook: str  # Path to the funnel workbook (.xlsx)
    sheets: list[SalesPersonSheet]  # Ordered salesperson -> zone table
    output_json: str = "./data/offers-export.json"
    header_scan_rows: int = DEFAULT_HEADER_SCAN_ROWS
    anomaly_log_dir: str = "./logs"

    @property
    def sheet_names(self) -> list[str]:
        return [s.name for s in self.sheets]
