#!/usr/bin/env python3
"""Sample funnel workbook generator.

Generates a synthetic offer-funnel workbook with one sheet per salesperson in
the layout the reconciliation tool expects:
- Row 1: Title row
- Row 2: Metadata row ("Total Offers" followed by the offer count)
- Row 3: blank
- Row 4: Header row (SL, Reg Date, Company, ...)
- Row 5+: Offer blocks (primary row + optional continuation rows), blank
  rows sprinkled between blocks

Useful for demos and for trying the CLI without a real ledger.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = [
    "SL",
    "Reg Date",
    "Company",
    "Location",
    "Contact Person",
    "Contact Number",
    "E-Mail",
    "Machine Serial No",
    "Product Type",
    "Offer Reference Number",
    "Offer Reference Date",
    "Offer Value",
    "Offer Month",
    "PO Expected Month",
    "Probabality",
    "PO Number",
    "PO Date",
    "PO Value",
    "PO Received Month",
    "Open Funnel",
    "Remarks",
]

DEFAULT_SHEETS = [
    "Yogesh", "Ashraf", "Rahul", "Minesh", "Gajendra",
    "Pradeep", "Sasi", "Vinay", "Nitin", "Pankaj",
]

PRODUCT_TYPES = ["Contract", "SPP", "Relocation", "Upgrade kit", "Software", "MLU"]
MONTHS = ["January", "February", "March", "April", "May", "June",
          "July", "August", "September", "October", "November", "December"]
CITIES = ["Pune", "Mumbai", "Chennai", "Delhi", "Kolkata", "Bengaluru"]


def generate_sheet_rows(
    sheet_name: str,
    offers: int,
    rng: np.random.Generator,
    *,
    max_assets: int = 3,
) -> list[list[Any]]:
    """Build the rows of one salesperson sheet.

    Args:
        sheet_name: Salesperson / sheet name (used in the title and references)
        offers: Number of offers (primary rows) to generate
        rng: Random generator
        max_assets: Upper bound of machine serials per offer

    Returns:
        List of rows, each padded to the header width
    """
    width = len(HEADER)

    def pad(values: list[Any]) -> list[Any]:
        return values + [None] * (width - len(values))

    rows: list[list[Any]] = [
        pad([f"{sheet_name} - Offer Funnel"]),
        pad(["Total Offers", offers]),
        pad([]),
        list(HEADER),
    ]

    reg_dates = pd.date_range("2024-04-01", "2025-03-31", freq="D")
    for sl in range(1, offers + 1):
        reg_date = pd.Timestamp(rng.choice(reg_dates)).strftime("%Y-%m-%d")
        assets = int(rng.integers(1, max_assets + 1))
        value = float(np.round(rng.uniform(50_000, 5_000_000), -3))
        won = rng.random() < 0.3
        probability = int(rng.choice([0, 25, 50, 75, 90]))
        month = MONTHS[int(rng.integers(0, 12))]

        primary = [
            sl,
            reg_date,
            f"Company {sl:03d}",
            CITIES[int(rng.integers(0, len(CITIES)))],
            f"Contact {sl}",
            f"98{int(rng.integers(10_000_000, 99_999_999))}",
            f"contact{sl}@example.com",
            f"MS-{sheet_name[:3].upper()}-{sl:03d}-1",
            PRODUCT_TYPES[int(rng.integers(0, len(PRODUCT_TYPES)))],
            f"REF/{sheet_name[:3].upper()}/{sl:04d}",
            reg_date,
            value,
            month,
            month,
            probability,
            f"PO-{sl:05d}" if won else None,
            reg_date if won else None,
            value if won else None,
            month if won else None,
            None if won else "Open",
            None,
        ]
        rows.append(primary)

        # 継続行: SL / Reg Date なし、シリアルのみ
        for n in range(2, assets + 1):
            cont: list[Any] = [None] * width
            cont[HEADER.index("Machine Serial No")] = f"MS-{sheet_name[:3].upper()}-{sl:03d}-{n}"
            rows.append(cont)

        if rng.random() < 0.2:
            rows.append(pad([]))

    return rows


def create_workbook(
    output_path: Path,
    offers: int,
    sheets: list[str] | None = None,
    seed: int = 42,
) -> None:
    """Write the synthetic workbook to ``output_path``."""
    if sheets is None:
        sheets = list(DEFAULT_SHEETS)

    rng = np.random.default_rng(seed)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for sheet_name in sheets:
            df = pd.DataFrame(generate_sheet_rows(sheet_name, offers, rng))
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Sheets: {len(sheets)} ({', '.join(sheets)})")
    print(f"  Offers per sheet: {offers}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic offer-funnel workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10 salesperson sheets, 25 offers each
  %(prog)s data/offer-funnel.xlsx

  # Two sheets, 100 offers each, custom seed
  %(prog)s data/small.xlsx --offers 100 --sheets Yogesh Pankaj --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output workbook path (.xlsx)")
    parser.add_argument("--offers", type=int, default=25, help="Offers per sheet (default: 25)")
    parser.add_argument("--sheets", nargs="+", default=DEFAULT_SHEETS, help="Sheet names")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.offers < 0:
        print("Error: --offers must not be negative", file=sys.stderr)
        return 1

    try:
        create_workbook(args.output, args.offers, args.sheets, args.seed)
    except Exception as e:
        print(f"Error generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
