"""Offer-funnel reconciliation engine.

Reads per-salesperson offer ledgers from a funnel workbook, extracts canonical
offers, aggregates a reference-keyed ledger and reconciles the offers against the
"Total Offers" figures maintained in the sheets.
"""

__version__ = "0.1.0"
