"""Personal finance tracking backend: ledger, assets, cashflow and price history."""

__version__ = "0.1.0"
