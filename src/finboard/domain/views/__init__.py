"""View models for service outputs."""

from finboard.domain.views.cashflow import (
    CashflowSummary,
    GroupTotal,
    TypeTotal,
    MonthlySummary,
    PeriodTotals,
    ExpenseStats,
    SankeyNode,
    SankeyLink,
    SankeyGraph,
)
from finboard.domain.views.price_history import (
    MonthColumn,
    MonthPriceCell,
    AssetPriceHistoryRow,
    TotalRow,
    PriceHistoryTable,
)
from finboard.domain.views.tax import TaxGainResult
from finboard.domain.views.market import Quote, PriceUpdateResult
from finboard.domain.views.allocation import (
    CurrentAllocation,
    AllocationLine,
    AllocationComparison,
    NetWorthChange,
)

__all__ = [
    "CashflowSummary",
    "GroupTotal",
    "TypeTotal",
    "MonthlySummary",
    "PeriodTotals",
    "ExpenseStats",
    "SankeyNode",
    "SankeyLink",
    "SankeyGraph",
    "MonthColumn",
    "MonthPriceCell",
    "AssetPriceHistoryRow",
    "TotalRow",
    "PriceHistoryTable",
    "TaxGainResult",
    "Quote",
    "PriceUpdateResult",
    "CurrentAllocation",
    "AllocationLine",
    "AllocationComparison",
    "NetWorthChange",
]
