"""Pydantic schemas for cashflow report endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class CashflowSummaryResponse(BaseModel):
    """Headline totals for a filtered period."""

    total_income: Decimal
    total_expenses: Decimal
    net_balance: Decimal
    income_expense_ratio: Optional[Decimal] = None
    entry_count: int


class GroupTotalResponse(BaseModel):
    model_config = {"from_attributes": True}

    key: str
    label: str
    total: Decimal
    count: int
    share: Optional[Decimal] = None


class BreakdownResponse(BaseModel):
    """Grouped totals."""

    by: str
    groups: list[GroupTotalResponse]


class SankeyNodeResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    label: str
    color: str
    kind: str
    entry_type: Optional[str] = None


class SankeyLinkResponse(BaseModel):
    model_config = {"from_attributes": True}

    source: str
    target: str
    value: Decimal


class SankeyResponse(BaseModel):
    """Sankey graph for one drill-down level."""

    model_config = {"from_attributes": True}

    view: str
    nodes: list[SankeyNodeResponse]
    links: list[SankeyLinkResponse]


class PeriodTotalsResponse(BaseModel):
    model_config = {"from_attributes": True}

    income: Decimal
    expenses: Decimal
    net: Decimal


class ExpenseStatsResponse(BaseModel):
    """Current month against the previous one; `delta` holds percentages."""

    model_config = {"from_attributes": True}

    current_month: PeriodTotalsResponse
    previous_month: PeriodTotalsResponse
    delta: PeriodTotalsResponse
