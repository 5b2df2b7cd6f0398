"""Cashflow report endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_entry_filter, get_reporting_service, get_time_window
from finboard.api.schemas import (
    CashflowSummaryResponse,
    GroupTotalResponse,
    BreakdownResponse,
    SankeyNodeResponse,
    SankeyLinkResponse,
    SankeyResponse,
    ExpenseStatsResponse,
)
from finboard.core.exceptions import ValidationError
from finboard.domain.models import EntryType
from finboard.services import ReportingService
from finboard.services.expense_aggregator import EntryFilter, GroupBy, TimeWindow
from finboard.services.sankey_builder import (
    CategoryDrill,
    DrillState,
    RootView,
    TypeDrill,
)

router = APIRouter(prefix="/cashflow", tags=["cashflow"])


def _drill_state(
    entry_type: Optional[EntryType],
    category: Optional[str],
    color: Optional[str],
) -> tuple[str, DrillState]:
    if category:
        if entry_type is None:
            raise ValidationError("Drilling into a category requires its entry type")
        return "category", CategoryDrill(
            category=category,
            entry_type=entry_type,
            color=color,
        )
    if entry_type is not None:
        if entry_type.is_income:
            raise ValidationError("Only expense types can be drilled into")
        return "type", TypeDrill(entry_type=entry_type, color=color)
    return "root", RootView()


@router.get("/summary", response_model=CashflowSummaryResponse)
def get_summary(
    user_id: str = Query(..., min_length=1),
    window: TimeWindow = Depends(get_time_window),
    entry_filter: EntryFilter = Depends(get_entry_filter),
    reporting: ReportingService = Depends(get_reporting_service),
) -> CashflowSummaryResponse:
    """Income, expenses, net balance and income/expense ratio."""
    summary = reporting.cashflow_summary(user_id, window, entry_filter)
    return CashflowSummaryResponse(
        total_income=summary.total_income,
        total_expenses=summary.total_expenses,
        net_balance=summary.net_balance,
        income_expense_ratio=summary.income_expense_ratio,
        entry_count=len(summary.entries),
    )


@router.get("/breakdown", response_model=BreakdownResponse)
def get_breakdown(
    user_id: str = Query(..., min_length=1),
    by: GroupBy = Query(GroupBy.CATEGORY),
    window: TimeWindow = Depends(get_time_window),
    entry_filter: EntryFilter = Depends(get_entry_filter),
    reporting: ReportingService = Depends(get_reporting_service),
) -> BreakdownResponse:
    """Totals grouped by type, category, subcategory, month or year."""
    groups = reporting.cashflow_breakdown(user_id, by, window, entry_filter)
    return BreakdownResponse(
        by=by.value,
        groups=[GroupTotalResponse.model_validate(g) for g in groups],
    )


@router.get("/sankey", response_model=SankeyResponse)
def get_sankey(
    user_id: str = Query(..., min_length=1),
    window: TimeWindow = Depends(get_time_window),
    drill_type: Optional[EntryType] = Query(None, alias="type", description="Expense type to drill into"),
    category: Optional[str] = Query(None, description="Category name to drill into"),
    color: Optional[str] = Query(None, description="Color of the clicked node"),
    compact: bool = Query(False, description="Cap the number of nodes per layer"),
    reporting: ReportingService = Depends(get_reporting_service),
) -> SankeyResponse:
    """Sankey graph: the budget view, or one drill-down level."""
    view, state = _drill_state(drill_type, category, color)
    graph = reporting.cashflow_sankey(user_id, window, state, compact=compact)
    return SankeyResponse(
        view=view,
        nodes=[SankeyNodeResponse.model_validate(n) for n in graph.nodes],
        links=[SankeyLinkResponse.model_validate(link) for link in graph.links],
    )


@router.get("/stats", response_model=ExpenseStatsResponse)
def get_stats(
    user_id: str = Query(..., min_length=1),
    as_of: Optional[date] = Query(None, description="Reference day (defaults to today)"),
    reporting: ReportingService = Depends(get_reporting_service),
) -> ExpenseStatsResponse:
    """This month against last month."""
    return ExpenseStatsResponse.model_validate(reporting.cashflow_stats(user_id, as_of))
