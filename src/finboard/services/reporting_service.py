"""Reporting service: cashflow aggregates, Sankey graphs and price history."""

from datetime import date
from typing import Optional, Union

from finboard.config.settings import get_settings
from finboard.core.timezone import today_local
from finboard.domain.models import DisplayMode
from finboard.domain.views import (
    CashflowSummary,
    ExpenseStats,
    GroupTotal,
    PriceHistoryTable,
    SankeyGraph,
)
from finboard.repositories.protocols import AssetRepository, SnapshotRepository
from finboard.services.expense_aggregator import (
    EntryFilter,
    GroupBy,
    TimeWindow,
    expense_stats,
    group_entries,
    summarize,
)
from finboard.services.ledger_service import LedgerService
from finboard.services.price_history import transform_price_history
from finboard.services.sankey_builder import (
    CategoryDrill,
    DrillState,
    build_sankey,
    resolve_drill_color,
)


class ReportingService:
    """
    Read-only reports built from stored data.

    Loads entries, assets and snapshots through the repositories and hands
    them to the pure calculation modules.
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        asset_repo: AssetRepository,
        snapshot_repo: SnapshotRepository,
    ):
        self._ledger = ledger_service
        self._asset_repo = asset_repo
        self._snapshot_repo = snapshot_repo

    def cashflow_summary(
        self,
        user_id: str,
        window: Optional[TimeWindow] = None,
        entry_filter: Optional[EntryFilter] = None,
    ) -> CashflowSummary:
        window = window or TimeWindow()
        entries = self._ledger.list_entries(user_id, window)
        return summarize(entries, window, entry_filter)

    def cashflow_breakdown(
        self,
        user_id: str,
        by: Union[GroupBy, str],
        window: Optional[TimeWindow] = None,
        entry_filter: Optional[EntryFilter] = None,
    ) -> list[GroupTotal]:
        entries = self._ledger.list_entries(user_id, window, entry_filter)
        return group_entries(entries, by)

    def cashflow_sankey(
        self,
        user_id: str,
        window: Optional[TimeWindow] = None,
        state: Optional[DrillState] = None,
        compact: bool = False,
    ) -> SankeyGraph:
        """
        Sankey graph for a drill-down state; compact mode caps nodes per layer.

        A drill-down without a color takes the color of its node in the
        budget view of the same period.
        """
        limit = root_limit = None
        if compact:
            settings = get_settings()
            root_limit = settings.sankey_compact_limit
            limit = (
                settings.sankey_compact_subcategory_limit
                if isinstance(state, CategoryDrill)
                else root_limit
            )
        entries = self._ledger.list_entries(user_id, window)
        if state is not None:
            state = resolve_drill_color(entries, state, root_limit)
        return build_sankey(entries, state, limit=limit)

    def cashflow_stats(self, user_id: str, today: Optional[date] = None) -> ExpenseStats:
        """Current month against the previous one."""
        today = today or today_local()
        entries = self._ledger.list_entries(user_id)
        return expense_stats(entries, today)

    def price_history(
        self,
        user_id: str,
        display_mode: Union[DisplayMode, str] = DisplayMode.PRICE,
        filter_year: Optional[int] = None,
        start: Optional[tuple[int, int]] = None,
        include_total: bool = False,
        today: Optional[date] = None,
    ) -> PriceHistoryTable:
        return transform_price_history(
            self._snapshot_repo.list_by_user(user_id),
            self._asset_repo.list_by_user(user_id),
            display_mode=display_mode,
            filter_year=filter_year,
            start=start,
            include_total=include_total,
            today=today,
        )
