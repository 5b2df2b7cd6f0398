"""Transform monthly snapshots into the asset price-history table."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Union

from finboard.core.timezone import today_local
from finboard.domain.models import (
    Asset,
    AssetSnapshot,
    CellColor,
    DisplayMode,
    MonthlySnapshot,
)
from finboard.domain.views import (
    AssetPriceHistoryRow,
    MonthColumn,
    MonthPriceCell,
    PriceHistoryTable,
    TotalRow,
)

ZERO = Decimal("0")
CENT = Decimal("0.01")


@dataclass(frozen=True)
class _AssetMeta:
    ticker: str
    name: str
    is_deleted: bool


def month_key(year: int, month: int) -> str:
    return f"{year}-{month}"


def month_label(year: int, month: int) -> str:
    """Short column label, e.g. "01/25"."""
    return f"{month:02d}/{year % 100:02d}"


def color_code(current: Decimal, previous: Optional[Decimal]) -> CellColor:
    """Green if the value rose, red if it fell, neutral if unchanged or no earlier value."""
    if previous is None:
        return CellColor.NEUTRAL
    if current > previous:
        return CellColor.GREEN
    if current < previous:
        return CellColor.RED
    return CellColor.NEUTRAL


def percent_change(current: Decimal, previous: Optional[Decimal]) -> Optional[Decimal]:
    if previous is None or previous == ZERO:
        return None
    return ((current - previous) / previous * 100).quantize(CENT)


def displayed_value(holding: AssetSnapshot, display_mode: DisplayMode) -> Decimal:
    """Cash-equivalent holdings always show their total value."""
    if display_mode == DisplayMode.TOTAL_VALUE or holding.shows_total_value:
        return holding.total_value
    return holding.price


def _color_basis(holding: AssetSnapshot) -> Decimal:
    # Cash keeps a unit price of 1; its balance is what moves
    if holding.shows_total_value:
        return holding.total_value
    return holding.price


def _summary_changes(
    series: list[tuple[int, Decimal]],
    current_year: int,
) -> tuple[Optional[Decimal], Optional[Decimal]]:
    """
    Year-to-date and from-start percentage changes of a (year, value) series.

    Each needs at least two qualifying points: YTD runs from the first point
    of the current year to the latest one, from-start from the first point
    overall to the latest one.
    """
    from_start = None
    if len(series) >= 2:
        from_start = percent_change(series[-1][1], series[0][1])

    ytd = None
    this_year = [value for year, value in series if year == current_year]
    if len(this_year) >= 2:
        ytd = percent_change(this_year[-1], this_year[0])
    return ytd, from_start


def _select_snapshots(
    ordered: list[MonthlySnapshot],
    filter_year: Optional[int],
    start: Optional[tuple[int, int]],
) -> list[MonthlySnapshot]:
    # A start-date filter overrides the year filter
    if start is not None:
        return [s for s in ordered if s.period_key >= start]
    if filter_year is not None:
        return [s for s in ordered if s.year == filter_year]
    return ordered


def _collect_assets(
    current_assets: Iterable[Asset],
    snapshots: list[MonthlySnapshot],
) -> dict[str, _AssetMeta]:
    metadata: dict[str, _AssetMeta] = {}
    for asset in current_assets:
        metadata[asset.asset_id] = _AssetMeta(ticker=asset.ticker, name=asset.name, is_deleted=False)
    for snapshot in snapshots:
        for holding in snapshot.by_asset:
            if holding.asset_id not in metadata:
                metadata[holding.asset_id] = _AssetMeta(
                    ticker=holding.ticker,
                    name=holding.name,
                    is_deleted=True,
                )
    return metadata


def transform_price_history(
    snapshots: Iterable[MonthlySnapshot],
    current_assets: Iterable[Asset],
    display_mode: Union[DisplayMode, str] = DisplayMode.PRICE,
    filter_year: Optional[int] = None,
    start: Optional[tuple[int, int]] = None,
    include_total: bool = False,
    today: Optional[date] = None,
) -> PriceHistoryTable:
    """
    Build one row per asset (current or sold) with one cell per month in range.

    Each cell is coloured by comparing the asset's price with its price in
    the nearest strictly earlier month in range that has one, whatever the
    display mode; cash-equivalent holdings compare their balance instead.
    Months without a price are "no data" cells and do not break the
    comparison chain. `change` is relative to the displayed value. YTD and
    from-start changes use the whole snapshot history, not just the
    displayed range.
    """
    display_mode = DisplayMode(display_mode)
    current_year = (today or today_local()).year

    ordered = sorted(snapshots, key=lambda s: s.period_key)
    selected = _select_snapshots(ordered, filter_year, start)

    columns = [
        MonthColumn(
            key=month_key(s.year, s.month),
            label=month_label(s.year, s.month),
            year=s.year,
            month=s.month,
        )
        for s in selected
    ]
    holdings_by_period = [
        {holding.asset_id: holding for holding in s.by_asset} for s in ordered
    ]
    holdings_by_key = {
        month_key(s.year, s.month): holdings
        for s, holdings in zip(ordered, holdings_by_period)
    }

    rows: list[AssetPriceHistoryRow] = []
    for asset_id, meta in _collect_assets(current_assets, selected).items():
        row = AssetPriceHistoryRow(
            asset_id=asset_id,
            ticker=meta.ticker,
            name=meta.name,
            is_deleted=meta.is_deleted,
        )

        previous_basis: Optional[Decimal] = None
        previous_value: Optional[Decimal] = None
        for column in columns:
            holding = holdings_by_key[column.key].get(asset_id)
            if holding is None or holding.price is None:
                row.months[column.key] = MonthPriceCell()
                continue

            value = displayed_value(holding, display_mode)
            basis = _color_basis(holding)
            row.months[column.key] = MonthPriceCell(
                price=holding.price,
                total_value=holding.total_value,
                value=value,
                color=color_code(basis, previous_basis),
                change=percent_change(value, previous_value),
            )
            previous_basis = basis
            previous_value = value

        series = [
            (s.year, displayed_value(holdings[asset_id], display_mode))
            for s, holdings in zip(ordered, holdings_by_period)
            if asset_id in holdings and holdings[asset_id].price is not None
        ]
        row.ytd_change, row.from_start_change = _summary_changes(series, current_year)
        rows.append(row)

    rows.sort(key=lambda r: (r.ticker.casefold(), r.name.casefold()))

    table = PriceHistoryTable(assets=rows, month_columns=columns)
    if include_total:
        table.total_row = _build_total_row(ordered, selected, current_year)
    return table


def _build_total_row(
    ordered: list[MonthlySnapshot],
    selected: list[MonthlySnapshot],
    current_year: int,
) -> TotalRow:
    def snapshot_total(snapshot: MonthlySnapshot) -> Decimal:
        return sum((h.total_value for h in snapshot.by_asset if h.price is not None), ZERO)

    total_row = TotalRow()
    previous: Optional[Decimal] = None
    for snapshot in selected:
        total = snapshot_total(snapshot)
        total_row.months[month_key(snapshot.year, snapshot.month)] = MonthPriceCell(
            price=total,
            total_value=total,
            value=total,
            color=color_code(total, previous),
            change=percent_change(total, previous),
        )
        previous = total

    series = [(s.year, snapshot_total(s)) for s in ordered]
    total_row.ytd_change, total_row.from_start_change = _summary_changes(series, current_year)
    return total_row
