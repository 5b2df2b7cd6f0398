"""Monthly portfolio snapshots."""

import logging
from decimal import Decimal
from typing import Optional

from finboard.core.exceptions import NotFoundError, ValidationError
from finboard.core.timezone import now_local, today_local
from finboard.domain.models import Asset, AssetSnapshot, MonthlySnapshot
from finboard.domain.views import NetWorthChange
from finboard.repositories.protocols import AssetRepository, SnapshotRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def snapshot_holding(asset: Asset) -> AssetSnapshot:
    """Freeze an asset's position; a zero price is recorded as "no data"."""
    price = asset.current_price if asset.current_price > ZERO else None
    return AssetSnapshot(
        asset_id=asset.asset_id,
        ticker=asset.ticker,
        name=asset.name,
        quantity=asset.quantity,
        price=price,
        total_value=(asset.quantity * price).quantize(CENT) if price is not None else ZERO,
        is_cash_equivalent=asset.is_cash_equivalent,
    )


def calculate_monthly_change(
    current_net_worth: Decimal,
    previous: Optional[MonthlySnapshot],
) -> NetWorthChange:
    """Change against the previous snapshot; zero when there is no usable base."""
    if previous is None or previous.total_net_worth == ZERO:
        return NetWorthChange(value=ZERO, percentage=ZERO)
    value = current_net_worth - previous.total_net_worth
    percentage = value / previous.total_net_worth * HUNDRED
    return NetWorthChange(value=value.quantize(CENT), percentage=percentage.quantize(CENT))


class SnapshotService:
    """Records and reads back monthly snapshots of a user's assets."""

    def __init__(
        self,
        asset_repo: AssetRepository,
        snapshot_repo: SnapshotRepository,
    ):
        self._asset_repo = asset_repo
        self._snapshot_repo = snapshot_repo

    def create_snapshot(
        self,
        user_id: str,
        year: Optional[int] = None,
        month: Optional[int] = None,
        note: Optional[str] = None,
    ) -> MonthlySnapshot:
        """
        Snapshot the user's current assets for a month (default: this month).

        An existing snapshot for the same month is replaced.
        """
        today = today_local()
        year = year or today.year
        month = month or today.month
        if not 1 <= month <= 12:
            raise ValidationError(f"Invalid month: {month}")

        holdings = [snapshot_holding(a) for a in self._asset_repo.list_by_user(user_id)]
        snapshot = MonthlySnapshot(
            user_id=user_id,
            year=year,
            month=month,
            total_net_worth=sum((h.total_value for h in holdings), ZERO),
            by_asset=holdings,
            note=note,
            created_at=now_local(),
        )
        saved = self._snapshot_repo.upsert(snapshot)
        logger.info(
            "Saved snapshot %s with %d holdings (net worth %s)",
            saved.snapshot_id,
            len(holdings),
            saved.total_net_worth,
        )
        return saved

    def get_snapshot(self, user_id: str, year: int, month: int) -> MonthlySnapshot:
        snapshot = self._snapshot_repo.get(user_id, year, month)
        if not snapshot:
            raise NotFoundError("Snapshot", f"{user_id}-{year}-{month}")
        return snapshot

    def list_snapshots(self, user_id: str) -> list[MonthlySnapshot]:
        return self._snapshot_repo.list_by_user(user_id)

    def delete_snapshot(self, user_id: str, year: int, month: int) -> None:
        self.get_snapshot(user_id, year, month)
        self._snapshot_repo.delete(user_id, year, month)

    def previous_snapshot(self, user_id: str, year: int, month: int) -> Optional[MonthlySnapshot]:
        """The latest snapshot strictly before the given month."""
        earlier = [
            s for s in self._snapshot_repo.list_by_user(user_id)
            if (s.year, s.month) < (year, month)
        ]
        return earlier[-1] if earlier else None

    def monthly_change(self, snapshot: MonthlySnapshot) -> NetWorthChange:
        previous = self.previous_snapshot(snapshot.user_id, snapshot.year, snapshot.month)
        return calculate_monthly_change(snapshot.total_net_worth, previous)
