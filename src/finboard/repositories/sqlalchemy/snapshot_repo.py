"""SQLAlchemy implementation of SnapshotRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from finboard.domain.models import AssetSnapshot, MonthlySnapshot, make_snapshot_id
from finboard.repositories.sqlalchemy.orm_models import SnapshotORM, SnapshotAssetORM


class SqlAlchemySnapshotRepository:
    """SQLAlchemy-backed monthly snapshot repository."""

    def __init__(self, db: Session):
        self._db = db

    def upsert(self, snapshot: MonthlySnapshot) -> MonthlySnapshot:
        """Insert a snapshot or replace the existing one for the same month."""
        orm_snapshot = self._db.query(SnapshotORM).filter(
            SnapshotORM.snapshot_id == snapshot.snapshot_id
        ).first()
        if orm_snapshot is None:
            orm_snapshot = SnapshotORM(
                snapshot_id=snapshot.snapshot_id,
                user_id=snapshot.user_id,
                year=snapshot.year,
                month=snapshot.month,
            )
            if snapshot.created_at is not None:
                orm_snapshot.created_at = snapshot.created_at
            self._db.add(orm_snapshot)

        orm_snapshot.total_net_worth = snapshot.total_net_worth
        orm_snapshot.note = snapshot.note
        orm_snapshot.holdings = [
            SnapshotAssetORM(
                asset_id=h.asset_id,
                ticker=h.ticker,
                name=h.name,
                quantity=h.quantity,
                price=h.price,
                total_value=h.total_value,
                is_cash_equivalent=h.is_cash_equivalent,
            )
            for h in snapshot.by_asset
        ]

        self._db.commit()
        self._db.refresh(orm_snapshot)
        return self._to_domain(orm_snapshot)

    def get(self, user_id: str, year: int, month: int) -> Optional[MonthlySnapshot]:
        """Retrieve a user's snapshot for one month."""
        orm_snapshot = self._db.query(SnapshotORM).filter(
            SnapshotORM.snapshot_id == make_snapshot_id(user_id, year, month)
        ).first()
        return self._to_domain(orm_snapshot) if orm_snapshot else None

    def list_by_user(self, user_id: str) -> list[MonthlySnapshot]:
        """List a user's snapshots in chronological order."""
        orm_snapshots = (
            self._db.query(SnapshotORM)
            .filter(SnapshotORM.user_id == user_id)
            .order_by(SnapshotORM.year, SnapshotORM.month)
            .all()
        )
        return [self._to_domain(s) for s in orm_snapshots]

    def delete(self, user_id: str, year: int, month: int) -> None:
        """Delete a user's snapshot for one month."""
        orm_snapshot = self._db.query(SnapshotORM).filter(
            SnapshotORM.snapshot_id == make_snapshot_id(user_id, year, month)
        ).first()
        if orm_snapshot:
            self._db.delete(orm_snapshot)
            self._db.commit()

    @staticmethod
    def _to_domain(orm: SnapshotORM) -> MonthlySnapshot:
        """Convert ORM model to domain model."""
        return MonthlySnapshot(
            user_id=orm.user_id,
            year=orm.year,
            month=orm.month,
            total_net_worth=Decimal(str(orm.total_net_worth or 0)),
            by_asset=[
                AssetSnapshot(
                    asset_id=h.asset_id,
                    ticker=h.ticker,
                    name=h.name,
                    quantity=Decimal(str(h.quantity)),
                    price=Decimal(str(h.price)) if h.price is not None else None,
                    total_value=Decimal(str(h.total_value or 0)),
                    is_cash_equivalent=h.is_cash_equivalent,
                )
                for h in orm.holdings
            ],
            note=orm.note,
            created_at=orm.created_at,
        )
