"""SQLAlchemy implementation of AssetRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from finboard.domain.models import Asset, AssetComposition
from finboard.repositories.sqlalchemy.orm_models import AssetORM, AssetCompositionORM


def _to_decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyAssetRepository:
    """SQLAlchemy-backed asset repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, asset: Asset) -> Asset:
        """Persist a new asset."""
        orm_asset = AssetORM(asset_id=asset.asset_id, user_id=asset.user_id)
        self._apply(orm_asset, asset)
        if asset.created_at is not None:
            orm_asset.created_at = asset.created_at
        self._db.add(orm_asset)
        self._db.commit()
        self._db.refresh(orm_asset)
        return self._to_domain(orm_asset)

    def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """Retrieve asset by ID."""
        orm_asset = self._db.query(AssetORM).filter(
            AssetORM.asset_id == asset_id
        ).first()
        return self._to_domain(orm_asset) if orm_asset else None

    def list_by_user(self, user_id: str) -> list[Asset]:
        """List a user's current assets, ordered by ticker."""
        orm_assets = (
            self._db.query(AssetORM)
            .filter(AssetORM.user_id == user_id)
            .order_by(AssetORM.ticker)
            .all()
        )
        return [self._to_domain(a) for a in orm_assets]

    def update(self, asset: Asset) -> Asset:
        """Update an existing asset, replacing its composition."""
        orm_asset = self._db.query(AssetORM).filter(
            AssetORM.asset_id == asset.asset_id
        ).first()
        if not orm_asset:
            raise ValueError(f"Asset not found: {asset.asset_id}")

        self._apply(orm_asset, asset)
        self._db.commit()
        self._db.refresh(orm_asset)
        return self._to_domain(orm_asset)

    def delete(self, asset_id: str) -> None:
        """Delete an asset and its composition rows."""
        orm_asset = self._db.query(AssetORM).filter(
            AssetORM.asset_id == asset_id
        ).first()
        if orm_asset:
            self._db.delete(orm_asset)
            self._db.commit()

    @staticmethod
    def _apply(orm_asset: AssetORM, asset: Asset) -> None:
        orm_asset.ticker = asset.ticker
        orm_asset.name = asset.name
        orm_asset.asset_type = asset.asset_type
        orm_asset.asset_class = asset.asset_class
        orm_asset.sub_category = asset.sub_category
        orm_asset.currency = asset.currency
        orm_asset.quantity = asset.quantity
        orm_asset.average_cost = asset.average_cost
        orm_asset.tax_rate = asset.tax_rate
        orm_asset.current_price = asset.current_price
        orm_asset.auto_update_price = asset.auto_update_price
        orm_asset.last_price_update = asset.last_price_update
        orm_asset.composition = [
            AssetCompositionORM(
                asset_class=c.asset_class,
                percentage=c.percentage,
                sub_category=c.sub_category,
            )
            for c in asset.composition
        ]

    @staticmethod
    def _to_domain(orm: AssetORM) -> Asset:
        """Convert ORM model to domain model."""
        return Asset(
            asset_id=orm.asset_id,
            user_id=orm.user_id,
            ticker=orm.ticker,
            name=orm.name,
            asset_type=orm.asset_type,
            asset_class=orm.asset_class,
            sub_category=orm.sub_category,
            currency=orm.currency,
            quantity=Decimal(str(orm.quantity)),
            average_cost=_to_decimal(orm.average_cost),
            tax_rate=_to_decimal(orm.tax_rate),
            current_price=_to_decimal(orm.current_price) or Decimal("0"),
            auto_update_price=bool(orm.auto_update_price),
            composition=[
                AssetComposition(
                    asset_class=c.asset_class,
                    percentage=Decimal(str(c.percentage)),
                    sub_category=c.sub_category,
                )
                for c in orm.composition
            ],
            last_price_update=orm.last_price_update,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
