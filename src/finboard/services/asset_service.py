"""Asset service for holdings, price refreshes and sale simulations."""

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from finboard.config.settings import get_settings
from finboard.core.exceptions import CompositionError, NotFoundError, ValidationError
from finboard.core.timezone import now_local
from finboard.domain.models import Asset, AssetClass, AssetComposition, AssetType
from finboard.domain.views import PriceUpdateResult, TaxGainResult
from finboard.repositories.protocols import AssetRepository
from finboard.services.market_data_service import MarketDataService
from finboard.services.tax_calculator import simulate_sale

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")
COMPOSITION_TOLERANCE = Decimal("0.01")


@dataclass
class AssetCreate:
    """Input data for creating an asset."""

    user_id: str
    ticker: str
    name: str
    asset_type: AssetType
    asset_class: AssetClass
    quantity: Decimal
    current_price: Optional[Decimal] = None
    currency: Optional[str] = None
    sub_category: Optional[str] = None
    average_cost: Optional[Decimal] = None
    tax_rate: Optional[Decimal] = None
    auto_update_price: bool = True
    composition: Optional[list[AssetComposition]] = None


@dataclass
class AssetUpdate:
    """Partial update data for editing an asset."""

    ticker: Optional[str] = None
    name: Optional[str] = None
    asset_type: Optional[AssetType] = None
    asset_class: Optional[AssetClass] = None
    quantity: Optional[Decimal] = None
    current_price: Optional[Decimal] = None
    currency: Optional[str] = None
    sub_category: Optional[str] = None
    average_cost: Optional[Decimal] = None
    tax_rate: Optional[Decimal] = None
    auto_update_price: Optional[bool] = None
    composition: Optional[list[AssetComposition]] = None


def validate_composition(composition: list[AssetComposition]) -> None:
    """An empty composition is allowed; otherwise percentages must sum to 100."""
    if not composition:
        return
    for part in composition:
        if part.percentage < ZERO:
            raise ValidationError("Composition percentages cannot be negative")
    total = sum((part.percentage for part in composition), ZERO)
    if abs(total - HUNDRED) > COMPOSITION_TOLERANCE:
        raise CompositionError(str(total))


class AssetService:
    """
    Service for managing portfolio assets.

    New quoted assets are priced from the market data service. An
    unavailable quote never blocks a write: the asset is stored with price 0
    and the caller receives a warning to set the price manually.
    """

    def __init__(
        self,
        asset_repo: AssetRepository,
        market_data_service: MarketDataService,
    ):
        self._asset_repo = asset_repo
        self._market_data = market_data_service

    def create_asset(self, data: AssetCreate) -> tuple[Asset, Optional[str]]:
        """
        Create an asset.

        Returns the created asset and an optional warning message.
        """
        composition = list(data.composition or [])
        validate_composition(composition)

        asset = Asset(
            asset_id=str(uuid.uuid4()),
            user_id=data.user_id,
            ticker=self._normalize_ticker(data.ticker),
            name=(data.name or "").strip(),
            asset_type=data.asset_type,
            asset_class=data.asset_class,
            quantity=data.quantity,
            currency=data.currency or get_settings().default_currency,
            sub_category=data.sub_category or None,
            average_cost=data.average_cost,
            tax_rate=data.tax_rate,
            auto_update_price=data.auto_update_price,
            composition=composition,
            created_at=now_local(),
        )
        self._validate(asset)

        warning = None
        if data.current_price is not None and data.current_price > ZERO:
            asset.current_price = data.current_price
        elif asset.is_cash_equivalent:
            asset.current_price = ONE
        elif asset.supports_price_update:
            quote = self._market_data.get_quote(asset.ticker)
            if quote.is_available:
                asset.current_price = quote.price
                asset.last_price_update = now_local()
            else:
                asset.current_price = ZERO
                warning = f"Price not available for {asset.ticker}; set it manually"
        else:
            asset.current_price = ZERO
            warning = f"{asset.ticker} has no market quote; set its price manually"

        if warning:
            logger.warning(warning)
        return self._asset_repo.create(asset), warning

    def get_asset(self, asset_id: str) -> Asset:
        asset = self._asset_repo.get_by_id(asset_id)
        if not asset:
            raise NotFoundError("Asset", asset_id)
        return asset

    def list_assets(self, user_id: str) -> list[Asset]:
        return self._asset_repo.list_by_user(user_id)

    def update_asset(self, asset_id: str, patch: AssetUpdate) -> Asset:
        asset = self.get_asset(asset_id)

        if patch.ticker is not None:
            asset.ticker = self._normalize_ticker(patch.ticker)
        if patch.name is not None:
            asset.name = patch.name.strip()
        if patch.asset_type is not None:
            asset.asset_type = AssetType(patch.asset_type)
        if patch.asset_class is not None:
            asset.asset_class = AssetClass(patch.asset_class)
        if patch.quantity is not None:
            asset.quantity = patch.quantity
        if patch.current_price is not None:
            asset.current_price = patch.current_price
        if patch.currency is not None:
            asset.currency = patch.currency
        if patch.sub_category is not None:
            asset.sub_category = patch.sub_category or None
        if patch.average_cost is not None:
            asset.average_cost = patch.average_cost
        if patch.tax_rate is not None:
            asset.tax_rate = patch.tax_rate
        if patch.auto_update_price is not None:
            asset.auto_update_price = patch.auto_update_price
        if patch.composition is not None:
            validate_composition(patch.composition)
            asset.composition = list(patch.composition)

        self._validate(asset)
        if asset.current_price < ZERO:
            raise ValidationError("Price cannot be negative")
        return self._asset_repo.update(asset)

    def delete_asset(self, asset_id: str) -> None:
        self.get_asset(asset_id)
        self._asset_repo.delete(asset_id)

    def update_prices(self, user_id: str) -> PriceUpdateResult:
        """
        Refresh current prices of a user's quoted assets.

        Assets without a market quote (cash, real estate, private equity)
        and assets with auto-update disabled are skipped. A ticker whose
        quote is unavailable is reported in `failed`.
        """
        assets = self._asset_repo.list_by_user(user_id)
        if not assets:
            return PriceUpdateResult(message="No assets found")

        updatable = [a for a in assets if a.supports_price_update]
        if not updatable:
            return PriceUpdateResult(message="No assets require price updates")

        quotes = self._market_data.get_quotes([a.ticker for a in updatable])
        result = PriceUpdateResult()
        for asset in updatable:
            quote = quotes.get(asset.ticker)
            if quote is None or not quote.is_available:
                result.failed.append(asset.ticker)
                continue
            asset.current_price = quote.price
            asset.last_price_update = now_local()
            self._asset_repo.update(asset)
            result.updated += 1

        result.message = f"Updated {result.updated} assets, {len(result.failed)} failed"
        logger.info("Price refresh for %s: %s", user_id, result.message)
        return result

    def simulate_tax(
        self,
        asset_id: str,
        quantity: Optional[Decimal] = None,
        target_value: Optional[Decimal] = None,
    ) -> TaxGainResult:
        """Simulate selling part of an asset at its current price."""
        if quantity is None and target_value is None:
            raise ValidationError("Provide either a quantity or a target value")
        return simulate_sale(self.get_asset(asset_id), quantity=quantity, target_value=target_value)

    @staticmethod
    def _normalize_ticker(ticker: str) -> str:
        ticker = (ticker or "").strip().upper()
        if not ticker:
            raise ValidationError("Ticker is required")
        return ticker

    @staticmethod
    def _validate(asset: Asset) -> None:
        if not asset.name:
            raise ValidationError("Asset name is required")
        if asset.quantity < ZERO:
            raise ValidationError("Quantity cannot be negative")
        if asset.average_cost is not None and asset.average_cost < ZERO:
            raise ValidationError("Average cost cannot be negative")
        if asset.tax_rate is not None and not ZERO <= asset.tax_rate <= HUNDRED:
            raise ValidationError("Tax rate must be between 0 and 100")
