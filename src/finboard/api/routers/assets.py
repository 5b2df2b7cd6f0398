"""Asset endpoints."""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_asset_service
from finboard.api.schemas import (
    AssetCreateRequest,
    AssetUpdateRequest,
    AssetResponse,
    AssetCreateResponse,
    AssetListResponse,
    TaxSimulationResponse,
)
from finboard.domain.models import AssetComposition
from finboard.services import AssetService, AssetCreate, AssetUpdate

router = APIRouter(prefix="/assets", tags=["assets"])


def _composition(items) -> Optional[list[AssetComposition]]:
    if items is None:
        return None
    return [
        AssetComposition(
            asset_class=item.asset_class,
            percentage=item.percentage,
            sub_category=item.sub_category,
        )
        for item in items
    ]


@router.post("", response_model=AssetCreateResponse, status_code=201)
def create_asset(
    request: AssetCreateRequest,
    assets: AssetService = Depends(get_asset_service),
) -> AssetCreateResponse:
    """Create an asset; a missing price is fetched from the market data provider."""
    data = request.model_dump(exclude={"composition"})
    asset, warning = assets.create_asset(
        AssetCreate(**data, composition=_composition(request.composition))
    )
    return AssetCreateResponse(asset=AssetResponse.model_validate(asset), warning=warning)


@router.get("", response_model=AssetListResponse)
def list_assets(
    user_id: str = Query(..., min_length=1),
    assets: AssetService = Depends(get_asset_service),
) -> AssetListResponse:
    items = assets.list_assets(user_id)
    return AssetListResponse(
        assets=[AssetResponse.model_validate(a) for a in items],
        count=len(items),
        total_value=sum((a.total_value for a in items), Decimal("0")),
    )


@router.get("/{asset_id}", response_model=AssetResponse)
def get_asset(
    asset_id: str,
    assets: AssetService = Depends(get_asset_service),
) -> AssetResponse:
    return AssetResponse.model_validate(assets.get_asset(asset_id))


@router.put("/{asset_id}", response_model=AssetResponse)
def update_asset(
    asset_id: str,
    request: AssetUpdateRequest,
    assets: AssetService = Depends(get_asset_service),
) -> AssetResponse:
    data = request.model_dump(exclude={"composition"})
    asset = assets.update_asset(
        asset_id,
        AssetUpdate(**data, composition=_composition(request.composition)),
    )
    return AssetResponse.model_validate(asset)


@router.delete("/{asset_id}", status_code=204)
def delete_asset(
    asset_id: str,
    assets: AssetService = Depends(get_asset_service),
) -> None:
    assets.delete_asset(asset_id)


@router.get("/{asset_id}/tax-simulation", response_model=TaxSimulationResponse)
def simulate_tax(
    asset_id: str,
    quantity: Optional[Decimal] = Query(None, description="Units to sell"),
    target_value: Optional[Decimal] = Query(None, description="Gross sale value to reach"),
    assets: AssetService = Depends(get_asset_service),
) -> TaxSimulationResponse:
    """Simulate selling part of the position and the capital gains tax due."""
    result = assets.simulate_tax(asset_id, quantity=quantity, target_value=target_value)
    return TaxSimulationResponse.model_validate(result)
