"""Market price endpoints."""

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_asset_service, get_market_data_service
from finboard.api.schemas import QuoteResponse, PriceUpdateRequest, PriceUpdateResponse
from finboard.services import AssetService, MarketDataService

router = APIRouter(prefix="/prices", tags=["prices"])


@router.get("/quote", response_model=QuoteResponse)
def get_quote(
    ticker: str = Query(..., min_length=1, description="Ticker symbol"),
    market_data: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    """Latest quote; an unavailable price is returned as null, not as an error."""
    quote = market_data.get_quote(ticker)
    return QuoteResponse(
        ticker=quote.ticker,
        price=quote.price,
        currency=quote.currency,
        available=quote.is_available,
        as_of=quote.as_of,
        error=quote.error,
    )


@router.post("/update", response_model=PriceUpdateResponse)
def update_prices(
    request: PriceUpdateRequest,
    assets: AssetService = Depends(get_asset_service),
) -> PriceUpdateResponse:
    """Refresh current prices of all of a user's quoted assets."""
    return PriceUpdateResponse.model_validate(assets.update_prices(request.user_id))
