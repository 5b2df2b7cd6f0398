"""Historical price table endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from finboard.api.deps import get_reporting_service
from finboard.api.schemas import PriceHistoryResponse
from finboard.core.exceptions import ValidationError
from finboard.domain.models import DisplayMode
from finboard.services import ReportingService

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/prices", response_model=PriceHistoryResponse)
def get_price_history(
    user_id: str = Query(..., min_length=1),
    mode: DisplayMode = Query(DisplayMode.PRICE, description="price or total_value"),
    year: Optional[int] = Query(None, description="Only months of this year"),
    start_year: Optional[int] = Query(None, description="Only months from this one on"),
    start_month: Optional[int] = Query(None, ge=1, le=12),
    include_total: bool = Query(False),
    reporting: ReportingService = Depends(get_reporting_service),
) -> PriceHistoryResponse:
    """Month-by-month table of every asset's price (or position value)."""
    start = None
    if start_year is not None or start_month is not None:
        if start_year is None or start_month is None:
            raise ValidationError("start_year and start_month must be given together")
        start = (start_year, start_month)

    table = reporting.price_history(
        user_id,
        display_mode=mode,
        filter_year=year,
        start=start,
        include_total=include_total,
    )
    return PriceHistoryResponse.model_validate(table)
