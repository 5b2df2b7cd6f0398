"""Pydantic schemas for market price endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class QuoteResponse(BaseModel):
    """Quote for one ticker; `price` is null when unavailable."""

    ticker: str
    price: Optional[Decimal] = None
    currency: str
    available: bool
    as_of: Optional[datetime] = None
    error: Optional[str] = None


class PriceUpdateRequest(BaseModel):
    user_id: str = Field(..., min_length=1)


class PriceUpdateResponse(BaseModel):
    """Summary of a batch price refresh."""

    model_config = {"from_attributes": True}

    updated: int
    failed: list[str]
    message: str
