"""Pydantic schemas for watchlist endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from fintrack.api.schemas.stocks import QuoteResponse


class WatchlistCreateRequest(BaseModel):
    """Request schema for creating a watchlist."""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)


class WatchlistItemCreateRequest(BaseModel):
    """Request schema for adding a symbol to a watchlist."""

    symbol: str = Field(..., min_length=1, max_length=20)


class WatchlistItemResponse(BaseModel):
    """Response schema for a watchlist item."""

    model_config = {"from_attributes": True}

    item_id: str
    watchlist_id: str
    symbol: str
    added_at_est: Optional[datetime] = None


class WatchlistResponse(BaseModel):
    """Response schema for a watchlist without items."""

    model_config = {"from_attributes": True}

    watchlist_id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at_est: Optional[datetime] = None


class WatchlistDetailResponse(WatchlistResponse):
    """Response schema for a watchlist with its items."""

    items: list[WatchlistItemResponse] = []


class WatchlistListResponse(BaseModel):
    """Response schema for listing watchlists."""

    watchlists: list[WatchlistResponse]
    count: int


class WatchlistQuotesResponse(BaseModel):
    """Quotes for a watchlist's symbols; symbols without a quote are listed in `missing`."""

    watchlist_id: str
    quotes: list[QuoteResponse]
    missing: list[str]
