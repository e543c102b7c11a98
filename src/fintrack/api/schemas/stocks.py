"""Pydantic schemas for market data endpoints."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    """Response schema for a stock quote."""

    model_config = {"from_attributes": True}

    symbol: str
    price: float
    change: float
    changes_percentage: float
    volume: Optional[int] = None
    market_cap: Optional[float] = None
    name: Optional[str] = None
    as_of: Optional[datetime] = None


class ProfileResponse(BaseModel):
    """Response schema for a company profile."""

    model_config = {"from_attributes": True}

    symbol: str
    company_name: str
    exchange: Optional[str] = None
    industry: Optional[str] = None
    sector: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    ceo: Optional[str] = None
    image: Optional[str] = None


class SearchResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    name: str
    exchange: Optional[str] = None
    currency: Optional[str] = None


class SearchResponse(BaseModel):
    """Response schema for symbol search."""

    query: str
    results: list[SearchResultResponse]
    count: int


class NewsArticleResponse(BaseModel):
    model_config = {"from_attributes": True}

    title: str
    url: str
    symbol: Optional[str] = None
    site: Optional[str] = None
    published_at: Optional[datetime] = None
    text: Optional[str] = None
    image: Optional[str] = None


class NewsResponse(BaseModel):
    """Response schema for news listing."""

    articles: list[NewsArticleResponse]
    count: int


class PricePointResponse(BaseModel):
    model_config = {"from_attributes": True}

    date: date
    close: float


class HistoricalResponse(BaseModel):
    """Response schema for daily closes, oldest first."""

    symbol: str
    points: list[PricePointResponse]


class MarketSummaryResponse(BaseModel):
    """Major index quotes; indices without a quote are listed in `missing`."""

    quotes: list[QuoteResponse]
    missing: list[str]


class FeaturedStockQuoteResponse(BaseModel):
    """An active featured stock and its quote (null when unavailable)."""

    symbol: str
    title: str
    description: Optional[str] = None
    start_date_est: datetime
    end_date_est: Optional[datetime] = None
    quote: Optional[QuoteResponse] = None


class FeaturedListResponse(BaseModel):
    featured: list[FeaturedStockQuoteResponse]
    count: int
