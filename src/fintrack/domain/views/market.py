"""View models for market data returned by providers."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from fintrack.domain.models import FeaturedStock


@dataclass(frozen=True)
class Quote:
    """Point-in-time market price snapshot for a symbol. Never persisted."""

    symbol: str
    price: float
    change: float = 0.0
    changes_percentage: float = 0.0
    volume: Optional[int] = None
    market_cap: Optional[float] = None
    name: Optional[str] = None
    as_of: Optional[datetime] = None


@dataclass(frozen=True)
class CompanyProfile:
    """Descriptive company data for a symbol."""

    symbol: str
    company_name: str
    exchange: Optional[str] = None
    industry: Optional[str] = None
    sector: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    ceo: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class SearchResult:
    """Symbol search hit."""

    symbol: str
    name: str
    exchange: Optional[str] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class NewsArticle:
    """Financial news headline."""

    title: str
    url: str
    symbol: Optional[str] = None
    site: Optional[str] = None
    published_at: Optional[datetime] = None
    text: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class PricePoint:
    """Daily close for a symbol."""

    date: date
    close: float


@dataclass(frozen=True)
class FeaturedStockQuote:
    """An active featured stock with its current quote, if one could be fetched."""

    featured: FeaturedStock
    quote: Optional[Quote] = None
