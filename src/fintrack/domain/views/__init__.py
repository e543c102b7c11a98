"""View models for service outputs."""

from fintrack.domain.views.market import (
    Quote,
    CompanyProfile,
    SearchResult,
    NewsArticle,
    PricePoint,
    FeaturedStockQuote,
)
from fintrack.domain.views.valuation import (
    PositionValuation,
    PortfolioValuation,
    AllocationItem,
    ValuePoint,
    PortfolioReport,
)

__all__ = [
    "Quote",
    "CompanyProfile",
    "SearchResult",
    "NewsArticle",
    "PricePoint",
    "FeaturedStockQuote",
    "PositionValuation",
    "PortfolioValuation",
    "AllocationItem",
    "ValuePoint",
    "PortfolioReport",
]
