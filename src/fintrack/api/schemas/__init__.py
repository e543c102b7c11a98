"""Pydantic schemas for API request/response."""

from fintrack.api.schemas.portfolio import (
    PortfolioCreateRequest,
    PortfolioUpdateRequest,
    PortfolioResponse,
    PortfolioListResponse,
    PositionCreateRequest,
    PositionUpdateRequest,
    PositionResponse,
    PositionListResponse,
    PositionValuationResponse,
    ValuationResponse,
    AllocationItemResponse,
    AllocationResponse,
    ValuePointResponse,
    HistoryResponse,
)
from fintrack.api.schemas.stocks import (
    QuoteResponse,
    ProfileResponse,
    SearchResultResponse,
    SearchResponse,
    NewsArticleResponse,
    NewsResponse,
    PricePointResponse,
    HistoricalResponse,
    MarketSummaryResponse,
    FeaturedStockQuoteResponse,
    FeaturedListResponse,
)
from fintrack.api.schemas.watchlist import (
    WatchlistCreateRequest,
    WatchlistItemCreateRequest,
    WatchlistItemResponse,
    WatchlistResponse,
    WatchlistDetailResponse,
    WatchlistListResponse,
    WatchlistQuotesResponse,
)
from fintrack.api.schemas.admin import (
    SettingUpdateRequest,
    SettingResponse,
    SettingListResponse,
    RestrictedSymbolCreateRequest,
    RestrictedSymbolResponse,
    RestrictedSymbolListResponse,
    FeaturedStockCreateRequest,
    FeaturedStockUpdateRequest,
    FeaturedStockResponse,
    FeaturedStockListResponse,
    ApiLogResponse,
    ApiLogListResponse,
)

__all__ = [
    "PortfolioCreateRequest",
    "PortfolioUpdateRequest",
    "PortfolioResponse",
    "PortfolioListResponse",
    "PositionCreateRequest",
    "PositionUpdateRequest",
    "PositionResponse",
    "PositionListResponse",
    "PositionValuationResponse",
    "ValuationResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "ValuePointResponse",
    "HistoryResponse",
    "QuoteResponse",
    "ProfileResponse",
    "SearchResultResponse",
    "SearchResponse",
    "NewsArticleResponse",
    "NewsResponse",
    "PricePointResponse",
    "HistoricalResponse",
    "MarketSummaryResponse",
    "FeaturedStockQuoteResponse",
    "FeaturedListResponse",
    "WatchlistCreateRequest",
    "WatchlistItemCreateRequest",
    "WatchlistItemResponse",
    "WatchlistResponse",
    "WatchlistDetailResponse",
    "WatchlistListResponse",
    "WatchlistQuotesResponse",
    "SettingUpdateRequest",
    "SettingResponse",
    "SettingListResponse",
    "RestrictedSymbolCreateRequest",
    "RestrictedSymbolResponse",
    "RestrictedSymbolListResponse",
    "FeaturedStockCreateRequest",
    "FeaturedStockUpdateRequest",
    "FeaturedStockResponse",
    "FeaturedStockListResponse",
    "ApiLogResponse",
    "ApiLogListResponse",
]
