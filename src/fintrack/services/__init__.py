"""Service layer - business logic orchestration."""

from fintrack.services.valuation_engine import valuate, allocation_by_symbol, value_series
from fintrack.services.quote_fetcher import QuoteBatchFetcher, FetchOutcome
from fintrack.services.portfolio_service import (
    PortfolioService,
    PortfolioCreate,
    PortfolioUpdate,
    PositionCreate,
    PositionUpdate,
)
from fintrack.services.watchlist_service import WatchlistService
from fintrack.services.market_data_service import MarketDataService
from fintrack.services.admin_service import AdminService

__all__ = [
    "valuate",
    "allocation_by_symbol",
    "value_series",
    "QuoteBatchFetcher",
    "FetchOutcome",
    "PortfolioService",
    "PortfolioCreate",
    "PortfolioUpdate",
    "PositionCreate",
    "PositionUpdate",
    "WatchlistService",
    "MarketDataService",
    "AdminService",
]
