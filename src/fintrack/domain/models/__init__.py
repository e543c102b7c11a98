"""Domain models package."""

from fintrack.domain.models.portfolio import Portfolio, Position
from fintrack.domain.models.watchlist import Watchlist, WatchlistItem
from fintrack.domain.models.admin import AppSetting, RestrictedSymbol, FeaturedStock, ApiLog

__all__ = [
    "Portfolio",
    "Position",
    "Watchlist",
    "WatchlistItem",
    "AppSetting",
    "RestrictedSymbol",
    "FeaturedStock",
    "ApiLog",
]
