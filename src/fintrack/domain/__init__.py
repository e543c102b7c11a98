"""Domain layer - pure business models with no external dependencies."""

from fintrack.domain.models import (
    Portfolio,
    Position,
    Watchlist,
    WatchlistItem,
    AppSetting,
    RestrictedSymbol,
    ApiLog,
)

__all__ = [
    "Portfolio",
    "Position",
    "Watchlist",
    "WatchlistItem",
    "AppSetting",
    "RestrictedSymbol",
    "ApiLog",
]
