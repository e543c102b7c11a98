"""Watchlist domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Watchlist:
    """Named list of symbols a user follows."""

    watchlist_id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at_est: Optional[datetime] = field(default=None)


@dataclass
class WatchlistItem:
    """A symbol on a watchlist. Unique per watchlist."""

    item_id: str
    watchlist_id: str
    symbol: str
    added_at_est: Optional[datetime] = field(default=None)
