"""Process-local backing store for the in-memory repositories."""

from dataclasses import dataclass, field

from fintrack.domain.models import (
    Portfolio,
    Position,
    Watchlist,
    WatchlistItem,
    AppSetting,
    RestrictedSymbol,
    FeaturedStock,
    ApiLog,
)


@dataclass
class InMemoryStore:
    """
    Maps keyed by the opaque identifiers the services generate.

    One store is shared by all in-memory repositories of a process (or test).
    Dict insertion order is the creation order.
    """

    portfolios: dict[str, Portfolio] = field(default_factory=dict)
    positions: dict[str, Position] = field(default_factory=dict)
    watchlists: dict[str, Watchlist] = field(default_factory=dict)
    watchlist_items: dict[str, WatchlistItem] = field(default_factory=dict)
    settings: dict[str, AppSetting] = field(default_factory=dict)
    restricted: dict[str, RestrictedSymbol] = field(default_factory=dict)
    featured: dict[str, FeaturedStock] = field(default_factory=dict)
    api_logs: list[ApiLog] = field(default_factory=list)

    def clear(self) -> None:
        """Drop all data."""
        self.portfolios.clear()
        self.positions.clear()
        self.watchlists.clear()
        self.watchlist_items.clear()
        self.settings.clear()
        self.restricted.clear()
        self.featured.clear()
        self.api_logs.clear()
