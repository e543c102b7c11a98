"""Watchlist repository protocol."""

from typing import Protocol, Optional

from fintrack.domain.models import Watchlist, WatchlistItem


class WatchlistRepository(Protocol):
    """Interface for watchlist and watchlist item data access."""

    def create(self, watchlist: Watchlist) -> Watchlist:
        """Persist a new watchlist."""
        ...

    def get_by_id(self, watchlist_id: str) -> Optional[Watchlist]:
        """Retrieve watchlist by ID."""
        ...

    def list_by_user(self, user_id: str) -> list[Watchlist]:
        """List all watchlists owned by a user."""
        ...

    def delete(self, watchlist_id: str) -> None:
        """Delete a watchlist and its items."""
        ...

    # Item operations
    def add_item(self, item: WatchlistItem) -> WatchlistItem:
        """Persist a new item."""
        ...

    def get_item(self, item_id: str) -> Optional[WatchlistItem]:
        """Retrieve an item by ID."""
        ...

    def get_item_by_symbol(self, watchlist_id: str, symbol: str) -> Optional[WatchlistItem]:
        """Retrieve an item of a watchlist by symbol."""
        ...

    def list_items(self, watchlist_id: str) -> list[WatchlistItem]:
        """List items of a watchlist in the order they were added."""
        ...

    def delete_item(self, item_id: str) -> None:
        """Delete a single item."""
        ...
