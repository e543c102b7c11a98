"""In-memory implementation of WatchlistRepository."""

from dataclasses import replace
from typing import Optional

from fintrack.domain.models import Watchlist, WatchlistItem
from fintrack.repositories.memory.store import InMemoryStore


class InMemoryWatchlistRepository:
    """Dict-backed watchlist repository."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    def create(self, watchlist: Watchlist) -> Watchlist:
        self._store.watchlists[watchlist.watchlist_id] = replace(watchlist)
        return replace(watchlist)

    def get_by_id(self, watchlist_id: str) -> Optional[Watchlist]:
        watchlist = self._store.watchlists.get(watchlist_id)
        return replace(watchlist) if watchlist else None

    def list_by_user(self, user_id: str) -> list[Watchlist]:
        return [
            replace(w) for w in self._store.watchlists.values()
            if w.user_id == user_id
        ]

    def delete(self, watchlist_id: str) -> None:
        for item_id in [
            i.item_id for i in self._store.watchlist_items.values()
            if i.watchlist_id == watchlist_id
        ]:
            del self._store.watchlist_items[item_id]
        self._store.watchlists.pop(watchlist_id, None)

    # Item operations

    def add_item(self, item: WatchlistItem) -> WatchlistItem:
        self._store.watchlist_items[item.item_id] = replace(item)
        return replace(item)

    def get_item(self, item_id: str) -> Optional[WatchlistItem]:
        item = self._store.watchlist_items.get(item_id)
        return replace(item) if item else None

    def get_item_by_symbol(self, watchlist_id: str, symbol: str) -> Optional[WatchlistItem]:
        for item in self._store.watchlist_items.values():
            if item.watchlist_id == watchlist_id and item.symbol == symbol:
                return replace(item)
        return None

    def list_items(self, watchlist_id: str) -> list[WatchlistItem]:
        return [
            replace(i) for i in self._store.watchlist_items.values()
            if i.watchlist_id == watchlist_id
        ]

    def delete_item(self, item_id: str) -> None:
        self._store.watchlist_items.pop(item_id, None)
