"""Watchlist service."""

import uuid
from typing import Optional

from fintrack.core.timezone import now_eastern
from fintrack.core.exceptions import (
    ValidationError,
    NotFoundError,
    ForbiddenError,
    RestrictedSymbolError,
)
from fintrack.domain.models import Watchlist, WatchlistItem
from fintrack.domain.views import Quote
from fintrack.repositories.protocols import WatchlistRepository, AdminRepository
from fintrack.services.quote_fetcher import QuoteBatchFetcher


class WatchlistService:
    """
    Service for managing a user's named watchlists.

    A symbol appears at most once per watchlist; restricted symbols cannot be added.
    """

    def __init__(
        self,
        watchlist_repo: WatchlistRepository,
        admin_repo: AdminRepository,
        quote_fetcher: QuoteBatchFetcher,
    ):
        self._watchlist_repo = watchlist_repo
        self._admin_repo = admin_repo
        self._quote_fetcher = quote_fetcher

    def create_watchlist(self, user_id: str, name: str, description: Optional[str] = None) -> Watchlist:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name is required")
        watchlist = Watchlist(
            watchlist_id=str(uuid.uuid4()),
            user_id=user_id,
            name=name,
            description=description,
            created_at_est=now_eastern(),
        )
        return self._watchlist_repo.create(watchlist)

    def list_watchlists(self, user_id: str) -> list[Watchlist]:
        return self._watchlist_repo.list_by_user(user_id)

    def get_watchlist(self, watchlist_id: str, user_id: str) -> Watchlist:
        watchlist = self._watchlist_repo.get_by_id(watchlist_id)
        if not watchlist:
            raise NotFoundError("Watchlist", watchlist_id)
        if watchlist.user_id != user_id:
            raise ForbiddenError("You do not have access to this watchlist")
        return watchlist

    def delete_watchlist(self, watchlist_id: str, user_id: str) -> None:
        """Delete a watchlist and its items."""
        self.get_watchlist(watchlist_id, user_id)
        self._watchlist_repo.delete(watchlist_id)

    def list_items(self, watchlist_id: str, user_id: str) -> list[WatchlistItem]:
        self.get_watchlist(watchlist_id, user_id)
        return self._watchlist_repo.list_items(watchlist_id)

    def add_item(self, watchlist_id: str, user_id: str, symbol: str) -> WatchlistItem:
        self.get_watchlist(watchlist_id, user_id)
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required")
        if self._admin_repo.get_restricted_by_symbol(symbol):
            raise RestrictedSymbolError(symbol)
        if self._watchlist_repo.get_item_by_symbol(watchlist_id, symbol):
            raise ValidationError(f"{symbol} is already on this watchlist")
        item = WatchlistItem(
            item_id=str(uuid.uuid4()),
            watchlist_id=watchlist_id,
            symbol=symbol,
            added_at_est=now_eastern(),
        )
        return self._watchlist_repo.add_item(item)

    def remove_item(self, watchlist_id: str, item_id: str, user_id: str) -> None:
        self.get_watchlist(watchlist_id, user_id)
        item = self._watchlist_repo.get_item(item_id)
        if not item or item.watchlist_id != watchlist_id:
            raise NotFoundError("Watchlist item", item_id)
        self._watchlist_repo.delete_item(item_id)

    async def get_watchlist_quotes(self, watchlist_id: str, user_id: str) -> dict[str, Quote]:
        """Current quotes for the watchlist's symbols; symbols without a quote are absent."""
        items = self.list_items(watchlist_id, user_id)
        return await self._quote_fetcher.fetch_all(item.symbol for item in items)
