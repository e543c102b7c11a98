"""SQLAlchemy implementation of WatchlistRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from fintrack.domain.models import Watchlist, WatchlistItem
from fintrack.repositories.sqlalchemy.orm_models import WatchlistORM, WatchlistItemORM


class SqlAlchemyWatchlistRepository:
    """SQLAlchemy-backed watchlist repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, watchlist: Watchlist) -> Watchlist:
        """Persist a new watchlist."""
        orm_watchlist = WatchlistORM(
            watchlist_id=watchlist.watchlist_id,
            user_id=watchlist.user_id,
            name=watchlist.name,
            description=watchlist.description,
            created_at_est=watchlist.created_at_est,
        )
        self._db.add(orm_watchlist)
        self._db.commit()
        self._db.refresh(orm_watchlist)
        return self._to_domain(orm_watchlist)

    def get_by_id(self, watchlist_id: str) -> Optional[Watchlist]:
        """Retrieve watchlist by ID."""
        orm_watchlist = self._db.query(WatchlistORM).filter(
            WatchlistORM.watchlist_id == watchlist_id
        ).first()
        return self._to_domain(orm_watchlist) if orm_watchlist else None

    def list_by_user(self, user_id: str) -> list[Watchlist]:
        """List all watchlists owned by a user."""
        orm_watchlists = (
            self._db.query(WatchlistORM)
            .filter(WatchlistORM.user_id == user_id)
            .order_by(WatchlistORM.created_at_est, WatchlistORM.name)
            .all()
        )
        return [self._to_domain(w) for w in orm_watchlists]

    def delete(self, watchlist_id: str) -> None:
        """Delete a watchlist and its items."""
        self._db.query(WatchlistItemORM).filter(
            WatchlistItemORM.watchlist_id == watchlist_id
        ).delete()
        self._db.query(WatchlistORM).filter(
            WatchlistORM.watchlist_id == watchlist_id
        ).delete()
        self._db.commit()

    # Item operations

    def add_item(self, item: WatchlistItem) -> WatchlistItem:
        """Persist a new item."""
        orm_item = WatchlistItemORM(
            item_id=item.item_id,
            watchlist_id=item.watchlist_id,
            symbol=item.symbol,
            added_at_est=item.added_at_est,
        )
        self._db.add(orm_item)
        self._db.commit()
        self._db.refresh(orm_item)
        return self._item_to_domain(orm_item)

    def get_item(self, item_id: str) -> Optional[WatchlistItem]:
        """Retrieve an item by ID."""
        orm_item = self._db.query(WatchlistItemORM).filter(
            WatchlistItemORM.item_id == item_id
        ).first()
        return self._item_to_domain(orm_item) if orm_item else None

    def get_item_by_symbol(self, watchlist_id: str, symbol: str) -> Optional[WatchlistItem]:
        """Retrieve an item of a watchlist by symbol."""
        orm_item = (
            self._db.query(WatchlistItemORM)
            .filter(
                WatchlistItemORM.watchlist_id == watchlist_id,
                WatchlistItemORM.symbol == symbol,
            )
            .first()
        )
        return self._item_to_domain(orm_item) if orm_item else None

    def list_items(self, watchlist_id: str) -> list[WatchlistItem]:
        """List items of a watchlist in the order they were added."""
        orm_items = (
            self._db.query(WatchlistItemORM)
            .filter(WatchlistItemORM.watchlist_id == watchlist_id)
            .order_by(WatchlistItemORM.added_at_est, WatchlistItemORM.symbol)
            .all()
        )
        return [self._item_to_domain(i) for i in orm_items]

    def delete_item(self, item_id: str) -> None:
        """Delete a single item."""
        self._db.query(WatchlistItemORM).filter(
            WatchlistItemORM.item_id == item_id
        ).delete()
        self._db.commit()

    @staticmethod
    def _to_domain(orm: WatchlistORM) -> Watchlist:
        """Convert ORM watchlist to domain model."""
        return Watchlist(
            watchlist_id=orm.watchlist_id,
            user_id=orm.user_id,
            name=orm.name,
            description=orm.description,
            created_at_est=orm.created_at_est,
        )

    @staticmethod
    def _item_to_domain(orm: WatchlistItemORM) -> WatchlistItem:
        """Convert ORM item to domain model."""
        return WatchlistItem(
            item_id=orm.item_id,
            watchlist_id=orm.watchlist_id,
            symbol=orm.symbol,
            added_at_est=orm.added_at_est,
        )
