"""SQLAlchemy repository implementations."""

from fintrack.repositories.sqlalchemy.database import (
    make_engine,
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from fintrack.repositories.sqlalchemy.portfolio_repo import SqlAlchemyPortfolioRepository
from fintrack.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from fintrack.repositories.sqlalchemy.watchlist_repo import SqlAlchemyWatchlistRepository
from fintrack.repositories.sqlalchemy.admin_repo import SqlAlchemyAdminRepository

__all__ = [
    "make_engine",
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyPortfolioRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyWatchlistRepository",
    "SqlAlchemyAdminRepository",
]
