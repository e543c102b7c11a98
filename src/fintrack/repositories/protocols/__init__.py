"""Repository protocol definitions (interfaces)."""

from fintrack.repositories.protocols.portfolio_repo import PortfolioRepository
from fintrack.repositories.protocols.position_repo import PositionRepository
from fintrack.repositories.protocols.watchlist_repo import WatchlistRepository
from fintrack.repositories.protocols.admin_repo import AdminRepository

__all__ = [
    "PortfolioRepository",
    "PositionRepository",
    "WatchlistRepository",
    "AdminRepository",
]
