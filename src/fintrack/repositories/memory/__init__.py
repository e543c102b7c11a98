"""In-memory repository implementations (tests and throwaway dev servers)."""

from fintrack.repositories.memory.store import InMemoryStore
from fintrack.repositories.memory.portfolio_repo import InMemoryPortfolioRepository
from fintrack.repositories.memory.position_repo import InMemoryPositionRepository
from fintrack.repositories.memory.watchlist_repo import InMemoryWatchlistRepository
from fintrack.repositories.memory.admin_repo import InMemoryAdminRepository

__all__ = [
    "InMemoryStore",
    "InMemoryPortfolioRepository",
    "InMemoryPositionRepository",
    "InMemoryWatchlistRepository",
    "InMemoryAdminRepository",
]
