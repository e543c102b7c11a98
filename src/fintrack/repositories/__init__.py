"""Repository layer - data access abstractions and implementations."""

from fintrack.repositories.protocols import (
    PortfolioRepository,
    PositionRepository,
    WatchlistRepository,
    AdminRepository,
)

__all__ = [
    "PortfolioRepository",
    "PositionRepository",
    "WatchlistRepository",
    "AdminRepository",
]
