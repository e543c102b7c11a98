"""In-memory implementation of PortfolioRepository."""

from dataclasses import replace
from typing import Optional

from fintrack.domain.models import Portfolio
from fintrack.repositories.memory.store import InMemoryStore


class InMemoryPortfolioRepository:
    """Dict-backed portfolio repository."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    def create(self, portfolio: Portfolio) -> Portfolio:
        self._store.portfolios[portfolio.portfolio_id] = replace(portfolio)
        return replace(portfolio)

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        portfolio = self._store.portfolios.get(portfolio_id)
        return replace(portfolio) if portfolio else None

    def list_by_user(self, user_id: str) -> list[Portfolio]:
        return [
            replace(p) for p in self._store.portfolios.values()
            if p.user_id == user_id
        ]

    def update(self, portfolio: Portfolio) -> Portfolio:
        existing = self._store.portfolios.get(portfolio.portfolio_id)
        if existing is None:
            raise ValueError(f"Portfolio not found: {portfolio.portfolio_id}")
        updated = replace(existing, name=portfolio.name, description=portfolio.description)
        self._store.portfolios[portfolio.portfolio_id] = updated
        return replace(updated)

    def delete(self, portfolio_id: str) -> None:
        """Delete a portfolio and all of its positions."""
        for position_id in [
            p.position_id for p in self._store.positions.values()
            if p.portfolio_id == portfolio_id
        ]:
            del self._store.positions[position_id]
        self._store.portfolios.pop(portfolio_id, None)
