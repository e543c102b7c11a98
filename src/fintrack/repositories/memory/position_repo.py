"""In-memory implementation of PositionRepository."""

from dataclasses import replace
from typing import Optional

from fintrack.domain.models import Position
from fintrack.repositories.memory.store import InMemoryStore


class InMemoryPositionRepository:
    """Dict-backed position repository."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    def create(self, position: Position) -> Position:
        self._store.positions[position.position_id] = replace(position)
        return replace(position)

    def get_by_id(self, position_id: str) -> Optional[Position]:
        position = self._store.positions.get(position_id)
        return replace(position) if position else None

    def list_by_portfolio(self, portfolio_id: str) -> list[Position]:
        """List positions of a portfolio ordered by purchase date (stable)."""
        positions = [
            replace(p) for p in self._store.positions.values()
            if p.portfolio_id == portfolio_id
        ]
        return sorted(positions, key=lambda p: p.purchase_date)

    def update(self, position: Position) -> Position:
        if position.position_id not in self._store.positions:
            raise ValueError(f"Position not found: {position.position_id}")
        self._store.positions[position.position_id] = replace(position)
        return replace(position)

    def delete(self, position_id: str) -> None:
        self._store.positions.pop(position_id, None)
