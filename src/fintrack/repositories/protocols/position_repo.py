"""Position repository protocol."""

from typing import Protocol, Optional

from fintrack.domain.models import Position


class PositionRepository(Protocol):
    """Interface for position data access."""

    def create(self, position: Position) -> Position:
        """Persist a new position."""
        ...

    def get_by_id(self, position_id: str) -> Optional[Position]:
        """Retrieve position by ID."""
        ...

    def list_by_portfolio(self, portfolio_id: str) -> list[Position]:
        """List positions of a portfolio ordered by purchase date."""
        ...

    def update(self, position: Position) -> Position:
        """Update an existing position."""
        ...

    def delete(self, position_id: str) -> None:
        """Delete a single position."""
        ...
