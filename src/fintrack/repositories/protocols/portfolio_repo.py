"""Portfolio repository protocol."""

from typing import Protocol, Optional

from fintrack.domain.models import Portfolio


class PortfolioRepository(Protocol):
    """Interface for portfolio data access."""

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        ...

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        """Retrieve portfolio by ID."""
        ...

    def list_by_user(self, user_id: str) -> list[Portfolio]:
        """List all portfolios owned by a user, oldest first."""
        ...

    def update(self, portfolio: Portfolio) -> Portfolio:
        """Update name/description of an existing portfolio."""
        ...

    def delete(self, portfolio_id: str) -> None:
        """Delete a portfolio and all of its positions."""
        ...
