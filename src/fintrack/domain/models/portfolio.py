"""Portfolio and Position domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass
class Portfolio:
    """
    Named collection of positions owned by a single user.

    Names need not be unique. Deleting a portfolio removes its positions.
    """

    portfolio_id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at_est: Optional[datetime] = field(default=None)


@dataclass
class Position:
    """
    A single purchase lot of a security within a portfolio.

    Invariant: shares > 0 and purchase_price > 0. Several positions may share
    a symbol; they are never merged.
    """

    position_id: str
    portfolio_id: str
    symbol: str
    shares: float
    purchase_price: float
    purchase_date: date
    notes: Optional[str] = None

    @property
    def cost_basis(self) -> float:
        """Original investment amount: shares × purchase price."""
        return self.shares * self.purchase_price
