"""View models for portfolio valuation outputs."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from fintrack.domain.models import Portfolio


@dataclass(frozen=True)
class PositionValuation:
    """Valuation of a single position row."""

    position_id: str
    symbol: str
    shares: float
    current_price: float
    current_value: float
    cost_basis: float
    gain_loss: float
    gain_loss_percent: float
    allocation_percent: float
    price_is_stale: bool


@dataclass(frozen=True)
class PortfolioValuation:
    """
    Aggregate valuation of a set of positions.

    Derived on every read; unrounded.
    """

    total_value: float = 0.0
    total_cost_basis: float = 0.0
    total_gain_loss: float = 0.0
    total_gain_loss_percent: float = 0.0
    per_position: tuple[PositionValuation, ...] = ()


@dataclass(frozen=True)
class AllocationItem:
    """Share of portfolio value held in one symbol."""

    symbol: str
    current_value: float
    allocation_percent: float
    position_count: int


@dataclass(frozen=True)
class ValuePoint:
    """Portfolio market value and cost basis on one date."""

    date: date
    market_value: float
    cost_basis: float


@dataclass
class PortfolioReport:
    """Valuation of a portfolio plus quote-coverage diagnostics."""

    portfolio: Portfolio
    valuation: PortfolioValuation
    stale_symbols: list[str] = field(default_factory=list)
    degraded: bool = False
    warning: Optional[str] = None
    as_of: Optional[datetime] = None
