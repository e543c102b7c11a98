"""Pydantic schemas for portfolio endpoints."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class PortfolioCreateRequest(BaseModel):
    """Request schema for creating a portfolio."""

    name: str = Field(..., min_length=1, max_length=255, description="Portfolio name")
    description: Optional[str] = Field(default=None, max_length=2000)


class PortfolioUpdateRequest(BaseModel):
    """Request schema for updating a portfolio (all fields optional)."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)


class PortfolioResponse(BaseModel):
    """Response schema for a single portfolio."""

    model_config = {"from_attributes": True}

    portfolio_id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at_est: Optional[datetime] = None


class PortfolioListResponse(BaseModel):
    """Response schema for listing portfolios."""

    portfolios: list[PortfolioResponse]
    count: int


class PositionCreateRequest(BaseModel):
    """Request schema for adding a position."""

    symbol: str = Field(..., min_length=1, max_length=20, description="Ticker symbol")
    shares: float = Field(..., gt=0)
    purchase_price: float = Field(..., gt=0)
    purchase_date: Optional[date] = Field(default=None, description="Defaults to today (US/Eastern)")
    notes: Optional[str] = Field(default=None, max_length=2000)


class PositionUpdateRequest(BaseModel):
    """Request schema for editing a position (all fields optional)."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=20)
    shares: Optional[float] = Field(default=None, gt=0)
    purchase_price: Optional[float] = Field(default=None, gt=0)
    purchase_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=2000)


class PositionResponse(BaseModel):
    """Response schema for a stored position."""

    model_config = {"from_attributes": True}

    position_id: str
    portfolio_id: str
    symbol: str
    shares: float
    purchase_price: float
    purchase_date: date
    cost_basis: float
    notes: Optional[str] = None


class PositionListResponse(BaseModel):
    """Response schema for listing positions."""

    positions: list[PositionResponse]
    count: int


class PositionValuationResponse(BaseModel):
    """Valuation of one position, rounded for display."""

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


class ValuationResponse(BaseModel):
    """Response schema for a portfolio valuation."""

    portfolio_id: str
    name: str
    total_value: float
    total_cost_basis: float
    total_gain_loss: float
    total_gain_loss_percent: float
    positions: list[PositionValuationResponse]
    stale_symbols: list[str]
    degraded: bool = False
    warning: Optional[str] = None
    as_of: Optional[datetime] = None


class AllocationItemResponse(BaseModel):
    """Response schema for a single allocation item."""

    symbol: str
    current_value: float
    allocation_percent: float
    position_count: int


class AllocationResponse(BaseModel):
    """Response schema for allocation breakdown."""

    items: list[AllocationItemResponse]
    total_value: float


class ValuePointResponse(BaseModel):
    """One day of portfolio value history."""

    date: date
    market_value: float
    cost_basis: float


class HistoryResponse(BaseModel):
    """Response schema for portfolio value history."""

    portfolio_id: str
    days: int
    points: list[ValuePointResponse]
