"""Portfolio, position and valuation endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from fintrack.api.deps import get_current_user_id, get_portfolio_service
from fintrack.api.schemas import (
    PortfolioCreateRequest,
    PortfolioUpdateRequest,
    PortfolioResponse,
    PortfolioListResponse,
    PositionCreateRequest,
    PositionUpdateRequest,
    PositionResponse,
    PositionListResponse,
    PositionValuationResponse,
    ValuationResponse,
    AllocationItemResponse,
    AllocationResponse,
    ValuePointResponse,
    HistoryResponse,
)
from fintrack.config.settings import get_settings
from fintrack.domain.views import PortfolioReport
from fintrack.services import (
    PortfolioService,
    PortfolioCreate,
    PortfolioUpdate,
    PositionCreate,
    PositionUpdate,
)

router = APIRouter(prefix="/portfolios", tags=["portfolios"])


def _round(value: float) -> float:
    """Two-decimal display rounding for currency and percentages."""
    return round(value, 2)


def _valuation_response(report: PortfolioReport) -> ValuationResponse:
    valuation = report.valuation
    return ValuationResponse(
        portfolio_id=report.portfolio.portfolio_id,
        name=report.portfolio.name,
        total_value=_round(valuation.total_value),
        total_cost_basis=_round(valuation.total_cost_basis),
        total_gain_loss=_round(valuation.total_gain_loss),
        total_gain_loss_percent=_round(valuation.total_gain_loss_percent),
        positions=[
            PositionValuationResponse(
                position_id=row.position_id,
                symbol=row.symbol,
                shares=row.shares,
                current_price=_round(row.current_price),
                current_value=_round(row.current_value),
                cost_basis=_round(row.cost_basis),
                gain_loss=_round(row.gain_loss),
                gain_loss_percent=_round(row.gain_loss_percent),
                allocation_percent=_round(row.allocation_percent),
                price_is_stale=row.price_is_stale,
            )
            for row in valuation.per_position
        ],
        stale_symbols=report.stale_symbols,
        degraded=report.degraded,
        warning=report.warning,
        as_of=report.as_of,
    )


# Portfolios


@router.get("", response_model=PortfolioListResponse)
def list_portfolios(
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioListResponse:
    """List the caller's portfolios."""
    portfolios = service.list_portfolios(user_id)
    return PortfolioListResponse(
        portfolios=[PortfolioResponse.model_validate(p) for p in portfolios],
        count=len(portfolios),
    )


@router.post("", response_model=PortfolioResponse, status_code=201)
def create_portfolio(
    data: PortfolioCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    """Create a portfolio owned by the caller."""
    portfolio = service.create_portfolio(
        user_id,
        PortfolioCreate(name=data.name, description=data.description),
    )
    return PortfolioResponse.model_validate(portfolio)


@router.get("/{portfolio_id}", response_model=PortfolioResponse)
def get_portfolio(
    portfolio_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    return PortfolioResponse.model_validate(service.get_portfolio(portfolio_id, user_id))


@router.patch("/{portfolio_id}", response_model=PortfolioResponse)
def update_portfolio(
    portfolio_id: str,
    data: PortfolioUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioResponse:
    portfolio = service.update_portfolio(
        portfolio_id,
        user_id,
        PortfolioUpdate(name=data.name, description=data.description),
    )
    return PortfolioResponse.model_validate(portfolio)


@router.delete("/{portfolio_id}", status_code=204)
def delete_portfolio(
    portfolio_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Response:
    """Delete a portfolio and its positions."""
    service.delete_portfolio(portfolio_id, user_id)
    return Response(status_code=204)


# Positions


@router.get("/{portfolio_id}/positions", response_model=PositionListResponse)
def list_positions(
    portfolio_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PositionListResponse:
    positions = service.list_positions(portfolio_id, user_id)
    return PositionListResponse(
        positions=[PositionResponse.model_validate(p) for p in positions],
        count=len(positions),
    )


@router.post("/{portfolio_id}/positions", response_model=PositionResponse, status_code=201)
def add_position(
    portfolio_id: str,
    data: PositionCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PositionResponse:
    position = service.add_position(
        portfolio_id,
        user_id,
        PositionCreate(
            symbol=data.symbol,
            shares=data.shares,
            purchase_price=data.purchase_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        ),
    )
    return PositionResponse.model_validate(position)


@router.patch("/{portfolio_id}/positions/{position_id}", response_model=PositionResponse)
def update_position(
    portfolio_id: str,
    position_id: str,
    data: PositionUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PositionResponse:
    position = service.update_position(
        portfolio_id,
        position_id,
        user_id,
        PositionUpdate(
            symbol=data.symbol,
            shares=data.shares,
            purchase_price=data.purchase_price,
            purchase_date=data.purchase_date,
            notes=data.notes,
        ),
    )
    return PositionResponse.model_validate(position)


@router.delete("/{portfolio_id}/positions/{position_id}", status_code=204)
def remove_position(
    portfolio_id: str,
    position_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> Response:
    service.remove_position(portfolio_id, position_id, user_id)
    return Response(status_code=204)


# Valuation


@router.get("/{portfolio_id}/valuation", response_model=ValuationResponse)
async def get_valuation(
    portfolio_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> ValuationResponse:
    """Current value, gain/loss and allocation of every position."""
    report = await service.value_portfolio(portfolio_id, user_id)
    return _valuation_response(report)


@router.get("/{portfolio_id}/allocation", response_model=AllocationResponse)
async def get_allocation(
    portfolio_id: str,
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> AllocationResponse:
    """Allocation grouped by symbol, largest holding first."""
    items = await service.get_allocation(portfolio_id, user_id)
    return AllocationResponse(
        items=[
            AllocationItemResponse(
                symbol=item.symbol,
                current_value=_round(item.current_value),
                allocation_percent=_round(item.allocation_percent),
                position_count=item.position_count,
            )
            for item in items
        ],
        total_value=_round(sum(item.current_value for item in items)),
    )


@router.get("/{portfolio_id}/history", response_model=HistoryResponse)
async def get_history(
    portfolio_id: str,
    days: Optional[int] = Query(None, ge=1, le=3650, description="Look-back window in days"),
    user_id: str = Depends(get_current_user_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> HistoryResponse:
    """Daily market value and cost basis."""
    days = days or get_settings().history_default_days
    points = await service.value_history(portfolio_id, user_id, days=days)
    return HistoryResponse(
        portfolio_id=portfolio_id,
        days=days,
        points=[
            ValuePointResponse(
                date=point.date,
                market_value=_round(point.market_value),
                cost_basis=_round(point.cost_basis),
            )
            for point in points
        ],
    )
