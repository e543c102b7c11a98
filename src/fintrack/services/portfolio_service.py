"""Portfolio service: portfolio and position management plus valuation."""

import asyncio
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from fintrack.core.timezone import now_eastern, today_eastern
from fintrack.core.exceptions import (
    ValidationError,
    NotFoundError,
    ForbiddenError,
    QuoteSourceError,
    QuoteSourceUnavailable,
)
from fintrack.domain.models import Portfolio, Position
from fintrack.domain.views import PortfolioReport, AllocationItem, ValuePoint
from fintrack.providers.market_data_provider import MarketDataProvider
from fintrack.repositories.protocols import PortfolioRepository, PositionRepository
from fintrack.services.quote_fetcher import QuoteBatchFetcher, normalize_symbols
from fintrack.services.valuation_engine import valuate, allocation_by_symbol, value_series

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


@dataclass
class PortfolioCreate:
    """Input data for creating a portfolio."""

    name: str
    description: Optional[str] = None


@dataclass
class PortfolioUpdate:
    """Partial update data for a portfolio."""

    name: Optional[str] = None
    description: Optional[str] = None


@dataclass
class PositionCreate:
    """Input data for adding a position."""

    symbol: str
    shares: float
    purchase_price: float
    purchase_date: Optional[date] = None
    notes: Optional[str] = None


@dataclass
class PositionUpdate:
    """Partial update data for editing a position."""

    symbol: Optional[str] = None
    shares: Optional[float] = None
    purchase_price: Optional[float] = None
    purchase_date: Optional[date] = None
    notes: Optional[str] = None


def _clean_name(name: Optional[str]) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name must be at most {MAX_NAME_LENGTH} characters")
    return cleaned


def _clean_symbol(symbol: Optional[str]) -> str:
    cleaned = (symbol or "").strip().upper()
    if not cleaned:
        raise ValidationError("Symbol is required")
    return cleaned


def _check_positive(label: str, value: float) -> float:
    if value is None or not math.isfinite(value) or value <= 0:
        raise ValidationError(f"{label} must be greater than 0")
    return value


class PortfolioService:
    """
    Service for managing portfolios and valuing them.

    Portfolios are owned by a single user; every operation checks ownership.
    Valuation loads positions, fetches quotes for the distinct symbols and
    hands both to the valuation engine.
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        position_repo: PositionRepository,
        quote_fetcher: QuoteBatchFetcher,
        provider: MarketDataProvider,
        stale_warning_ratio: float = 0.5,
        fail_on_quote_outage: bool = False,
        history_timeout_seconds: float = 8.0,
    ):
        self._portfolio_repo = portfolio_repo
        self._position_repo = position_repo
        self._quote_fetcher = quote_fetcher
        self._provider = provider
        self._stale_warning_ratio = stale_warning_ratio
        self._fail_on_quote_outage = fail_on_quote_outage
        self._history_timeout_seconds = history_timeout_seconds

    # Portfolios

    def create_portfolio(self, user_id: str, data: PortfolioCreate) -> Portfolio:
        portfolio = Portfolio(
            portfolio_id=str(uuid.uuid4()),
            user_id=user_id,
            name=_clean_name(data.name),
            description=data.description,
            created_at_est=now_eastern(),
        )
        created = self._portfolio_repo.create(portfolio)
        logger.info("Created portfolio %s for user %s", created.portfolio_id, user_id)
        return created

    def list_portfolios(self, user_id: str) -> list[Portfolio]:
        return self._portfolio_repo.list_by_user(user_id)

    def get_portfolio(self, portfolio_id: str, user_id: str) -> Portfolio:
        """Get a portfolio the user owns. NotFoundError if missing, ForbiddenError if not theirs."""
        portfolio = self._portfolio_repo.get_by_id(portfolio_id)
        if not portfolio:
            raise NotFoundError("Portfolio", portfolio_id)
        if portfolio.user_id != user_id:
            raise ForbiddenError("You do not have access to this portfolio")
        return portfolio

    def update_portfolio(self, portfolio_id: str, user_id: str, patch: PortfolioUpdate) -> Portfolio:
        portfolio = self.get_portfolio(portfolio_id, user_id)
        if patch.name is not None:
            portfolio.name = _clean_name(patch.name)
        if patch.description is not None:
            portfolio.description = patch.description
        return self._portfolio_repo.update(portfolio)

    def delete_portfolio(self, portfolio_id: str, user_id: str) -> None:
        """Delete a portfolio and all of its positions."""
        self.get_portfolio(portfolio_id, user_id)
        self._portfolio_repo.delete(portfolio_id)
        logger.info("Deleted portfolio %s", portfolio_id)

    # Positions

    def list_positions(self, portfolio_id: str, user_id: str) -> list[Position]:
        self.get_portfolio(portfolio_id, user_id)
        return self._position_repo.list_by_portfolio(portfolio_id)

    def add_position(self, portfolio_id: str, user_id: str, data: PositionCreate) -> Position:
        """
        Add a position to a portfolio.

        Symbols are stored upper-cased; purchase date defaults to today (US/Eastern).
        """
        self.get_portfolio(portfolio_id, user_id)
        position = Position(
            position_id=str(uuid.uuid4()),
            portfolio_id=portfolio_id,
            symbol=_clean_symbol(data.symbol),
            shares=_check_positive("Shares", data.shares),
            purchase_price=_check_positive("Purchase price", data.purchase_price),
            purchase_date=data.purchase_date or today_eastern(),
            notes=data.notes,
        )
        return self._position_repo.create(position)

    def _get_owned_position(self, portfolio_id: str, position_id: str, user_id: str) -> Position:
        self.get_portfolio(portfolio_id, user_id)
        position = self._position_repo.get_by_id(position_id)
        if not position or position.portfolio_id != portfolio_id:
            raise NotFoundError("Position", position_id)
        return position

    def update_position(
        self,
        portfolio_id: str,
        position_id: str,
        user_id: str,
        patch: PositionUpdate,
    ) -> Position:
        position = self._get_owned_position(portfolio_id, position_id, user_id)
        if patch.symbol is not None:
            position.symbol = _clean_symbol(patch.symbol)
        if patch.shares is not None:
            position.shares = _check_positive("Shares", patch.shares)
        if patch.purchase_price is not None:
            position.purchase_price = _check_positive("Purchase price", patch.purchase_price)
        if patch.purchase_date is not None:
            position.purchase_date = patch.purchase_date
        if patch.notes is not None:
            position.notes = patch.notes
        return self._position_repo.update(position)

    def remove_position(self, portfolio_id: str, position_id: str, user_id: str) -> None:
        self._get_owned_position(portfolio_id, position_id, user_id)
        self._position_repo.delete(position_id)

    # Valuation

    async def value_portfolio(self, portfolio_id: str, user_id: str) -> PortfolioReport:
        """
        Value a portfolio at current quotes.

        Symbols without a quote are valued at purchase price and listed in
        `stale_symbols`. When the quote source is down entirely the report is
        degraded (everything stale) unless `fail_on_quote_outage` is set, in
        which case QuoteSourceUnavailable propagates.
        """
        portfolio = self.get_portfolio(portfolio_id, user_id)
        positions = self._position_repo.list_by_portfolio(portfolio_id)
        symbols = normalize_symbols(p.symbol for p in positions)

        degraded = False
        try:
            quotes = await self._quote_fetcher.fetch_all(symbols)
        except QuoteSourceUnavailable:
            if self._fail_on_quote_outage:
                raise
            logger.error("Quote source down; valuing portfolio %s at purchase prices", portfolio_id)
            quotes = {}
            degraded = True

        valuation = valuate(positions, quotes)
        stale_symbols = sorted(
            normalize_symbols(row.symbol for row in valuation.per_position if row.price_is_stale)
        )

        warning = None
        if degraded:
            warning = "Market data is unavailable; all positions are valued at purchase price"
        elif symbols and len(stale_symbols) / len(symbols) > self._stale_warning_ratio:
            warning = (
                f"Quotes unavailable for {len(stale_symbols)} of {len(symbols)} symbols; "
                "values may be out of date"
            )

        logger.info(
            "Valued portfolio %s: %d positions, %d stale symbol(s)",
            portfolio_id,
            len(positions),
            len(stale_symbols),
        )
        return PortfolioReport(
            portfolio=portfolio,
            valuation=valuation,
            stale_symbols=stale_symbols,
            degraded=degraded,
            warning=warning,
            as_of=now_eastern(),
        )

    async def get_allocation(self, portfolio_id: str, user_id: str) -> list[AllocationItem]:
        """Allocation grouped by symbol, largest first."""
        report = await self.value_portfolio(portfolio_id, user_id)
        return allocation_by_symbol(report.valuation)

    async def value_history(self, portfolio_id: str, user_id: str, days: int = 90) -> list[ValuePoint]:
        """
        Daily market value and cost basis over the last `days` days.

        Symbols whose history cannot be fetched in time fall back to purchase price.
        """
        if days < 1:
            raise ValidationError("days must be at least 1")
        self.get_portfolio(portfolio_id, user_id)
        positions = self._position_repo.list_by_portfolio(portfolio_id)
        if not positions:
            return []

        symbols = normalize_symbols(p.symbol for p in positions)
        series = await asyncio.gather(*(self._closes_for(symbol, days) for symbol in symbols))
        closes = {symbol: points for symbol, points in zip(symbols, series)}

        # `days` points including today
        cutoff = today_eastern() - timedelta(days=days - 1)
        return [point for point in value_series(positions, closes) if point.date >= cutoff]

    async def _closes_for(self, symbol: str, days: int) -> dict[date, float]:
        try:
            points = await asyncio.wait_for(
                self._provider.get_historical(symbol, days=days),
                timeout=self._history_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("History for %s timed out after %.1fs", symbol, self._history_timeout_seconds)
            return {}
        except QuoteSourceError as exc:
            logger.warning("History for %s unavailable: %s", symbol, exc.message)
            return {}
        return {point.date: point.close for point in points}
