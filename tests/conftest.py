"""
Pytest configuration and fixtures for portfolio tracking tests.

This module provides:
- In-memory SQLite database fixtures
- Repository fixtures for the SQLAlchemy and in-memory backends
- Scripted quote sources (fixed quotes, per-symbol failures, delays)
- Service fixtures and factory helpers
- FastAPI test client with dependency overrides
"""

import asyncio
import uuid
from datetime import date, datetime, timedelta
from typing import Callable, Optional

import pytest
from sqlalchemy import StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from fintrack.main import app
from fintrack.api import deps
from fintrack.config.settings import Settings, set_settings, reset_settings
from fintrack.repositories.sqlalchemy.database import Base, make_engine, reset_database
# Import ORM models to register them with Base before creating tables
from fintrack.repositories.sqlalchemy import orm_models  # noqa: F401
from fintrack.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyPositionRepository,
    SqlAlchemyWatchlistRepository,
    SqlAlchemyAdminRepository,
)
from fintrack.repositories.memory import InMemoryStore
from fintrack.providers.stub_provider import StubMarketDataProvider
from fintrack.services import (
    QuoteBatchFetcher,
    PortfolioService,
    PortfolioCreate,
    PositionCreate,
    WatchlistService,
    MarketDataService,
    AdminService,
)
from fintrack.core.exceptions import QuoteSourceUnavailable, SymbolNotFoundError
from fintrack.domain.models import Portfolio, Position
from fintrack.domain.views import Quote, PricePoint
from fintrack.core.timezone import EASTERN_TZ


USER_ID = "user-1"
OTHER_USER_ID = "user-2"


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = make_engine("sqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Provide an empty in-memory store."""
    return InMemoryStore()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_repo(test_session) -> SqlAlchemyPortfolioRepository:
    """Provide test PortfolioRepository."""
    return SqlAlchemyPortfolioRepository(test_session)


@pytest.fixture
def position_repo(test_session) -> SqlAlchemyPositionRepository:
    """Provide test PositionRepository."""
    return SqlAlchemyPositionRepository(test_session)


@pytest.fixture
def watchlist_repo(test_session) -> SqlAlchemyWatchlistRepository:
    """Provide test WatchlistRepository."""
    return SqlAlchemyWatchlistRepository(test_session)


@pytest.fixture
def admin_repo(test_session) -> SqlAlchemyAdminRepository:
    """Provide test AdminRepository."""
    return SqlAlchemyAdminRepository(test_session)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================


class ScriptedQuoteSource:
    """
    Deterministic market data source for testing.

    Serves fixed quotes, raises a configured exception per symbol, and can
    delay individual symbols (quotes and history). Every get_quote call is
    recorded.
    """

    FIXED_QUOTES = {
        "AAPL": 185.50,
        "GOOGL": 142.75,
        "MSFT": 378.25,
        "TSLA": 248.75,
        "SPY": 485.25,
    }

    def __init__(
        self,
        prices: Optional[dict[str, float]] = None,
        errors: Optional[dict[str, Exception]] = None,
        delays: Optional[dict[str, float]] = None,
        history: Optional[dict[str, list[PricePoint]]] = None,
        as_of: Optional[datetime] = None,
    ):
        self.prices = dict(self.FIXED_QUOTES if prices is None else prices)
        self.errors = errors or {}
        self.delays = delays or {}
        self.history = history or {}
        self.calls: list[str] = []
        self._as_of = as_of or eastern_datetime(2024, 6, 15, 16, 0, 0)

    async def get_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        if symbol in self.delays:
            await asyncio.sleep(self.delays[symbol])
        if symbol in self.errors:
            raise self.errors[symbol]
        if symbol not in self.prices:
            raise SymbolNotFoundError(symbol)
        return Quote(symbol=symbol, price=self.prices[symbol], as_of=self._as_of)

    async def get_historical(self, symbol: str, days: int = 365) -> list[PricePoint]:
        if symbol in self.delays:
            await asyncio.sleep(self.delays[symbol])
        if symbol in self.errors:
            raise self.errors[symbol]
        if symbol not in self.history:
            raise SymbolNotFoundError(symbol)
        return list(self.history[symbol])

    async def aclose(self) -> None:
        return None


class UnreachableQuoteSource(ScriptedQuoteSource):
    """Quote source whose network is always down."""

    async def get_quote(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        raise QuoteSourceUnavailable("Network unavailable")


@pytest.fixture
def quote_source() -> ScriptedQuoteSource:
    """Provide a scripted quote source with the fixed quote table."""
    return ScriptedQuoteSource()


@pytest.fixture
def unreachable_source() -> UnreachableQuoteSource:
    """Provide a quote source that always fails with a transport error."""
    return UnreachableQuoteSource()


@pytest.fixture
def market_provider() -> StubMarketDataProvider:
    """Provide test MarketDataProvider with fixed seed."""
    return StubMarketDataProvider(seed=42)


@pytest.fixture
def quote_fetcher(quote_source) -> QuoteBatchFetcher:
    """Provide a fetcher over the scripted source with caching disabled."""
    return QuoteBatchFetcher(source=quote_source, timeout_seconds=1.0, cache_ttl_seconds=0)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_service(portfolio_repo, position_repo, quote_fetcher, quote_source) -> PortfolioService:
    """Provide test PortfolioService."""
    return PortfolioService(
        portfolio_repo=portfolio_repo,
        position_repo=position_repo,
        quote_fetcher=quote_fetcher,
        provider=quote_source,
    )


@pytest.fixture
def watchlist_service(watchlist_repo, admin_repo, quote_fetcher) -> WatchlistService:
    """Provide test WatchlistService."""
    return WatchlistService(
        watchlist_repo=watchlist_repo,
        admin_repo=admin_repo,
        quote_fetcher=quote_fetcher,
    )


@pytest.fixture
def market_data_service(market_provider, admin_repo) -> MarketDataService:
    """Provide test MarketDataService over the stub provider."""
    return MarketDataService(provider=market_provider, admin_repo=admin_repo)


@pytest.fixture
def admin_service(admin_repo) -> AdminService:
    """Provide test AdminService."""
    return AdminService(admin_repo=admin_repo)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_factory(portfolio_service) -> Callable[..., Portfolio]:
    """Factory for creating test portfolios."""

    def _create_portfolio(
        name: Optional[str] = None,
        user_id: str = USER_ID,
        description: Optional[str] = None,
    ) -> Portfolio:
        if name is None:
            name = f"Test Portfolio {uuid.uuid4().hex[:8]}"
        return portfolio_service.create_portfolio(
            user_id,
            PortfolioCreate(name=name, description=description),
        )

    return _create_portfolio


@pytest.fixture
def position_factory(portfolio_service) -> Callable[..., Position]:
    """Factory for adding positions to a portfolio."""

    def _add_position(
        portfolio_id: str,
        symbol: str,
        shares: float,
        purchase_price: float,
        purchase_date: Optional[date] = None,
        user_id: str = USER_ID,
    ) -> Position:
        return portfolio_service.add_position(
            portfolio_id,
            user_id,
            PositionCreate(
                symbol=symbol,
                shares=shares,
                purchase_price=purchase_price,
                purchase_date=purchase_date or date(2024, 1, 15),
            ),
        )

    return _add_position


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_portfolio(portfolio_factory) -> Portfolio:
    """Create a sample portfolio."""
    return portfolio_factory(name="Retirement")


@pytest.fixture
def sample_portfolio_with_positions(sample_portfolio, position_factory) -> Portfolio:
    """
    Sample portfolio holding 10 AAPL @ 150 and 5 MSFT @ 300.

    With the fixed quotes: AAPL 1855.00 vs 1500.00 cost, MSFT 1891.25 vs 1500.00.
    """
    position_factory(sample_portfolio.portfolio_id, "AAPL", 10, 150.0)
    position_factory(sample_portfolio.portfolio_id, "MSFT", 5, 300.0)
    return sample_portfolio


def make_position(
    symbol: str,
    shares: float,
    purchase_price: float,
    position_id: Optional[str] = None,
    purchase_date: date = date(2024, 1, 15),
) -> Position:
    """Build a Position without persisting it."""
    return Position(
        position_id=position_id or f"pos-{uuid.uuid4().hex[:8]}",
        portfolio_id="portfolio-1",
        symbol=symbol,
        shares=shares,
        purchase_price=purchase_price,
        purchase_date=purchase_date,
    )


def make_quote(symbol: str, price: float) -> Quote:
    """Build a Quote at a fixed timestamp."""
    return Quote(symbol=symbol, price=price, as_of=eastern_datetime(2024, 6, 15, 16, 0, 0))


def daily_points(start: date, closes: list[float]) -> list[PricePoint]:
    """PricePoints on consecutive days starting at `start`."""
    return [PricePoint(date=start + timedelta(days=i), close=c) for i, c in enumerate(closes)]


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_source() -> StubMarketDataProvider:
    """Market data provider used behind the API client."""
    return StubMarketDataProvider(seed=42)


@pytest.fixture
def client(test_engine, api_source) -> TestClient:
    """Provide FastAPI test client with test database and stub market data."""
    set_settings(Settings(database_url="sqlite:///:memory:", market_data_provider="stub"))
    reset_database()
    deps.reset_dependencies()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_storage():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    fetcher = QuoteBatchFetcher(source=api_source, timeout_seconds=1.0, cache_ttl_seconds=0)

    app.dependency_overrides[deps.get_storage] = override_get_storage
    app.dependency_overrides[deps.get_market_provider] = lambda: api_source
    app.dependency_overrides[deps.get_quote_fetcher] = lambda: fetcher
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    deps.reset_dependencies()
    reset_database()
    reset_settings()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers identifying the default test user."""
    return {"X-User-Id": USER_ID}


@pytest.fixture
def other_headers() -> dict[str, str]:
    """Headers identifying a second user."""
    return {"X-User-Id": OTHER_USER_ID}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Headers identifying an administrator."""
    return {"X-User-Id": "admin-1", "X-User-Role": "admin"}


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_float_equal(actual: float, expected: float, tolerance: float = 1e-6) -> None:
    """Assert two floats are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
