"""
Unit tests for PortfolioService.

Tests cover:
- Portfolio CRUD and ownership checks
- Position validation, updates and removal
- Cascade delete
- Valuation reports (stale symbols, warnings, degraded mode)
- Allocation and value history
"""

import asyncio
import math
from datetime import date, timedelta

import pytest

from fintrack.core.exceptions import (
    ValidationError,
    NotFoundError,
    ForbiddenError,
    QuoteSourceUnavailable,
    InvalidPositionError,
)
from fintrack.core.timezone import today_eastern
from fintrack.repositories.memory import (
    InMemoryStore,
    InMemoryPortfolioRepository,
    InMemoryPositionRepository,
)
from fintrack.services import (
    PortfolioService,
    PortfolioCreate,
    PortfolioUpdate,
    PositionCreate,
    PositionUpdate,
    QuoteBatchFetcher,
)

from tests.conftest import (
    USER_ID,
    OTHER_USER_ID,
    ScriptedQuoteSource,
    UnreachableQuoteSource,
    daily_points,
)


def build_service(source, **kwargs) -> PortfolioService:
    """PortfolioService over in-memory repositories and the given source."""
    store = InMemoryStore()
    return PortfolioService(
        portfolio_repo=InMemoryPortfolioRepository(store),
        position_repo=InMemoryPositionRepository(store),
        quote_fetcher=QuoteBatchFetcher(source=source, timeout_seconds=1.0, cache_ttl_seconds=0),
        provider=source,
        **kwargs,
    )


# =============================================================================
# PORTFOLIO CRUD TESTS
# =============================================================================


class TestPortfolioCrud:
    """Tests for portfolio create/read/update/delete."""

    def test_create_portfolio_strips_name(self, portfolio_service: PortfolioService):
        """
        GIVEN a name with surrounding whitespace
        WHEN I create a portfolio
        THEN it is stored trimmed, owned by the caller, with an id and timestamp
        """
        portfolio = portfolio_service.create_portfolio(USER_ID, PortfolioCreate(name="  Growth  "))

        assert portfolio.name == "Growth"
        assert portfolio.user_id == USER_ID
        assert portfolio.portfolio_id
        assert portfolio.created_at_est is not None

    def test_create_portfolio_blank_name_raises(self, portfolio_service: PortfolioService):
        with pytest.raises(ValidationError):
            portfolio_service.create_portfolio(USER_ID, PortfolioCreate(name="   "))

    def test_create_portfolio_name_too_long_raises(self, portfolio_service: PortfolioService):
        with pytest.raises(ValidationError):
            portfolio_service.create_portfolio(USER_ID, PortfolioCreate(name="x" * 256))

    def test_names_need_not_be_unique(self, portfolio_factory):
        first = portfolio_factory(name="Same")
        second = portfolio_factory(name="Same")

        assert first.portfolio_id != second.portfolio_id

    def test_list_portfolios_only_returns_own(self, portfolio_service, portfolio_factory):
        """
        GIVEN portfolios for two users
        WHEN user 1 lists portfolios
        THEN only their portfolios are returned
        """
        portfolio_factory(name="Mine")
        portfolio_factory(name="Theirs", user_id=OTHER_USER_ID)

        names = [p.name for p in portfolio_service.list_portfolios(USER_ID)]

        assert names == ["Mine"]

    def test_get_missing_portfolio_raises_not_found(self, portfolio_service):
        with pytest.raises(NotFoundError):
            portfolio_service.get_portfolio("missing", USER_ID)

    def test_get_other_users_portfolio_is_forbidden(self, portfolio_service, sample_portfolio):
        with pytest.raises(ForbiddenError):
            portfolio_service.get_portfolio(sample_portfolio.portfolio_id, OTHER_USER_ID)

    def test_update_portfolio(self, portfolio_service, sample_portfolio):
        updated = portfolio_service.update_portfolio(
            sample_portfolio.portfolio_id,
            USER_ID,
            PortfolioUpdate(name="Renamed", description="Long term"),
        )

        assert updated.name == "Renamed"
        assert updated.description == "Long term"

    def test_delete_by_non_owner_is_forbidden(self, portfolio_service, sample_portfolio):
        """
        GIVEN a portfolio owned by user 1
        WHEN user 2 deletes it
        THEN ForbiddenError is raised and the portfolio survives
        """
        with pytest.raises(ForbiddenError):
            portfolio_service.delete_portfolio(sample_portfolio.portfolio_id, OTHER_USER_ID)

        assert portfolio_service.get_portfolio(sample_portfolio.portfolio_id, USER_ID)

    def test_delete_cascades_to_positions(
        self,
        portfolio_service,
        sample_portfolio_with_positions,
        position_repo,
    ):
        """
        GIVEN a portfolio with two positions
        WHEN the owner deletes it
        THEN its positions are gone too
        """
        portfolio_id = sample_portfolio_with_positions.portfolio_id

        portfolio_service.delete_portfolio(portfolio_id, USER_ID)

        assert position_repo.list_by_portfolio(portfolio_id) == []
        with pytest.raises(NotFoundError):
            portfolio_service.get_portfolio(portfolio_id, USER_ID)


# =============================================================================
# POSITION TESTS
# =============================================================================


class TestPositions:
    """Tests for position management."""

    def test_add_position_normalises_symbol(self, portfolio_service, sample_portfolio):
        position = portfolio_service.add_position(
            sample_portfolio.portfolio_id,
            USER_ID,
            PositionCreate(symbol=" aapl ", shares=10, purchase_price=150.0, purchase_date=date(2024, 1, 2)),
        )

        assert position.symbol == "AAPL"
        assert position.cost_basis == 1500.0

    def test_add_position_defaults_purchase_date_to_today(self, portfolio_service, sample_portfolio):
        position = portfolio_service.add_position(
            sample_portfolio.portfolio_id,
            USER_ID,
            PositionCreate(symbol="AAPL", shares=1, purchase_price=1.0),
        )

        assert position.purchase_date == today_eastern()

    @pytest.mark.parametrize(
        "symbol,shares,price",
        [
            ("", 1, 1.0),
            ("AAPL", 0, 1.0),
            ("AAPL", -2, 1.0),
            ("AAPL", 1, 0.0),
            ("AAPL", 1, float("nan")),
        ],
    )
    def test_add_invalid_position_raises(self, portfolio_service, sample_portfolio, symbol, shares, price):
        with pytest.raises(ValidationError):
            portfolio_service.add_position(
                sample_portfolio.portfolio_id,
                USER_ID,
                PositionCreate(symbol=symbol, shares=shares, purchase_price=price),
            )

    def test_add_position_to_other_users_portfolio_is_forbidden(self, portfolio_service, sample_portfolio):
        with pytest.raises(ForbiddenError):
            portfolio_service.add_position(
                sample_portfolio.portfolio_id,
                OTHER_USER_ID,
                PositionCreate(symbol="AAPL", shares=1, purchase_price=1.0),
            )

    def test_update_position(self, portfolio_service, sample_portfolio, position_factory):
        position = position_factory(sample_portfolio.portfolio_id, "AAPL", 10, 150.0)

        updated = portfolio_service.update_position(
            sample_portfolio.portfolio_id,
            position.position_id,
            USER_ID,
            PositionUpdate(shares=12, notes="added more"),
        )

        assert updated.shares == 12
        assert updated.purchase_price == 150.0
        assert updated.notes == "added more"

    def test_update_position_rejects_non_positive_shares(
        self, portfolio_service, sample_portfolio, position_factory
    ):
        position = position_factory(sample_portfolio.portfolio_id, "AAPL", 10, 150.0)

        with pytest.raises(ValidationError):
            portfolio_service.update_position(
                sample_portfolio.portfolio_id,
                position.position_id,
                USER_ID,
                PositionUpdate(shares=0),
            )

    def test_position_must_belong_to_given_portfolio(
        self, portfolio_service, portfolio_factory, position_factory
    ):
        """
        GIVEN a position in portfolio A
        WHEN I address it through portfolio B
        THEN NotFoundError is raised
        """
        portfolio_a = portfolio_factory(name="A")
        portfolio_b = portfolio_factory(name="B")
        position = position_factory(portfolio_a.portfolio_id, "AAPL", 1, 1.0)

        with pytest.raises(NotFoundError):
            portfolio_service.remove_position(portfolio_b.portfolio_id, position.position_id, USER_ID)

    def test_remove_position(self, portfolio_service, sample_portfolio, position_factory):
        position = position_factory(sample_portfolio.portfolio_id, "AAPL", 10, 150.0)

        portfolio_service.remove_position(sample_portfolio.portfolio_id, position.position_id, USER_ID)

        assert portfolio_service.list_positions(sample_portfolio.portfolio_id, USER_ID) == []

    def test_list_positions_ordered_by_purchase_date(
        self, portfolio_service, sample_portfolio, position_factory
    ):
        position_factory(sample_portfolio.portfolio_id, "MSFT", 1, 1.0, purchase_date=date(2024, 3, 1))
        position_factory(sample_portfolio.portfolio_id, "AAPL", 1, 1.0, purchase_date=date(2024, 1, 1))

        symbols = [p.symbol for p in portfolio_service.list_positions(sample_portfolio.portfolio_id, USER_ID)]

        assert symbols == ["AAPL", "MSFT"]


# =============================================================================
# VALUATION TESTS
# =============================================================================


class TestValuePortfolio:
    """Tests for value_portfolio()."""

    @pytest.mark.asyncio
    async def test_values_positions_at_current_quotes(
        self,
        portfolio_service,
        sample_portfolio_with_positions,
    ):
        """
        GIVEN 10 AAPL @ 150 and 5 MSFT @ 300 with quotes 185.50 and 378.25
        WHEN I value the portfolio
        THEN totals reflect current prices and nothing is stale
        """
        report = await portfolio_service.value_portfolio(
            sample_portfolio_with_positions.portfolio_id, USER_ID
        )

        assert report.valuation.total_value == pytest.approx(1855.0 + 1891.25)
        assert report.valuation.total_cost_basis == pytest.approx(3000.0)
        assert report.stale_symbols == []
        assert report.degraded is False
        assert report.warning is None
        assert report.as_of is not None

    @pytest.mark.asyncio
    async def test_empty_portfolio_values_to_zero(self, portfolio_service, sample_portfolio, quote_source):
        report = await portfolio_service.value_portfolio(sample_portfolio.portfolio_id, USER_ID)

        assert report.valuation.total_value == 0
        assert report.valuation.per_position == ()
        assert quote_source.calls == []

    @pytest.mark.asyncio
    async def test_distinct_symbols_fetched_once(self, portfolio_service, sample_portfolio, position_factory, quote_source):
        position_factory(sample_portfolio.portfolio_id, "AAPL", 1, 100.0)
        position_factory(sample_portfolio.portfolio_id, "AAPL", 2, 120.0)

        report = await portfolio_service.value_portfolio(sample_portfolio.portfolio_id, USER_ID)

        assert quote_source.calls == ["AAPL"]
        assert len(report.valuation.per_position) == 2

    @pytest.mark.asyncio
    async def test_missing_quotes_listed_as_stale_without_warning_below_threshold(self):
        """
        GIVEN three symbols of which one has no quote
        WHEN I value the portfolio
        THEN the symbol is listed as stale but 1/3 is under the warning ratio
        """
        service = build_service(ScriptedQuoteSource())
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        for symbol in ("AAPL", "MSFT", "NOPE"):
            service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate(symbol, 1, 10.0))

        report = await service.value_portfolio(portfolio.portfolio_id, USER_ID)

        assert report.stale_symbols == ["NOPE"]
        assert report.warning is None

    @pytest.mark.asyncio
    async def test_warning_when_most_quotes_missing(self):
        """
        GIVEN three symbols of which two have no quote
        WHEN I value the portfolio
        THEN a warning is attached
        """
        service = build_service(ScriptedQuoteSource())
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        for symbol in ("AAPL", "XXX", "YYY"):
            service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate(symbol, 1, 10.0))

        report = await service.value_portfolio(portfolio.portfolio_id, USER_ID)

        assert report.stale_symbols == ["XXX", "YYY"]
        assert report.warning is not None
        assert report.degraded is False

    @pytest.mark.asyncio
    async def test_unusable_quote_price_is_listed_as_stale(self):
        """
        GIVEN AAPL quoted with a NaN price and MSFT quoted normally
        WHEN I value the portfolio
        THEN AAPL is valued at cost and reported in stale_symbols
        """
        service = build_service(ScriptedQuoteSource(prices={"AAPL": math.nan, "MSFT": 378.25}))
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        for symbol in ("AAPL", "MSFT"):
            service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate(symbol, 1, 10.0))

        report = await service.value_portfolio(portfolio.portfolio_id, USER_ID)

        stale_rows = [row.symbol for row in report.valuation.per_position if row.price_is_stale]
        assert stale_rows == ["AAPL"]
        assert report.stale_symbols == ["AAPL"]
        assert report.warning is None

    @pytest.mark.asyncio
    async def test_unusable_quotes_count_towards_warning(self):
        service = build_service(ScriptedQuoteSource(prices={"AAPL": math.inf, "MSFT": -1.0, "TSLA": 248.75}))
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        for symbol in ("AAPL", "MSFT", "TSLA"):
            service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate(symbol, 1, 10.0))

        report = await service.value_portfolio(portfolio.portfolio_id, USER_ID)

        assert report.stale_symbols == ["AAPL", "MSFT"]
        assert report.warning is not None

    @pytest.mark.asyncio
    async def test_outage_degrades_to_purchase_prices(self):
        """
        GIVEN the quote source is unreachable
        WHEN I value the portfolio
        THEN every position is stale at purchase price and the report is degraded
        """
        service = build_service(UnreachableQuoteSource())
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("AAPL", 2, 100.0))

        report = await service.value_portfolio(portfolio.portfolio_id, USER_ID)

        assert report.degraded is True
        assert report.warning is not None
        assert report.valuation.total_value == 200.0
        assert all(row.price_is_stale for row in report.valuation.per_position)

    @pytest.mark.asyncio
    async def test_outage_propagates_when_configured(self):
        service = build_service(UnreachableQuoteSource(), fail_on_quote_outage=True)
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("AAPL", 2, 100.0))

        with pytest.raises(QuoteSourceUnavailable):
            await service.value_portfolio(portfolio.portfolio_id, USER_ID)

    @pytest.mark.asyncio
    async def test_invalid_stored_position_propagates(self, portfolio_service, sample_portfolio, position_repo):
        """
        GIVEN a stored position whose shares were corrupted to 0
        WHEN I value the portfolio
        THEN InvalidPositionError propagates
        """
        position = portfolio_service.add_position(
            sample_portfolio.portfolio_id, USER_ID, PositionCreate("AAPL", 1, 10.0)
        )
        position.shares = 0
        position_repo.update(position)

        with pytest.raises(InvalidPositionError):
            await portfolio_service.value_portfolio(sample_portfolio.portfolio_id, USER_ID)

    @pytest.mark.asyncio
    async def test_other_user_cannot_value(self, portfolio_service, sample_portfolio):
        with pytest.raises(ForbiddenError):
            await portfolio_service.value_portfolio(sample_portfolio.portfolio_id, OTHER_USER_ID)


class TestAllocationAndHistory:
    """Tests for get_allocation() and value_history()."""

    @pytest.mark.asyncio
    async def test_allocation_groups_by_symbol(self, portfolio_service, sample_portfolio, position_factory):
        position_factory(sample_portfolio.portfolio_id, "AAPL", 1, 100.0)
        position_factory(sample_portfolio.portfolio_id, "AAPL", 1, 100.0)
        position_factory(sample_portfolio.portfolio_id, "MSFT", 1, 100.0)

        items = await portfolio_service.get_allocation(sample_portfolio.portfolio_id, USER_ID)

        assert [item.symbol for item in items] == ["MSFT", "AAPL"]
        assert items[1].position_count == 2
        assert sum(item.allocation_percent for item in items) == pytest.approx(100.0)

    @pytest.mark.asyncio
    async def test_history_uses_closes_and_tolerates_missing_symbols(self):
        """
        GIVEN AAPL with three days of closes and an unknown symbol with none
        WHEN I request value history
        THEN AAPL is priced from closes and the unknown symbol at purchase price
        """
        start = today_eastern() - timedelta(days=2)
        source = ScriptedQuoteSource(history={"AAPL": daily_points(start, [100.0, 101.0, 102.0])})
        service = build_service(source)
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        purchased = start - timedelta(days=10)
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("AAPL", 2, 90.0, purchased))
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("NOPE", 1, 50.0, purchased))

        points = await service.value_history(portfolio.portfolio_id, USER_ID, days=30)

        assert [p.market_value for p in points] == [250.0, 252.0, 254.0]
        assert all(p.cost_basis == 230.0 for p in points)

    @pytest.mark.asyncio
    async def test_history_of_empty_portfolio_is_empty(self, portfolio_service, sample_portfolio):
        assert await portfolio_service.value_history(sample_portfolio.portfolio_id, USER_ID) == []

    @pytest.mark.asyncio
    async def test_history_rejects_non_positive_days(self, portfolio_service, sample_portfolio):
        with pytest.raises(ValidationError):
            await portfolio_service.value_history(sample_portfolio.portfolio_id, USER_ID, days=0)

    @pytest.mark.asyncio
    async def test_history_covers_exactly_the_requested_days(self):
        """
        GIVEN five days of closes ending today
        WHEN I request one day and then three days of history
        THEN I get one point (today) and then three points
        """
        today = today_eastern()
        source = ScriptedQuoteSource(
            history={"AAPL": daily_points(today - timedelta(days=4), [10.0, 11.0, 12.0, 13.0, 14.0])}
        )
        service = build_service(source)
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        purchased = today - timedelta(days=30)
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("AAPL", 1, 5.0, purchased))

        one_day = await service.value_history(portfolio.portfolio_id, USER_ID, days=1)
        three_days = await service.value_history(portfolio.portfolio_id, USER_ID, days=3)

        assert [p.date for p in one_day] == [today]
        assert [p.market_value for p in one_day] == [14.0]
        assert [p.date for p in three_days] == [today - timedelta(days=2), today - timedelta(days=1), today]

    @pytest.mark.asyncio
    async def test_slow_history_falls_back_to_purchase_price(self):
        """
        GIVEN MSFT history that would take an hour to arrive
        WHEN I request value history with a 0.1s history timeout
        THEN the call completes, AAPL is priced from closes and MSFT at cost
        """
        start = today_eastern() - timedelta(days=1)
        source = ScriptedQuoteSource(
            history={
                "AAPL": daily_points(start, [100.0, 110.0]),
                "MSFT": daily_points(start, [300.0, 310.0]),
            },
            delays={"MSFT": 3600.0},
        )
        service = build_service(source, history_timeout_seconds=0.1)
        portfolio = service.create_portfolio(USER_ID, PortfolioCreate(name="P"))
        purchased = start - timedelta(days=5)
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("AAPL", 1, 90.0, purchased))
        service.add_position(portfolio.portfolio_id, USER_ID, PositionCreate("MSFT", 1, 250.0, purchased))

        points = await asyncio.wait_for(
            service.value_history(portfolio.portfolio_id, USER_ID, days=30),
            timeout=5.0,
        )

        assert [p.market_value for p in points] == [350.0, 360.0]
        assert all(p.cost_basis == 340.0 for p in points)
