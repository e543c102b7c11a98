"""Market data service for quotes, profiles, search, news, history, market summary and featured stocks."""

import logging
import time
import uuid
from typing import Awaitable, Optional, TypeVar

from fintrack.core.timezone import now_eastern
from fintrack.core.exceptions import (
    AppError,
    ValidationError,
    RestrictedSymbolError,
    QuoteSourceUnavailable,
)
from fintrack.domain.models import ApiLog
from fintrack.domain.views import (
    Quote,
    CompanyProfile,
    SearchResult,
    NewsArticle,
    PricePoint,
    FeaturedStockQuote,
)
from fintrack.providers.market_data_provider import MarketDataProvider
from fintrack.repositories.protocols import AdminRepository
from fintrack.services.quote_fetcher import QuoteBatchFetcher

logger = logging.getLogger(__name__)

T = TypeVar("T")

MIN_QUERY_LENGTH = 2

# S&P 500, Dow Jones, NASDAQ Composite, Russell 2000, VIX
MARKET_INDICES = ("^GSPC", "^DJI", "^IXIC", "^RUT", "^VIX")


class MarketDataService:
    """
    Service for market data lookups.

    Wraps the provider with restricted-symbol checks and writes one ApiLog
    entry per provider call. Multi-symbol lookups (market summary, featured
    stocks) go through the shared QuoteBatchFetcher. A failure to write the log never fails the lookup.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        admin_repo: AdminRepository,
        quote_fetcher: Optional[QuoteBatchFetcher] = None,
    ):
        self._provider = provider
        self._admin_repo = admin_repo
        self._quote_fetcher = quote_fetcher or QuoteBatchFetcher(source=provider)

    def _normalize(self, symbol: str) -> str:
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required")
        if self._admin_repo.get_restricted_by_symbol(symbol):
            raise RestrictedSymbolError(symbol)
        return symbol

    async def _logged(self, endpoint: str, user_id: Optional[str], call: Awaitable[T]) -> T:
        request_time = now_eastern()
        started = time.perf_counter()
        error_message = None
        try:
            return await call
        except AppError as exc:
            error_message = exc.message
            raise
        except Exception as exc:
            error_message = str(exc) or exc.__class__.__name__
            raise
        finally:
            self._write_log(
                ApiLog(
                    log_id=str(uuid.uuid4()),
                    endpoint=endpoint,
                    request_time_est=request_time,
                    response_time_ms=int((time.perf_counter() - started) * 1000),
                    success=error_message is None,
                    user_id=user_id,
                    error_message=error_message,
                )
            )

    def _write_log(self, log: ApiLog) -> None:
        try:
            self._admin_repo.add_api_log(log)
        except Exception:
            logger.exception("Failed to record API log for %s", log.endpoint)

    async def get_quote(self, symbol: str, user_id: Optional[str] = None) -> Quote:
        symbol = self._normalize(symbol)
        return await self._logged(f"quote/{symbol}", user_id, self._provider.get_quote(symbol))

    async def get_profile(self, symbol: str, user_id: Optional[str] = None) -> CompanyProfile:
        symbol = self._normalize(symbol)
        return await self._logged(f"profile/{symbol}", user_id, self._provider.get_profile(symbol))

    async def get_historical(
        self,
        symbol: str,
        days: int = 365,
        user_id: Optional[str] = None,
    ) -> list[PricePoint]:
        if days < 1:
            raise ValidationError("days must be at least 1")
        symbol = self._normalize(symbol)
        return await self._logged(
            f"historical/{symbol}",
            user_id,
            self._provider.get_historical(symbol, days=days),
        )

    async def search(self, query: str, limit: int = 10, user_id: Optional[str] = None) -> list[SearchResult]:
        """Search symbols by name or ticker. Restricted symbols are filtered out."""
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        results = await self._logged("search", user_id, self._provider.search(query, limit=limit))
        restricted = {r.symbol for r in self._admin_repo.list_restricted()}
        return [r for r in results if r.symbol.upper() not in restricted]

    async def get_news(
        self,
        symbol: Optional[str] = None,
        limit: int = 20,
        user_id: Optional[str] = None,
    ) -> list[NewsArticle]:
        if symbol:
            symbol = self._normalize(symbol)
        endpoint = f"news/{symbol}" if symbol else "news"
        return await self._logged(endpoint, user_id, self._provider.get_news(symbol, limit=limit))

    async def get_market_summary(self, user_id: Optional[str] = None) -> list[Quote]:
        """Quotes for the major US indices, in MARKET_INDICES order. Indices that fail are left out."""
        quotes = await self._logged("market-summary", user_id, self._quote_fetcher.fetch_all(MARKET_INDICES))
        return [quotes[symbol] for symbol in MARKET_INDICES if symbol in quotes]

    async def get_featured(self, user_id: Optional[str] = None) -> list[FeaturedStockQuote]:
        """
        Currently active featured stocks with their quotes.

        Symbols restricted after being featured are hidden. A featured stock
        whose quote cannot be fetched is still listed, without a quote.
        """
        now = now_eastern()
        restricted = {r.symbol for r in self._admin_repo.list_restricted()}
        featured = [
            f
            for f in self._admin_repo.list_featured()
            if f.is_active(now) and f.symbol not in restricted
        ]
        if not featured:
            return []
        try:
            quotes = await self._logged(
                "featured",
                user_id,
                self._quote_fetcher.fetch_all(f.symbol for f in featured),
            )
        except QuoteSourceUnavailable as exc:
            logger.warning("Featured stocks listed without quotes: %s", exc.message)
            quotes = {}
        return [FeaturedStockQuote(featured=f, quote=quotes.get(f.symbol)) for f in featured]
