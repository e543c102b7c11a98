"""Market data provider protocols."""

from typing import Optional, Protocol

from fintrack.domain.views import (
    Quote,
    CompanyProfile,
    SearchResult,
    NewsArticle,
    PricePoint,
)


class QuoteSource(Protocol):
    """
    Capability needed by the quote batch fetcher.

    get_quote returns a validated Quote or raises SymbolNotFoundError,
    RateLimitError or QuoteSourceUnavailable (network unreachable, upstream down).
    """

    async def get_quote(self, symbol: str) -> Quote:
        ...


class MarketDataProvider(QuoteSource, Protocol):
    """
    Full market data capability used by the lookup endpoints.

    Implementations validate provider payloads at this boundary so nothing
    downstream sees raw response shapes.
    """

    async def get_profile(self, symbol: str) -> CompanyProfile:
        """Company profile; SymbolNotFoundError if unknown."""
        ...

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        """Symbol/name search."""
        ...

    async def get_news(self, symbol: Optional[str] = None, limit: int = 20) -> list[NewsArticle]:
        """Latest news, optionally for one symbol."""
        ...

    async def get_historical(self, symbol: str, days: int = 365) -> list[PricePoint]:
        """Daily closes for roughly the last `days` days, oldest first."""
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
