"""Stub market data provider for offline/testing use."""

import random
from datetime import timedelta
from typing import Optional

from fintrack.core.exceptions import SymbolNotFoundError
from fintrack.core.timezone import now_eastern
from fintrack.domain.views import (
    Quote,
    CompanyProfile,
    SearchResult,
    NewsArticle,
    PricePoint,
)


# Deterministic fake prices for common symbols: (last price, previous close, name)
_STUB_PRICES: dict[str, tuple[float, float, str]] = {
    "AAPL": (185.50, 184.25, "Apple Inc."),
    "GOOGL": (142.75, 141.50, "Alphabet Inc."),
    "MSFT": (378.25, 376.80, "Microsoft Corporation"),
    "AMZN": (178.50, 177.25, "Amazon.com, Inc."),
    "TSLA": (248.75, 250.10, "Tesla, Inc."),
    "NVDA": (485.25, 482.50, "NVIDIA Corporation"),
    "META": (505.50, 502.75, "Meta Platforms, Inc."),
    "SPY": (485.25, 484.10, "SPDR S&P 500 ETF Trust"),
    "QQQ": (418.75, 417.50, "Invesco QQQ Trust"),
    "VTI": (252.30, 251.80, "Vanguard Total Stock Market ETF"),
}

# Market indices answer quotes and history but stay out of search and news
_STUB_INDICES: dict[str, tuple[float, float, str]] = {
    "^GSPC": (5005.25, 4990.10, "S&P 500"),
    "^DJI": (38150.50, 38020.75, "Dow Jones Industrial Average"),
    "^IXIC": (15820.40, 15760.20, "NASDAQ Composite"),
    "^RUT": (2015.60, 2021.30, "Russell 2000"),
    "^VIX": (13.85, 14.20, "CBOE Volatility Index"),
}

_STUB_QUOTES = {**_STUB_PRICES, **_STUB_INDICES}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Knows only the symbols in its price table; anything else is reported as
    not found, like a real provider would.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducible history."""
        self._seed = seed

    async def get_quote(self, symbol: str) -> Quote:
        upper_symbol = symbol.upper()
        if upper_symbol not in _STUB_QUOTES:
            raise SymbolNotFoundError(upper_symbol)
        last_price, prev_close, name = _STUB_QUOTES[upper_symbol]
        change = last_price - prev_close
        return Quote(
            symbol=upper_symbol,
            price=last_price,
            change=change,
            changes_percentage=change / prev_close * 100,
            volume=1_000_000,
            name=name,
            as_of=now_eastern(),
        )

    async def get_profile(self, symbol: str) -> CompanyProfile:
        upper_symbol = symbol.upper()
        if upper_symbol not in _STUB_PRICES:
            raise SymbolNotFoundError(upper_symbol)
        return CompanyProfile(
            symbol=upper_symbol,
            company_name=_STUB_PRICES[upper_symbol][2],
            exchange="NASDAQ",
        )

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        needle = query.strip().lower()
        hits = [
            SearchResult(symbol=symbol, name=name, exchange="NASDAQ", currency="USD")
            for symbol, (_, _, name) in _STUB_PRICES.items()
            if needle in symbol.lower() or needle in name.lower()
        ]
        return hits[:limit]

    async def get_news(self, symbol: Optional[str] = None, limit: int = 20) -> list[NewsArticle]:
        symbols = [symbol.upper()] if symbol else list(_STUB_PRICES)
        published = now_eastern()
        articles = [
            NewsArticle(
                title=f"{s} shares move in quiet trading",
                url=f"https://example.com/news/{s.lower()}",
                symbol=s,
                site="example.com",
                published_at=published,
            )
            for s in symbols
        ]
        return articles[:limit]

    async def get_historical(self, symbol: str, days: int = 365) -> list[PricePoint]:
        """Seeded random walk ending at the stub last price."""
        upper_symbol = symbol.upper()
        if upper_symbol not in _STUB_QUOTES:
            raise SymbolNotFoundError(upper_symbol)
        rng = random.Random(f"{self._seed}:{upper_symbol}")
        price = _STUB_QUOTES[upper_symbol][0]
        today = now_eastern().date()
        points = []
        for offset in range(days):
            points.append(PricePoint(date=today - timedelta(days=offset), close=round(price, 2)))
            price = price / (1 + (rng.random() - 0.5) * 0.04)
        points.reverse()
        return points

    async def aclose(self) -> None:
        return None
