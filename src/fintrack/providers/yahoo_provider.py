"""
Yahoo Finance market data provider via yfinance.

yfinance is synchronous; every call runs in a worker thread so the event
loop is never blocked.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Optional

from fintrack.core.exceptions import (
    QuoteSourceError,
    QuoteSourceUnavailable,
    QuoteTimeoutError,
    RateLimitError,
    SymbolNotFoundError,
)
from fintrack.core.timezone import EASTERN_TZ, now_eastern, parse_datetime_eastern
from fintrack.domain.views import (
    Quote,
    CompanyProfile,
    SearchResult,
    NewsArticle,
    PricePoint,
)

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def _news_from_item(item: dict, symbol: Optional[str]) -> Optional[NewsArticle]:
    """Map both the legacy flat and the newer nested `content` news shapes."""
    content = item.get("content") if isinstance(item.get("content"), dict) else None
    if content:
        url = (content.get("canonicalUrl") or {}).get("url") or (content.get("clickThroughUrl") or {}).get("url")
        title = content.get("title")
        published = content.get("pubDate")
        published_at = parse_datetime_eastern(published) if published else None
        site = (content.get("provider") or {}).get("displayName")
        text = content.get("summary")
        image = (content.get("thumbnail") or {}).get("originalUrl")
    else:
        url = item.get("link")
        title = item.get("title")
        timestamp = item.get("providerPublishTime")
        published_at = datetime.fromtimestamp(timestamp, EASTERN_TZ) if timestamp else None
        site = item.get("publisher")
        text = None
        image = None
    if not title or not url:
        return None
    return NewsArticle(
        title=title,
        url=url,
        symbol=symbol,
        site=site,
        published_at=published_at,
        text=text,
        image=image,
    )


def _status_code(exc: Exception) -> Optional[int]:
    response = getattr(exc, "response", None)
    status = getattr(response, "status_code", None)
    return status if isinstance(status, int) else None


def _map_error(exc: Exception, symbol: str) -> QuoteSourceError:
    """
    Translate a yfinance failure into the provider error hierarchy.

    Only network-level failures mean the source is unreachable; yfinance
    reports unknown tickers as HTTP 404 errors or empty payloads.
    """
    message = str(exc)
    status = _status_code(exc)
    if status == 404 or "404" in message or "Not Found" in message:
        return SymbolNotFoundError(symbol)
    if status == 429 or "429" in message or "Too Many Requests" in message:
        return RateLimitError(f"Yahoo Finance rate limit: {message}")
    if isinstance(exc, TimeoutError) or "Timeout" in exc.__class__.__name__:
        return QuoteTimeoutError(f"Yahoo Finance request timed out: {message}")
    if isinstance(exc, OSError) or "Connection" in exc.__class__.__name__:
        return QuoteSourceUnavailable(f"Yahoo Finance request failed: {message}")
    return QuoteSourceError(f"Yahoo Finance error: {message}", code="PROVIDER_ERROR")


class YahooMarketDataProvider:
    """Fetches quotes, profiles, news and history from Yahoo Finance."""

    async def _run(self, func, *args):
        try:
            return await asyncio.to_thread(func, *args)
        except QuoteSourceError:
            raise
        except Exception as exc:
            logger.debug("Yahoo Finance call %s%r failed: %s", func.__name__, args, exc)
            raise _map_error(exc, str(args[0]) if args and args[0] else "") from exc

    def _info(self, symbol: str) -> dict:
        info = _get_yf().Ticker(symbol).info
        if not isinstance(info, dict):
            raise SymbolNotFoundError(symbol)
        return info

    def _quote_sync(self, symbol: str) -> Quote:
        info = self._info(symbol)
        # Price: currentPrice preferred, then regularMarketPrice
        price = _to_float(info.get("currentPrice"))
        if price is None:
            price = _to_float(info.get("regularMarketPrice"))
        if price is None:
            raise SymbolNotFoundError(symbol)
        prev_close = _to_float(info.get("previousClose") or info.get("regularMarketPreviousClose"))
        change = price - prev_close if prev_close else 0.0
        changes_percentage = change / prev_close * 100 if prev_close else 0.0
        name = (info.get("longName") or info.get("shortName") or "").strip() or None
        return Quote(
            symbol=symbol,
            price=price,
            change=change,
            changes_percentage=changes_percentage,
            volume=_to_int(info.get("volume") or info.get("regularMarketVolume")),
            market_cap=_to_float(info.get("marketCap")),
            name=name,
            as_of=now_eastern(),
        )

    def _profile_sync(self, symbol: str) -> CompanyProfile:
        info = self._info(symbol)
        name = (info.get("longName") or info.get("shortName") or "").strip()
        if not name:
            raise SymbolNotFoundError(symbol)
        officers = info.get("companyOfficers") or []
        ceo = officers[0].get("name") if officers and isinstance(officers[0], dict) else None
        return CompanyProfile(
            symbol=symbol,
            company_name=name,
            exchange=info.get("exchange"),
            industry=info.get("industry"),
            sector=info.get("sector"),
            description=info.get("longBusinessSummary"),
            website=info.get("website"),
            ceo=ceo,
            image=info.get("logo_url"),
        )

    def _search_sync(self, query: str, limit: int) -> list[SearchResult]:
        results = _get_yf().Search(query, max_results=limit, news_count=0).quotes or []
        hits = []
        for item in results:
            symbol = item.get("symbol")
            if not symbol:
                continue
            hits.append(
                SearchResult(
                    symbol=symbol,
                    name=item.get("longname") or item.get("shortname") or symbol,
                    exchange=item.get("exchange"),
                )
            )
        return hits[:limit]

    def _news_sync(self, symbol: Optional[str], limit: int) -> list[NewsArticle]:
        yf = _get_yf()
        if symbol:
            items = yf.Ticker(symbol).news or []
        else:
            items = yf.Search("stock market", max_results=0, news_count=limit).news or []
        articles = []
        for item in items:
            if isinstance(item, dict):
                article = _news_from_item(item, symbol)
                if article is not None:
                    articles.append(article)
        return articles[:limit]

    def _historical_sync(self, symbol: str, days: int) -> list[PricePoint]:
        frame = _get_yf().Ticker(symbol).history(period=f"{days}d", interval="1d")
        if frame is None or frame.empty:
            raise SymbolNotFoundError(symbol)
        return [
            PricePoint(date=timestamp.date(), close=float(close))
            for timestamp, close in frame["Close"].items()
        ]

    async def get_quote(self, symbol: str) -> Quote:
        return await self._run(self._quote_sync, symbol.upper())

    async def get_profile(self, symbol: str) -> CompanyProfile:
        return await self._run(self._profile_sync, symbol.upper())

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        return await self._run(self._search_sync, query, limit)

    async def get_news(self, symbol: Optional[str] = None, limit: int = 20) -> list[NewsArticle]:
        return await self._run(self._news_sync, symbol.upper() if symbol else None, limit)

    async def get_historical(self, symbol: str, days: int = 365) -> list[PricePoint]:
        return await self._run(self._historical_sync, symbol.upper(), days)

    async def aclose(self) -> None:
        return None
