"""
Financial Modeling Prep market data provider.

HTTPS JSON API authenticated with an API key. Payloads are validated with
pydantic models here and mapped to domain views; HTTP failures are mapped to
the quote-source error taxonomy:

- 404 or an empty result list  -> SymbolNotFoundError
- 429                          -> RateLimitError
- request deadline exceeded    -> QuoteTimeoutError
- 401/403, 5xx, network errors -> QuoteSourceUnavailable
"""

import logging
from datetime import datetime
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from fintrack.core.exceptions import (
    QuoteSourceError,
    QuoteSourceUnavailable,
    QuoteTimeoutError,
    RateLimitError,
    SymbolNotFoundError,
)
from fintrack.core.timezone import EASTERN_TZ, now_eastern, parse_date, parse_datetime_eastern
from fintrack.domain.views import (
    Quote,
    CompanyProfile,
    SearchResult,
    NewsArticle,
    PricePoint,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://financialmodelingprep.com/api/v3"
DEFAULT_TIMEOUT_SECONDS = 10.0


class _FmpModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class FmpQuotePayload(_FmpModel):
    symbol: str
    price: float
    change: float = 0.0
    changes_percentage: float = Field(default=0.0, alias="changesPercentage")
    volume: Optional[int] = None
    market_cap: Optional[float] = Field(default=None, alias="marketCap")
    name: Optional[str] = None
    timestamp: Optional[int] = None


class FmpProfilePayload(_FmpModel):
    symbol: str
    company_name: str = Field(alias="companyName")
    exchange: Optional[str] = Field(default=None, alias="exchangeShortName")
    industry: Optional[str] = None
    sector: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    ceo: Optional[str] = None
    image: Optional[str] = None


class FmpSearchPayload(_FmpModel):
    symbol: str
    name: str = ""
    exchange: Optional[str] = Field(default=None, alias="exchangeShortName")
    currency: Optional[str] = None


class FmpNewsPayload(_FmpModel):
    title: str
    url: str
    symbol: Optional[str] = None
    site: Optional[str] = None
    published_date: Optional[str] = Field(default=None, alias="publishedDate")
    text: Optional[str] = None
    image: Optional[str] = None


class FmpHistoricalPoint(_FmpModel):
    date: str
    close: float


class FmpHistoricalPayload(_FmpModel):
    symbol: str
    historical: list[FmpHistoricalPoint] = Field(default_factory=list)


class FmpMarketDataProvider:
    """Async client for the Financial Modeling Prep v3 API."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._api_key = (api_key or "").strip() or None
        if self._api_key is None:
            logger.warning("FMP API key missing; requests will be rejected upstream")
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request_json(self, path: str, params: Optional[dict] = None, symbol: str = "") -> Any:
        query = dict(params or {})
        if self._api_key:
            query["apikey"] = self._api_key
        try:
            response = await self._client.get(path, params=query)
        except httpx.TimeoutException as exc:
            raise QuoteTimeoutError(f"FMP request timed out: {path}") from exc
        except httpx.TransportError as exc:
            raise QuoteSourceUnavailable(f"FMP unreachable: {exc}") from exc

        if response.status_code == 404:
            raise SymbolNotFoundError(symbol or path)
        if response.status_code == 429:
            raise RateLimitError()
        if response.status_code in (401, 403):
            raise QuoteSourceUnavailable("FMP rejected the API key")
        if response.status_code >= 500:
            raise QuoteSourceUnavailable(f"FMP upstream error {response.status_code}")
        if response.status_code != 200:
            raise QuoteSourceError(
                f"Unexpected FMP response {response.status_code} for {path}",
                code="UPSTREAM_ERROR",
            )
        try:
            return response.json()
        except ValueError as exc:
            raise QuoteSourceError(f"Malformed FMP response for {path}", code="MALFORMED_RESPONSE") from exc

    @staticmethod
    def _first(data: Any, symbol: str) -> dict:
        if isinstance(data, list):
            if not data:
                raise SymbolNotFoundError(symbol)
            data = data[0]
        if not isinstance(data, dict):
            raise QuoteSourceError(f"Malformed FMP response for {symbol}", code="MALFORMED_RESPONSE")
        return data

    @staticmethod
    def _validate(model: type[BaseModel], data: dict, symbol: str):
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise QuoteSourceError(
                f"Malformed FMP payload for {symbol}: {exc.error_count()} error(s)",
                code="MALFORMED_RESPONSE",
            ) from exc

    async def get_quote(self, symbol: str) -> Quote:
        symbol = symbol.upper()
        data = self._first(await self._request_json(f"/quote/{symbol}", symbol=symbol), symbol)
        payload: FmpQuotePayload = self._validate(FmpQuotePayload, data, symbol)
        as_of = (
            datetime.fromtimestamp(payload.timestamp, EASTERN_TZ)
            if payload.timestamp
            else now_eastern()
        )
        return Quote(
            symbol=payload.symbol.upper(),
            price=payload.price,
            change=payload.change,
            changes_percentage=payload.changes_percentage,
            volume=payload.volume,
            market_cap=payload.market_cap,
            name=payload.name,
            as_of=as_of,
        )

    async def get_profile(self, symbol: str) -> CompanyProfile:
        symbol = symbol.upper()
        data = self._first(await self._request_json(f"/profile/{symbol}", symbol=symbol), symbol)
        payload: FmpProfilePayload = self._validate(FmpProfilePayload, data, symbol)
        return CompanyProfile(**payload.model_dump())

    async def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        data = await self._request_json("/search", params={"query": query, "limit": limit})
        if not isinstance(data, list):
            return []
        return [
            SearchResult(**self._validate(FmpSearchPayload, item, query).model_dump())
            for item in data
            if isinstance(item, dict)
        ]

    async def get_news(self, symbol: Optional[str] = None, limit: int = 20) -> list[NewsArticle]:
        params: dict[str, Any] = {"limit": limit}
        if symbol:
            params["tickers"] = symbol.upper()
        data = await self._request_json("/stock_news", params=params)
        if not isinstance(data, list):
            return []
        articles = []
        for item in data:
            if not isinstance(item, dict):
                continue
            payload: FmpNewsPayload = self._validate(FmpNewsPayload, item, symbol or "news")
            published = (
                parse_datetime_eastern(payload.published_date)
                if payload.published_date
                else None
            )
            articles.append(
                NewsArticle(
                    title=payload.title,
                    url=payload.url,
                    symbol=payload.symbol,
                    site=payload.site,
                    published_at=published,
                    text=payload.text,
                    image=payload.image,
                )
            )
        return articles

    async def get_historical(self, symbol: str, days: int = 365) -> list[PricePoint]:
        symbol = symbol.upper()
        data = await self._request_json(
            f"/historical-price-full/{symbol}",
            params={"serietype": "line", "timeseries": days},
            symbol=symbol,
        )
        if not isinstance(data, dict) or not data.get("historical"):
            raise SymbolNotFoundError(symbol)
        payload: FmpHistoricalPayload = self._validate(FmpHistoricalPayload, data, symbol)
        points = [
            PricePoint(date=parse_date(p.date), close=p.close)
            for p in payload.historical
        ]
        points.sort(key=lambda p: p.date)
        return points
