"""Concurrent quote fetching with per-symbol timeouts and all-settled semantics."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional

from fintrack.core.exceptions import QuoteSourceError, QuoteSourceUnavailable
from fintrack.domain.views import Quote
from fintrack.providers.market_data_provider import QuoteSource

logger = logging.getLogger(__name__)

TIMEOUT_CODE = "QUOTE_TIMEOUT"
UNEXPECTED_CODE = "UNEXPECTED_ERROR"
UNAVAILABLE_CODE = "QUOTE_SOURCE_UNAVAILABLE"


@dataclass
class FetchOutcome:
    """Quotes obtained by a batch plus the error code of every symbol that failed."""

    quotes: dict[str, Quote] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def failed_symbols(self) -> set[str]:
        return set(self.failures)


def normalize_symbols(symbols: Iterable[str]) -> list[str]:
    """Strip, upper-case and de-duplicate, keeping first-seen order. Blanks are dropped."""
    seen: dict[str, None] = {}
    for symbol in symbols:
        if symbol is None:
            continue
        cleaned = symbol.strip().upper()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


class QuoteBatchFetcher:
    """
    Fetches quotes for many symbols at once.

    Every symbol gets its own `get_quote` call, issued concurrently and
    bounded by a semaphore and a per-call timeout. One symbol failing never
    fails the batch; failed symbols are simply absent from the result.
    Successful quotes are cached per symbol for `cache_ttl_seconds`.
    """

    def __init__(
        self,
        source: QuoteSource,
        timeout_seconds: float = 8.0,
        max_concurrency: int = 10,
        cache_ttl_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._source = source
        self._timeout = timeout_seconds
        self._max_concurrency = max_concurrency
        self._cache_ttl = cache_ttl_seconds
        self._clock = clock
        self._cache: dict[str, tuple[float, Quote]] = {}

    async def fetch_all(self, symbols: Iterable[str]) -> dict[str, Quote]:
        """
        Fetch quotes for `symbols`, returning only those that succeeded.

        Raises:
            QuoteSourceUnavailable: no quote was obtained and every symbol
                failed because the source could not be reached.
        """
        outcome = await self.fetch_all_with_outcome(symbols)
        return outcome.quotes

    async def fetch_all_with_outcome(self, symbols: Iterable[str]) -> FetchOutcome:
        """Like fetch_all, but also reports which symbols failed and why."""
        wanted = normalize_symbols(symbols)
        outcome = FetchOutcome()
        if not wanted:
            return outcome

        missing = []
        for symbol in wanted:
            cached = self._cached(symbol)
            if cached is not None:
                outcome.quotes[symbol] = cached
            else:
                missing.append(symbol)

        if missing:
            semaphore = asyncio.Semaphore(self._max_concurrency)
            results = await asyncio.gather(
                *(self._fetch_one(symbol, semaphore) for symbol in missing)
            )
            for symbol, quote, error_code in results:
                if quote is not None:
                    outcome.quotes[symbol] = quote
                    self._store(symbol, quote)
                else:
                    outcome.failures[symbol] = error_code

        if not outcome.quotes and outcome.failures and all(
            code == UNAVAILABLE_CODE for code in outcome.failures.values()
        ):
            logger.error("Quote source unavailable for all %d symbol(s)", len(outcome.failures))
            raise QuoteSourceUnavailable(
                f"Quote source unavailable for {', '.join(sorted(outcome.failures))}"
            )

        logger.debug(
            "Fetched %d/%d quotes (%d from cache)",
            len(outcome.quotes),
            len(wanted),
            len(wanted) - len(missing),
        )
        return outcome

    async def _fetch_one(
        self,
        symbol: str,
        semaphore: asyncio.Semaphore,
    ) -> tuple[str, Optional[Quote], Optional[str]]:
        async with semaphore:
            try:
                quote = await asyncio.wait_for(self._source.get_quote(symbol), timeout=self._timeout)
            except asyncio.TimeoutError:
                logger.warning("Quote for %s timed out after %.1fs", symbol, self._timeout)
                return symbol, None, TIMEOUT_CODE
            except QuoteSourceError as exc:
                logger.warning("Quote for %s failed: %s (%s)", symbol, exc.message, exc.code)
                return symbol, None, exc.code
            except Exception:
                logger.exception("Unexpected error fetching quote for %s", symbol)
                return symbol, None, UNEXPECTED_CODE
        return symbol, quote, None

    def _cached(self, symbol: str) -> Optional[Quote]:
        if self._cache_ttl <= 0:
            return None
        entry = self._cache.get(symbol)
        if entry is None:
            return None
        stored_at, quote = entry
        if self._clock() - stored_at >= self._cache_ttl:
            del self._cache[symbol]
            return None
        return quote

    def _store(self, symbol: str, quote: Quote) -> None:
        if self._cache_ttl > 0:
            self._cache[symbol] = (self._clock(), quote)

    def clear_cache(self) -> None:
        self._cache.clear()
