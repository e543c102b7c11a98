"""Market data providers module."""

from typing import Optional

from fintrack.config.settings import Settings, get_settings
from fintrack.providers.market_data_provider import MarketDataProvider, QuoteSource
from fintrack.providers.stub_provider import StubMarketDataProvider
from fintrack.providers.fmp_provider import FmpMarketDataProvider
from fintrack.providers.yahoo_provider import YahooMarketDataProvider


def build_provider(settings: Optional[Settings] = None) -> MarketDataProvider:
    """Create the provider selected by `market_data_provider`."""
    settings = settings or get_settings()
    if settings.market_data_provider == "fmp":
        return FmpMarketDataProvider(
            api_key=settings.fmp_api_key,
            base_url=settings.fmp_base_url,
            timeout_seconds=settings.quote_timeout_seconds,
        )
    if settings.market_data_provider == "yahoo":
        return YahooMarketDataProvider()
    return StubMarketDataProvider()


__all__ = [
    "MarketDataProvider",
    "QuoteSource",
    "StubMarketDataProvider",
    "FmpMarketDataProvider",
    "YahooMarketDataProvider",
    "build_provider",
]
