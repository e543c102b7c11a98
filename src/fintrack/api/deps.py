"""Dependency injection for FastAPI."""

from typing import Generator, Optional, Union

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from fintrack.config.settings import get_settings
from fintrack.core.exceptions import ForbiddenError
from fintrack.providers import MarketDataProvider, build_provider
from fintrack.repositories.protocols import (
    PortfolioRepository,
    PositionRepository,
    WatchlistRepository,
    AdminRepository,
)
from fintrack.repositories.sqlalchemy.database import get_db
from fintrack.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyPositionRepository,
    SqlAlchemyWatchlistRepository,
    SqlAlchemyAdminRepository,
)
from fintrack.repositories.memory import (
    InMemoryStore,
    InMemoryPortfolioRepository,
    InMemoryPositionRepository,
    InMemoryWatchlistRepository,
    InMemoryAdminRepository,
)
from fintrack.services import (
    QuoteBatchFetcher,
    PortfolioService,
    WatchlistService,
    MarketDataService,
    AdminService,
)

Storage = Union[Session, InMemoryStore]

# Process-wide singletons (reset with reset_dependencies)
_memory_store: Optional[InMemoryStore] = None
_provider: Optional[MarketDataProvider] = None
_quote_fetcher: Optional[QuoteBatchFetcher] = None


def get_memory_store() -> InMemoryStore:
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryStore()
    return _memory_store


def get_storage() -> Generator[Storage, None, None]:
    """Provide a database session, or the shared in-memory store when configured."""
    if get_settings().storage_backend == "memory":
        yield get_memory_store()
        return
    yield from get_db()


def get_portfolio_repo(storage: Storage = Depends(get_storage)) -> PortfolioRepository:
    if isinstance(storage, InMemoryStore):
        return InMemoryPortfolioRepository(storage)
    return SqlAlchemyPortfolioRepository(storage)


def get_position_repo(storage: Storage = Depends(get_storage)) -> PositionRepository:
    if isinstance(storage, InMemoryStore):
        return InMemoryPositionRepository(storage)
    return SqlAlchemyPositionRepository(storage)


def get_watchlist_repo(storage: Storage = Depends(get_storage)) -> WatchlistRepository:
    if isinstance(storage, InMemoryStore):
        return InMemoryWatchlistRepository(storage)
    return SqlAlchemyWatchlistRepository(storage)


def get_admin_repo(storage: Storage = Depends(get_storage)) -> AdminRepository:
    if isinstance(storage, InMemoryStore):
        return InMemoryAdminRepository(storage)
    return SqlAlchemyAdminRepository(storage)


def get_market_provider() -> MarketDataProvider:
    """Provide the configured MarketDataProvider (one per process)."""
    global _provider
    if _provider is None:
        _provider = build_provider(get_settings())
    return _provider


def get_quote_fetcher(
    provider: MarketDataProvider = Depends(get_market_provider),
) -> QuoteBatchFetcher:
    """Provide the QuoteBatchFetcher; shared so its quote cache outlives a request."""
    global _quote_fetcher
    if _quote_fetcher is None:
        settings = get_settings()
        _quote_fetcher = QuoteBatchFetcher(
            source=provider,
            timeout_seconds=settings.quote_timeout_seconds,
            max_concurrency=settings.quote_max_concurrency,
            cache_ttl_seconds=settings.quote_cache_ttl_seconds,
        )
    return _quote_fetcher


async def close_market_provider() -> None:
    """Release provider resources on shutdown."""
    global _provider, _quote_fetcher
    if _provider is not None:
        await _provider.aclose()
    _provider = None
    _quote_fetcher = None


def reset_dependencies() -> None:
    """Forget cached singletons (for reconfiguration and tests)."""
    global _memory_store, _provider, _quote_fetcher
    _memory_store = None
    _provider = None
    _quote_fetcher = None


# Caller identity, set by the upstream auth layer


def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Caller's user id from the X-User-Id header; 401 when absent."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def require_admin(
    user_id: str = Depends(get_current_user_id),
    x_user_role: Optional[str] = Header(default=None),
) -> str:
    """Caller's user id, provided they carry the admin role."""
    if (x_user_role or "").strip().lower() != "admin":
        raise ForbiddenError("Administrator role required")
    return user_id


# Services


def get_portfolio_service(
    portfolio_repo: PortfolioRepository = Depends(get_portfolio_repo),
    position_repo: PositionRepository = Depends(get_position_repo),
    quote_fetcher: QuoteBatchFetcher = Depends(get_quote_fetcher),
    provider: MarketDataProvider = Depends(get_market_provider),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    settings = get_settings()
    return PortfolioService(
        portfolio_repo=portfolio_repo,
        position_repo=position_repo,
        quote_fetcher=quote_fetcher,
        provider=provider,
        stale_warning_ratio=settings.stale_warning_ratio,
        fail_on_quote_outage=settings.fail_on_quote_outage,
        history_timeout_seconds=settings.quote_timeout_seconds,
    )


def get_watchlist_service(
    watchlist_repo: WatchlistRepository = Depends(get_watchlist_repo),
    admin_repo: AdminRepository = Depends(get_admin_repo),
    quote_fetcher: QuoteBatchFetcher = Depends(get_quote_fetcher),
) -> WatchlistService:
    """Provide WatchlistService instance."""
    return WatchlistService(
        watchlist_repo=watchlist_repo,
        admin_repo=admin_repo,
        quote_fetcher=quote_fetcher,
    )


def get_market_data_service(
    provider: MarketDataProvider = Depends(get_market_provider),
    admin_repo: AdminRepository = Depends(get_admin_repo),
    quote_fetcher: QuoteBatchFetcher = Depends(get_quote_fetcher),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return MarketDataService(provider=provider, admin_repo=admin_repo, quote_fetcher=quote_fetcher)


def get_admin_service(
    admin_repo: AdminRepository = Depends(get_admin_repo),
) -> AdminService:
    """Provide AdminService instance."""
    return AdminService(admin_repo=admin_repo)
