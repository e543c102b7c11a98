"""API routers package."""

from fintrack.api.routers.portfolios import router as portfolios_router
from fintrack.api.routers.watchlists import router as watchlists_router
from fintrack.api.routers.stocks import router as stocks_router, news_router
from fintrack.api.routers.admin import router as admin_router

__all__ = [
    "portfolios_router",
    "watchlists_router",
    "stocks_router",
    "news_router",
    "admin_router",
]
