"""Market data lookup endpoints: quotes, profiles, search, history, news, market summary and featured stocks."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from fintrack.api.deps import get_current_user_id, get_market_data_service
from fintrack.api.schemas import (
    QuoteResponse,
    ProfileResponse,
    SearchResultResponse,
    SearchResponse,
    NewsArticleResponse,
    NewsResponse,
    PricePointResponse,
    HistoricalResponse,
    MarketSummaryResponse,
    FeaturedStockQuoteResponse,
    FeaturedListResponse,
)
from fintrack.services import MarketDataService
from fintrack.services.market_data_service import MARKET_INDICES

router = APIRouter(prefix="/stocks", tags=["stocks"])
news_router = APIRouter(prefix="/news", tags=["news"])


@router.get("/quote/{symbol}", response_model=QuoteResponse)
async def get_quote(
    symbol: str,
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> QuoteResponse:
    quote = await service.get_quote(symbol, user_id=user_id)
    return QuoteResponse.model_validate(quote)


@router.get("/profile/{symbol}", response_model=ProfileResponse)
async def get_profile(
    symbol: str,
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> ProfileResponse:
    profile = await service.get_profile(symbol, user_id=user_id)
    return ProfileResponse.model_validate(profile)


@router.get("/historical/{symbol}", response_model=HistoricalResponse)
async def get_historical(
    symbol: str,
    days: int = Query(365, ge=1, le=3650),
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> HistoricalResponse:
    """Daily closes, oldest first."""
    points = await service.get_historical(symbol, days=days, user_id=user_id)
    return HistoricalResponse(
        symbol=symbol.strip().upper(),
        points=[PricePointResponse.model_validate(p) for p in points],
    )


@router.get("/search", response_model=SearchResponse)
async def search(
    query: str = Query("", max_length=100),
    limit: int = Query(10, ge=1, le=50),
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> SearchResponse:
    """Search by ticker or company name. Queries under two characters return nothing."""
    results = await service.search(query, limit=limit, user_id=user_id)
    return SearchResponse(
        query=query,
        results=[SearchResultResponse.model_validate(r) for r in results],
        count=len(results),
    )


@router.get("/market-summary", response_model=MarketSummaryResponse)
async def get_market_summary(
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> MarketSummaryResponse:
    """S&P 500, Dow Jones, NASDAQ Composite, Russell 2000 and VIX quotes."""
    quotes = await service.get_market_summary(user_id=user_id)
    returned = {q.symbol for q in quotes}
    return MarketSummaryResponse(
        quotes=[QuoteResponse.model_validate(q) for q in quotes],
        missing=[symbol for symbol in MARKET_INDICES if symbol not in returned],
    )


@router.get("/featured", response_model=FeaturedListResponse)
async def get_featured(
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> FeaturedListResponse:
    """Active featured stocks with their current quotes."""
    featured = await service.get_featured(user_id=user_id)
    return FeaturedListResponse(
        featured=[
            FeaturedStockQuoteResponse(
                symbol=item.featured.symbol,
                title=item.featured.title,
                description=item.featured.description,
                start_date_est=item.featured.start_date_est,
                end_date_est=item.featured.end_date_est,
                quote=QuoteResponse.model_validate(item.quote) if item.quote else None,
            )
            for item in featured
        ],
        count=len(featured),
    )


@news_router.get("", response_model=NewsResponse)
async def get_news(
    symbol: Optional[str] = Query(None, max_length=20),
    limit: int = Query(20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    service: MarketDataService = Depends(get_market_data_service),
) -> NewsResponse:
    """Latest market news, or news for one symbol."""
    articles = await service.get_news(symbol, limit=limit, user_id=user_id)
    return NewsResponse(
        articles=[NewsArticleResponse.model_validate(a) for a in articles],
        count=len(articles),
    )
