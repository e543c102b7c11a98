"""Watchlist endpoints."""

from fastapi import APIRouter, Depends, Response

from fintrack.api.deps import get_current_user_id, get_watchlist_service
from fintrack.api.schemas import (
    WatchlistCreateRequest,
    WatchlistItemCreateRequest,
    WatchlistItemResponse,
    WatchlistResponse,
    WatchlistDetailResponse,
    WatchlistListResponse,
    WatchlistQuotesResponse,
    QuoteResponse,
)
from fintrack.services import WatchlistService

router = APIRouter(prefix="/watchlists", tags=["watchlists"])


@router.get("", response_model=WatchlistListResponse)
def list_watchlists(
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistListResponse:
    watchlists = service.list_watchlists(user_id)
    return WatchlistListResponse(
        watchlists=[WatchlistResponse.model_validate(w) for w in watchlists],
        count=len(watchlists),
    )


@router.post("", response_model=WatchlistResponse, status_code=201)
def create_watchlist(
    data: WatchlistCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistResponse:
    watchlist = service.create_watchlist(user_id, data.name, data.description)
    return WatchlistResponse.model_validate(watchlist)


@router.get("/{watchlist_id}", response_model=WatchlistDetailResponse)
def get_watchlist(
    watchlist_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistDetailResponse:
    """A watchlist with its items."""
    watchlist = service.get_watchlist(watchlist_id, user_id)
    items = service.list_items(watchlist_id, user_id)
    return WatchlistDetailResponse(
        **WatchlistResponse.model_validate(watchlist).model_dump(),
        items=[WatchlistItemResponse.model_validate(i) for i in items],
    )


@router.delete("/{watchlist_id}", status_code=204)
def delete_watchlist(
    watchlist_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> Response:
    service.delete_watchlist(watchlist_id, user_id)
    return Response(status_code=204)


@router.post("/{watchlist_id}/items", response_model=WatchlistItemResponse, status_code=201)
def add_item(
    watchlist_id: str,
    data: WatchlistItemCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistItemResponse:
    item = service.add_item(watchlist_id, user_id, data.symbol)
    return WatchlistItemResponse.model_validate(item)


@router.delete("/{watchlist_id}/items/{item_id}", status_code=204)
def remove_item(
    watchlist_id: str,
    item_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> Response:
    service.remove_item(watchlist_id, item_id, user_id)
    return Response(status_code=204)


@router.get("/{watchlist_id}/quotes", response_model=WatchlistQuotesResponse)
async def get_watchlist_quotes(
    watchlist_id: str,
    user_id: str = Depends(get_current_user_id),
    service: WatchlistService = Depends(get_watchlist_service),
) -> WatchlistQuotesResponse:
    """Current quotes for every symbol on the watchlist."""
    items = service.list_items(watchlist_id, user_id)
    quotes = await service.get_watchlist_quotes(watchlist_id, user_id)
    return WatchlistQuotesResponse(
        watchlist_id=watchlist_id,
        quotes=[
            QuoteResponse.model_validate(quotes[item.symbol])
            for item in items
            if item.symbol in quotes
        ],
        missing=[item.symbol for item in items if item.symbol not in quotes],
    )
