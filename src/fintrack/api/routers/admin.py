"""Administrator endpoints: settings, restricted symbols, featured stocks, provider logs."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from fintrack.api.deps import get_admin_service, require_admin
from fintrack.api.schemas import (
    SettingUpdateRequest,
    SettingResponse,
    SettingListResponse,
    RestrictedSymbolCreateRequest,
    RestrictedSymbolResponse,
    RestrictedSymbolListResponse,
    FeaturedStockCreateRequest,
    FeaturedStockUpdateRequest,
    FeaturedStockResponse,
    FeaturedStockListResponse,
    ApiLogResponse,
    ApiLogListResponse,
)
from fintrack.services import AdminService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/settings", response_model=SettingListResponse)
def list_settings(service: AdminService = Depends(get_admin_service)) -> SettingListResponse:
    settings = service.list_settings()
    return SettingListResponse(
        settings=[SettingResponse.model_validate(s) for s in settings],
        count=len(settings),
    )


@router.get("/settings/{key}", response_model=SettingResponse)
def get_setting(key: str, service: AdminService = Depends(get_admin_service)) -> SettingResponse:
    return SettingResponse.model_validate(service.get_setting(key))


@router.put("/settings/{key}", response_model=SettingResponse)
def save_setting(
    key: str,
    data: SettingUpdateRequest,
    admin_id: str = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> SettingResponse:
    """Create or overwrite a setting."""
    setting = service.save_setting(key, data.value, updated_by=admin_id)
    return SettingResponse.model_validate(setting)


@router.get("/restricted", response_model=RestrictedSymbolListResponse)
def list_restricted(service: AdminService = Depends(get_admin_service)) -> RestrictedSymbolListResponse:
    restricted = service.list_restricted()
    return RestrictedSymbolListResponse(
        restricted=[RestrictedSymbolResponse.model_validate(r) for r in restricted],
        count=len(restricted),
    )


@router.post("/restricted", response_model=RestrictedSymbolResponse, status_code=201)
def add_restricted(
    data: RestrictedSymbolCreateRequest,
    admin_id: str = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> RestrictedSymbolResponse:
    restricted = service.add_restricted(data.symbol, reason=data.reason, added_by=admin_id)
    return RestrictedSymbolResponse.model_validate(restricted)


@router.delete("/restricted/{restriction_id}", status_code=204)
def remove_restricted(
    restriction_id: str,
    service: AdminService = Depends(get_admin_service),
) -> Response:
    service.remove_restricted(restriction_id)
    return Response(status_code=204)


@router.get("/featured", response_model=FeaturedStockListResponse)
def list_featured(
    active_only: bool = Query(False, description="Only stocks featured right now"),
    service: AdminService = Depends(get_admin_service),
) -> FeaturedStockListResponse:
    featured = service.list_featured(active_only=active_only)
    return FeaturedStockListResponse(
        featured=[FeaturedStockResponse.model_validate(f) for f in featured],
        count=len(featured),
    )


@router.post("/featured", response_model=FeaturedStockResponse, status_code=201)
def add_featured(
    data: FeaturedStockCreateRequest,
    admin_id: str = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
) -> FeaturedStockResponse:
    featured = service.add_featured(
        data.symbol,
        data.title,
        description=data.description,
        start_date=data.start_date,
        end_date=data.end_date,
        added_by=admin_id,
    )
    return FeaturedStockResponse.model_validate(featured)


@router.put("/featured/{featured_id}", response_model=FeaturedStockResponse)
def update_featured(
    featured_id: str,
    data: FeaturedStockUpdateRequest,
    service: AdminService = Depends(get_admin_service),
) -> FeaturedStockResponse:
    featured = service.update_featured(
        featured_id,
        symbol=data.symbol,
        title=data.title,
        description=data.description,
        start_date=data.start_date,
        end_date=data.end_date,
    )
    return FeaturedStockResponse.model_validate(featured)


@router.delete("/featured/{featured_id}", status_code=204)
def remove_featured(
    featured_id: str,
    service: AdminService = Depends(get_admin_service),
) -> Response:
    service.remove_featured(featured_id)
    return Response(status_code=204)


@router.get("/api-logs", response_model=ApiLogListResponse)
def list_api_logs(
    limit: int = Query(100, ge=1, le=1000),
    user_id: Optional[str] = Query(None, description="Only calls made by this user"),
    service: AdminService = Depends(get_admin_service),
) -> ApiLogListResponse:
    """Provider calls, newest first."""
    logs = service.list_api_logs(limit=limit, user_id=user_id)
    return ApiLogListResponse(
        logs=[ApiLogResponse.model_validate(log) for log in logs],
        count=len(logs),
    )
