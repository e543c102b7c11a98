"""Pydantic schemas for admin endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class SettingUpdateRequest(BaseModel):
    """Request schema for creating or overwriting a setting."""

    value: str = Field(..., max_length=10000)


class SettingResponse(BaseModel):
    model_config = {"from_attributes": True}

    key: str
    value: str
    updated_at_est: Optional[datetime] = None
    updated_by: Optional[str] = None


class SettingListResponse(BaseModel):
    settings: list[SettingResponse]
    count: int


class RestrictedSymbolCreateRequest(BaseModel):
    """Request schema for restricting a symbol."""

    symbol: str = Field(..., min_length=1, max_length=20)
    reason: Optional[str] = Field(default=None, max_length=500)


class RestrictedSymbolResponse(BaseModel):
    model_config = {"from_attributes": True}

    restriction_id: str
    symbol: str
    reason: Optional[str] = None
    added_at_est: Optional[datetime] = None
    added_by: Optional[str] = None


class RestrictedSymbolListResponse(BaseModel):
    restricted: list[RestrictedSymbolResponse]
    count: int


class FeaturedStockCreateRequest(BaseModel):
    """Request schema for featuring a symbol. Start defaults to now; no end means open-ended."""

    symbol: str = Field(..., min_length=1, max_length=20)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class FeaturedStockUpdateRequest(BaseModel):
    """Request schema for changing a featured stock. Omitted fields are left as is."""

    symbol: Optional[str] = Field(default=None, min_length=1, max_length=20)
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class FeaturedStockResponse(BaseModel):
    model_config = {"from_attributes": True}

    featured_id: str
    symbol: str
    title: str
    description: Optional[str] = None
    start_date_est: datetime
    end_date_est: Optional[datetime] = None
    added_by: Optional[str] = None


class FeaturedStockListResponse(BaseModel):
    featured: list[FeaturedStockResponse]
    count: int


class ApiLogResponse(BaseModel):
    """One recorded market data provider call."""

    model_config = {"from_attributes": True}

    log_id: str
    endpoint: str
    request_time_est: datetime
    response_time_ms: int
    success: bool
    user_id: Optional[str] = None
    error_message: Optional[str] = None


class ApiLogListResponse(BaseModel):
    logs: list[ApiLogResponse]
    count: int
