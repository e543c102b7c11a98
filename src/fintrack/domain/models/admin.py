"""Administration domain models: settings, restricted symbols, featured stocks, API logs."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class AppSetting:
    """Key/value application setting managed by administrators."""

    key: str
    value: str
    updated_at_est: Optional[datetime] = field(default=None)
    updated_by: Optional[str] = None


@dataclass
class RestrictedSymbol:
    """Symbol that users may not look up or add to watchlists."""

    restriction_id: str
    symbol: str
    reason: Optional[str] = None
    added_at_est: Optional[datetime] = field(default=None)
    added_by: Optional[str] = None


@dataclass
class ApiLog:
    """
    One call to the market data provider.

    Written for every lookup routed through MarketDataService, successful or not.
    """

    log_id: str
    endpoint: str
    request_time_est: datetime
    response_time_ms: int
    success: bool
    user_id: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class FeaturedStock:
    """
    Symbol promoted by an administrator for a period of time.

    Active from `start_date_est` until `end_date_est`; open-ended when the end
    date is missing.
    """

    featured_id: str
    symbol: str
    title: str
    start_date_est: datetime
    description: Optional[str] = None
    end_date_est: Optional[datetime] = None
    added_by: Optional[str] = None

    def is_active(self, at: datetime) -> bool:
        return self.start_date_est <= at and (self.end_date_est is None or self.end_date_est > at)
