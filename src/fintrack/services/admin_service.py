"""Admin service for app settings, restricted symbols, featured stocks and API logs."""

import logging
import uuid
from datetime import datetime
from typing import Optional

from fintrack.core.timezone import now_eastern, to_eastern
from fintrack.core.exceptions import ValidationError, NotFoundError, RestrictedSymbolError
from fintrack.domain.models import AppSetting, RestrictedSymbol, FeaturedStock, ApiLog
from fintrack.repositories.protocols import AdminRepository

logger = logging.getLogger(__name__)

MAX_LOG_LIMIT = 1000


class AdminService:
    """Administrator operations. Callers are expected to have checked the admin role."""

    def __init__(self, admin_repo: AdminRepository):
        self._admin_repo = admin_repo

    def list_settings(self) -> list[AppSetting]:
        return self._admin_repo.list_settings()

    def get_setting(self, key: str) -> AppSetting:
        setting = self._admin_repo.get_setting(key)
        if not setting:
            raise NotFoundError("Setting", key)
        return setting

    def save_setting(self, key: str, value: str, updated_by: Optional[str] = None) -> AppSetting:
        """Create or overwrite a setting."""
        key = (key or "").strip()
        if not key:
            raise ValidationError("Setting key is required")
        setting = AppSetting(
            key=key,
            value=value,
            updated_at_est=now_eastern(),
            updated_by=updated_by,
        )
        saved = self._admin_repo.upsert_setting(setting)
        logger.info("Setting %s updated by %s", key, updated_by)
        return saved

    def list_restricted(self) -> list[RestrictedSymbol]:
        return self._admin_repo.list_restricted()

    def is_restricted(self, symbol: str) -> bool:
        return self._admin_repo.get_restricted_by_symbol(symbol.strip().upper()) is not None

    def add_restricted(
        self,
        symbol: str,
        reason: Optional[str] = None,
        added_by: Optional[str] = None,
    ) -> RestrictedSymbol:
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Symbol is required")
        if self._admin_repo.get_restricted_by_symbol(symbol):
            raise ValidationError(f"Symbol {symbol} is already restricted")
        restricted = RestrictedSymbol(
            restriction_id=str(uuid.uuid4()),
            symbol=symbol,
            reason=reason,
            added_at_est=now_eastern(),
            added_by=added_by,
        )
        created = self._admin_repo.add_restricted(restricted)
        logger.info("Symbol %s restricted by %s", symbol, added_by)
        return created

    def remove_restricted(self, restriction_id: str) -> None:
        if not self._admin_repo.delete_restricted(restriction_id):
            raise NotFoundError("Restricted symbol", restriction_id)

    def list_featured(self, active_only: bool = False) -> list[FeaturedStock]:
        """Featured stocks by start date; `active_only` keeps those running now."""
        featured = self._admin_repo.list_featured()
        if active_only:
            now = now_eastern()
            featured = [f for f in featured if f.is_active(now)]
        return featured

    def get_featured(self, featured_id: str) -> FeaturedStock:
        featured = self._admin_repo.get_featured(featured_id)
        if not featured:
            raise NotFoundError("Featured stock", featured_id)
        return featured

    def add_featured(
        self,
        symbol: str,
        title: str,
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        added_by: Optional[str] = None,
    ) -> FeaturedStock:
        """
        Feature a symbol from `start_date` (default now) until `end_date`.

        Raises:
            ValidationError: Missing symbol or title, or end not after start
            RestrictedSymbolError: The symbol is restricted
        """
        featured = FeaturedStock(
            featured_id=str(uuid.uuid4()),
            symbol=symbol,
            title=title,
            description=description,
            start_date_est=start_date or now_eastern(),
            end_date_est=end_date,
            added_by=added_by,
        )
        created = self._admin_repo.add_featured(self._checked_featured(featured))
        logger.info("Symbol %s featured by %s", created.symbol, added_by)
        return created

    def update_featured(
        self,
        featured_id: str,
        symbol: Optional[str] = None,
        title: Optional[str] = None,
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> FeaturedStock:
        """Change the given fields of a featured stock; None leaves a field as is."""
        featured = self.get_featured(featured_id)
        if symbol is not None:
            featured.symbol = symbol
        if title is not None:
            featured.title = title
        if description is not None:
            featured.description = description
        if start_date is not None:
            featured.start_date_est = start_date
        if end_date is not None:
            featured.end_date_est = end_date
        return self._admin_repo.update_featured(self._checked_featured(featured))

    def remove_featured(self, featured_id: str) -> None:
        if not self._admin_repo.delete_featured(featured_id):
            raise NotFoundError("Featured stock", featured_id)

    def _checked_featured(self, featured: FeaturedStock) -> FeaturedStock:
        featured.symbol = (featured.symbol or "").strip().upper()
        featured.title = (featured.title or "").strip()
        if not featured.symbol:
            raise ValidationError("Symbol is required")
        if not featured.title:
            raise ValidationError("Title is required")
        if self._admin_repo.get_restricted_by_symbol(featured.symbol):
            raise RestrictedSymbolError(featured.symbol)
        featured.start_date_est = to_eastern(featured.start_date_est)
        if featured.end_date_est is not None:
            featured.end_date_est = to_eastern(featured.end_date_est)
            if featured.end_date_est <= featured.start_date_est:
                raise ValidationError("end_date must be after start_date")
        return featured

    def list_api_logs(self, limit: int = 100, user_id: Optional[str] = None) -> list[ApiLog]:
        """Most recent provider calls first."""
        if limit < 1 or limit > MAX_LOG_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_LOG_LIMIT}")
        return self._admin_repo.list_api_logs(limit=limit, user_id=user_id)
