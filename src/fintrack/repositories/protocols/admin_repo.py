"""Admin repository protocol: settings, restricted symbols, featured stocks and API logs."""

from typing import Protocol, Optional

from fintrack.domain.models import AppSetting, RestrictedSymbol, FeaturedStock, ApiLog


class AdminRepository(Protocol):
    """Interface for administration data access."""

    # App settings
    def list_settings(self) -> list[AppSetting]:
        """List all settings ordered by key."""
        ...

    def get_setting(self, key: str) -> Optional[AppSetting]:
        """Retrieve a setting by key."""
        ...

    def upsert_setting(self, setting: AppSetting) -> AppSetting:
        """Insert or update a setting."""
        ...

    # Restricted symbols
    def list_restricted(self) -> list[RestrictedSymbol]:
        """List restricted symbols ordered by symbol."""
        ...

    def get_restricted_by_symbol(self, symbol: str) -> Optional[RestrictedSymbol]:
        """Retrieve a restriction by symbol."""
        ...

    def add_restricted(self, restricted: RestrictedSymbol) -> RestrictedSymbol:
        """Persist a new restriction."""
        ...

    def delete_restricted(self, restriction_id: str) -> bool:
        """Delete a restriction. Returns False if it did not exist."""
        ...

    # Featured stocks
    def list_featured(self) -> list[FeaturedStock]:
        """List featured stocks ordered by start date, active or not."""
        ...

    def get_featured(self, featured_id: str) -> Optional[FeaturedStock]:
        """Retrieve a featured stock by ID."""
        ...

    def add_featured(self, featured: FeaturedStock) -> FeaturedStock:
        """Persist a new featured stock."""
        ...

    def update_featured(self, featured: FeaturedStock) -> FeaturedStock:
        """Overwrite an existing featured stock."""
        ...

    def delete_featured(self, featured_id: str) -> bool:
        """Delete a featured stock. Returns False if it did not exist."""
        ...

    # API logs
    def add_api_log(self, log: ApiLog) -> ApiLog:
        """Persist an API log entry."""
        ...

    def list_api_logs(self, limit: int = 100, user_id: Optional[str] = None) -> list[ApiLog]:
        """List log entries newest first."""
        ...
