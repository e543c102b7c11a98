"""In-memory implementation of AdminRepository."""

from dataclasses import replace
from typing import Optional

from fintrack.domain.models import AppSetting, RestrictedSymbol, FeaturedStock, ApiLog
from fintrack.repositories.memory.store import InMemoryStore


class InMemoryAdminRepository:
    """Dict-backed repository for settings, restrictions, featured stocks and API logs."""

    def __init__(self, store: InMemoryStore):
        self._store = store

    # App settings

    def list_settings(self) -> list[AppSetting]:
        return [replace(s) for _, s in sorted(self._store.settings.items())]

    def get_setting(self, key: str) -> Optional[AppSetting]:
        setting = self._store.settings.get(key)
        return replace(setting) if setting else None

    def upsert_setting(self, setting: AppSetting) -> AppSetting:
        self._store.settings[setting.key] = replace(setting)
        return replace(setting)

    # Restricted symbols

    def list_restricted(self) -> list[RestrictedSymbol]:
        return sorted(
            (replace(r) for r in self._store.restricted.values()),
            key=lambda r: r.symbol,
        )

    def get_restricted_by_symbol(self, symbol: str) -> Optional[RestrictedSymbol]:
        for restricted in self._store.restricted.values():
            if restricted.symbol == symbol:
                return replace(restricted)
        return None

    def add_restricted(self, restricted: RestrictedSymbol) -> RestrictedSymbol:
        self._store.restricted[restricted.restriction_id] = replace(restricted)
        return replace(restricted)

    def delete_restricted(self, restriction_id: str) -> bool:
        return self._store.restricted.pop(restriction_id, None) is not None

    # Featured stocks

    def list_featured(self) -> list[FeaturedStock]:
        return sorted(
            (replace(f) for f in self._store.featured.values()),
            key=lambda f: (f.start_date_est, f.symbol),
        )

    def get_featured(self, featured_id: str) -> Optional[FeaturedStock]:
        featured = self._store.featured.get(featured_id)
        return replace(featured) if featured else None

    def add_featured(self, featured: FeaturedStock) -> FeaturedStock:
        self._store.featured[featured.featured_id] = replace(featured)
        return replace(featured)

    def update_featured(self, featured: FeaturedStock) -> FeaturedStock:
        self._store.featured[featured.featured_id] = replace(featured)
        return replace(featured)

    def delete_featured(self, featured_id: str) -> bool:
        return self._store.featured.pop(featured_id, None) is not None

    # API logs

    def add_api_log(self, log: ApiLog) -> ApiLog:
        self._store.api_logs.append(replace(log))
        return replace(log)

    def list_api_logs(self, limit: int = 100, user_id: Optional[str] = None) -> list[ApiLog]:
        logs = [
            replace(log) for log in self._store.api_logs
            if user_id is None or log.user_id == user_id
        ]
        logs.sort(key=lambda log: log.request_time_est, reverse=True)
        return logs[:limit]
