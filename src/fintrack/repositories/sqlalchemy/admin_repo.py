"""SQLAlchemy implementation of AdminRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from fintrack.core.timezone import to_eastern
from fintrack.domain.models import AppSetting, RestrictedSymbol, FeaturedStock, ApiLog
from fintrack.repositories.sqlalchemy.orm_models import (
    AppSettingORM,
    RestrictedSymbolORM,
    FeaturedStockORM,
    ApiLogORM,
)


class SqlAlchemyAdminRepository:
    """SQLAlchemy-backed repository for settings, restrictions and API logs."""

    def __init__(self, db: Session):
        self._db = db

    # App settings

    def list_settings(self) -> list[AppSetting]:
        """List all settings ordered by key."""
        orm_settings = self._db.query(AppSettingORM).order_by(AppSettingORM.key).all()
        return [self._setting_to_domain(s) for s in orm_settings]

    def get_setting(self, key: str) -> Optional[AppSetting]:
        """Retrieve a setting by key."""
        orm_setting = self._db.query(AppSettingORM).filter(AppSettingORM.key == key).first()
        return self._setting_to_domain(orm_setting) if orm_setting else None

    def upsert_setting(self, setting: AppSetting) -> AppSetting:
        """Insert or update a setting."""
        orm_setting = self._db.query(AppSettingORM).filter(
            AppSettingORM.key == setting.key
        ).first()

        if orm_setting:
            orm_setting.value = setting.value
            orm_setting.updated_at_est = setting.updated_at_est
            orm_setting.updated_by = setting.updated_by
        else:
            orm_setting = AppSettingORM(
                key=setting.key,
                value=setting.value,
                updated_at_est=setting.updated_at_est,
                updated_by=setting.updated_by,
            )
            self._db.add(orm_setting)

        self._db.commit()
        self._db.refresh(orm_setting)
        return self._setting_to_domain(orm_setting)

    # Restricted symbols

    def list_restricted(self) -> list[RestrictedSymbol]:
        """List restricted symbols ordered by symbol."""
        orm_rows = self._db.query(RestrictedSymbolORM).order_by(RestrictedSymbolORM.symbol).all()
        return [self._restricted_to_domain(r) for r in orm_rows]

    def get_restricted_by_symbol(self, symbol: str) -> Optional[RestrictedSymbol]:
        """Retrieve a restriction by symbol."""
        orm_row = self._db.query(RestrictedSymbolORM).filter(
            RestrictedSymbolORM.symbol == symbol
        ).first()
        return self._restricted_to_domain(orm_row) if orm_row else None

    def add_restricted(self, restricted: RestrictedSymbol) -> RestrictedSymbol:
        """Persist a new restriction."""
        orm_row = RestrictedSymbolORM(
            restriction_id=restricted.restriction_id,
            symbol=restricted.symbol,
            reason=restricted.reason,
            added_at_est=restricted.added_at_est,
            added_by=restricted.added_by,
        )
        self._db.add(orm_row)
        self._db.commit()
        self._db.refresh(orm_row)
        return self._restricted_to_domain(orm_row)

    def delete_restricted(self, restriction_id: str) -> bool:
        """Delete a restriction. Returns False if it did not exist."""
        deleted = self._db.query(RestrictedSymbolORM).filter(
            RestrictedSymbolORM.restriction_id == restriction_id
        ).delete()
        self._db.commit()
        return deleted > 0

    # Featured stocks

    def list_featured(self) -> list[FeaturedStock]:
        """List featured stocks ordered by start date, active or not."""
        orm_rows = self._db.query(FeaturedStockORM).order_by(
            FeaturedStockORM.start_date_est, FeaturedStockORM.symbol
        ).all()
        return [self._featured_to_domain(r) for r in orm_rows]

    def get_featured(self, featured_id: str) -> Optional[FeaturedStock]:
        """Retrieve a featured stock by ID."""
        orm_row = self._db.query(FeaturedStockORM).filter(
            FeaturedStockORM.featured_id == featured_id
        ).first()
        return self._featured_to_domain(orm_row) if orm_row else None

    def add_featured(self, featured: FeaturedStock) -> FeaturedStock:
        """Persist a new featured stock."""
        orm_row = FeaturedStockORM(featured_id=featured.featured_id)
        self._apply_featured(orm_row, featured)
        self._db.add(orm_row)
        self._db.commit()
        self._db.refresh(orm_row)
        return self._featured_to_domain(orm_row)

    def update_featured(self, featured: FeaturedStock) -> FeaturedStock:
        """Overwrite an existing featured stock."""
        orm_row = self._db.query(FeaturedStockORM).filter(
            FeaturedStockORM.featured_id == featured.featured_id
        ).first()
        if orm_row is None:
            raise ValueError(f"Featured stock not found: {featured.featured_id}")
        self._apply_featured(orm_row, featured)
        self._db.commit()
        self._db.refresh(orm_row)
        return self._featured_to_domain(orm_row)

    def delete_featured(self, featured_id: str) -> bool:
        """Delete a featured stock. Returns False if it did not exist."""
        deleted = self._db.query(FeaturedStockORM).filter(
            FeaturedStockORM.featured_id == featured_id
        ).delete()
        self._db.commit()
        return deleted > 0

    # API logs

    def add_api_log(self, log: ApiLog) -> ApiLog:
        """Persist an API log entry."""
        orm_log = ApiLogORM(
            log_id=log.log_id,
            user_id=log.user_id,
            endpoint=log.endpoint,
            request_time_est=log.request_time_est,
            response_time_ms=log.response_time_ms,
            success=log.success,
            error_message=log.error_message,
        )
        self._db.add(orm_log)
        self._db.commit()
        self._db.refresh(orm_log)
        return self._log_to_domain(orm_log)

    def list_api_logs(self, limit: int = 100, user_id: Optional[str] = None) -> list[ApiLog]:
        """List log entries newest first."""
        query = self._db.query(ApiLogORM)
        if user_id is not None:
            query = query.filter(ApiLogORM.user_id == user_id)
        orm_logs = query.order_by(ApiLogORM.request_time_est.desc()).limit(limit).all()
        return [self._log_to_domain(row) for row in orm_logs]

    @staticmethod
    def _setting_to_domain(orm: AppSettingORM) -> AppSetting:
        return AppSetting(
            key=orm.key,
            value=orm.value,
            updated_at_est=orm.updated_at_est,
            updated_by=orm.updated_by,
        )

    @staticmethod
    def _restricted_to_domain(orm: RestrictedSymbolORM) -> RestrictedSymbol:
        return RestrictedSymbol(
            restriction_id=orm.restriction_id,
            symbol=orm.symbol,
            reason=orm.reason,
            added_at_est=orm.added_at_est,
            added_by=orm.added_by,
        )

    @staticmethod
    def _log_to_domain(orm: ApiLogORM) -> ApiLog:
        return ApiLog(
            log_id=orm.log_id,
            user_id=orm.user_id,
            endpoint=orm.endpoint,
            request_time_est=orm.request_time_est,
            response_time_ms=orm.response_time_ms,
            success=orm.success,
            error_message=orm.error_message,
        )

    @staticmethod
    def _apply_featured(orm: FeaturedStockORM, featured: FeaturedStock) -> None:
        orm.symbol = featured.symbol
        orm.title = featured.title
        orm.description = featured.description
        orm.start_date_est = featured.start_date_est
        orm.end_date_est = featured.end_date_est
        orm.added_by = featured.added_by

    @staticmethod
    def _featured_to_domain(orm: FeaturedStockORM) -> FeaturedStock:
        # SQLite returns naive datetimes holding Eastern wall-clock time
        return FeaturedStock(
            featured_id=orm.featured_id,
            symbol=orm.symbol,
            title=orm.title,
            description=orm.description,
            start_date_est=to_eastern(orm.start_date_est),
            end_date_est=to_eastern(orm.end_date_est) if orm.end_date_est else None,
            added_by=orm.added_by,
        )
