"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Date,
    Boolean,
    Float,
    Integer,
    Text,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from fintrack.repositories.sqlalchemy.database import Base


class PortfolioORM(Base):
    """SQLAlchemy model for Portfolio."""

    __tablename__ = "portfolios"

    portfolio_id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at_est = Column(DateTime, nullable=False, default=datetime.utcnow)

    positions = relationship(
        "PositionORM",
        back_populates="portfolio",
        cascade="all, delete-orphan",
    )


class PositionORM(Base):
    """SQLAlchemy model for Position."""

    __tablename__ = "positions"

    position_id = Column(String(36), primary_key=True)
    portfolio_id = Column(
        String(36),
        ForeignKey("portfolios.portfolio_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    symbol = Column(String(20), nullable=False)
    shares = Column(Float, nullable=False)
    purchase_price = Column(Float, nullable=False)
    purchase_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    created_at_est = Column(DateTime, nullable=False, default=datetime.utcnow)

    portfolio = relationship("PortfolioORM", back_populates="positions")


class WatchlistORM(Base):
    """SQLAlchemy model for Watchlist."""

    __tablename__ = "watchlists"

    watchlist_id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_at_est = Column(DateTime, nullable=False, default=datetime.utcnow)

    items = relationship(
        "WatchlistItemORM",
        back_populates="watchlist",
        cascade="all, delete-orphan",
    )


class WatchlistItemORM(Base):
    """SQLAlchemy model for WatchlistItem."""

    __tablename__ = "watchlist_items"
    __table_args__ = (UniqueConstraint("watchlist_id", "symbol"),)

    item_id = Column(String(36), primary_key=True)
    watchlist_id = Column(
        String(36),
        ForeignKey("watchlists.watchlist_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    symbol = Column(String(20), nullable=False)
    added_at_est = Column(DateTime, nullable=False, default=datetime.utcnow)

    watchlist = relationship("WatchlistORM", back_populates="items")


class AppSettingORM(Base):
    """SQLAlchemy model for AppSetting."""

    __tablename__ = "app_settings"

    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at_est = Column(DateTime, nullable=True)
    updated_by = Column(String(64), nullable=True)


class RestrictedSymbolORM(Base):
    """SQLAlchemy model for RestrictedSymbol."""

    __tablename__ = "restricted_symbols"

    restriction_id = Column(String(36), primary_key=True)
    symbol = Column(String(20), unique=True, nullable=False)
    reason = Column(Text, nullable=True)
    added_at_est = Column(DateTime, nullable=True)
    added_by = Column(String(64), nullable=True)


class FeaturedStockORM(Base):
    """SQLAlchemy model for FeaturedStock."""

    __tablename__ = "featured_stocks"

    featured_id = Column(String(36), primary_key=True)
    symbol = Column(String(20), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    start_date_est = Column(DateTime, nullable=False)
    end_date_est = Column(DateTime, nullable=True)
    added_by = Column(String(64), nullable=True)


class ApiLogORM(Base):
    """SQLAlchemy model for ApiLog."""

    __tablename__ = "api_logs"

    log_id = Column(String(36), primary_key=True)
    user_id = Column(String(64), nullable=True, index=True)
    endpoint = Column(String(255), nullable=False)
    request_time_est = Column(DateTime, nullable=False)
    response_time_ms = Column(Integer, nullable=False, default=0)
    success = Column(Boolean, nullable=False)
    error_message = Column(Text, nullable=True)
