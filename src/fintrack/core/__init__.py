"""Core utilities and shared functionality."""

from fintrack.core.timezone import (
    now_eastern,
    today_eastern,
    to_eastern,
    parse_datetime_eastern,
    parse_date,
    EASTERN_TZ,
)
from fintrack.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ForbiddenError,
    InvalidPositionError,
    RestrictedSymbolError,
    QuoteSourceError,
    SymbolNotFoundError,
    RateLimitError,
    QuoteSourceUnavailable,
    QuoteTimeoutError,
)

__all__ = [
    "now_eastern",
    "today_eastern",
    "to_eastern",
    "parse_datetime_eastern",
    "parse_date",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ForbiddenError",
    "InvalidPositionError",
    "RestrictedSymbolError",
    "QuoteSourceError",
    "SymbolNotFoundError",
    "RateLimitError",
    "QuoteSourceUnavailable",
    "QuoteTimeoutError",
]
