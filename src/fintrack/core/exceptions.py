"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class ForbiddenError(AppError):
    """Raised when a user acts on a resource they do not own."""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, code="FORBIDDEN")


class InvalidPositionError(AppError):
    """Raised when a position has non-positive shares or purchase price."""

    def __init__(self, position_id: str, reason: str):
        self.position_id = position_id
        super().__init__(
            f"Invalid position {position_id}: {reason}",
            code="INVALID_POSITION",
        )


class RestrictedSymbolError(AppError):
    """Raised when a symbol has been restricted by an administrator."""

    status_code = 403

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(
            f"Symbol {symbol} is restricted by the administrator",
            code="RESTRICTED_SYMBOL",
        )


class QuoteSourceError(AppError):
    """Base class for market data provider failures."""

    status_code = 502


class SymbolNotFoundError(QuoteSourceError):
    """Raised when the provider has no data for a symbol."""

    status_code = 404

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__(f"No data found for {symbol}", code="SYMBOL_NOT_FOUND")


class RateLimitError(QuoteSourceError):
    """Raised when the provider rejects a request because of its quota."""

    status_code = 429

    def __init__(self, message: str = "Market data provider rate limit exceeded"):
        super().__init__(message, code="RATE_LIMITED")


class QuoteSourceUnavailable(QuoteSourceError):
    """Raised when the provider cannot be reached at all."""

    status_code = 503

    def __init__(self, message: str = "Market data provider unavailable"):
        super().__init__(message, code="QUOTE_SOURCE_UNAVAILABLE")


class QuoteTimeoutError(QuoteSourceError):
    """Raised when a single provider request exceeds its deadline."""

    status_code = 504

    def __init__(self, message: str = "Market data provider request timed out"):
        super().__init__(message, code="QUOTE_TIMEOUT")
