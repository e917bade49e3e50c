"""
Base Exception Class

The root of the Showlist exception hierarchy. Themed exceptions live in
their own modules and inherit from `ShowlistError`.
"""

from typing import Any


class ShowlistError(Exception):
    """
    Base exception for all Showlist errors.

    All custom exceptions inherit from this class to enable:
    - Consistent error handling and HTTP mapping (`status_code`)
    - Request ID correlation
    - Structured error logging

    Attributes:
        message: Error message (safe to show to API clients)
        request_id: Request ID for correlation (if available)
        details: Additional error details (dict)

    Example:
        raise NotFoundError(
            "Watchlist not found",
            details={"watchlist_id": watchlist_id},
        )
    """

    status_code: int = 500

    def __init__(
        self, message: str, request_id: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.request_id = request_id
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging/API responses.

        Returns:
            Dict with error_type, message, request_id, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "request_id": self.request_id,
            "details": self.details,
        }

    def with_context(self, **context) -> "ShowlistError":
        """
        Add additional context to the error details.

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        request_id_str = f", request_id='{self.request_id}'" if self.request_id else ""
        return f"{self.__class__.__name__}(message='{self.message}'{request_id_str}{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        request_id: str | None = None,
        **details
    ) -> "ShowlistError":
        """
        Create an error of this class from another exception.

        Useful for wrapping third-party exceptions with additional context.

        Example:
            >>> try:
            ...     await redis.ping()
            ... except redis.ConnectionError as e:
            ...     raise CacheConnectionError.from_exception(e, host="localhost", port=6379)
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(error_message, request_id=request_id, details=error_details)


class ConfigurationError(ShowlistError):
    """Raised when configuration is invalid or missing."""
    pass
