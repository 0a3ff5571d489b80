"""
Base exceptions for the Tradedesk backend.

Module errors subclass TradedeskError so the API error handler can render
them as ErrorResponse JSON. The access policy itself never raises.
"""

from typing import Optional, Any


class TradedeskError(Exception):
    """
    Base exception for backend errors.

    `code` defaults to the class name and is what clients match on.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Body of the ErrorResponse returned to the dashboard."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ExternalServiceError(TradedeskError):
    """A backing service (Supabase) failed or timed out. Rendered as 503."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
