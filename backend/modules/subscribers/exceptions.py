"""
Subscriber module exceptions.

Raised when the subscriber directory cannot answer. A missing subscriber is
not an error; lookups return None for that.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class SubscriberLookupError(ExternalServiceError):
    """Raised when Supabase fails while reading subscriber or admin records."""

    def __init__(self, operation: str, reason: Optional[str] = None):
        super().__init__(
            f"Subscriber lookup failed during {operation}",
            service="supabase",
            code="SUBSCRIBER_LOOKUP_FAILED",
            details={"operation": operation},
        )
        if reason:
            self.details["reason"] = reason
