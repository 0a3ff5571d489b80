"""
Subscriber module interface.

The access module depends on ISubscriberDirectory, not on Supabase. Tests
and local development use the in-memory implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import Subscriber


@runtime_checkable
class ISubscriberDirectory(Protocol):
    """
    Read-only view of subscribers and platform admins.

    Implementations must normalize subscription tiers before returning
    a Subscriber.
    """

    async def get_by_email(self, email: str) -> Optional[Subscriber]:
        """
        Get a subscriber by email.

        Args:
            email: Subscriber email (matched case-insensitively)

        Returns:
            Subscriber if found, None otherwise

        Raises:
            SubscriberLookupError: If the backing store fails
        """
        ...

    async def is_admin(self, email: str) -> bool:
        """
        Check whether an email belongs to an active platform admin.

        Raises:
            SubscriberLookupError: If the backing store fails
        """
        ...
