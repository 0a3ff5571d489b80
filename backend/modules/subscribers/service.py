"""
Subscriber directory implementations.

Provides both in-memory (for testing) and Supabase-backed (for production)
implementations of ISubscriberDirectory.
"""

import logging
from typing import Iterable, Optional

from .exceptions import SubscriberLookupError
from .interfaces import ISubscriberDirectory
from .models import Subscriber
from .repository import SubscriberRepository

logger = logging.getLogger(__name__)


class InMemorySubscriberDirectory(ISubscriberDirectory):
    """
    Subscriber directory with in-memory storage.

    For testing and development. Use SupabaseSubscriberDirectory for production.
    """

    def __init__(
        self,
        subscribers: Optional[Iterable[Subscriber]] = None,
        admin_emails: Optional[Iterable[str]] = None,
    ):
        self._by_email: dict[str, Subscriber] = {}
        self._admin_emails: set[str] = set()

        for subscriber in subscribers or []:
            self.add(subscriber)
        for email in admin_emails or []:
            self.add_admin(email)

    def add(self, subscriber: Subscriber) -> None:
        """Insert or replace a subscriber."""
        self._by_email[subscriber.email] = subscriber

    def add_admin(self, email: str) -> None:
        """Mark an email as an active platform admin."""
        self._admin_emails.add(email.strip().lower())

    async def get_by_email(self, email: str) -> Optional[Subscriber]:
        return self._by_email.get(email.strip().lower())

    async def is_admin(self, email: str) -> bool:
        return email.strip().lower() in self._admin_emails


class SupabaseSubscriberDirectory(ISubscriberDirectory):
    """
    Subscriber directory backed by Supabase.

    Wraps SubscriberRepository and converts client failures into
    SubscriberLookupError so callers can degrade instead of crashing.
    """

    def __init__(self, repository: SubscriberRepository):
        self._repository = repository

    async def get_by_email(self, email: str) -> Optional[Subscriber]:
        try:
            return self._repository.get_by_email(email)
        except Exception as e:
            logger.warning(f"Subscriber lookup by email failed: {e}")
            raise SubscriberLookupError("get_by_email", str(e)) from e

    async def is_admin(self, email: str) -> bool:
        try:
            return self._repository.is_active_admin(email)
        except Exception as e:
            logger.warning(f"Admin lookup failed: {e}")
            raise SubscriberLookupError("is_admin", str(e)) from e
