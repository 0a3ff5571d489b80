"""
Subscriber repository for database access.

Encapsulates the Supabase queries and row mapping for:
- beehiiv_subscribers
- admin_users
"""

import logging
from datetime import datetime
from typing import Optional, Any

from supabase import Client

from shared.repository import BaseRepository
from .models import Subscriber, SubscriptionTier

logger = logging.getLogger(__name__)


class SubscriberRepository(BaseRepository[Subscriber]):
    """
    Repository for subscriber data access.

    Only reads. Tier values outside the known enum are logged and mapped
    to free so no caller ever sees an unrecognized tier.
    """

    def __init__(
        self,
        db: Client,
        subscribers_table: str = "beehiiv_subscribers",
        admin_users_table: str = "admin_users",
    ) -> None:
        super().__init__(db)
        self._subscribers_table = subscribers_table
        self._admin_users_table = admin_users_table

    def get_by_email(self, email: str) -> Optional[Subscriber]:
        """
        Get a subscriber by email.

        Args:
            email: Email address; compared lowercased.

        Returns:
            Subscriber, or None if no row matches.
        """
        result = (
            self._db.table(self._subscribers_table)
            .select("*")
            .eq("email", email.strip().lower())
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_subscriber(result.data[0])

    def is_active_admin(self, email: str) -> bool:
        """Whether an active admin_users row exists for this email."""
        result = (
            self._db.table(self._admin_users_table)
            .select("id")
            .eq("email", email.strip().lower())
            .eq("is_active", True)
            .limit(1)
            .execute()
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    def _map_to_subscriber(self, row: dict[str, Any]) -> Subscriber:
        raw_tier = row.get("subscription_tier")
        if not SubscriptionTier.is_known(raw_tier):
            logger.warning(
                f"Subscriber {row.get('id')} has unknown subscription_tier "
                f"{raw_tier!r}; treating as free"
            )

        return Subscriber(
            id=str(row["id"]),
            email=row.get("email") or "",
            subscription_tier=SubscriptionTier.normalize(raw_tier),
            status=row.get("status") or "active",
            created_at=self._parse_timestamp(row.get("created_at")),
            updated_at=self._parse_timestamp(row.get("updated_at")),
        )

    @staticmethod
    def _parse_timestamp(value: Any) -> Optional[datetime]:
        if not value:
            return None
        if isinstance(value, datetime):
            return value
        # Supabase returns ISO 8601 with a trailing Z
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
