"""
Base repository class for database access.

Wraps the Supabase client so each repository keeps its own table queries
and row-to-model mapping in one place.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Subclasses implement the lookups they need and map raw rows to
    Pydantic models internally.

    Example:
        class SubscriberRepository(BaseRepository[Subscriber]):
            def get_by_email(self, email: str) -> Optional[Subscriber]:
                result = (
                    self._db.table("beehiiv_subscribers")
                    .select("*")
                    .eq("email", email)
                    .execute()
                )
                if not result.data:
                    return None
                return self._map_to_subscriber(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db
