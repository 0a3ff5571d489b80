"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.
"""

import logging
from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.access.interfaces import ITierAccessService
    from modules.chat.service import ChatGateService
    from modules.subscribers.interfaces import ISubscriberDirectory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self) -> None:
        self._subscriber_directory: "ISubscriberDirectory | None" = None
        self._access_service: "ITierAccessService | None" = None
        self._chat_service: "ChatGateService | None" = None

    @property
    def subscribers(self) -> "ISubscriberDirectory":
        """
        Get the subscriber directory.

        Uses Supabase when configured, otherwise an empty in-memory
        directory so the API can run locally without credentials.
        """
        if self._subscriber_directory is None:
            from shared.config import get_settings
            from modules.subscribers.service import (
                InMemorySubscriberDirectory,
                SupabaseSubscriberDirectory,
            )

            settings = get_settings()
            if settings.supabase_url and settings.supabase_service_role_key:
                from shared.database import get_supabase_client
                from modules.subscribers.repository import SubscriberRepository

                self._subscriber_directory = SupabaseSubscriberDirectory(
                    SubscriberRepository(
                        get_supabase_client(),
                        subscribers_table=settings.subscribers_table,
                        admin_users_table=settings.admin_users_table,
                    )
                )
            else:
                logger.warning(
                    "Supabase not configured; using empty in-memory subscriber directory"
                )
                self._subscriber_directory = InMemorySubscriberDirectory()
        return self._subscriber_directory

    @property
    def access(self) -> "ITierAccessService":
        """Get the tier access service instance."""
        if self._access_service is None:
            from modules.access.service import TierAccessService
            self._access_service = TierAccessService(directory=self.subscribers)
        return self._access_service

    @property
    def chat(self) -> "ChatGateService":
        """Get the chat gating service instance."""
        if self._chat_service is None:
            from modules.chat.service import ChatGateService
            self._chat_service = ChatGateService(access=self.access)
        return self._chat_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._subscriber_directory = None
        self._access_service = None
        self._chat_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_subscriber_directory() -> "ISubscriberDirectory":
    """FastAPI dependency for the subscriber directory."""
    return get_container().subscribers


def get_access_service() -> "ITierAccessService":
    """FastAPI dependency for the tier access service."""
    return get_container().access


def get_chat_service() -> "ChatGateService":
    """FastAPI dependency for the chat gating service."""
    return get_container().chat
