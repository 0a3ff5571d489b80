"""
Access module interface.

Routes and other modules depend on ITierAccessService, not on the concrete
service, so the subscriber source can be swapped in tests.
"""

from datetime import datetime
from typing import Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser

from .models import AccessDecision, ChatLimits, FeatureAccess


@runtime_checkable
class ITierAccessService(Protocol):
    """
    Interface for tier access decisions.

    Every method accepts an optional user (None means anonymous, treated
    as free) and an optional clock value for the grace window.
    """

    async def evaluate(
        self,
        user: Optional[AuthenticatedUser],
        widget_type: str,
        now: Optional[datetime] = None,
    ) -> AccessDecision:
        """
        Decide access and overlay state for one widget.

        Args:
            user: Authenticated user, or None for anonymous viewers
            widget_type: Widget key; unknown keys require paid
            now: Clock value for the grace window (defaults to now)

        Returns:
            AccessDecision, marked pending if subscriber data is unavailable
        """
        ...

    async def list_widgets(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> list[AccessDecision]:
        """Decisions for every registered widget, in registry order."""
        ...

    async def get_features(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> FeatureAccess:
        """Feature flags for the viewer."""
        ...

    async def get_chat_limits(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> ChatLimits:
        """Chat limits for the viewer."""
        ...

    async def get_chat_access(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> tuple[ChatLimits, FeatureAccess]:
        """Chat limits and feature flags from a single viewer lookup."""
        ...
