"""
Tier access service implementation.

Resolves who is asking (subscriber record, admin flag, grace claim), then
delegates every decision to the pure policy in policy.py.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser
from modules.subscribers.exceptions import SubscriberLookupError
from modules.subscribers.interfaces import ISubscriberDirectory
from modules.subscribers.models import Subscriber, SubscriptionTier

from . import policy
from .interfaces import ITierAccessService
from .models import AccessDecision, AccessOverride, ChatLimits, FeatureAccess
from .widgets import WIDGET_REGISTRY

logger = logging.getLogger(__name__)


@dataclass
class ViewerContext:
    """Everything the policy needs about the current viewer."""

    subscriber: Optional[Subscriber]
    override: AccessOverride
    pending: bool = False


def parse_grace_claim(
    app_metadata: dict[str, Any],
) -> tuple[Optional[SubscriptionTier], Optional[datetime]]:
    """
    Read the grace claim from Supabase app_metadata.

    Expects `grace_tier` and `grace_started_at` (ISO 8601 string or epoch
    seconds). Anything malformed yields (None, None).
    """
    tier = SubscriptionTier.parse(app_metadata.get("grace_tier"))
    raw_started = app_metadata.get("grace_started_at")
    if tier is None or raw_started is None:
        return None, None

    try:
        if isinstance(raw_started, (int, float)):
            started_at = datetime.fromtimestamp(raw_started, tz=timezone.utc)
        else:
            started_at = datetime.fromisoformat(str(raw_started).replace("Z", "+00:00"))
    except (ValueError, OverflowError, OSError):
        return None, None

    return tier, started_at


class TierAccessService(ITierAccessService):
    """
    Implementation of the tier access service.

    Subscriber and admin lookups go through ISubscriberDirectory. If the
    directory fails, decisions fall back to the override alone and are
    marked pending.
    """

    def __init__(
        self,
        directory: ISubscriberDirectory,
        settings: Optional[Settings] = None,
    ):
        self._directory = directory
        self._settings = settings or get_settings()

    @property
    def grace_window(self) -> timedelta:
        return timedelta(seconds=self._settings.access_grace_period_seconds)

    def build_override(
        self,
        is_admin: bool = False,
        grace_tier: Optional[SubscriptionTier] = None,
        grace_started_at: Optional[datetime] = None,
    ) -> AccessOverride:
        """Build an override honoring the feature flags and the grace window."""
        is_admin = is_admin and self._settings.enable_admin_override
        if (
            not self._settings.enable_grace_period
            or grace_tier is None
            or grace_started_at is None
        ):
            return AccessOverride(is_admin=is_admin)
        return AccessOverride.grace(
            grace_tier,
            grace_started_at,
            self.grace_window,
            is_admin=is_admin,
        )

    async def resolve_viewer(self, user: Optional[AuthenticatedUser]) -> ViewerContext:
        """Look up the viewer's subscriber record, admin flag and grace claim."""
        if user is None:
            return ViewerContext(subscriber=None, override=AccessOverride.none())

        grace_tier, grace_started_at = parse_grace_claim(user.app_metadata)

        try:
            subscriber = await self._directory.get_by_email(user.email)
            is_admin = await self._directory.is_admin(user.email)
        except SubscriberLookupError as e:
            logger.warning(f"Subscriber data unavailable for {user.id}, deferring: {e.message}")
            return ViewerContext(
                subscriber=None,
                override=self.build_override(False, grace_tier, grace_started_at),
                pending=True,
            )

        return ViewerContext(
            subscriber=subscriber,
            override=self.build_override(is_admin, grace_tier, grace_started_at),
        )

    async def evaluate(
        self,
        user: Optional[AuthenticatedUser],
        widget_type: str,
        now: Optional[datetime] = None,
    ) -> AccessDecision:
        viewer = await self.resolve_viewer(user)
        return self._decide(viewer, widget_type, now or datetime.now(timezone.utc), user)

    async def list_widgets(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> list[AccessDecision]:
        viewer = await self.resolve_viewer(user)
        now = now or datetime.now(timezone.utc)
        return [self._decide(viewer, key, now, user) for key in WIDGET_REGISTRY]

    async def get_features(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> FeatureAccess:
        viewer = await self.resolve_viewer(user)
        return self._features(viewer, now)

    async def get_chat_limits(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> ChatLimits:
        viewer = await self.resolve_viewer(user)
        return self._chat_limits(viewer, now)

    async def get_chat_access(
        self,
        user: Optional[AuthenticatedUser],
        now: Optional[datetime] = None,
    ) -> tuple[ChatLimits, FeatureAccess]:
        viewer = await self.resolve_viewer(user)
        return self._chat_limits(viewer, now), self._features(viewer, now)

    def _features(self, viewer: ViewerContext, now: Optional[datetime]) -> FeatureAccess:
        features = policy.get_feature_access(viewer.subscriber, viewer.override, now)
        if viewer.pending:
            return features.model_copy(update={"pending": True})
        return features

    def _chat_limits(self, viewer: ViewerContext, now: Optional[datetime]) -> ChatLimits:
        limits = policy.get_chat_limits(viewer.subscriber, viewer.override, now)
        if viewer.pending:
            return limits.model_copy(update={"pending": True})
        return limits

    def _decide(
        self,
        viewer: ViewerContext,
        widget_type: str,
        now: datetime,
        user: Optional[AuthenticatedUser],
    ) -> AccessDecision:
        viewer_id = user.id if user else "anonymous"

        if viewer.pending:
            return policy.pending_decision(widget_type, viewer.override, now)

        decision = policy.evaluate_widget(viewer.subscriber, widget_type, viewer.override, now)

        if decision.override_applied is not None:
            logger.info(
                f"{decision.override_applied.value} override granted {viewer_id} "
                f"access to {widget_type}"
            )
        logger.debug(
            f"Access decision for {viewer_id} on {widget_type}: "
            f"tier={decision.effective_tier.value} required={decision.required_tier.value} "
            f"access={decision.has_access} overlay={decision.should_show_overlay}"
        )

        if decision.should_show_overlay:
            return decision.model_copy(update={"upgrade_url": self._upgrade_url()})
        return decision

    def _upgrade_url(self) -> str:
        return self._settings.frontend_url.rstrip("/") + self._settings.upgrade_path
