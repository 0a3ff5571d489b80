"""
Tier access policy.

Pure functions deciding whether a viewer may see a widget or feature, and
whether the freemium overlay replaces it. Nothing here performs I/O, logs,
or raises: malformed input is normalized toward the more restrictive
answer. Callers pass an explicit AccessOverride and clock value instead of
relying on ambient session state.
"""

from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Union

from modules.subscribers.models import Subscriber, SubscriptionTier

from .models import (
    AccessDecision,
    AccessOverride,
    ChatLimits,
    FeatureAccess,
    HighlightAccess,
    OverrideKind,
    WidgetAccess,
)
from .widgets import DEFAULT_REQUIRED_TIER, WIDGET_REGISTRY, get_widget

SubscriberLike = Union[Subscriber, Mapping[str, Any], None]


CHAT_LIMITS: dict[SubscriptionTier, ChatLimits] = {
    SubscriptionTier.PREMIUM: ChatLimits(
        message_history=1000,
        can_send_messages=True,
        can_export=True,
        realtime_updates=True,
        highlight_access=HighlightAccess.FULL,
    ),
    SubscriptionTier.PAID: ChatLimits(
        message_history=100,
        can_send_messages=True,
        can_export=False,
        realtime_updates=True,
        highlight_access=HighlightAccess.LIMITED,
    ),
    SubscriptionTier.FREE: ChatLimits(
        message_history=10,
        can_send_messages=False,
        can_export=False,
        realtime_updates=False,
        highlight_access=HighlightAccess.PREVIEW,
    ),
}

FEATURE_REQUIREMENTS: dict[str, SubscriptionTier] = {
    "newsletter": SubscriptionTier.FREE,
    "full_chat_history": SubscriptionTier.PREMIUM,
    "advanced_filtering": SubscriptionTier.PAID,
    "topic_selection": SubscriptionTier.PAID,
    "sentiment_analysis": SubscriptionTier.PREMIUM,
    "alert_system": SubscriptionTier.PAID,
    "export_capabilities": SubscriptionTier.PREMIUM,
    "priority_support": SubscriptionTier.PREMIUM,
}


# -----------------------------------------------------------------------------
# Tier resolution
# -----------------------------------------------------------------------------


def subscriber_tier(subscriber: SubscriberLike) -> SubscriptionTier:
    """Tier recorded for a subscriber. None and bad values mean free."""
    if subscriber is None:
        return SubscriptionTier.FREE
    if isinstance(subscriber, Mapping):
        raw = subscriber.get("subscription_tier")
    else:
        raw = getattr(subscriber, "subscription_tier", None)
    return SubscriptionTier.normalize(raw)


def required_tier(minimum_tier: Any) -> SubscriptionTier:
    """Parse a gate's tier. Unknown values require DEFAULT_REQUIRED_TIER."""
    return SubscriptionTier.parse(minimum_tier) or DEFAULT_REQUIRED_TIER


def required_tier_for(widget_type: Optional[str]) -> SubscriptionTier:
    """Minimum tier for a widget, for upgrade prompts and docs."""
    return get_widget(widget_type).required_tier


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken as UTC so comparisons never raise
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_grace_active(override: Optional[AccessOverride], now: Optional[datetime] = None) -> bool:
    """Whether the override carries an above-free grace tier that has not expired."""
    if override is None or override.grace_tier is None:
        return False
    if override.grace_started_at is None or override.grace_expires_at is None:
        return False
    if override.grace_tier.rank <= SubscriptionTier.FREE.rank:
        return False

    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    started = _as_utc(override.grace_started_at)
    expires = _as_utc(override.grace_expires_at)
    return started <= now < expires


def active_override(
    override: Optional[AccessOverride],
    now: Optional[datetime] = None,
) -> Optional[OverrideKind]:
    """The override that grants full access right now, admin first."""
    if override is None:
        return None
    if override.is_admin:
        return OverrideKind.ADMIN
    if is_grace_active(override, now):
        return OverrideKind.GRACE
    return None


def effective_tier(
    subscriber: SubscriberLike,
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> SubscriptionTier:
    """
    Tier the viewer is treated as having.

    Admins count as premium. An active grace tier lifts the recorded tier
    but never lowers it.
    """
    base = subscriber_tier(subscriber)
    kind = active_override(override, now)
    if kind == OverrideKind.ADMIN:
        return SubscriptionTier.PREMIUM
    if kind == OverrideKind.GRACE and override.grace_tier.rank > base.rank:
        return override.grace_tier
    return base


# -----------------------------------------------------------------------------
# Access questions
# -----------------------------------------------------------------------------


def can_access(
    subscriber: SubscriberLike,
    minimum_tier: Any,
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> bool:
    """
    Whether the viewer meets `minimum_tier`.

    An active override (admin or grace) is checked before the tier
    comparison and always grants access.
    """
    if active_override(override, now) is not None:
        return True
    return subscriber_tier(subscriber).rank >= required_tier(minimum_tier).rank


def should_show_freemium_overlay(
    subscriber: SubscriberLike,
    widget_type: Optional[str],
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> bool:
    """
    Whether the widget must be replaced by the freemium overlay.

    Never for an active override or a tier-exempt widget. Unknown widgets
    require paid.
    """
    if active_override(override, now) is not None:
        return False

    descriptor = get_widget(widget_type)
    if descriptor.tier_exempt:
        return False

    return not can_access(subscriber, descriptor.required_tier)


def evaluate_widget(
    subscriber: SubscriberLike,
    widget_type: Optional[str],
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> AccessDecision:
    """Full decision for one widget, with overlay content when locked."""
    if now is None:
        now = datetime.now(timezone.utc)

    descriptor = get_widget(widget_type)
    overlay = should_show_freemium_overlay(subscriber, widget_type, override, now)

    return AccessDecision(
        widget_type=descriptor.widget_type,
        required_tier=descriptor.required_tier,
        effective_tier=effective_tier(subscriber, override, now),
        has_access=can_access(subscriber, descriptor.required_tier, override, now),
        should_show_overlay=overlay,
        override_applied=active_override(override, now),
        header=descriptor.header if overlay else None,
        teaser=descriptor.teaser if overlay else None,
    )


def pending_decision(
    widget_type: Optional[str],
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> AccessDecision:
    """
    Decision to return while subscriber data is unavailable.

    Only the override is consulted. No overlay is requested, so the caller
    defers rendering rather than flashing a false lock.
    """
    descriptor = get_widget(widget_type)
    kind = active_override(override, now)
    return AccessDecision(
        widget_type=descriptor.widget_type,
        required_tier=descriptor.required_tier,
        effective_tier=effective_tier(None, override, now),
        has_access=kind is not None or descriptor.tier_exempt,
        should_show_overlay=False,
        override_applied=kind,
        pending=True,
    )


# -----------------------------------------------------------------------------
# Capability tables
# -----------------------------------------------------------------------------


def get_chat_limits(
    subscriber: SubscriberLike,
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> ChatLimits:
    return CHAT_LIMITS[effective_tier(subscriber, override, now)]


def get_feature_access(
    subscriber: SubscriberLike,
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> FeatureAccess:
    return FeatureAccess(
        **{
            feature: can_access(subscriber, tier, override, now)
            for feature, tier in FEATURE_REQUIREMENTS.items()
        }
    )


def get_widget_access(
    subscriber: SubscriberLike,
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> dict[str, WidgetAccess]:
    """Access and blur state for every registered widget."""
    result = {}
    for key, descriptor in WIDGET_REGISTRY.items():
        access = can_access(subscriber, descriptor.required_tier, override, now)
        result[key] = WidgetAccess(
            access=access,
            show_blurred=not access and descriptor.blurrable and not descriptor.tier_exempt,
        )
    return result


def should_blur_widget(
    subscriber: SubscriberLike,
    widget_type: Optional[str],
    override: Optional[AccessOverride] = None,
    now: Optional[datetime] = None,
) -> bool:
    """Whether a locked widget is shown blurred. Never for tier-exempt widgets."""
    descriptor = get_widget(widget_type)
    if descriptor.tier_exempt or not descriptor.blurrable:
        return False
    return not can_access(subscriber, descriptor.required_tier, override, now)
