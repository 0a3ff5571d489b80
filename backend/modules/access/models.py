"""
Access module data models.

These models describe widgets, the override context passed to the policy,
and the decisions the policy returns.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from modules.subscribers.models import SubscriptionTier


class OverrideKind(str, Enum):
    """Which override, if any, decided an access question."""

    ADMIN = "admin"
    GRACE = "grace"


class WidgetHeader(BaseModel):
    """Header copy shown above a locked widget."""

    title: str = Field(..., description="Widget title")
    icon: str = Field(..., description="Icon name understood by the dashboard")
    description: str = Field(..., description="One-line description")

    model_config = {"frozen": True}


class TeaserStats(BaseModel):
    """Illustrative numbers shown on top of the overlay. Never real data."""

    active_alerts: int = Field(default=12, description="Active alerts count")
    active_trades: int = Field(default=7, description="Live trades count")
    awaiting_entry: int = Field(default=5, description="Alerts awaiting entry")
    avg_daily_pnl: str = Field(default="$2,847", description="Average daily P&L")

    model_config = {"frozen": True}


class TeaserCall(BaseModel):
    """A sample winning call shown on the trading signals teaser."""

    symbol: str
    gain: str
    profit: str

    model_config = {"frozen": True}


class TeaserContent(BaseModel):
    """Teaser content rendered in place of locked widget data."""

    show_teaser_stats: bool = Field(default=False)
    teaser_stats: Optional[TeaserStats] = Field(None)
    features: list[str] = Field(default_factory=list, description="Feature bullets")
    highlight: Optional[str] = Field(None, description="Highlight line")
    recent_calls: list[TeaserCall] = Field(default_factory=list)
    win_rate: Optional[str] = Field(None)
    growth: Optional[str] = Field(None)
    monthly_gain: Optional[str] = Field(None)

    model_config = {"frozen": True}


class WidgetDescriptor(BaseModel):
    """Static configuration for one gated dashboard feature."""

    widget_type: str = Field(..., description="Widget key")
    required_tier: SubscriptionTier = Field(..., description="Minimum tier for full access")
    tier_exempt: bool = Field(default=False, description="Never gated (e.g. newsletter)")
    blurrable: bool = Field(
        default=True,
        description="Show blurred with a teaser when locked, instead of hiding",
    )
    header: WidgetHeader = Field(..., description="Overlay header")
    teaser: TeaserContent = Field(default_factory=TeaserContent)

    model_config = {"frozen": True}


class AccessOverride(BaseModel):
    """
    Explicit override context for one access question.

    Replaces ambient "just logged in" storage reads. The grace window is
    fixed when the override is built, so evaluation only compares against
    a clock value.
    """

    is_admin: bool = Field(default=False, description="Platform admin identity")
    grace_tier: Optional[SubscriptionTier] = Field(
        None,
        description="Tier asserted by a just-completed checkout or magic-link login",
    )
    grace_started_at: Optional[datetime] = Field(None, description="Grace event time")
    grace_expires_at: Optional[datetime] = Field(None, description="End of grace window")

    model_config = {"frozen": True}

    @classmethod
    def none(cls) -> "AccessOverride":
        return cls()

    @classmethod
    def admin(cls) -> "AccessOverride":
        return cls(is_admin=True)

    @classmethod
    def grace(
        cls,
        tier: SubscriptionTier,
        started_at: datetime,
        window: timedelta,
        is_admin: bool = False,
    ) -> "AccessOverride":
        """Build an override granting `tier` for `window` after `started_at`."""
        return cls(
            is_admin=is_admin,
            grace_tier=SubscriptionTier.normalize(tier),
            grace_started_at=started_at,
            grace_expires_at=started_at + window,
        )


class AccessDecision(BaseModel):
    """Result of evaluating one widget for one viewer."""

    widget_type: str = Field(..., description="Widget key that was evaluated")
    required_tier: SubscriptionTier = Field(..., description="Minimum tier for the widget")
    effective_tier: SubscriptionTier = Field(
        ..., description="Viewer tier after any grace override"
    )
    has_access: bool = Field(..., description="Full content may be shown")
    should_show_overlay: bool = Field(..., description="Freemium overlay must be shown")
    override_applied: Optional[OverrideKind] = Field(None)
    pending: bool = Field(
        default=False,
        description="Subscriber data unavailable; caller should defer rendering",
    )
    header: Optional[WidgetHeader] = Field(None, description="Set when overlay is shown")
    teaser: Optional[TeaserContent] = Field(None, description="Set when overlay is shown")
    upgrade_url: Optional[str] = Field(None, description="Set when overlay is shown")


class HighlightAccess(str, Enum):
    """How much of the chat highlights a tier may see."""

    FULL = "full"
    LIMITED = "limited"
    PREVIEW = "preview"


class ChatLimits(BaseModel):
    """Per-tier limits applied to the community chat mirror."""

    message_history: int = Field(..., description="Max messages visible")
    can_send_messages: bool
    can_export: bool
    realtime_updates: bool
    highlight_access: HighlightAccess
    pending: bool = Field(default=False, description="Subscriber data unavailable")

    model_config = {"frozen": True}


class FeatureAccess(BaseModel):
    """Feature flags resolved for one viewer."""

    newsletter: bool = True
    full_chat_history: bool = False
    advanced_filtering: bool = False
    topic_selection: bool = False
    sentiment_analysis: bool = False
    alert_system: bool = False
    export_capabilities: bool = False
    priority_support: bool = False
    pending: bool = Field(default=False, description="Subscriber data unavailable")


class WidgetAccess(BaseModel):
    """Access and blur state for one widget."""

    access: bool
    show_blurred: bool


class RequiredTierResponse(BaseModel):
    """API response for minimum-tier queries."""

    widget_type: str
    required_tier: SubscriptionTier
    tier_exempt: bool
    known: bool = Field(..., description="Whether the widget is registered")
