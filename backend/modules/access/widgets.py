"""
Widget registry.

The closed table of dashboard widgets, their minimum tier, and the header
and teaser content shown when a widget is locked. The table is validated
when this module is imported, so a bad entry fails at startup instead of
silently falling back at request time.
"""

from enum import Enum
from typing import Mapping, Optional

from modules.subscribers.models import SubscriptionTier

from .exceptions import WidgetRegistryError
from .models import TeaserCall, TeaserContent, TeaserStats, WidgetDescriptor, WidgetHeader


class WidgetType(str, Enum):
    """Every widget key the dashboard may ask about."""

    NEWSLETTER = "newsletter"
    ALERTS = "alerts"
    LIVE_ALERTS = "live-alerts"
    TRADING_SIGNALS = "trading_signals"
    ANALYTICS = "analytics"
    CHAT = "chat"
    CHAT_HIGHLIGHTS = "chat-highlights"
    SENTIMENT = "sentiment"
    EDGE = "edge"
    DEGEN_CALLS = "degen-calls"

    # Premium-only features, hidden rather than blurred when locked
    EXPORT_DATA = "export-data"
    ADVANCED_ANALYTICS = "advanced-analytics"
    PRIORITY_ALERTS = "priority-alerts"


# Unknown widget keys require this tier
DEFAULT_REQUIRED_TIER = SubscriptionTier.PAID

DEFAULT_WIDGET_HEADER = WidgetHeader(
    title="Premium Feature",
    icon="trending-up",
    description="Upgrade to unlock",
)

_ALERTS_TEASER = TeaserContent(
    show_teaser_stats=True,
    teaser_stats=TeaserStats(
        active_alerts=12,
        active_trades=7,
        awaiting_entry=5,
        avg_daily_pnl="$2,847",
    ),
)


def _paid(
    widget_type: WidgetType,
    header: WidgetHeader,
    teaser: Optional[TeaserContent] = None,
) -> WidgetDescriptor:
    return WidgetDescriptor(
        widget_type=widget_type.value,
        required_tier=SubscriptionTier.PAID,
        header=header,
        teaser=teaser or TeaserContent(),
    )


def _premium_only(widget_type: WidgetType, title: str, description: str) -> WidgetDescriptor:
    return WidgetDescriptor(
        widget_type=widget_type.value,
        required_tier=SubscriptionTier.PREMIUM,
        blurrable=False,
        header=WidgetHeader(title=title, icon="crown", description=description),
    )


WIDGET_REGISTRY: dict[str, WidgetDescriptor] = {
    d.widget_type: d
    for d in [
        WidgetDescriptor(
            widget_type=WidgetType.NEWSLETTER.value,
            required_tier=SubscriptionTier.FREE,
            tier_exempt=True,
            blurrable=False,
            header=WidgetHeader(
                title="Weekly Newsletter",
                icon="mail",
                description="Market insights & analysis",
            ),
        ),
        _paid(
            WidgetType.ALERTS,
            WidgetHeader(
                title="Live Trading Alerts",
                icon="bell",
                description="Real-time market opportunities",
            ),
            _ALERTS_TEASER,
        ),
        _paid(
            WidgetType.LIVE_ALERTS,
            WidgetHeader(
                title="Live Trading Alerts",
                icon="bell",
                description="Real-time market opportunities",
            ),
            _ALERTS_TEASER,
        ),
        _paid(
            WidgetType.TRADING_SIGNALS,
            WidgetHeader(
                title="Recent Winning Calls",
                icon="trending-up",
                description="Verified trading results",
            ),
            TeaserContent(
                recent_calls=[
                    TeaserCall(symbol="BTC", gain="+23%", profit="$2,847"),
                    TeaserCall(symbol="SOL", gain="+45%", profit="$1,924"),
                    TeaserCall(symbol="NVDA", gain="+52%", profit="$4,235"),
                ],
            ),
        ),
        _paid(
            WidgetType.ANALYTICS,
            WidgetHeader(
                title="Performance Analytics",
                icon="bar-chart",
                description="12-month growth tracking",
            ),
            TeaserContent(win_rate="96%", growth="+142%", monthly_gain="+28%"),
        ),
        _paid(
            WidgetType.CHAT,
            WidgetHeader(
                title="Community Chat",
                icon="message-circle",
                description="Live trading discussions",
            ),
            TeaserContent(
                features=[
                    "Live trading discussions",
                    "Expert market commentary",
                    "Real-time Q&A sessions",
                    "Community sentiment tracking",
                ],
                highlight="2,500+ active traders online",
            ),
        ),
        _paid(
            WidgetType.CHAT_HIGHLIGHTS,
            WidgetHeader(
                title="Chat Highlights",
                icon="zap",
                description="Key insights & analysis",
            ),
            TeaserContent(
                features=[
                    "AI-curated key insights",
                    "Top performer analysis",
                    "Market-moving discussions",
                    "Alpha leak detection",
                ],
                highlight="Never miss important signals",
            ),
        ),
        _paid(
            WidgetType.SENTIMENT,
            WidgetHeader(
                title="AI Sentiment Analysis",
                icon="bar-chart",
                description="Market sentiment tracking",
            ),
            TeaserContent(
                features=[
                    "AI sentiment analysis",
                    "Social media tracking",
                    "Whale movement alerts",
                    "Market psychology insights",
                ],
                highlight="See what smart money is doing",
            ),
        ),
        _paid(
            WidgetType.EDGE,
            WidgetHeader(
                title="Watch The Edge",
                icon="trending-up",
                description="Weekly video analysis",
            ),
            TeaserContent(
                features=[
                    "Weekly deep-dive market analysis",
                    "Expert trading insights & strategies",
                    "Technical analysis tutorials",
                    "Market outlook & predictions",
                ],
                highlight="New episodes every Wednesday",
            ),
        ),
        _paid(
            WidgetType.DEGEN_CALLS,
            WidgetHeader(
                title="Degen Call Alerts",
                icon="alert-triangle",
                description="High-risk opportunities",
            ),
            TeaserContent(
                features=[
                    "High-conviction moonshot calls",
                    "Early altcoin opportunities",
                    "Leverage & options strategies",
                    "Risk/reward calculations",
                ],
                highlight="For experienced risk-takers only",
            ),
        ),
        _premium_only(WidgetType.EXPORT_DATA, "Data Export", "Download alerts and chat history"),
        _premium_only(
            WidgetType.ADVANCED_ANALYTICS,
            "Advanced Analytics",
            "Deeper performance breakdowns",
        ),
        _premium_only(WidgetType.PRIORITY_ALERTS, "Priority Alerts", "Alerts before everyone else"),
    ]
}


def validate_registry(registry: Mapping[str, WidgetDescriptor]) -> None:
    """
    Check the registry against WidgetType.

    Raises:
        WidgetRegistryError: Listing every problem found
    """
    problems = []

    for widget_type in WidgetType:
        if widget_type.value not in registry:
            problems.append(f"missing descriptor for {widget_type.value!r}")

    known = {w.value for w in WidgetType}
    for key, descriptor in registry.items():
        if key not in known:
            problems.append(f"{key!r} is not a WidgetType")
        if descriptor.widget_type != key:
            problems.append(
                f"{key!r} maps to descriptor for {descriptor.widget_type!r}"
            )
        if descriptor.tier_exempt and descriptor.required_tier != SubscriptionTier.FREE:
            problems.append(f"{key!r} is tier exempt but requires {descriptor.required_tier.value}")
        if not descriptor.tier_exempt and descriptor.required_tier == SubscriptionTier.FREE:
            problems.append(f"{key!r} requires free but is not tier exempt")

    if problems:
        raise WidgetRegistryError(problems)


def is_registered(widget_type: str) -> bool:
    return widget_type in WIDGET_REGISTRY


def get_widget(widget_type: Optional[str]) -> WidgetDescriptor:
    """
    Look up a widget descriptor.

    Unknown or missing keys get a fail-closed descriptor requiring
    DEFAULT_REQUIRED_TIER.
    """
    if widget_type is not None and widget_type in WIDGET_REGISTRY:
        return WIDGET_REGISTRY[widget_type]
    return WidgetDescriptor(
        widget_type=widget_type or "",
        required_tier=DEFAULT_REQUIRED_TIER,
        header=DEFAULT_WIDGET_HEADER,
    )


validate_registry(WIDGET_REGISTRY)
