"""
Access module.

Decides which dashboard widgets a viewer may see and when the freemium
overlay replaces them.

Public API:
- ITierAccessService: Interface for access decisions
- can_access / should_show_freemium_overlay: Pure policy functions
- AccessDecision, AccessOverride: Decision and override context models
- WidgetType, WIDGET_REGISTRY: The widget table
- Access exceptions: WidgetRegistryError
"""

from .interfaces import ITierAccessService
from .models import (
    AccessDecision,
    AccessOverride,
    ChatLimits,
    FeatureAccess,
    OverrideKind,
    WidgetAccess,
    WidgetDescriptor,
)
from .policy import (
    can_access,
    should_show_freemium_overlay,
    required_tier_for,
    evaluate_widget,
    get_chat_limits,
    get_feature_access,
    get_widget_access,
    should_blur_widget,
)
from .widgets import WidgetType, WIDGET_REGISTRY
from .exceptions import AccessError, WidgetRegistryError

__all__ = [
    # Interface
    "ITierAccessService",
    # Models
    "AccessDecision",
    "AccessOverride",
    "ChatLimits",
    "FeatureAccess",
    "OverrideKind",
    "WidgetAccess",
    "WidgetDescriptor",
    # Policy
    "can_access",
    "should_show_freemium_overlay",
    "required_tier_for",
    "evaluate_widget",
    "get_chat_limits",
    "get_feature_access",
    "get_widget_access",
    "should_blur_widget",
    # Registry
    "WidgetType",
    "WIDGET_REGISTRY",
    # Exceptions
    "AccessError",
    "WidgetRegistryError",
]
