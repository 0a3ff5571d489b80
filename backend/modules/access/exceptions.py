"""
Access module exceptions.

The policy functions never raise. These cover configuration problems
detected when the widget registry is loaded.
"""

from shared.exceptions import TradedeskError


class AccessError(TradedeskError):
    """Base exception for access-related errors."""

    pass


class WidgetRegistryError(AccessError):
    """Raised when the widget registry is inconsistent. Fails at load time."""

    def __init__(self, problems: list[str]):
        super().__init__(
            "Widget registry is invalid: " + "; ".join(problems),
            code="WIDGET_REGISTRY_INVALID",
            details={"problems": problems},
        )
