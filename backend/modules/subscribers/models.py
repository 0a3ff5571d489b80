"""
Subscriber module data models.

These models define the subscriber record as the rest of the backend sees
it. Raw rows are normalized here, at the ingestion boundary, so that every
other module can rely on a closed set of tiers.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class SubscriptionTier(str, Enum):
    """Subscriber tiers, ordered free < paid < premium."""

    FREE = "free"
    PAID = "paid"
    PREMIUM = "premium"

    @property
    def rank(self) -> int:
        """Numeric rank used for tier comparisons (free=0, paid=1, premium=2)."""
        return _TIER_RANKS[self]

    @classmethod
    def parse(cls, value: Any) -> Optional["SubscriptionTier"]:
        """Parse a raw tier value, ignoring case and whitespace. None if unknown."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                return None
        return None

    @classmethod
    def normalize(cls, value: Any) -> "SubscriptionTier":
        """
        Coerce a raw tier value into the enum.

        Anything that is not a known tier (None, unknown strings, other
        types) becomes FREE. Never raises.
        """
        return cls.parse(value) or cls.FREE

    @classmethod
    def is_known(cls, value: Any) -> bool:
        """Whether a raw value names a tier, ignoring case and whitespace."""
        return cls.parse(value) is not None


_TIER_RANKS = {
    SubscriptionTier.FREE: 0,
    SubscriptionTier.PAID: 1,
    SubscriptionTier.PREMIUM: 2,
}


class Subscriber(BaseModel):
    """
    A dashboard subscriber as stored in Supabase.

    Read-only to the access policy. The tier is set externally by payment
    and webhook processing.
    """

    id: str = Field(..., description="Subscriber ID (UUID)")
    email: str = Field(..., description="Email address (unique)")
    subscription_tier: SubscriptionTier = Field(
        default=SubscriptionTier.FREE,
        description="Subscription tier",
    )
    status: str = Field(default="active", description="Account status")
    created_at: Optional[datetime] = Field(None, description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    model_config = {"frozen": True}

    @field_validator("subscription_tier", mode="before")
    @classmethod
    def _normalize_tier(cls, value: Any) -> SubscriptionTier:
        return SubscriptionTier.normalize(value)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()
