"""
User models for authentication.

These models represent JWT claims and the profile returned to the dashboard.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from modules.subscribers.models import SubscriptionTier


class TokenPayload(BaseModel):
    """JWT token payload structure."""
    model_config = ConfigDict(extra="ignore")  # Ignore extra Supabase claims

    sub: str  # User ID
    email: str
    email_confirmed_at: Optional[str] = None
    aud: str  # Audience
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    role: str = "authenticated"
    app_metadata: dict[str, Any] = Field(default_factory=dict)


class UserProfileResponse(BaseModel):
    """Profile of the current user as the dashboard sees it."""

    id: str
    email: str
    email_verified: bool
    subscription_tier: SubscriptionTier
    status: Optional[str] = None
    is_admin: bool
    is_subscriber: bool
