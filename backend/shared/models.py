"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection. The subscription tier is
    NOT taken from the token; it is looked up in the subscriber directory.
    """

    id: str = Field(..., description="User ID (UUID from Supabase)")
    email: EmailStr = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    # Timestamps (optional for backward compatibility)
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    role: str = Field(default="user", description="Auth role from the token")

    # Supabase app_metadata; carries the grace claim after checkout/magic link
    app_metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }
