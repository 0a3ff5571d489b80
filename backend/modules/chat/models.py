"""
Chat module data models.

Messages are mirrored from the community Telegram group by an external
sync job; this module only shapes what a viewer gets to see.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class AutoHighlight(BaseModel):
    """Highlight rule that matched a message."""

    rule_name: str
    highlight_color: str = "#facc15"
    highlight_style: str = "background"


class ChatMessage(BaseModel):
    """A mirrored community chat message."""

    id: str = Field(..., description="Message ID")
    first_name: Optional[str] = Field(None)
    last_name: Optional[str] = Field(None)
    username: Optional[str] = Field(None)
    message_text: Optional[str] = Field(None)
    timestamp: datetime = Field(..., description="When the message was sent")
    topic_name: Optional[str] = Field(None, description="Telegram forum topic")
    auto_highlights: list[AutoHighlight] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps from the mirror are UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ChatViewRequest(BaseModel):
    """Request to shape a batch of messages for the current viewer."""

    messages: list[ChatMessage] = Field(default_factory=list)
    topic: Optional[str] = Field(None, description="Topic filter; None or 'all' for every topic")


class LimitedChatView(BaseModel):
    """Messages a viewer may see, newest first."""

    messages: list[ChatMessage]
    hidden_count: int = Field(..., description="Messages cut by the tier limit")
    limit: int = Field(..., description="Tier message history limit")
    preview_mode: bool = Field(..., description="Viewer is read-only (cannot send)")
    topic: Optional[str] = Field(None, description="Topic filter actually applied")
    pending: bool = Field(
        default=False,
        description="Subscriber data unavailable; limits are provisional",
    )
