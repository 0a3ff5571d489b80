"""
Chat gating service.

Applies the viewer's chat limits and topic permissions to a batch of
mirrored messages.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from shared.models import AuthenticatedUser
from modules.access.interfaces import ITierAccessService
from modules.access.models import ChatLimits

from .filtering import filter_by_topic, limit_messages, normalize_topic
from .models import ChatMessage, ChatViewRequest, LimitedChatView

logger = logging.getLogger(__name__)


def build_view(
    messages: Iterable[ChatMessage],
    limits: ChatLimits,
    topic: Optional[str] = None,
    topic_allowed: bool = True,
) -> LimitedChatView:
    """
    Filter by topic (when the tier allows choosing one), then apply limits.
    """
    applied_topic = normalize_topic(topic) if topic_allowed else None
    view = limit_messages(filter_by_topic(messages, applied_topic), limits)
    return view.model_copy(update={"topic": applied_topic})


class ChatGateService:
    """Shapes chat history for a viewer using the access service."""

    def __init__(self, access: ITierAccessService):
        self._access = access

    async def view(
        self,
        user: Optional[AuthenticatedUser],
        request: ChatViewRequest,
        now: Optional[datetime] = None,
    ) -> LimitedChatView:
        limits, features = await self._access.get_chat_access(user, now)
        # A pending viewer keeps the requested topic filter.
        topic_allowed = features.topic_selection or features.pending

        if request.topic and not topic_allowed:
            logger.debug(
                f"Ignoring topic filter {request.topic!r} for "
                f"{user.id if user else 'anonymous'}: topic selection not in tier"
            )

        view = build_view(
            request.messages,
            limits,
            topic=request.topic,
            topic_allowed=topic_allowed,
        )
        if limits.pending:
            return view.model_copy(update={"pending": True})
        return view
