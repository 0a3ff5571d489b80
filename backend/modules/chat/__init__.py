"""
Chat module.

Applies tier limits and topic filtering to the mirrored community chat.

Public API:
- ChatGateService: Shapes chat history for a viewer
- ChatMessage, LimitedChatView: Message and result models
- filter_by_topic, limit_messages, display_name: Filtering helpers
"""

from .models import ChatMessage, ChatViewRequest, LimitedChatView
from .filtering import filter_by_topic, limit_messages, display_name
from .service import ChatGateService, build_view

__all__ = [
    "ChatGateService",
    "build_view",
    "ChatMessage",
    "ChatViewRequest",
    "LimitedChatView",
    "filter_by_topic",
    "limit_messages",
    "display_name",
]
