"""
Chat message filtering.

Single-pass helpers over an already-fetched message list.
"""

from typing import Iterable, Optional

from modules.access.models import ChatLimits

from .models import ChatMessage, LimitedChatView

ALL_TOPICS = "all"


def display_name(message: ChatMessage) -> str:
    """'First Last' if either is set, else the username, else 'Anonymous'."""
    if message.first_name or message.last_name:
        return f"{message.first_name or ''} {message.last_name or ''}".strip()
    return message.username or "Anonymous"


def normalize_topic(topic: Optional[str]) -> Optional[str]:
    """None for 'every topic', otherwise the stripped topic name."""
    if topic is None:
        return None
    topic = topic.strip()
    if not topic or topic.lower() == ALL_TOPICS:
        return None
    return topic


def filter_by_topic(messages: Iterable[ChatMessage], topic: Optional[str]) -> list[ChatMessage]:
    """Keep messages in `topic`, compared case-insensitively."""
    wanted = normalize_topic(topic)
    if wanted is None:
        return list(messages)
    wanted = wanted.casefold()
    return [m for m in messages if m.topic_name and m.topic_name.strip().casefold() == wanted]


def limit_messages(messages: Iterable[ChatMessage], limits: ChatLimits) -> LimitedChatView:
    """
    Sort newest first and cut to the tier's history limit.

    Ties on timestamp keep their input order.
    """
    ordered = sorted(messages, key=lambda m: m.timestamp, reverse=True)
    limit = max(0, limits.message_history)
    return LimitedChatView(
        messages=ordered[:limit],
        hidden_count=max(0, len(ordered) - limit),
        limit=limit,
        preview_mode=not limits.can_send_messages,
    )
