"""
Chat API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.middleware.auth import get_optional_user
from api.dependencies import get_chat_service
from shared.models import AuthenticatedUser

from .models import ChatViewRequest, LimitedChatView
from .service import ChatGateService

router = APIRouter()


@router.post("/view", response_model=LimitedChatView)
async def view_chat(
    request: ChatViewRequest,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: ChatGateService = Depends(get_chat_service),
) -> LimitedChatView:
    """
    Shape a batch of chat messages for the current viewer.

    Free viewers get the newest 10 messages in preview mode and cannot
    filter by topic.
    """
    return await service.view(user, request)
