"""
Access API endpoints.

Lets dashboard widgets ask whether to render full content or the freemium
overlay. All endpoints accept anonymous callers, who are treated as free.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.middleware.auth import get_optional_user
from api.dependencies import get_access_service
from shared.models import AuthenticatedUser

from .interfaces import ITierAccessService
from .models import AccessDecision, ChatLimits, FeatureAccess, RequiredTierResponse
from .widgets import get_widget, is_registered

router = APIRouter()


@router.get("/widgets", response_model=list[AccessDecision])
async def list_widget_access(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: ITierAccessService = Depends(get_access_service),
) -> list[AccessDecision]:
    """
    Get access decisions for every registered widget.
    """
    return await service.list_widgets(user)


@router.get("/widgets/{widget_type}", response_model=AccessDecision)
async def get_widget_decision(
    widget_type: str,
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: ITierAccessService = Depends(get_access_service),
) -> AccessDecision:
    """
    Get the access decision for one widget.

    Unknown widget keys are answered with the paid-tier default, not 404.
    """
    return await service.evaluate(user, widget_type)


@router.get("/features", response_model=FeatureAccess)
async def get_features(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: ITierAccessService = Depends(get_access_service),
) -> FeatureAccess:
    return await service.get_features(user)


@router.get("/chat-limits", response_model=ChatLimits)
async def get_chat_limits(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
    service: ITierAccessService = Depends(get_access_service),
) -> ChatLimits:
    return await service.get_chat_limits(user)


@router.get("/tiers/{widget_type}", response_model=RequiredTierResponse)
async def get_required_tier(widget_type: str) -> RequiredTierResponse:
    """Minimum tier for a widget, used by upgrade prompts."""
    descriptor = get_widget(widget_type)
    return RequiredTierResponse(
        widget_type=widget_type,
        required_tier=descriptor.required_tier,
        tier_exempt=descriptor.tier_exempt,
        known=is_registered(widget_type),
    )
