"""
User-related endpoints.

Provides the current user's profile as stored in the subscriber directory.
"""

from fastapi import APIRouter, Depends

from shared.models import AuthenticatedUser
from modules.subscribers.interfaces import ISubscriberDirectory
from modules.subscribers.models import SubscriptionTier

from ..dependencies import get_subscriber_directory
from ..middleware.auth import get_current_user
from ..models.errors import ErrorResponse
from ..models.user import UserProfileResponse

router = APIRouter()


@router.get(
    "/me",
    response_model=UserProfileResponse,
    responses={503: {"model": ErrorResponse}},
)
async def get_current_user_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    directory: ISubscriberDirectory = Depends(get_subscriber_directory),
) -> UserProfileResponse:
    """
    Get the current user's profile.

    Requires authentication. Users without a subscriber row are reported
    as free. Lookup failures surface as 503 through the error handler.
    """
    subscriber = await directory.get_by_email(user.email)
    is_admin = await directory.is_admin(user.email)

    return UserProfileResponse(
        id=user.id,
        email=user.email,
        email_verified=user.email_verified,
        subscription_tier=(
            subscriber.subscription_tier if subscriber else SubscriptionTier.FREE
        ),
        status=subscriber.status if subscriber else None,
        is_admin=is_admin,
        is_subscriber=subscriber is not None,
    )
