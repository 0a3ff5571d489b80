"""
Subscribers module.

Reads subscriber records and admin identities from Supabase and normalizes
them for the access policy.

Public API:
- ISubscriberDirectory: Interface for subscriber lookups
- Subscriber: Normalized subscriber record
- SubscriptionTier: Ordered tier enum
- SubscriberLookupError: Raised when the backing store fails
"""

from .interfaces import ISubscriberDirectory
from .models import Subscriber, SubscriptionTier
from .exceptions import SubscriberLookupError

__all__ = [
    # Interface
    "ISubscriberDirectory",
    # Models
    "Subscriber",
    "SubscriptionTier",
    # Exceptions
    "SubscriberLookupError",
]
