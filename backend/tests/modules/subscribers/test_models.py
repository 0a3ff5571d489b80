"""Tests for subscriber models."""

import pytest
from pydantic import ValidationError

from modules.subscribers.models import Subscriber, SubscriptionTier


class TestSubscriptionTier:
    """Tests for SubscriptionTier parsing and ordering."""

    def test_ranks_are_ordered(self):
        """free < paid < premium."""
        assert SubscriptionTier.FREE.rank == 0
        assert SubscriptionTier.PAID.rank == 1
        assert SubscriptionTier.PREMIUM.rank == 2

    @pytest.mark.parametrize("raw,expected", [
        ("free", SubscriptionTier.FREE),
        ("paid", SubscriptionTier.PAID),
        ("premium", SubscriptionTier.PREMIUM),
        ("  Premium ", SubscriptionTier.PREMIUM),
        ("PAID", SubscriptionTier.PAID),
        (SubscriptionTier.PAID, SubscriptionTier.PAID),
    ])
    def test_parse_known_values(self, raw, expected):
        """Known values parse regardless of case and whitespace."""
        assert SubscriptionTier.parse(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "gold", "enterprise", 1, 2.5, ["paid"], {}])
    def test_parse_unknown_values(self, raw):
        """Anything else parses to None."""
        assert SubscriptionTier.parse(raw) is None

    @pytest.mark.parametrize("raw", [None, "", "gold", 42, object()])
    def test_normalize_unknown_to_free(self, raw):
        """Unknown values normalize to free and never raise."""
        assert SubscriptionTier.normalize(raw) == SubscriptionTier.FREE

    def test_normalize_is_idempotent(self):
        """Normalizing twice gives the same tier."""
        for raw in ["paid", "GOLD", None, "premium"]:
            once = SubscriptionTier.normalize(raw)
            assert SubscriptionTier.normalize(once) == once

    def test_is_known_matches_parse(self):
        """is_known should accept whatever parse accepts."""
        assert SubscriptionTier.is_known("paid") is True
        assert SubscriptionTier.is_known(SubscriptionTier.FREE) is True
        assert SubscriptionTier.is_known("Paid") is True
        assert SubscriptionTier.is_known(" premium") is True
        assert SubscriptionTier.is_known("gold") is False
        assert SubscriptionTier.is_known(None) is False

    def test_string_value(self):
        """Tier should serialize as its lowercase name."""
        assert SubscriptionTier.PREMIUM.value == "premium"
        assert SubscriptionTier.PAID == "paid"


class TestSubscriber:
    """Tests for the Subscriber model."""

    def test_defaults(self):
        """Subscriber should default to free and active."""
        subscriber = Subscriber(id="sub-1", email="a@example.com")
        assert subscriber.subscription_tier == SubscriptionTier.FREE
        assert subscriber.status == "active"
        assert subscriber.created_at is None

    def test_tier_normalized_on_input(self):
        """Raw tier strings are normalized at construction."""
        assert Subscriber(id="1", email="a@example.com", subscription_tier="PREMIUM").subscription_tier == SubscriptionTier.PREMIUM
        assert Subscriber(id="1", email="a@example.com", subscription_tier="gold").subscription_tier == SubscriptionTier.FREE
        assert Subscriber(id="1", email="a@example.com", subscription_tier=None).subscription_tier == SubscriptionTier.FREE

    def test_email_lowercased(self):
        """Emails are stored trimmed and lowercased."""
        subscriber = Subscriber(id="1", email="  Trader@Example.COM ")
        assert subscriber.email == "trader@example.com"

    def test_immutability(self):
        """Subscriber should be frozen."""
        subscriber = Subscriber(id="1", email="a@example.com")
        with pytest.raises(ValidationError):
            subscriber.subscription_tier = SubscriptionTier.PREMIUM

    def test_model_dump_uses_tier_value(self):
        """Serialized tier should be the plain string."""
        data = Subscriber(id="1", email="a@example.com", subscription_tier="paid").model_dump(mode="json")
        assert data["subscription_tier"] == "paid"
