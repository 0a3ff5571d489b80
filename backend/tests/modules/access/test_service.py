"""Tests for TierAccessService."""

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from shared.models import AuthenticatedUser
from modules.access.interfaces import ITierAccessService
from modules.access.models import OverrideKind
from modules.access.service import TierAccessService, parse_grace_claim
from modules.access.widgets import WIDGET_REGISTRY
from modules.subscribers.exceptions import SubscriberLookupError
from modules.subscribers.models import SubscriptionTier


def make_user(email: str, app_metadata: dict | None = None) -> AuthenticatedUser:
    return AuthenticatedUser(
        id=f"user-{email.split('@')[0]}",
        email=email,
        app_metadata=app_metadata or {},
    )


class TestParseGraceClaim:
    """Tests for reading the grace claim from app_metadata."""

    def test_iso_timestamp(self):
        tier, started = parse_grace_claim({
            "grace_tier": "premium",
            "grace_started_at": "2025-01-15T11:59:50Z",
        })
        assert tier == SubscriptionTier.PREMIUM
        assert started == datetime(2025, 1, 15, 11, 59, 50, tzinfo=timezone.utc)

    def test_epoch_seconds(self):
        epoch = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc).timestamp()
        tier, started = parse_grace_claim({"grace_tier": "paid", "grace_started_at": epoch})
        assert tier == SubscriptionTier.PAID
        assert started == datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("metadata", [
        {},
        {"grace_tier": "premium"},
        {"grace_started_at": "2025-01-15T12:00:00Z"},
        {"grace_tier": "gold", "grace_started_at": "2025-01-15T12:00:00Z"},
        {"grace_tier": "paid", "grace_started_at": "yesterday"},
    ])
    def test_malformed_claims_ignored(self, metadata):
        assert parse_grace_claim(metadata) == (None, None)


class TestTierAccessService:
    """Tests for the access service over an in-memory directory."""

    def test_implements_interface(self, directory, settings):
        assert isinstance(TierAccessService(directory, settings), ITierAccessService)

    def test_grace_window_from_settings(self, directory, settings):
        service = TierAccessService(directory, settings.model_copy(update={"access_grace_period_seconds": 45}))
        assert service.grace_window == timedelta(seconds=45)

    @pytest.mark.asyncio
    async def test_anonymous_viewer_is_free(self, directory, settings, now):
        service = TierAccessService(directory, settings)

        decision = await service.evaluate(None, "chat", now)

        assert decision.has_access is False
        assert decision.should_show_overlay is True
        assert decision.effective_tier == SubscriptionTier.FREE

    @pytest.mark.asyncio
    async def test_upgrade_url_only_when_locked(self, directory, settings, now):
        service = TierAccessService(directory, settings)

        locked = await service.evaluate(make_user("free@example.com"), "chat", now)
        unlocked = await service.evaluate(make_user("paid@example.com"), "chat", now)

        assert locked.upgrade_url == "https://dash.example.com/upgrade"
        assert unlocked.upgrade_url is None

    @pytest.mark.asyncio
    async def test_subscriber_tier_from_directory(self, directory, settings, now):
        """The tier comes from the directory, not the token."""
        service = TierAccessService(directory, settings)
        user = make_user("premium@example.com", {"subscription_tier": "free"})

        decision = await service.evaluate(user, "export-data", now)

        assert decision.has_access is True
        assert decision.effective_tier == SubscriptionTier.PREMIUM

    @pytest.mark.asyncio
    async def test_unknown_user_is_free(self, directory, settings, now):
        service = TierAccessService(directory, settings)
        decision = await service.evaluate(make_user("stranger@example.com"), "analytics", now)
        assert decision.should_show_overlay is True

    @pytest.mark.asyncio
    async def test_admin_override(self, directory, settings, now, caplog):
        """Admins see everything and the override is logged."""
        service = TierAccessService(directory, settings)

        with caplog.at_level(logging.INFO, logger="modules.access.service"):
            decision = await service.evaluate(make_user("admin@example.com"), "priority-alerts", now)

        assert decision.has_access is True
        assert decision.should_show_overlay is False
        assert decision.override_applied == OverrideKind.ADMIN
        assert "admin override" in caplog.text

    @pytest.mark.asyncio
    async def test_admin_override_disabled(self, directory, settings, now):
        service = TierAccessService(directory, settings.model_copy(update={"enable_admin_override": False}))
        decision = await service.evaluate(make_user("admin@example.com"), "chat", now)
        assert decision.has_access is False
        assert decision.override_applied is None

    @pytest.mark.asyncio
    async def test_grace_claim_grants_access(self, directory, settings, now):
        """A fresh checkout claim unlocks while the record still reads free."""
        service = TierAccessService(directory, settings)
        user = make_user("free@example.com", {
            "grace_tier": "premium",
            "grace_started_at": (now - timedelta(seconds=10)).isoformat(),
        })

        decision = await service.evaluate(user, "live-alerts", now)

        assert decision.has_access is True
        assert decision.should_show_overlay is False
        assert decision.override_applied == OverrideKind.GRACE

    @pytest.mark.asyncio
    async def test_grace_claim_expires(self, directory, settings, now):
        service = TierAccessService(directory, settings)
        user = make_user("free@example.com", {
            "grace_tier": "premium",
            "grace_started_at": (now - timedelta(seconds=31)).isoformat(),
        })

        decision = await service.evaluate(user, "live-alerts", now)

        assert decision.has_access is False
        assert decision.should_show_overlay is True

    @pytest.mark.asyncio
    async def test_grace_disabled(self, directory, settings, now):
        service = TierAccessService(directory, settings.model_copy(update={"enable_grace_period": False}))
        user = make_user("free@example.com", {
            "grace_tier": "premium",
            "grace_started_at": (now - timedelta(seconds=1)).isoformat(),
        })
        decision = await service.evaluate(user, "chat", now)
        assert decision.has_access is False

    @pytest.mark.asyncio
    async def test_lookup_failure_returns_pending(self, settings, now, caplog):
        """Directory failures defer the decision instead of locking."""
        directory = AsyncMock()
        directory.get_by_email.side_effect = SubscriberLookupError("get_by_email", "timeout")
        service = TierAccessService(directory, settings)

        with caplog.at_level(logging.WARNING, logger="modules.access.service"):
            decision = await service.evaluate(make_user("paid@example.com"), "chat", now)

        assert decision.pending is True
        assert decision.should_show_overlay is False
        assert decision.has_access is False
        assert decision.upgrade_url is None
        assert "deferring" in caplog.text

    @pytest.mark.asyncio
    async def test_lookup_failure_still_honors_grace(self, settings, now):
        directory = AsyncMock()
        directory.get_by_email.side_effect = SubscriberLookupError("get_by_email")
        service = TierAccessService(directory, settings)
        user = make_user("paid@example.com", {
            "grace_tier": "paid",
            "grace_started_at": (now - timedelta(seconds=2)).isoformat(),
        })

        decision = await service.evaluate(user, "chat", now)

        assert decision.pending is True
        assert decision.has_access is True

    @pytest.mark.asyncio
    async def test_list_widgets_covers_registry(self, directory, settings, now):
        service = TierAccessService(directory, settings)

        decisions = await service.list_widgets(make_user("paid@example.com"), now)

        assert [d.widget_type for d in decisions] == list(WIDGET_REGISTRY)
        by_key = {d.widget_type: d for d in decisions}
        assert by_key["chat"].has_access is True
        assert by_key["export-data"].should_show_overlay is True

    @pytest.mark.asyncio
    async def test_list_widgets_single_lookup(self, settings, now):
        """One directory round trip per request, not per widget."""
        directory = AsyncMock()
        directory.get_by_email.return_value = None
        directory.is_admin.return_value = False
        service = TierAccessService(directory, settings)

        await service.list_widgets(make_user("free@example.com"), now)

        directory.get_by_email.assert_awaited_once()
        directory.is_admin.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_features(self, directory, settings, now):
        service = TierAccessService(directory, settings)
        features = await service.get_features(make_user("paid@example.com"), now)
        assert features.topic_selection is True
        assert features.export_capabilities is False

    @pytest.mark.asyncio
    async def test_get_chat_limits(self, directory, settings, now):
        service = TierAccessService(directory, settings)
        limits = await service.get_chat_limits(None, now)
        assert limits.message_history == 10
        assert limits.can_send_messages is False

    @pytest.mark.asyncio
    async def test_capabilities_pending_on_lookup_failure(self, settings, now):
        """Capability answers are flagged when the directory is down."""
        directory = AsyncMock()
        directory.get_by_email.side_effect = SubscriberLookupError("get_by_email", "timeout")
        service = TierAccessService(directory, settings)
        user = make_user("paid@example.com")

        features = await service.get_features(user, now)
        limits = await service.get_chat_limits(user, now)

        assert features.pending is True
        assert limits.pending is True

    @pytest.mark.asyncio
    async def test_capabilities_not_pending_normally(self, directory, settings, now):
        service = TierAccessService(directory, settings)
        user = make_user("paid@example.com")

        assert (await service.get_features(user, now)).pending is False
        assert (await service.get_chat_limits(user, now)).pending is False

    @pytest.mark.asyncio
    async def test_get_chat_access_single_lookup(self, settings, now):
        directory = AsyncMock()
        directory.get_by_email.return_value = None
        directory.is_admin.return_value = False
        service = TierAccessService(directory, settings)

        limits, features = await service.get_chat_access(make_user("free@example.com"), now)

        assert limits.message_history == 10
        assert features.topic_selection is False
        directory.get_by_email.assert_awaited_once()
        directory.is_admin.assert_awaited_once()
