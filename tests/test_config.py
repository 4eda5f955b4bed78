"""Tests for EscalationConfig and the settings that build it."""

import pytest
from pydantic import ValidationError

from app.config import Settings
from escalation.config import EscalationConfig
from escalation.schemas import EscalationPriority, NotificationChannel


class TestEscalationConfig:
    def test_defaults(self):
        config = EscalationConfig()
        assert config.confidence_threshold == 0.5
        assert config.failure_count_threshold == 3
        assert config.vip_customer_ids == frozenset()
        assert config.notify_channels == {NotificationChannel.EMAIL, NotificationChannel.SMS}

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_confidence_threshold_bounds(self, threshold):
        with pytest.raises(ValidationError):
            EscalationConfig(confidence_threshold=threshold)

    def test_failure_threshold_must_be_positive(self):
        with pytest.raises(ValidationError):
            EscalationConfig(failure_count_threshold=0)

    def test_unknown_channel_rejected(self):
        with pytest.raises(ValidationError):
            EscalationConfig(notify_channels=["pager"])

    def test_channels_accept_strings(self):
        config = EscalationConfig(notify_channels=["EMAIL", "push"])
        assert config.notify_channels == {NotificationChannel.EMAIL, NotificationChannel.PUSH}

    def test_is_frozen(self):
        config = EscalationConfig()
        with pytest.raises(ValidationError):
            config.confidence_threshold = 0.9

    def test_with_vip_returns_new_config(self):
        config = EscalationConfig(vip_customer_ids=["a"])
        updated = config.with_vip(["b"])
        assert updated.vip_customer_ids == {"a", "b"}
        assert config.vip_customer_ids == {"a"}
        assert updated.is_vip("b")
        assert not updated.is_vip(None)


class TestPriorityOrdering:
    def test_ordering(self):
        assert EscalationPriority.LOW < EscalationPriority.MEDIUM < EscalationPriority.HIGH < EscalationPriority.URGENT
        assert max(EscalationPriority) == EscalationPriority.URGENT
        assert sorted([EscalationPriority.URGENT, EscalationPriority.LOW]) == [
            EscalationPriority.LOW,
            EscalationPriority.URGENT,
        ]


class TestSettings:
    def test_escalation_config_from_settings(self):
        settings = Settings(
            _env_file=None,
            escalation_confidence_threshold=0.7,
            escalation_failure_threshold=2,
            escalation_vip_customer_ids="c-1, c-2,",
            escalation_notify_channels="email",
        )
        config = settings.escalation_config()
        assert config.confidence_threshold == 0.7
        assert config.failure_count_threshold == 2
        assert config.vip_customer_ids == {"c-1", "c-2"}
        assert config.notify_channels == {NotificationChannel.EMAIL}

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("NOTIFICATION_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("TWILIO_ACCOUNT_SID", "ACtest")
        settings = Settings(_env_file=None)
        assert settings.notification_timeout_seconds == 5.0
        assert settings.twilio_account_sid == "ACtest"


class TestVipIdNormalization:
    def test_padded_customer_id_matches(self):
        config = EscalationConfig(vip_customer_ids=[" cust-1 "])
        assert config.vip_customer_ids == {"cust-1"}
        assert config.is_vip(" cust-1 ")
        assert config.is_vip("cust-1")
        assert not config.is_vip("   ")

    def test_with_vip_strips_added_ids(self):
        config = EscalationConfig(notify_channels=["email"]).with_vip([" cust-2 ", ""])
        assert config.vip_customer_ids == {"cust-2"}
        assert config.notify_channels == {NotificationChannel.EMAIL}
        assert config.is_vip("cust-2")
