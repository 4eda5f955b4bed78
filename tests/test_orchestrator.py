"""End-to-end tests for EscalationOrchestrator."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from escalation.classifier import TriggerClassifier
from escalation.config import EscalationConfig
from escalation.directory import StaffDirectoryResolver
from escalation.orchestrator import (
    NO_TRIGGER_REASON,
    TICKET_FAILED_REASON,
    EscalationOrchestrator,
)
from escalation.registrar import TicketRegistrar
from escalation.schemas import EscalationPriority, NotificationChannel
from escalation.stores import InMemoryStaffDirectory

from tests.conftest import FailingTicketStore


class TestNoEscalation:
    @pytest.mark.asyncio
    async def test_neutral_turn_has_no_side_effects(self, orchestrator, ticket_store, email_transport, audit_log):
        result = await orchestrator.escalate_conversation(
            "sess-1", "cust-1", "Can I book a cleaning on Tuesday?", 0.95, 0
        )

        assert result.escalated is False
        assert result.reason == NO_TRIGGER_REASON
        assert result.ticket_id is None
        assert len(ticket_store) == 0
        assert email_transport.sent == []
        assert audit_log.entries == []


class TestEscalation:
    @pytest.mark.asyncio
    async def test_urgent_turn_creates_ticket_and_notifies(self, orchestrator, ticket_store, email_transport, sms_transport, audit_log):
        result = await orchestrator.escalate_conversation(
            "sess-1", "cust-1", "Water is flooding my basement!", 0.9, 0
        )

        assert result.escalated is True
        assert result.reason == "Urgent issue detected: flooding"
        ticket = ticket_store.get(result.ticket_id)
        assert ticket.ticket_number == result.ticket_number
        assert ticket.priority == EscalationPriority.URGENT
        assert len(email_transport.sent) == 3
        assert len(sms_transport.sent) == 1
        assert all(e.ticket_id == result.ticket_id for e in audit_log.entries)
        # the technician is not in an escalation role
        assert "tech@example.com" not in [to for to, _ in email_transport.sent]

    @pytest.mark.asyncio
    async def test_partial_notification_failure_still_escalates(
        self, orchestrator, sms_transport, email_transport, audit_log, caplog
    ):
        sms_transport.fail_for.add("+15550001111")

        with caplog.at_level(logging.WARNING):
            result = await orchestrator.escalate_conversation(
                "sess-1", None, "I want to speak to a manager", 0.9, 0
            )

        assert result.escalated is True
        successes = [e for e in audit_log.entries if e.metadata["outcome"] == "success"]
        failures = [e for e in audit_log.entries if e.metadata["outcome"] == "failure"]
        assert len(successes) == 3
        assert len(failures) == 1
        assert failures[0].channel == NotificationChannel.SMS
        assert caplog.text.count("Failed to notify staff") == 1

    @pytest.mark.asyncio
    async def test_vip_customer_from_config(self, orchestrator, config, ticket_store):
        result = await orchestrator.escalate_conversation(
            "sess-1", "cust-vip", "What are your opening hours?", 1.0, 0, config
        )
        assert result.escalated is True
        assert ticket_store.get(result.ticket_id).priority == EscalationPriority.HIGH

    @pytest.mark.asyncio
    async def test_default_config_used_when_none_given(self, ticket_store, staff_directory, dispatcher):
        orchestrator = EscalationOrchestrator(
            registrar=TicketRegistrar(ticket_store),
            resolver=StaffDirectoryResolver(staff_directory),
            dispatcher=dispatcher,
            default_config=EscalationConfig(failure_count_threshold=1),
        )
        result = await orchestrator.escalate_conversation("sess-1", None, "hello", 0.9, 1)
        assert result.escalated is True
        assert result.reason == "1 consecutive failed intent detections"

    @pytest.mark.asyncio
    async def test_channels_follow_config(self, orchestrator, sms_transport, email_transport):
        config = EscalationConfig(notify_channels=["email"])
        await orchestrator.escalate_conversation("sess-1", None, "fire!", 0.9, 0, config)
        assert sms_transport.sent == []
        assert len(email_transport.sent) == 3


class TestTicketFailure:
    @pytest.mark.asyncio
    async def test_store_failure_sends_nothing(self, staff_directory, dispatcher, email_transport, sms_transport):
        store = FailingTicketStore(error=ConnectionError("db down"))
        orchestrator = EscalationOrchestrator(
            registrar=TicketRegistrar(store),
            resolver=StaffDirectoryResolver(staff_directory),
            dispatcher=dispatcher,
        )

        result = await orchestrator.escalate_conversation(
            "sess-1", "cust-1", "This is an emergency", 0.9, 0
        )

        assert result.escalated is False
        assert result.reason == TICKET_FAILED_REASON
        assert result.ticket_id is None
        assert email_transport.sent == []
        assert sms_transport.sent == []


class TestDownstreamErrors:
    @pytest.mark.asyncio
    async def test_no_staff_still_escalates(self, ticket_store, dispatcher, email_transport):
        orchestrator = EscalationOrchestrator(
            registrar=TicketRegistrar(ticket_store),
            resolver=StaffDirectoryResolver(InMemoryStaffDirectory()),
            dispatcher=dispatcher,
        )
        result = await orchestrator.escalate_conversation("sess-1", None, "fire!", 0.9, 0)
        assert result.escalated is True
        assert email_transport.sent == []

    @pytest.mark.asyncio
    async def test_resolver_exception_still_escalates(self, ticket_store, dispatcher, caplog):
        resolver = StaffDirectoryResolver(InMemoryStaffDirectory())
        resolver.resolve_eligible_staff = AsyncMock(side_effect=RuntimeError("boom"))
        orchestrator = EscalationOrchestrator(
            registrar=TicketRegistrar(ticket_store),
            resolver=resolver,
            dispatcher=dispatcher,
        )

        with caplog.at_level(logging.ERROR):
            result = await orchestrator.escalate_conversation("sess-1", None, "fire!", 0.9, 0)

        assert result.escalated is True
        assert result.ticket_number.startswith("TKT-")
        assert "boom" in caplog.text

    @pytest.mark.asyncio
    async def test_dispatcher_exception_still_escalates(self, orchestrator):
        orchestrator.dispatcher.notify_staff = AsyncMock(side_effect=RuntimeError("fan-out broke"))
        result = await orchestrator.escalate_conversation("sess-1", None, "fire!", 0.9, 0)
        assert result.escalated is True

    @pytest.mark.asyncio
    async def test_classifier_exception_is_contained(self, ticket_store, staff_directory, dispatcher):
        classifier = TriggerClassifier()
        classifier.classify = MagicMock(side_effect=ValueError("bad input"))
        orchestrator = EscalationOrchestrator(
            registrar=TicketRegistrar(ticket_store),
            resolver=StaffDirectoryResolver(staff_directory),
            dispatcher=dispatcher,
            classifier=classifier,
        )
        result = await orchestrator.escalate_conversation("sess-1", None, "fire!", 0.9, 0)
        assert result.escalated is False
        assert len(ticket_store) == 0
