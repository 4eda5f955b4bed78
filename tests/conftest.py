"""Shared fakes for the escalation tests.

The transports record every call and can be told to fail, raise or stall
for specific recipients so fan-out isolation can be observed.
"""

import asyncio

import pytest

from escalation.classifier import TriggerClassifier
from escalation.config import EscalationConfig
from escalation.directory import StaffDirectoryResolver
from escalation.dispatcher import NotificationDispatcher
from escalation.orchestrator import EscalationOrchestrator
from escalation.registrar import TicketRegistrar
from escalation.schemas import StaffMember
from escalation.stores import (
    BaseTicketStore,
    InMemoryAuditLog,
    InMemoryStaffDirectory,
    InMemoryTicketStore,
)
from execution.models import ToolResult, ToolStatus
from execution.safety import TimeoutHandler


class FakeTransport:
    """Records sends; recipients in ``fail_for`` get a FAILED result,
    ``raise_for`` raise, ``stall_for`` sleep for ``stall_seconds``."""

    def __init__(self, name, delay=0.0, stall_seconds=5.0):
        self.name = name
        self.delay = delay
        self.stall_seconds = stall_seconds
        self.fail_for = set()
        self.raise_for = set()
        self.stall_for = set()
        self.sent = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _deliver(self, to, payload):
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if to in self.stall_for:
                await asyncio.sleep(self.stall_seconds)
            elif self.delay:
                await asyncio.sleep(self.delay)
            if to in self.raise_for:
                raise ConnectionError(f"{self.name} provider unreachable")
            if to in self.fail_for:
                return ToolResult(tool_name=self.name, status=ToolStatus.FAILED, error="rejected")
            self.sent.append((to, payload))
            return ToolResult(tool_name=self.name, status=ToolStatus.SUCCESS, data={"sent_to": to})
        finally:
            self.in_flight -= 1


class FakeEmailTransport(FakeTransport):
    def __init__(self, **kwargs):
        super().__init__("send_email", **kwargs)

    async def send_email(self, to, subject, html_body):
        return await self._deliver(to, {"subject": subject, "html": html_body})


class FakeSmsTransport(FakeTransport):
    def __init__(self, **kwargs):
        super().__init__("send_sms", **kwargs)

    async def send_sms(self, to, body):
        return await self._deliver(to, {"body": body})


class FailingTicketStore(BaseTicketStore):
    def __init__(self, error=None, ticket_id=None):
        self.error = error
        self.ticket_id = ticket_id
        self.calls = 0

    async def create_ticket(self, customer_id, session_id, reason, priority, metadata):
        self.calls += 1
        if self.error:
            raise self.error
        return self.ticket_id

    async def get_ticket_number(self, ticket_id):
        return None

    async def list_tickets(self, start, end):
        raise ConnectionError("ticket store unreachable")


@pytest.fixture
def email_transport():
    return FakeEmailTransport()


@pytest.fixture
def sms_transport():
    return FakeSmsTransport()


@pytest.fixture
def audit_log():
    return InMemoryAuditLog()


@pytest.fixture
def ticket_store():
    return InMemoryTicketStore()


@pytest.fixture
def staff_directory():
    directory = InMemoryStaffDirectory()
    directory.add(StaffMember(id="u-admin", email="admin@example.com"), ["admin"])
    directory.add(StaffMember(id="u-manager", email="manager@example.com"), ["manager"])
    directory.add(
        StaffMember(id="u-dispatch", email="dispatch@example.com", phone="+15550001111"),
        ["dispatcher"],
    )
    directory.add(StaffMember(id="u-tech", email="tech@example.com", phone="+15550002222"), ["technician"])
    return directory


@pytest.fixture
def dispatcher(email_transport, sms_transport, audit_log):
    return NotificationDispatcher(
        email_transport=email_transport,
        sms_transport=sms_transport,
        audit_log=audit_log,
        timeout_handler=TimeoutHandler(default_timeout_seconds=0.2),
    )


@pytest.fixture
def config():
    return EscalationConfig(vip_customer_ids={"cust-vip"})


@pytest.fixture
def orchestrator(ticket_store, staff_directory, dispatcher):
    return EscalationOrchestrator(
        registrar=TicketRegistrar(ticket_store),
        resolver=StaffDirectoryResolver(staff_directory),
        dispatcher=dispatcher,
        classifier=TriggerClassifier(),
    )
