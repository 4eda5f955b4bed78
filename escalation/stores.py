# collaborator interfaces
"""External collaborators of the escalation flow, plus in-memory backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Protocol, Set
import uuid

from escalation.schemas import (
    EscalationPriority,
    NotificationChannel,
    StaffMember,
    SupportTicket,
)
from execution.models import ToolResult


class EmailTransport(Protocol):
    async def send_email(self, to: str, subject: str, html_body: str) -> ToolResult:
        ...


class SmsTransport(Protocol):
    async def send_sms(self, to: str, body: str) -> ToolResult:
        ...


class BaseTicketStore(ABC):
    """Persistent support ticket storage."""

    @abstractmethod
    async def create_ticket(
        self,
        customer_id: Optional[str],
        session_id: str,
        reason: str,
        priority: EscalationPriority,
        metadata: Dict[str, Any],
    ) -> str:
        """Create ticket, return its id."""
        pass

    @abstractmethod
    async def get_ticket_number(self, ticket_id: str) -> Optional[str]:
        """Human-facing number of a ticket."""
        pass

    @abstractmethod
    async def list_tickets(self, start: datetime, end: datetime) -> List[SupportTicket]:
        """Tickets created in [start, end]."""
        pass


class BaseStaffDirectory(ABC):
    """Staff lookup by role."""

    @abstractmethod
    async def list_staff_by_roles(
        self,
        roles: Set[str],
        limit: Optional[int] = None,
    ) -> List[StaffMember]:
        pass


class BaseAuditLog(ABC):
    """Durable trail of staff notifications."""

    @abstractmethod
    async def append(
        self,
        user_id: str,
        ticket_id: str,
        channel: NotificationChannel,
        metadata: Dict[str, Any],
    ) -> None:
        pass


class BaseCustomerStore(ABC):
    """Customer record lookup."""

    @abstractmethod
    async def get_customer(self, customer_id: str) -> Optional[Dict[str, Any]]:
        pass


class InMemoryTicketStore(BaseTicketStore):
    """
    In-memory ticket storage for development and testing.
    Not suitable for production - data lost on restart.
    """

    def __init__(self):
        self._tickets: Dict[str, SupportTicket] = {}
        self._sequence = 0

    async def create_ticket(self, customer_id, session_id, reason, priority, metadata) -> str:
        self._sequence += 1
        ticket_id = str(uuid.uuid4())
        now = datetime.utcnow()
        self._tickets[ticket_id] = SupportTicket(
            ticket_id=ticket_id,
            ticket_number=f"TKT-{now:%Y%m%d}-{self._sequence:04d}",
            customer_id=customer_id,
            session_id=session_id,
            escalation_reason=reason,
            priority=priority,
            metadata=dict(metadata),
            created_at=now,
        )
        return ticket_id

    async def get_ticket_number(self, ticket_id: str) -> Optional[str]:
        ticket = self._tickets.get(ticket_id)
        return ticket.ticket_number if ticket else None

    async def list_tickets(self, start: datetime, end: datetime) -> List[SupportTicket]:
        return [
            t for t in self._tickets.values()
            if start <= t.created_at <= end
        ]

    async def resolve_ticket(self, ticket_id: str, resolved_at: Optional[datetime] = None):
        ticket = self._tickets[ticket_id]
        self._tickets[ticket_id] = ticket.model_copy(
            update={"resolved_at": resolved_at or datetime.utcnow()}
        )

    def get(self, ticket_id: str) -> Optional[SupportTicket]:
        return self._tickets.get(ticket_id)

    def __len__(self) -> int:
        return len(self._tickets)


class InMemoryStaffDirectory(BaseStaffDirectory):
    """Staff directory backed by a dict of user -> roles."""

    def __init__(self):
        self._staff: Dict[str, StaffMember] = {}
        self._roles: Dict[str, Set[str]] = {}

    def add(self, member: StaffMember, roles: Iterable[str]):
        self._staff[member.id] = member
        self._roles[member.id] = set(roles)

    async def list_staff_by_roles(self, roles, limit=None) -> List[StaffMember]:
        matches = [
            self._staff[user_id]
            for user_id, user_roles in self._roles.items()
            if user_roles & set(roles)
        ]
        return matches[:limit] if limit else matches


@dataclass
class AuditEntry:
    user_id: str
    ticket_id: str
    channel: NotificationChannel
    metadata: Dict[str, Any] = field(default_factory=dict)
    sent_at: datetime = field(default_factory=datetime.utcnow)


class InMemoryAuditLog(BaseAuditLog):
    def __init__(self):
        self.entries: List[AuditEntry] = []

    async def append(self, user_id, ticket_id, channel, metadata) -> None:
        self.entries.append(
            AuditEntry(user_id=user_id, ticket_id=ticket_id, channel=channel, metadata=dict(metadata))
        )

    def for_ticket(self, ticket_id: str) -> List[AuditEntry]:
        return [e for e in self.entries if e.ticket_id == ticket_id]


class InMemoryCustomerStore(BaseCustomerStore):
    def __init__(self, customers: Optional[Dict[str, Dict[str, Any]]] = None):
        self._customers = dict(customers or {})

    def add(self, customer_id: str, tags: Iterable[str] = (), metadata: Optional[Dict[str, Any]] = None):
        self._customers[customer_id] = {"tags": list(tags), "metadata": metadata or {}}

    async def get_customer(self, customer_id: str) -> Optional[Dict[str, Any]]:
        return self._customers.get(customer_id)
