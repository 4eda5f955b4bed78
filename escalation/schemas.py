# schemas for escalation

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class EscalationTrigger(str, Enum):
    LOW_CONFIDENCE = "low_confidence"
    CUSTOMER_FRUSTRATION = "customer_frustration"
    REPEATED_FAILURE = "repeated_failure"
    EXPLICIT_REQUEST = "explicit_request"
    VIP_CUSTOMER = "vip_customer"
    KEYWORD_MATCH = "keyword_match"
    URGENT_ISSUE = "urgent_issue"


class EscalationPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def __lt__(self, other):
        if not isinstance(other, EscalationPriority):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, EscalationPriority):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, EscalationPriority):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, EscalationPriority):
            return NotImplemented
        return self.rank >= other.rank


_PRIORITY_RANK = {
    EscalationPriority.LOW: 0,
    EscalationPriority.MEDIUM: 1,
    EscalationPriority.HIGH: 2,
    EscalationPriority.URGENT: 3,
}


class NotificationChannel(str, Enum):
    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"


class NotificationOutcome(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class EscalationDetection(BaseModel):
    """Outcome of classifying one conversational turn"""
    model_config = ConfigDict(frozen=True)

    should_escalate: bool
    trigger: Optional[EscalationTrigger] = None
    priority: EscalationPriority = EscalationPriority.LOW
    reason: str = ""
    is_urgent: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)


class TicketReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    ticket_id: str
    ticket_number: str


class TicketCreation(BaseModel):
    """Result of a ticket write; check ``ok`` before using ``ticket``"""
    model_config = ConfigDict(frozen=True)

    ok: bool
    ticket: Optional[TicketReference] = None
    error: Optional[str] = None

    @classmethod
    def created(cls, ticket_id: str, ticket_number: str) -> "TicketCreation":
        return cls(ok=True, ticket=TicketReference(ticket_id=ticket_id, ticket_number=ticket_number))

    @classmethod
    def failed(cls, error: str) -> "TicketCreation":
        return cls(ok=False, error=error)


class SupportTicket(BaseModel):
    """Ticket as persisted by the ticket store"""
    ticket_id: str
    ticket_number: str
    customer_id: Optional[str] = None
    session_id: Optional[str] = None
    escalation_reason: str
    priority: Optional[EscalationPriority] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    resolved_at: Optional[datetime] = None


class StaffMember(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None
    phone: Optional[str] = None

    def contact_for(self, channel: NotificationChannel) -> Optional[str]:
        if channel == NotificationChannel.EMAIL:
            return self.email or None
        if channel == NotificationChannel.SMS:
            return self.phone or None
        return None


class NotificationRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    ticket_id: str
    channel: NotificationChannel
    outcome: NotificationOutcome
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.outcome == NotificationOutcome.SUCCESS


class EscalationResult(BaseModel):
    """What the conversation handler receives"""
    escalated: bool
    ticket_id: Optional[str] = None
    ticket_number: Optional[str] = None
    reason: str


class EscalationStats(BaseModel):
    total_escalations: int = 0
    by_trigger: Dict[str, int] = Field(default_factory=dict)
    by_priority: Dict[str, int] = Field(default_factory=dict)
    average_resolution_minutes: float = 0.0
