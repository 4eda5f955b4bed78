# escalation package

from escalation.schemas import (
    EscalationTrigger, EscalationPriority, EscalationDetection, EscalationResult,
    EscalationStats, NotificationChannel, NotificationOutcome, NotificationRecord,
    StaffMember, SupportTicket, TicketCreation, TicketReference,
)
from escalation.config import EscalationConfig, DEFAULT_CONFIG
from escalation.keywords import EscalationKeywords, DEFAULT_KEYWORDS
from escalation.classifier import TriggerClassifier, EscalationRule, detect_escalation
from escalation.registrar import TicketRegistrar
from escalation.directory import StaffDirectoryResolver, ESCALATION_ROLES
from escalation.dispatcher import NotificationDispatcher
from escalation.orchestrator import EscalationOrchestrator
from escalation.customers import VipCustomerChecker
from escalation.stats import EscalationStatsService

__all__ = [
    "EscalationTrigger", "EscalationPriority", "EscalationDetection", "EscalationResult",
    "EscalationStats", "NotificationChannel", "NotificationOutcome", "NotificationRecord",
    "StaffMember", "SupportTicket", "TicketCreation", "TicketReference",
    "EscalationConfig", "DEFAULT_CONFIG", "EscalationKeywords", "DEFAULT_KEYWORDS",
    "TriggerClassifier", "EscalationRule", "detect_escalation",
    "TicketRegistrar", "StaffDirectoryResolver", "ESCALATION_ROLES",
    "NotificationDispatcher", "EscalationOrchestrator",
    "VipCustomerChecker", "EscalationStatsService",
]
