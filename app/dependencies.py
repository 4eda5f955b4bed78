"""Wiring of the escalation service for the HTTP app."""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
import json
import logging

from app.config import Settings, settings
from escalation.classifier import TriggerClassifier
from escalation.customers import VipCustomerChecker
from escalation.directory import StaffDirectoryResolver
from escalation.dispatcher import NotificationDispatcher
from escalation.messages import NotificationTemplates
from escalation.orchestrator import EscalationOrchestrator
from escalation.registrar import TicketRegistrar
from escalation.stats import EscalationStatsService
from escalation.schemas import StaffMember
from escalation.stores import (
    BaseAuditLog,
    BaseCustomerStore,
    BaseStaffDirectory,
    BaseTicketStore,
    InMemoryAuditLog,
    InMemoryCustomerStore,
    InMemoryStaffDirectory,
    InMemoryTicketStore,
)
from execution.safety import TimeoutHandler
from execution.tools.notifications import ResendEmailTool, TwilioSmsTool

logger = logging.getLogger(__name__)


@dataclass
class EscalationService:
    orchestrator: EscalationOrchestrator
    classifier: TriggerClassifier
    vip_checker: VipCustomerChecker
    stats: EscalationStatsService
    ticket_store: BaseTicketStore
    staff_directory: BaseStaffDirectory
    audit_log: BaseAuditLog


def load_staff_file(path: str, directory: InMemoryStaffDirectory) -> int:
    """
    Seed ``directory`` from a JSON list of
    ``{"id", "email", "phone", "roles": [...]}`` entries.

    Returns:
        Number of staff members loaded
    """
    with open(path, encoding="utf-8") as f:
        entries = json.load(f)
    for entry in entries:
        directory.add(StaffMember.model_validate(entry), entry.get("roles", []))
    logger.info(f"Loaded {len(entries)} staff members from {path}")
    return len(entries)


def build_service(
    config: Settings,
    ticket_store: Optional[BaseTicketStore] = None,
    staff_directory: Optional[BaseStaffDirectory] = None,
    audit_log: Optional[BaseAuditLog] = None,
    customer_store: Optional[BaseCustomerStore] = None,
) -> EscalationService:
    """
    Wire the escalation service.

    Stores not passed in fall back to the in-memory backends; the in-memory
    staff directory is seeded from ``config.escalation_staff_file`` when set.
    """
    if ticket_store is None:
        ticket_store = InMemoryTicketStore()
    if audit_log is None:
        audit_log = InMemoryAuditLog()
    if customer_store is None:
        customer_store = InMemoryCustomerStore()
    if staff_directory is None:
        staff_directory = InMemoryStaffDirectory()
        if config.escalation_staff_file:
            load_staff_file(config.escalation_staff_file, staff_directory)

    email_tool = ResendEmailTool(
        api_key=config.resend_api_key,
        from_email=config.email_from,
        api_url=config.resend_api_url,
        timeout_seconds=config.notification_timeout_seconds,
    )
    sms_tool = TwilioSmsTool(
        account_sid=config.twilio_account_sid,
        auth_token=config.twilio_auth_token,
        from_number=config.twilio_phone_number,
        timeout_seconds=config.notification_timeout_seconds,
    )

    classifier = TriggerClassifier()
    dispatcher = NotificationDispatcher(
        email_transport=email_tool,
        sms_transport=sms_tool,
        audit_log=audit_log,
        timeout_handler=TimeoutHandler(config.notification_timeout_seconds),
        templates=NotificationTemplates(config.app_url),
        max_concurrent=config.max_concurrent_notifications,
    )
    orchestrator = EscalationOrchestrator(
        registrar=TicketRegistrar(ticket_store),
        resolver=StaffDirectoryResolver(staff_directory, limit=config.staff_notify_limit),
        dispatcher=dispatcher,
        classifier=classifier,
        default_config=config.escalation_config(),
    )

    return EscalationService(
        orchestrator=orchestrator,
        classifier=classifier,
        vip_checker=VipCustomerChecker(customer_store),
        stats=EscalationStatsService(ticket_store),
        ticket_store=ticket_store,
        staff_directory=staff_directory,
        audit_log=audit_log,
    )


@lru_cache
def get_escalation_service() -> EscalationService:
    return build_service(settings)
