# escalation orchestrator
"""Runs one conversation turn through classification, ticketing and staff alerts."""

import logging
from typing import Optional

from escalation.classifier import TriggerClassifier
from escalation.config import DEFAULT_CONFIG, EscalationConfig
from escalation.directory import StaffDirectoryResolver
from escalation.dispatcher import NotificationDispatcher
from escalation.registrar import TicketRegistrar
from escalation.schemas import EscalationResult

logger = logging.getLogger(__name__)

NO_TRIGGER_REASON = "No escalation triggers detected"
TICKET_FAILED_REASON = "Failed to create support ticket"
ESCALATION_FAILED_REASON = "Escalation failed"


class EscalationOrchestrator:
    """
    Classify -> create ticket -> resolve staff -> notify.

    ``escalate_conversation`` never raises. Once a ticket exists the turn
    counts as escalated, however many notifications actually land.
    """

    def __init__(
        self,
        registrar: TicketRegistrar,
        resolver: StaffDirectoryResolver,
        dispatcher: NotificationDispatcher,
        classifier: Optional[TriggerClassifier] = None,
        default_config: Optional[EscalationConfig] = None,
    ):
        self.registrar = registrar
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.classifier = classifier or TriggerClassifier()
        self.default_config = default_config or DEFAULT_CONFIG

    async def escalate_conversation(
        self,
        session_id: str,
        customer_id: Optional[str],
        message: str,
        confidence: float,
        failure_count: int = 0,
        config: Optional[EscalationConfig] = None,
    ) -> EscalationResult:
        config = config or self.default_config

        try:
            detection = self.classifier.classify(
                message, confidence, failure_count, customer_id, config
            )
            if not detection.should_escalate:
                return EscalationResult(escalated=False, reason=NO_TRIGGER_REASON)

            creation = await self.registrar.create_ticket(session_id, customer_id, detection)
        except Exception as e:
            logger.error(f"Escalation failed for session {session_id}: {e}", exc_info=True)
            return EscalationResult(escalated=False, reason=ESCALATION_FAILED_REASON)

        if not creation.ok:
            logger.error(
                f"Escalation for session {session_id} not recorded: {creation.error}"
            )
            return EscalationResult(escalated=False, reason=TICKET_FAILED_REASON)

        ticket = creation.ticket
        logger.info(
            f"Session {session_id} escalated ({detection.trigger.value}, "
            f"{detection.priority.value}) as ticket {ticket.ticket_number}"
        )

        try:
            staff = await self.resolver.resolve_eligible_staff()
            if staff:
                await self.dispatcher.notify_staff(
                    ticket.ticket_id,
                    ticket.ticket_number,
                    detection.priority,
                    detection.reason,
                    staff,
                    config.notify_channels,
                )
        except Exception as e:
            logger.error(
                f"Error notifying staff about ticket {ticket.ticket_number}: {e}",
                exc_info=True,
            )

        return EscalationResult(
            escalated=True,
            ticket_id=ticket.ticket_id,
            ticket_number=ticket.ticket_number,
            reason=detection.reason,
        )
