# ticket registrar
"""Turns a positive escalation decision into a support ticket."""

import logging
from typing import Optional

from escalation.schemas import EscalationDetection, TicketCreation
from escalation.stores import BaseTicketStore

logger = logging.getLogger(__name__)

UNKNOWN_TICKET_NUMBER = "UNKNOWN"


class TicketRegistrar:
    """
    Single write against the ticket store. No retries here: a store that
    wants retries implements them itself.
    """

    def __init__(self, store: BaseTicketStore):
        self.store = store

    async def create_ticket(
        self,
        session_id: str,
        customer_id: Optional[str],
        detection: EscalationDetection,
    ) -> TicketCreation:
        """
        Persist a ticket for ``detection``.

        Returns:
            TicketCreation; ``ok`` is False when the store is unreachable or
            rejects the write. Never raises.
        """
        if not detection.should_escalate:
            return TicketCreation.failed("Detection does not call for escalation")

        metadata = {
            "trigger": detection.trigger.value if detection.trigger else None,
            "is_urgent": detection.is_urgent,
            **detection.metadata,
        }

        try:
            ticket_id = await self.store.create_ticket(
                customer_id,
                session_id,
                detection.reason,
                detection.priority,
                metadata,
            )
        except Exception as e:
            logger.error(f"Error creating support ticket for session {session_id}: {e}", exc_info=True)
            return TicketCreation.failed(str(e))

        if not ticket_id:
            logger.error(f"Ticket store returned no id for session {session_id}")
            return TicketCreation.failed("Ticket store returned no ticket id")

        ticket_number = await self._lookup_ticket_number(ticket_id)
        logger.info(
            f"Created support ticket {ticket_number} ({detection.priority.value}) "
            f"for session {session_id}"
        )
        return TicketCreation.created(str(ticket_id), ticket_number)

    async def _lookup_ticket_number(self, ticket_id: str) -> str:
        # the ticket exists at this point, so a lookup failure is not fatal
        try:
            ticket_number = await self.store.get_ticket_number(ticket_id)
        except Exception as e:
            logger.warning(f"Could not read ticket number for {ticket_id}: {e}")
            return UNKNOWN_TICKET_NUMBER
        return ticket_number or UNKNOWN_TICKET_NUMBER
