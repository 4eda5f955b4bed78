# notification fan-out
"""Notification dispatcher: alerts staff about a ticket on every enabled channel."""

from functools import partial
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional
import logging

from escalation.messages import NotificationTemplates, priority_marker
from escalation.schemas import (
    EscalationPriority,
    NotificationChannel,
    NotificationOutcome,
    NotificationRecord,
    StaffMember,
)
from escalation.stores import BaseAuditLog, EmailTransport, SmsTransport
from execution.models import ToolError, ToolResult
from execution.safety.timeout import TimeoutHandler
from execution.strategies.parallel import ParallelStrategy

logger = logging.getLogger(__name__)

NOTIFICATION_TYPE = "escalation_alert"

CHANNEL_ORDER = (
    NotificationChannel.EMAIL,
    NotificationChannel.SMS,
    NotificationChannel.PUSH,
)


class NotificationDispatcher:
    """
    Fans one ticket alert out to staff, one task per (staff member, channel).

    Every task is independent: a failure, a timeout or an exception in one
    send never affects the others, and nothing is raised to the caller.
    Only successful deliveries are returned; every attempt is written to the
    audit log.
    """

    def __init__(
        self,
        email_transport: Optional[EmailTransport] = None,
        sms_transport: Optional[SmsTransport] = None,
        audit_log: Optional[BaseAuditLog] = None,
        timeout_handler: Optional[TimeoutHandler] = None,
        templates: Optional[NotificationTemplates] = None,
        max_concurrent: int = 10,
    ):
        self.email_transport = email_transport
        self.sms_transport = sms_transport
        self.audit_log = audit_log
        self.timeout_handler = timeout_handler or TimeoutHandler(default_timeout_seconds=10)
        self.templates = templates or NotificationTemplates()
        self.strategy = ParallelStrategy(max_concurrent=max_concurrent, shield=True)

    def _sender_for(self, channel: NotificationChannel) -> Optional[Callable[..., Awaitable[Any]]]:
        if channel == NotificationChannel.EMAIL and self.email_transport is not None:
            return self._send_email
        if channel == NotificationChannel.SMS and self.sms_transport is not None:
            return self._send_sms
        return None

    async def notify_staff(
        self,
        ticket_id: str,
        ticket_number: str,
        priority: EscalationPriority,
        reason: str,
        staff: Iterable[StaffMember],
        channels: Iterable[NotificationChannel],
    ) -> List[NotificationRecord]:
        """
        Notify every staff member on every enabled channel they can receive.

        Returns:
            The successful NotificationRecords, in staff then channel order
        """
        priority = EscalationPriority(priority)
        enabled = {NotificationChannel(c) for c in channels}
        base_metadata = {
            "notification_type": NOTIFICATION_TYPE,
            "priority": priority.value,
            "escalation_reason": reason,
            "ticket_number": ticket_number,
            "marker": priority_marker(priority),
        }

        jobs = []
        for member in staff:
            for channel in CHANNEL_ORDER:
                if channel not in enabled:
                    continue
                contact = member.contact_for(channel)
                if not contact:
                    continue
                sender = self._sender_for(channel)
                if sender is None:
                    logger.debug(f"No transport for {channel.value}, skipping staff {member.id}")
                    continue
                jobs.append(partial(
                    self._dispatch_one,
                    sender,
                    member,
                    channel,
                    contact,
                    ticket_id,
                    ticket_number,
                    priority,
                    reason,
                    base_metadata,
                ))

        if not jobs:
            logger.warning(f"No reachable staff for ticket {ticket_number}")
            return []

        settled = await self.strategy.execute(jobs)

        delivered: List[NotificationRecord] = []
        for outcome in settled:
            if not outcome.success:
                # _dispatch_one handles its own errors; only cancellation lands here
                logger.warning(f"Notification task for ticket {ticket_number} aborted: {outcome.error!r}")
                continue
            if outcome.value.succeeded:
                delivered.append(outcome.value)

        logger.info(
            f"Notified {len(delivered)}/{len(jobs)} staff channels about ticket {ticket_number}"
        )
        return delivered

    async def _dispatch_one(
        self,
        sender: Callable[..., Awaitable[Any]],
        member: StaffMember,
        channel: NotificationChannel,
        contact: str,
        ticket_id: str,
        ticket_number: str,
        priority: EscalationPriority,
        reason: str,
        base_metadata: Dict[str, Any],
    ) -> NotificationRecord:
        error: Optional[str] = None
        try:
            result = await self.timeout_handler.execute_with_timeout(
                sender(contact, ticket_number, priority, reason),
                key=channel.value,
            )
            error = _delivery_error(result)
        except ToolError as e:
            error = e.message
        except Exception as e:
            error = f"{type(e).__name__}: {e}"

        if error is None:
            outcome = NotificationOutcome.SUCCESS
        else:
            outcome = NotificationOutcome.FAILURE
            logger.warning(
                f"Failed to notify staff {member.id} via {channel.value} "
                f"for ticket {ticket_number}: {error}"
            )

        metadata = {**base_metadata, "outcome": outcome.value}
        if error is not None:
            metadata["error"] = error

        record = NotificationRecord(
            user_id=member.id,
            ticket_id=ticket_id,
            channel=channel,
            outcome=outcome,
            metadata=metadata,
        )
        await self._write_audit(record)
        return record

    async def _write_audit(self, record: NotificationRecord):
        if self.audit_log is None:
            return
        try:
            await self.audit_log.append(
                record.user_id,
                record.ticket_id,
                record.channel,
                record.metadata,
            )
        except Exception as e:
            logger.error(
                f"Could not write notification audit for staff {record.user_id} "
                f"({record.channel.value}) on ticket {record.ticket_id}: {e}"
            )

    async def _send_email(self, to, ticket_number, priority, reason):
        return await self.email_transport.send_email(
            to,
            self.templates.email_subject(ticket_number, priority),
            self.templates.email_html(ticket_number, priority, reason),
        )

    async def _send_sms(self, to, ticket_number, priority, reason):
        return await self.sms_transport.send_sms(
            to,
            self.templates.sms_body(ticket_number, priority, reason),
        )


def _delivery_error(result: Any) -> Optional[str]:
    """None when the transport reported success, else a description of the failure."""
    if isinstance(result, ToolResult):
        if result.success:
            return None
        return result.error or f"transport returned {result.status.value}"
    if result is False or result is None:
        return "transport reported failure"
    return None
