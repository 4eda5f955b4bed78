# message templates for staff alerts

from html import escape

from escalation.schemas import EscalationPriority

PRIORITY_MARKERS = {
    EscalationPriority.URGENT: "🚨",
    EscalationPriority.HIGH: "⚠️",
    EscalationPriority.MEDIUM: "ℹ️",
    EscalationPriority.LOW: "📋",
}

QUEUE_PATH = "/dashboard/support/queue"


def priority_marker(priority: EscalationPriority) -> str:
    return PRIORITY_MARKERS[EscalationPriority(priority)]


class NotificationTemplates:
    def __init__(self, app_url: str = ""):
        self.queue_url = f"{app_url.rstrip('/')}{QUEUE_PATH}"

    def email_subject(self, ticket_number: str, priority: EscalationPriority) -> str:
        priority = EscalationPriority(priority)
        return (
            f"{priority_marker(priority)} {priority.value.upper()} - "
            f"New Support Ticket: {ticket_number}"
        )

    def email_html(self, ticket_number: str, priority: EscalationPriority, reason: str) -> str:
        priority = EscalationPriority(priority)
        marker = priority_marker(priority)
        return f"""<h2>{marker} New Support Ticket Escalated</h2>
<p><strong>Ticket:</strong> {escape(ticket_number)}</p>
<p><strong>Priority:</strong> {priority.value.upper()}</p>
<p><strong>Reason:</strong> {escape(reason)}</p>
<br>
<p>A customer conversation has been escalated to human support. Please review and respond as soon as possible.</p>
<p><a href="{escape(self.queue_url)}">View Support Queue</a></p>"""

    def sms_body(self, ticket_number: str, priority: EscalationPriority, reason: str) -> str:
        priority = EscalationPriority(priority)
        return (
            f"{priority_marker(priority)} {priority.value.upper()} Support Ticket {ticket_number}"
            f"\n\n{reason}\n\nView: {self.queue_url}"
        )
