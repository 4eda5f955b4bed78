# email notifier
"""Email notification tool (Resend HTTP API)"""
from typing import Dict, Any, Optional
from datetime import datetime
import httpx
import logging

from execution.tools.base import BaseTool
from execution.models import ToolResult, ToolStatus, ToolCategory, TransportNotConfiguredError

logger = logging.getLogger(__name__)

RESEND_EMAILS_URL = "https://api.resend.com/emails"


class ResendEmailTool(BaseTool):
    """Send email notifications through Resend"""

    def __init__(
        self,
        api_key: Optional[str],
        from_email: str,
        api_url: str = RESEND_EMAILS_URL,
        timeout_seconds: float = 10,
    ):
        super().__init__(
            name="send_email",
            description="Send an email notification",
            category=ToolCategory.NOTIFICATION,
            requires_auth=True,
            timeout_seconds=timeout_seconds,
            idempotent=False,
        )
        self.api_key = api_key
        self.from_email = from_email
        self.api_url = api_url

    async def send_email(self, to: str, subject: str, html_body: str) -> ToolResult:
        """Email transport entry point used by the escalation dispatcher"""
        return await self.run({"to": to, "subject": subject, "html": html_body})

    async def execute(self, params: Dict[str, Any]) -> ToolResult:
        start_time = datetime.utcnow()

        if not self.api_key:
            error = TransportNotConfiguredError(
                message="Resend API key not configured",
                tool_name=self.name,
                error_code="NOT_CONFIGURED",
            )
            logger.warning(f"{error.message}, skipping email send")
            return self._result(
                ToolStatus.SKIPPED,
                error=error.message,
                start_time=start_time,
            )

        payload = {
            "from": self.from_email,
            "to": params["to"],
            "subject": params["subject"],
            "html": params["html"],
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.api_url,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    timeout=float(self.timeout_seconds),
                )

            if response.status_code >= 400:
                logger.error(
                    f"Resend API error {response.status_code}: {response.text}"
                )
                return self._result(
                    ToolStatus.FAILED,
                    error=f"Resend API returned {response.status_code}",
                    start_time=start_time,
                )

            result = response.json()
            return self._result(
                ToolStatus.SUCCESS,
                data={
                    "sent_to": params["to"],
                    "subject": params["subject"],
                    "message_id": result.get("id"),
                },
                start_time=start_time,
            )

        except httpx.TimeoutException as e:
            logger.error(f"Email send timed out: {e}")
            return self._result(ToolStatus.TIMEOUT, error=str(e), start_time=start_time)
        except Exception as e:
            logger.error(f"Failed to send email: {e}")
            return self._result(ToolStatus.FAILED, error=str(e), start_time=start_time)

    def get_parameter_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "to": {"type": "string", "minLength": 3},
                "subject": {"type": "string"},
                "html": {"type": "string"},
            },
            "required": ["to", "subject", "html"],
        }
