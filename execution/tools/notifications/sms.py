# sms notifier
"""SMS notification tool (Twilio REST API)"""
from typing import Dict, Any, Optional
from datetime import datetime
import httpx
import logging

from execution.tools.base import BaseTool
from execution.models import ToolResult, ToolStatus, ToolCategory, TransportNotConfiguredError

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = (
    "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
)


class TwilioSmsTool(BaseTool):
    """Send SMS notifications through Twilio"""

    def __init__(
        self,
        account_sid: Optional[str],
        auth_token: Optional[str],
        from_number: Optional[str],
        timeout_seconds: float = 10,
    ):
        super().__init__(
            name="send_sms",
            description="Send an SMS notification",
            category=ToolCategory.NOTIFICATION,
            requires_auth=True,
            timeout_seconds=timeout_seconds,
            idempotent=False,
        )
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number

    async def send_sms(self, to: str, body: str) -> ToolResult:
        """SMS transport entry point used by the escalation dispatcher"""
        return await self.run({"to": to, "body": body})

    async def execute(self, params: Dict[str, Any]) -> ToolResult:
        start_time = datetime.utcnow()

        if not self.account_sid or not self.auth_token or not self.from_number:
            error = TransportNotConfiguredError(
                message="Twilio credentials not configured",
                tool_name=self.name,
                error_code="NOT_CONFIGURED",
            )
            logger.warning(f"{error.message}, skipping SMS send")
            return self._result(
                ToolStatus.SKIPPED,
                error=error.message,
                start_time=start_time,
            )

        url = TWILIO_MESSAGES_URL.format(sid=self.account_sid)

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    url,
                    data={
                        "To": params["to"],
                        "From": self.from_number,
                        "Body": params["body"],
                    },
                    auth=(self.account_sid, self.auth_token),
                    timeout=float(self.timeout_seconds),
                )

            result = response.json()

            if response.status_code >= 400:
                logger.error(
                    f"Twilio API error {response.status_code}: "
                    f"{result.get('message', result)}"
                )
                return self._result(
                    ToolStatus.FAILED,
                    error=result.get("message", f"HTTP {response.status_code}"),
                    start_time=start_time,
                )

            return self._result(
                ToolStatus.SUCCESS,
                data={
                    "sent_to": params["to"],
                    "sid": result.get("sid"),
                    "status": result.get("status"),
                },
                start_time=start_time,
            )

        except httpx.TimeoutException as e:
            logger.error(f"SMS send timed out: {e}")
            return self._result(ToolStatus.TIMEOUT, error=str(e), start_time=start_time)
        except Exception as e:
            logger.error(f"Failed to send SMS: {e}")
            return self._result(ToolStatus.FAILED, error=str(e), start_time=start_time)

    def get_parameter_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "to": {"type": "string", "pattern": "^\\+?[0-9 ()-]{6,}$"},
                "body": {"type": "string", "maxLength": 1600},
            },
            "required": ["to", "body"],
        }
