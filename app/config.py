"""
Service configuration.

Values come from environment variables or a ``.env`` file in the working
directory, loaded via pydantic-settings into the ``settings`` singleton.
"""

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from escalation.config import EscalationConfig


class Settings(BaseSettings):
    # ── General ──────────────────────────────────────────────
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    app_url: str = Field(default="http://localhost:3000")

    # ── Email (Resend) ───────────────────────────────────────
    resend_api_key: str = Field(default="")
    resend_api_url: str = Field(default="https://api.resend.com/emails")
    email_from: str = Field(default="Support <support@example.com>")

    # ── SMS (Twilio) ─────────────────────────────────────────
    twilio_account_sid: str = Field(default="")
    twilio_auth_token: str = Field(default="")
    twilio_phone_number: str = Field(default="")

    # ── Notification fan-out ─────────────────────────────────
    notification_timeout_seconds: float = Field(default=10.0, gt=0)
    max_concurrent_notifications: int = Field(default=10, ge=1)
    staff_notify_limit: int = Field(default=10, ge=1)

    # ── Escalation defaults ──────────────────────────────────
    escalation_confidence_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    escalation_failure_threshold: int = Field(default=3, ge=1)
    escalation_vip_customer_ids: str = Field(default="", description="Comma-separated customer ids")
    escalation_notify_channels: str = Field(default="email,sms")
    escalation_staff_file: str = Field(default="", description="JSON file seeding the in-memory staff directory")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @staticmethod
    def _split(value: str) -> List[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def vip_customer_id_list(self) -> List[str]:
        return self._split(self.escalation_vip_customer_ids)

    @property
    def notify_channel_list(self) -> List[str]:
        return self._split(self.escalation_notify_channels)

    def escalation_config(self) -> EscalationConfig:
        return EscalationConfig(
            confidence_threshold=self.escalation_confidence_threshold,
            failure_count_threshold=self.escalation_failure_threshold,
            vip_customer_ids=self.vip_customer_id_list,
            notify_channels=self.notify_channel_list,
        )


settings = Settings()
