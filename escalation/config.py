# escalation configuration

from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from escalation.schemas import NotificationChannel

DEFAULT_NOTIFY_CHANNELS = frozenset({NotificationChannel.EMAIL, NotificationChannel.SMS})


class EscalationConfig(BaseModel):
    """
    Per-invocation escalation settings.

    Immutable; use ``with_vip`` or ``model_copy(update=...)`` to derive a
    variant for a single call.
    """
    model_config = ConfigDict(frozen=True)

    confidence_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    failure_count_threshold: int = Field(default=3, ge=1)
    vip_customer_ids: FrozenSet[str] = frozenset()
    notify_channels: FrozenSet[NotificationChannel] = DEFAULT_NOTIFY_CHANNELS

    @field_validator("vip_customer_ids", mode="before")
    @classmethod
    def _strip_ids(cls, value):
        if value is None:
            return frozenset()
        return frozenset(str(v).strip() for v in value if str(v).strip())

    @field_validator("notify_channels", mode="before")
    @classmethod
    def _coerce_channels(cls, value):
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [value]
        return frozenset(
            v if isinstance(v, NotificationChannel) else NotificationChannel(str(v).strip().lower())
            for v in value
        )

    def is_vip(self, customer_id: Optional[str]) -> bool:
        if customer_id is None:
            return False
        customer_id = str(customer_id).strip()
        return bool(customer_id) and customer_id in self.vip_customer_ids

    def with_vip(self, customer_ids: Iterable[str]) -> "EscalationConfig":
        # re-validate so added ids are stripped like configured ones
        return self.model_validate({
            **self.model_dump(),
            "vip_customer_ids": set(self.vip_customer_ids) | set(customer_ids),
        })


DEFAULT_CONFIG = EscalationConfig()
