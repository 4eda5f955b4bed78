# VIP customer lookup

import logging
from typing import Optional

from escalation.config import EscalationConfig
from escalation.stores import BaseCustomerStore

logger = logging.getLogger(__name__)

VIP_TAGS = frozenset({"vip", "VIP"})


class VipCustomerChecker:
    """Flags customers tagged VIP, or marked VIP in their metadata."""

    def __init__(self, store: BaseCustomerStore):
        self.store = store

    async def is_vip(self, customer_id: Optional[str]) -> bool:
        customer_id = (customer_id or "").strip()
        if not customer_id:
            return False

        try:
            customer = await self.store.get_customer(customer_id)
        except Exception as e:
            logger.error(f"Error checking VIP status for {customer_id}: {e}")
            return False

        if not customer:
            return False

        tags = customer.get("tags") or []
        if any(tag in VIP_TAGS for tag in tags):
            return True

        metadata = customer.get("metadata") or {}
        return metadata.get("isVIP") is True or metadata.get("vip") is True

    async def resolve_config(
        self,
        config: EscalationConfig,
        customer_id: Optional[str],
    ) -> EscalationConfig:
        """``config`` with ``customer_id`` added to the VIP set when the store flags them."""
        if config.is_vip(customer_id) or not await self.is_vip(customer_id):
            return config
        return config.with_vip([customer_id])
