# staff directory resolver

import logging
from typing import FrozenSet, List, Optional

from escalation.schemas import StaffMember
from escalation.stores import BaseStaffDirectory

logger = logging.getLogger(__name__)

ESCALATION_ROLES: FrozenSet[str] = frozenset({"admin", "manager", "dispatcher"})


class StaffDirectoryResolver:
    """Fetches the staff eligible for escalation alerts. Nothing is cached."""

    def __init__(
        self,
        directory: BaseStaffDirectory,
        roles: FrozenSet[str] = ESCALATION_ROLES,
        limit: Optional[int] = 10,
    ):
        self.directory = directory
        self.roles = frozenset(roles)
        self.limit = limit

    async def resolve_eligible_staff(self) -> List[StaffMember]:
        """Eligible staff right now; an empty list when nobody can be reached."""
        try:
            staff = await self.directory.list_staff_by_roles(set(self.roles), self.limit)
        except Exception as e:
            logger.warning(f"Staff directory lookup failed, treating as no staff: {e}")
            return []

        unique: List[StaffMember] = []
        seen = set()
        for member in staff or []:
            if member.id in seen:
                continue
            seen.add(member.id)
            unique.append(member)

        if self.limit:
            unique = unique[:self.limit]

        if not unique:
            logger.warning("No available staff to notify")

        return unique
