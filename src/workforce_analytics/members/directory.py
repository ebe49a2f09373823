from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..common.validators import require_iterable
from ..core.constants import UNKNOWN_MEMBER
from .model import Member

logger = logging.getLogger(__name__)


class MemberDirectory:
    """Lookup helper over a member snapshot.

    Resolves assignee ids to names/departments without ever failing: an id
    that is not in the snapshot resolves to a fallback label and is logged as
    a data-integrity signal.
    """

    def __init__(self, members: Iterable[Member]):
        self._members = require_iterable(members, "members")
        self._by_id: dict[str, Member] = {}
        for m in self._members:
            # First occurrence wins, like a linear find.
            self._by_id.setdefault(m.member_id, m)

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self):
        return iter(self._members)

    def get(self, member_id: Optional[str]) -> Optional[Member]:
        if member_id is None:
            return None
        return self._by_id.get(member_id)

    def name_for(self, member_id: Optional[str], *, fallback: str = UNKNOWN_MEMBER) -> str:
        member = self.get(member_id)
        if member is None:
            logger.debug("Unresolved member reference %r", member_id)
            return fallback
        return member.name or fallback

    def department_of(self, member_id: Optional[str]) -> Optional[str]:
        member = self.get(member_id)
        return member.department if member else None

    def ids_in_department(self, department: str) -> set[str]:
        return {m.member_id for m in self._members if m.department == department}

    def active(self) -> list[Member]:
        return [m for m in self._members if m.is_active]

    def active_count(self) -> int:
        return sum(1 for m in self._members if m.is_active)

    def departments(self) -> list[str]:
        """Distinct non-empty departments, sorted (filter dropdown order)."""
        return sorted({m.department for m in self._members if m.department})
