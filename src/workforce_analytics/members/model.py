from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import UNASSIGNED_DEPARTMENT
from ..core.enums import MemberStatus


@dataclass(frozen=True)
class Member:
    """Thực thể miền (domain): Nhân sự.

    Lưu ý: Đây là dữ liệu tham chiếu chỉ đọc trong một phiên tính toán.
    """

    member_id: str
    name: str
    department: Optional[str] = None
    status: MemberStatus = MemberStatus.ACTIVE
    photo_url: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    join_date: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    @property
    def department_name(self) -> str:
        return self.department or UNASSIGNED_DEPARTMENT
