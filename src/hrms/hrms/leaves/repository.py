from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveInterval, LeaveRequest


class LeaveLedger(Protocol):
    def create(
        self,
        *,
        employee_id: str,
        employee_name: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: str,
        applied_date: date,
    ) -> int:
        raise NotImplementedError

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(self, *, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[LeaveRequest]:
        """Newest first; all employees when no aliases are given."""

        raise NotImplementedError

    def list_approved(self, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[LeaveInterval]:
        raise NotImplementedError

    def find_overlapping(
        self,
        *,
        employee_aliases: Iterable[str],
        start_date: date,
        end_date: date,
    ) -> Optional[LeaveRequest]:
        """First non-rejected request intersecting [start_date, end_date]."""

        raise NotImplementedError

    def update_decision(
        self,
        leave_id: int,
        *,
        status: Optional[LeaveStatus] = None,
        is_paid: Optional[bool] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, leave_id: int) -> bool:
        raise NotImplementedError
