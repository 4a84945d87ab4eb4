from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeIdentity


class EmployeeDirectory(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_alias(self, alias: str) -> Optional[Employee]:
        """Look up by employee id, employee code or internal row id."""

        raise NotImplementedError

    def resolve_identity(self, alias: str) -> Optional[EmployeeIdentity]:
        raise NotImplementedError

    def find_conflicts(
        self,
        *,
        employee_id: str,
        employee_code: Optional[str],
        username: str,
        email: str,
        exclude_row_id: Optional[int] = None,
    ) -> list[str]:
        """Return the names of unique fields already taken by another employee."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        employee_code: Optional[str],
        name: str,
        email: str,
        username: str,
        department: str,
        position: str,
        salary: Decimal,
        joining_date: date,
        phone: str,
    ) -> int:
        raise NotImplementedError

    def update(self, row_id: int, **fields) -> bool:
        raise NotImplementedError

    def delete(self, row_id: int) -> bool:
        raise NotImplementedError
