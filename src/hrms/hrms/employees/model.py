from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class EmployeeIdentity:
    """All identifiers an employee may be referenced by in other records."""

    primary_id: str
    aliases: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "aliases", frozenset(self.aliases) | {self.primary_id})

    def matches(self, reference: Optional[str]) -> bool:
        return bool(reference) and str(reference) in self.aliases


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee (plain data, no DB access)."""

    row_id: int
    employee_id: str
    name: str
    email: str
    username: str
    department: str
    position: str
    salary: Decimal
    joining_date: date
    employee_code: Optional[str] = None
    phone: str = ""

    def identity(self) -> EmployeeIdentity:
        aliases = {self.employee_id, str(self.row_id)}
        if self.employee_code:
            aliases.add(self.employee_code)
        return EmployeeIdentity(primary_id=self.employee_id, aliases=frozenset(aliases))

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "employee_code": self.employee_code,
            "row_id": self.row_id,
            "name": self.name,
            "email": self.email,
            "username": self.username,
            "department": self.department,
            "position": self.position,
            "salary": float(self.salary),
            "joining_date": self.joining_date.isoformat(),
            "phone": self.phone,
        }
