from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Login account. Employee accounts point at an employee id."""

    user_id: int
    username: str
    password_hash: str
    role: Role
    employee_id: Optional[str] = None
    name: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class AuthContext:
    """Who is making the current request, decoded from the bearer token."""

    user_id: int
    username: str
    role: Role
    employee_id: Optional[str] = None
    name: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "employee_id": self.employee_id,
            "name": self.name,
        }
