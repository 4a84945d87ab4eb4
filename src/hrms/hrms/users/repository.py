from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        employee_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def delete_for_employee(self, employee_id: str) -> bool:
        raise NotImplementedError
