from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import PayrollRecord, PayrollResult


class PayrollRepository(Protocol):
    def upsert(self, result: PayrollResult) -> int:
        """Insert or replace the record for (employee, year, month)."""

        raise NotImplementedError

    def list_records(self, *, employee_aliases: Optional[Iterable[str]] = None) -> Sequence[PayrollRecord]:
        raise NotImplementedError
