from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for access control."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    SICK = "Sick Leave"
    CASUAL = "Casual Leave"
    EARNED = "Earned Leave"
    MATERNITY = "Maternity Leave"
    PATERNITY = "Paternity Leave"
    EMERGENCY = "Emergency Leave"


class PayrollPolicy(str, Enum):
    """How working days are counted for per-day salary."""

    SIX_DAY_WEEK = "six_day_week"
    FLAT_30 = "flat_30"
