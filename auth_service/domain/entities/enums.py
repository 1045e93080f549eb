"""
Auth Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User account status (transitions are driven outside this service)"""

    pending = "pending"
    active = "active"
    suspended = "suspended"
    inactive = "inactive"


class UserType(str, Enum):
    """Kind of account, carried in access token claims"""

    admin = "admin"
    staff = "staff"
    teacher = "teacher"
    student = "student"
    parent = "parent"
