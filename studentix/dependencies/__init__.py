"""FastAPI dependencies."""
from studentix.dependencies.auth import (
    AdminUser,
    CurrentUser,
    StaffUser,
    forbid,
    get_current_user,
    require_admin,
    require_admin_or_teacher,
)

__all__ = [
    "AdminUser",
    "CurrentUser",
    "StaffUser",
    "forbid",
    "get_current_user",
    "require_admin",
    "require_admin_or_teacher",
]
