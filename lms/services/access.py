"""
Authorization rules as a pure function of (caller, action, owner).

Callers reach this module already authenticated; a denial here is always a
ForbiddenError (403), never a 401.
"""

import logging
from enum import Enum
from typing import Protocol

from lms.core.errors import ForbiddenError

logger = logging.getLogger(__name__)


class Caller(Protocol):
    id: int
    role: str


class Action(str, Enum):
    VIEW_REPORTS = "view_reports"
    LIST_USERS = "list_users"
    UPDATE_USER = "update_user"
    VIEW_USER = "view_user"
    DELETE_USER = "delete_user"
    VIEW_USER_STATS = "view_user_stats"
    VIEW_USER_ENROLLMENTS = "view_user_enrollments"
    ENROLL = "enroll"
    VIEW_COURSE_ENROLLMENTS = "view_course_enrollments"


ADMIN_ONLY = frozenset({Action.VIEW_REPORTS, Action.LIST_USERS, Action.UPDATE_USER})

# owner_id is the user the action targets
SELF_OR_ADMIN = frozenset(
    {
        Action.VIEW_USER,
        Action.DELETE_USER,
        Action.VIEW_USER_STATS,
        Action.VIEW_USER_ENROLLMENTS,
    }
)

# owner_id is the instructor of the course the action targets
OWNER_OR_ADMIN = frozenset({Action.VIEW_COURSE_ENROLLMENTS})

STUDENT_ONLY = frozenset({Action.ENROLL})

_DENIAL_MESSAGES = {
    Action.VIEW_REPORTS: "Admin access required",
    Action.LIST_USERS: "Access denied. Admin role required.",
    Action.UPDATE_USER: "Access denied. Admin role required.",
    Action.VIEW_USER: "Access denied. You can only view your own profile.",
    Action.DELETE_USER: "Access denied. You can only delete your own account.",
    Action.ENROLL: "Only students can enroll in courses",
}


def is_allowed(caller: Caller, action: Action, owner_id: int | None = None) -> bool:
    """Return True if caller may perform action on a resource owned by owner_id."""
    if action in STUDENT_ONLY:
        return caller.role == "student"
    if caller.role == "admin":
        return True
    if action in ADMIN_ONLY:
        return False
    if action in SELF_OR_ADMIN or action in OWNER_OR_ADMIN:
        return owner_id is not None and caller.id == owner_id
    return False


def authorize(caller: Caller, action: Action, owner_id: int | None = None) -> None:
    """Raise ForbiddenError unless caller may perform action."""
    if is_allowed(caller, action, owner_id):
        return
    logger.warning(
        "Access denied: user_id=%s role=%s action=%s owner_id=%s",
        caller.id,
        caller.role,
        action.value,
        owner_id,
    )
    raise ForbiddenError(_DENIAL_MESSAGES.get(action, "Access denied"))
