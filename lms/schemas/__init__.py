"""Pydantic request/response schemas."""

from lms.schemas.admin import (
    CourseRollup,
    DashboardStats,
    InstructorRollup,
    StudentRollup,
)
from lms.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserProfile,
)
from lms.schemas.catalog import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    CourseCreate,
    CourseOut,
    CourseUpdate,
)
from lms.schemas.common import MessageResponse
from lms.schemas.enrollment import (
    EnrollmentOut,
    EnrollmentResponse,
    EnrollmentStatusResponse,
    ProgressUpdate,
)
from lms.schemas.health import HealthResponse
from lms.schemas.user import (
    AdminUserUpdate,
    UpdateProfileRequest,
    UserDetail,
    UserResponse,
    UsersListResponse,
    UserStatsResponse,
)

__all__ = [
    "AdminUserUpdate",
    "AuthResponse",
    "CategoryCreate",
    "CategoryOut",
    "CategoryUpdate",
    "CourseCreate",
    "CourseOut",
    "CourseRollup",
    "CourseUpdate",
    "CurrentUser",
    "DashboardStats",
    "EnrollmentOut",
    "EnrollmentResponse",
    "EnrollmentStatusResponse",
    "HealthResponse",
    "InstructorRollup",
    "LoginRequest",
    "MessageResponse",
    "ProgressUpdate",
    "RegisterRequest",
    "StudentRollup",
    "UpdateProfileRequest",
    "UserDetail",
    "UserProfile",
    "UserResponse",
    "UsersListResponse",
    "UserStatsResponse",
]
