"""Request/response schemas for user management endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RoleName = Literal["student", "instructor", "admin"]


class UserDetail(BaseModel):
    """User as returned by profile and admin endpoints (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    is_active: bool
    avatar_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UserResponse(BaseModel):
    message: str
    user: UserDetail


class UsersListResponse(BaseModel):
    """Response for GET /users and GET /users/role/{role} (admin only)."""

    message: str
    count: int
    users: list[UserDetail]


class UpdateProfileRequest(BaseModel):
    """Self-service profile update; omitted fields are left unchanged."""

    name: str | None = Field(default=None, max_length=100)
    email: str | None = Field(default=None, max_length=255)


class AdminUserUpdate(BaseModel):
    """Admin-only changes to another account."""

    role: RoleName | None = None
    is_active: bool | None = None


class StudentStats(BaseModel):
    total_enrollments: int = 0
    active_enrollments: int = 0
    completed_enrollments: int = 0
    avg_progress: float = 0.0


class InstructorStats(BaseModel):
    total_courses: int = 0
    total_students: int = Field(default=0, description="Distinct students across all courses")
    total_enrollments: int = 0
    avg_progress: float = 0.0


class UserStatsResponse(BaseModel):
    """Per-user statistics; only the block matching the user's role is set."""

    user_id: int
    role: str
    student_stats: StudentStats | None = None
    instructor_stats: InstructorStats | None = None
