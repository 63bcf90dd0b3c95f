"""Response schemas for the admin dashboard rollups."""

from datetime import datetime

from pydantic import BaseModel, Field

from lms.schemas.catalog import CategoryOut, InstructorSummary


class DashboardStats(BaseModel):
    total_users: int
    total_students: int
    total_instructors: int
    total_courses: int
    total_enrollments: int


class EnrolledCourseItem(BaseModel):
    id: int
    title: str
    category_id: int
    created_at: datetime | None = None


class StudentRollup(BaseModel):
    """A student with every course they have a ledger row for."""

    id: int
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime | None = None
    enrolled_courses: list[EnrolledCourseItem] = Field(default_factory=list)


class TaughtCourseItem(BaseModel):
    id: int
    title: str
    category_id: int
    created_at: datetime | None = None
    enrolled_students_count: int = 0


class InstructorRollup(BaseModel):
    """An instructor with taught courses; total_students sums the per-course counts."""

    id: int
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime | None = None
    created_courses: list[TaughtCourseItem] = Field(default_factory=list)
    total_students: int = 0


class CourseRollup(BaseModel):
    id: int
    title: str
    description: str | None = None
    price: float
    duration: str | None = None
    level: str
    instructor: InstructorSummary | None = None
    category: CategoryOut | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    enrolled_students: list[int] = Field(default_factory=list)
