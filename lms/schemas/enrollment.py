"""Request/response schemas for the enrollment ledger."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from lms.schemas.catalog import CategoryOut, InstructorSummary


class ProgressUpdate(BaseModel):
    """Body for PUT /enrollments/courses/{course_id}/progress."""

    progress: float | None = None


class StudentSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    avatar_url: str | None = None


class CourseSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    price: float
    duration: str | None = None
    level: str
    category: CategoryOut | None = None
    instructor: InstructorSummary | None = None


class EnrollmentOut(BaseModel):
    """Ledger row with the student and course resolved for display."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: int
    course_id: int
    status: str
    progress: float
    enrollment_date: datetime
    completed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    student: StudentSummary | None = None
    course: CourseSummary | None = None


class EnrollmentResponse(BaseModel):
    message: str
    enrollment: EnrollmentOut


class EnrollmentStatusResponse(BaseModel):
    """enrolled means a ledger row exists, whatever its status."""

    enrolled: bool
    status: str | None = None
    progress: float = 0.0
    enrollment_date: datetime | None = None
    completed_at: datetime | None = None
