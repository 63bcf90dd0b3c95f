"""Admin dashboard rollups. Every route requires role 'admin'."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from lms.api.routes.auth import require_admin
from lms.core.database import get_db
from lms.schemas.admin import (
    CourseRollup,
    DashboardStats,
    InstructorRollup,
    StudentRollup,
)
from lms.schemas.auth import CurrentUser
from lms.services import reporting

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def get_stats(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> DashboardStats:
    return reporting.dashboard_stats(db)


@router.get("/students", response_model=list[StudentRollup])
def get_students(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[StudentRollup]:
    return reporting.students_with_enrollments(db)


@router.get("/instructors", response_model=list[InstructorRollup])
def get_instructors(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[InstructorRollup]:
    return reporting.instructors_with_stats(db)


@router.get("/courses", response_model=list[CourseRollup])
def get_courses(
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[CourseRollup]:
    return reporting.courses_rollup(db)
