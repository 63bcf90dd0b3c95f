"""Enrollment endpoints: enroll, unenroll, progress, status and listings."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lms.api.routes.auth import get_current_user
from lms.core.database import get_db
from lms.schemas.auth import CurrentUser
from lms.schemas.enrollment import (
    EnrollmentOut,
    EnrollmentResponse,
    EnrollmentStatusResponse,
    ProgressUpdate,
)
from lms.services import enrollment as ledger

router = APIRouter()


@router.post(
    "/courses/{course_id}/enroll",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
)
def enroll(
    course_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> EnrollmentResponse:
    """Enroll the caller (students only). 409 if already enrolled or completed."""
    row = ledger.enroll(db, current_user, course_id)
    return EnrollmentResponse(
        message="Successfully enrolled in course",
        enrollment=EnrollmentOut.model_validate(row),
    )


@router.delete("/courses/{course_id}/enroll", response_model=EnrollmentResponse)
def unenroll(
    course_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> EnrollmentResponse:
    """Cancel the caller's active enrollment. 404 if there is none."""
    row = ledger.unenroll(db, current_user, course_id)
    return EnrollmentResponse(
        message="Successfully unenrolled from course",
        enrollment=EnrollmentOut.model_validate(row),
    )


@router.get("/courses/{course_id}/status", response_model=EnrollmentStatusResponse)
def check_status(
    course_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> EnrollmentStatusResponse:
    return EnrollmentStatusResponse(**ledger.check_status(db, current_user, course_id))


@router.put("/courses/{course_id}/progress", response_model=EnrollmentResponse)
def update_progress(
    course_id: int,
    body: ProgressUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> EnrollmentResponse:
    """Set progress (0-100) on the caller's active enrollment; 100 completes it."""
    row = ledger.update_progress(db, current_user, course_id, body.progress)
    message = (
        "Course completed successfully!"
        if row.status == ledger.COMPLETED
        else "Progress updated successfully"
    )
    return EnrollmentResponse(message=message, enrollment=EnrollmentOut.model_validate(row))


@router.get("/user", response_model=list[EnrollmentOut])
def list_my_enrollments(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[EnrollmentOut]:
    rows = ledger.list_by_student(db, current_user)
    return [EnrollmentOut.model_validate(r) for r in rows]


@router.get("/user/{user_id}", response_model=list[EnrollmentOut])
def list_user_enrollments(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[EnrollmentOut]:
    """A user's enrollments (self or admin)."""
    rows = ledger.list_by_student(db, current_user, user_id)
    return [EnrollmentOut.model_validate(r) for r in rows]


@router.get("/courses/{course_id}/students", response_model=list[EnrollmentOut])
def list_course_enrollments(
    course_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[EnrollmentOut]:
    """Enrollments for a course (its instructor or an admin)."""
    rows = ledger.list_by_course(db, current_user, course_id)
    return [EnrollmentOut.model_validate(r) for r in rows]
