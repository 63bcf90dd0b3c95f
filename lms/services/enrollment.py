"""
Enrollment ledger: the active / completed / cancelled state machine.

One row per (student, course) pair, ever. Transitions:

    (none)    -> active     enroll
    cancelled -> active     enroll (row reused: progress and dates reset)
    active    -> cancelled  unenroll
    active    -> active     update_progress with progress < 100
    active    -> completed  update_progress with progress == 100

completed has no outgoing transitions.
"""

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from lms.core.errors import ConflictError, NotFoundError
from lms.models import Course, Enrollment
from lms.models.base import utcnow
from lms.services.access import Action, authorize
from lms.services.validation import PROGRESS_MAX, validate_progress

if TYPE_CHECKING:
    from lms.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

ACTIVE = "active"
COMPLETED = "completed"
CANCELLED = "cancelled"


def _with_relations(query):
    return query.options(
        joinedload(Enrollment.student),
        joinedload(Enrollment.course).joinedload(Course.category),
        joinedload(Enrollment.course).joinedload(Course.instructor),
    )


def _get_course_or_404(db: Session, course_id: int) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if course is None:
        raise NotFoundError("Course not found")
    return course


def _find_row(db: Session, student_id: int, course_id: int) -> Enrollment | None:
    return (
        db.query(Enrollment)
        .filter(Enrollment.student_id == student_id, Enrollment.course_id == course_id)
        .first()
    )


def _find_active_row(db: Session, student_id: int, course_id: int) -> Enrollment:
    row = (
        db.query(Enrollment)
        .filter(
            Enrollment.student_id == student_id,
            Enrollment.course_id == course_id,
            Enrollment.status == ACTIVE,
        )
        .first()
    )
    if row is None:
        raise NotFoundError("Active enrollment not found")
    return row


def _reload(db: Session, enrollment_id: int) -> Enrollment:
    return _with_relations(db.query(Enrollment)).filter(Enrollment.id == enrollment_id).one()


def enroll(db: Session, caller: "CurrentUser", course_id: int) -> Enrollment:
    """
    Enroll the caller (a student) in a course.

    Rejected with ConflictError while the caller's row for this course is
    active or completed. A cancelled row is reactivated in place.
    """
    authorize(caller, Action.ENROLL)
    _get_course_or_404(db, course_id)

    row = _find_row(db, caller.id, course_id)
    if row is not None and row.status == COMPLETED:
        raise ConflictError("You have already completed this course")
    if row is not None and row.status == ACTIVE:
        raise ConflictError("You are already enrolled in this course")

    now = utcnow()
    if row is None:
        row = Enrollment(
            student_id=caller.id,
            course_id=course_id,
            status=ACTIVE,
            progress=0.0,
            enrollment_date=now,
        )
        db.add(row)
    else:
        row.status = ACTIVE
        row.progress = 0.0
        row.enrollment_date = now
        row.completed_at = None
    try:
        db.commit()
    except IntegrityError as e:
        # A concurrent enroll for the same pair inserted first.
        db.rollback()
        raise ConflictError("You are already enrolled in this course") from e
    logger.info("Enrolled: student_id=%s course_id=%s", caller.id, course_id)
    return _reload(db, row.id)


def unenroll(db: Session, caller: "CurrentUser", course_id: int) -> Enrollment:
    """Cancel the caller's active enrollment; NotFoundError if there is none."""
    row = _find_active_row(db, caller.id, course_id)
    row.status = CANCELLED
    db.commit()
    logger.info("Unenrolled: student_id=%s course_id=%s", caller.id, course_id)
    return _reload(db, row.id)


def update_progress(
    db: Session,
    caller: "CurrentUser",
    course_id: int,
    progress: float | None,
) -> Enrollment:
    """
    Record progress on the caller's active enrollment.

    Progress must lie in [0, 100]; exactly 100 completes the course and stamps
    completed_at. Completed and cancelled rows are not found.
    """
    value = validate_progress(progress)
    row = _find_active_row(db, caller.id, course_id)
    row.progress = value
    if value == PROGRESS_MAX:
        row.status = COMPLETED
        row.completed_at = utcnow()
    db.commit()
    if row.status == COMPLETED:
        logger.info("Completed course: student_id=%s course_id=%s", caller.id, course_id)
    return _reload(db, row.id)


def check_status(db: Session, caller: "CurrentUser", course_id: int) -> dict[str, Any]:
    """
    Report the caller's ledger row for a course.

    enrolled is True whenever a row exists, including cancelled rows.
    """
    row = _find_row(db, caller.id, course_id)
    if row is None:
        return {"enrolled": False, "status": None, "progress": 0}
    return {
        "enrolled": True,
        "status": row.status,
        "progress": row.progress,
        "enrollment_date": row.enrollment_date,
        "completed_at": row.completed_at,
    }


def list_by_student(
    db: Session, caller: "CurrentUser", user_id: int | None = None
) -> list[Enrollment]:
    """A student's ledger rows, newest enrollment first (self or admin)."""
    student_id = caller.id if user_id is None else user_id
    authorize(caller, Action.VIEW_USER_ENROLLMENTS, owner_id=student_id)
    return (
        _with_relations(db.query(Enrollment))
        .filter(Enrollment.student_id == student_id)
        .order_by(Enrollment.enrollment_date.desc(), Enrollment.id.desc())
        .all()
    )


def list_by_course(db: Session, caller: "CurrentUser", course_id: int) -> list[Enrollment]:
    """A course's ledger rows, newest enrollment first (course instructor or admin)."""
    course = _get_course_or_404(db, course_id)
    authorize(caller, Action.VIEW_COURSE_ENROLLMENTS, owner_id=course.instructor_id)
    return (
        _with_relations(db.query(Enrollment))
        .filter(Enrollment.course_id == course_id)
        .order_by(Enrollment.enrollment_date.desc(), Enrollment.id.desc())
        .all()
    )
