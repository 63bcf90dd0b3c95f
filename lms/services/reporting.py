"""
Read-only rollups across users, courses and enrollments.

Everything is computed per request from the live tables. Ledger rows count in
any status, so cancelled and completed enrollments are included.
"""

from collections import defaultdict
from typing import TYPE_CHECKING

from sqlalchemy import case, func
from sqlalchemy.orm import Session, joinedload, selectinload

from lms.models import Course, Enrollment, User
from lms.schemas.admin import (
    CourseRollup,
    DashboardStats,
    EnrolledCourseItem,
    InstructorRollup,
    StudentRollup,
    TaughtCourseItem,
)
from lms.schemas.catalog import CategoryOut, InstructorSummary
from lms.schemas.user import InstructorStats, StudentStats, UserStatsResponse
from lms.services.access import Action, authorize
from lms.services.users import get_user_or_404

if TYPE_CHECKING:
    from lms.schemas.auth import CurrentUser


def dashboard_stats(db: Session) -> DashboardStats:
    """Headline counts for the admin dashboard."""
    return DashboardStats(
        total_users=db.query(func.count(User.id)).scalar() or 0,
        total_students=db.query(func.count(User.id)).filter(User.role == "student").scalar() or 0,
        total_instructors=db.query(func.count(User.id)).filter(User.role == "instructor").scalar() or 0,
        total_courses=db.query(func.count(Course.id)).scalar() or 0,
        total_enrollments=db.query(func.count(Enrollment.id)).scalar() or 0,
    )


def _enrollment_counts_by_course(db: Session) -> dict[int, int]:
    rows = (
        db.query(Enrollment.course_id, func.count(Enrollment.id))
        .group_by(Enrollment.course_id)
        .all()
    )
    return {course_id: count for course_id, count in rows}


def students_with_enrollments(db: Session) -> list[StudentRollup]:
    """Every student, newest account first, with the courses they have rows for."""
    students = (
        db.query(User)
        .options(selectinload(User.enrollments).joinedload(Enrollment.course))
        .filter(User.role == "student")
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    result: list[StudentRollup] = []
    for s in students:
        rows = sorted(s.enrollments, key=lambda e: e.enrollment_date, reverse=True)
        result.append(
            StudentRollup(
                id=s.id,
                name=s.name,
                email=s.email,
                role=s.role,
                is_active=s.is_active,
                created_at=s.created_at,
                enrolled_courses=[
                    EnrolledCourseItem(
                        id=e.course.id,
                        title=e.course.title,
                        category_id=e.course.category_id,
                        created_at=e.course.created_at,
                    )
                    for e in rows
                    if e.course is not None
                ],
            )
        )
    return result


def instructors_with_stats(db: Session) -> list[InstructorRollup]:
    """Every instructor with taught courses and per-course enrollment counts."""
    instructors = (
        db.query(User)
        .options(selectinload(User.taught_courses))
        .filter(User.role == "instructor")
        .order_by(User.created_at.desc(), User.id.desc())
        .all()
    )
    counts = _enrollment_counts_by_course(db)
    result: list[InstructorRollup] = []
    for i in instructors:
        courses = [
            TaughtCourseItem(
                id=c.id,
                title=c.title,
                category_id=c.category_id,
                created_at=c.created_at,
                enrolled_students_count=counts.get(c.id, 0),
            )
            for c in sorted(i.taught_courses, key=lambda c: c.id)
        ]
        result.append(
            InstructorRollup(
                id=i.id,
                name=i.name,
                email=i.email,
                role=i.role,
                is_active=i.is_active,
                created_at=i.created_at,
                created_courses=courses,
                total_students=sum(c.enrolled_students_count for c in courses),
            )
        )
    return result


def courses_rollup(db: Session) -> list[CourseRollup]:
    """Every course, newest first, with instructor, category and enrolled student ids."""
    courses = (
        db.query(Course)
        .options(joinedload(Course.instructor), joinedload(Course.category))
        .order_by(Course.created_at.desc(), Course.id.desc())
        .all()
    )
    students_by_course: defaultdict[int, list[int]] = defaultdict(list)
    for course_id, student_id in (
        db.query(Enrollment.course_id, Enrollment.student_id)
        .order_by(Enrollment.id)
        .all()
    ):
        students_by_course[course_id].append(student_id)

    return [
        CourseRollup(
            id=c.id,
            title=c.title,
            description=c.description,
            price=c.price,
            duration=c.duration,
            level=c.level,
            instructor=InstructorSummary.model_validate(c.instructor) if c.instructor else None,
            category=CategoryOut.model_validate(c.category) if c.category else None,
            created_at=c.created_at,
            updated_at=c.updated_at,
            enrolled_students=students_by_course.get(c.id, []),
        )
        for c in courses
    ]


def student_stats(db: Session, student_id: int) -> StudentStats:
    total, active, completed, avg_progress = (
        db.query(
            func.count(Enrollment.id),
            func.sum(case((Enrollment.status == "active", 1), else_=0)),
            func.sum(case((Enrollment.status == "completed", 1), else_=0)),
            func.avg(Enrollment.progress),
        )
        .filter(Enrollment.student_id == student_id)
        .one()
    )
    return StudentStats(
        total_enrollments=total or 0,
        active_enrollments=active or 0,
        completed_enrollments=completed or 0,
        avg_progress=float(avg_progress or 0.0),
    )


def instructor_stats(db: Session, instructor_id: int) -> InstructorStats:
    total_courses = (
        db.query(func.count(Course.id)).filter(Course.instructor_id == instructor_id).scalar()
        or 0
    )
    distinct_students, total_enrollments, avg_progress = (
        db.query(
            func.count(func.distinct(Enrollment.student_id)),
            func.count(Enrollment.id),
            func.avg(Enrollment.progress),
        )
        .join(Course, Course.id == Enrollment.course_id)
        .filter(Course.instructor_id == instructor_id)
        .one()
    )
    return InstructorStats(
        total_courses=total_courses,
        total_students=distinct_students or 0,
        total_enrollments=total_enrollments or 0,
        avg_progress=float(avg_progress or 0.0),
    )


def user_stats(db: Session, caller: "CurrentUser", user_id: int) -> UserStatsResponse:
    """Student or instructor statistics for one user (self or admin); admins get neither."""
    authorize(caller, Action.VIEW_USER_STATS, owner_id=user_id)
    user = get_user_or_404(db, user_id)
    response = UserStatsResponse(user_id=user.id, role=user.role)
    if user.role == "student":
        response.student_stats = student_stats(db, user.id)
    elif user.role == "instructor":
        response.instructor_stats = instructor_stats(db, user.id)
    return response
