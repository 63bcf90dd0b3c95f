"""ORM model for the enrollment ledger."""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from lms.models.base import Base, utcnow

STATUSES = ("active", "completed", "cancelled")


class Enrollment(Base):
    """
    One student's relationship to one course over time.

    At most one row exists per (student_id, course_id); re-enrolling after a
    cancellation reuses the row. completed_at is set only when status becomes
    'completed'.
    """

    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollments_student_course"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    enrollment_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    status = Column(String(32), nullable=False, default="active", index=True)
    progress = Column(Float, nullable=False, default=0.0)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
    )

    student = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")
