"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from lms.models.base import Base, utcnow

ROLES = ("student", "instructor", "admin")


class User(Base):
    """
    User account for cookie JWT authentication and role-based access control.

    role: 'student', 'instructor' or 'admin'. email is stored lower-cased.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="student", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    avatar_url = Column(String(2048), nullable=True)
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

    enrollments = relationship("Enrollment", back_populates="student")
    taught_courses = relationship("Course", back_populates="instructor")
