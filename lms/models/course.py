"""ORM model for courses in the catalog."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from lms.models.base import Base, utcnow

LEVELS = ("beginner", "intermediate", "advanced")


class Course(Base):
    """
    A course taught by one instructor and filed under one category.

    instructor_id may point at any user; the instructor role is not enforced.
    """

    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    duration = Column(String(255), nullable=True)
    level = Column(String(32), nullable=False, default="beginner")
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
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

    category = relationship("Category")
    instructor = relationship("User", back_populates="taught_courses")
    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
    )
