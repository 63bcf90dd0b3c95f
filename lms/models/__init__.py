"""SQLAlchemy ORM models."""

from lms.models.base import Base
from lms.models.category import Category
from lms.models.course import Course
from lms.models.enrollment import Enrollment
from lms.models.user import User

__all__ = ["Base", "Category", "Course", "Enrollment", "User"]
