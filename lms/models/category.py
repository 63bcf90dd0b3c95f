"""ORM model for course categories."""

from sqlalchemy import Column, Integer, String

from lms.models.base import Base


class Category(Base):
    """A named bucket for courses. Names are unique."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
