"""Catalog store: category and course CRUD."""

import logging
from typing import Any

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from lms.core.errors import ConflictError, NotFoundError, ValidationError
from lms.models import Category, Course, User
from lms.services.validation import (
    validate_category_name,
    validate_course_title,
    validate_level,
    validate_price,
)

logger = logging.getLogger(__name__)


# Categories


def list_categories(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if category is None:
        raise NotFoundError("Category not found")
    return category


def _commit_category(db: Session, category: Category) -> Category:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Category already exists") from e
    db.refresh(category)
    return category


def create_category(db: Session, name: str | None) -> Category:
    clean_name = validate_category_name(name)
    if db.query(Category.id).filter(Category.name == clean_name).first() is not None:
        raise ConflictError("Category already exists")
    category = Category(name=clean_name)
    db.add(category)
    category = _commit_category(db, category)
    logger.info("Created category: category_id=%s", category.id)
    return category


def update_category(db: Session, category_id: int, name: str | None) -> Category:
    category = get_category(db, category_id)
    clean_name = validate_category_name(name)
    clash = (
        db.query(Category.id)
        .filter(Category.name == clean_name, Category.id != category_id)
        .first()
    )
    if clash is not None:
        raise ConflictError("Category already exists")
    category.name = clean_name
    return _commit_category(db, category)


def delete_category(db: Session, category_id: int) -> None:
    """Delete a category; refused while any course is filed under it."""
    category = get_category(db, category_id)
    in_use = db.query(Course.id).filter(Course.category_id == category_id).count()
    if in_use:
        raise ConflictError(
            f"Category is used by {in_use} course(s) and cannot be deleted"
        )
    db.delete(category)
    db.commit()
    logger.info("Deleted category: category_id=%s", category_id)


# Courses


def _course_query(db: Session):
    return db.query(Course).options(
        joinedload(Course.category),
        joinedload(Course.instructor),
    )


def _escape_like(text: str) -> str:
    """Make % and _ match literally in a LIKE pattern (escape char is a backslash)."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_courses(
    db: Session,
    search: str | None = None,
    category_id: int | None = None,
    level: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
) -> list[Course]:
    """
    Return courses newest first, with category and instructor loaded.

    search matches title or description case-insensitively; the other filters
    are exact (level, category) or inclusive bounds (price).
    """
    query = _course_query(db)
    if search and search.strip():
        pattern = f"%{_escape_like(search.strip())}%"
        query = query.filter(
            or_(
                Course.title.ilike(pattern, escape="\\"),
                Course.description.ilike(pattern, escape="\\"),
            )
        )
    if category_id is not None:
        query = query.filter(Course.category_id == category_id)
    if level:
        query = query.filter(Course.level == validate_level(level))
    if min_price is not None:
        query = query.filter(Course.price >= min_price)
    if max_price is not None:
        query = query.filter(Course.price <= max_price)
    return query.order_by(Course.created_at.desc(), Course.id.desc()).all()


def get_course(db: Session, course_id: int) -> Course:
    course = _course_query(db).filter(Course.id == course_id).first()
    if course is None:
        raise NotFoundError("Course not found")
    return course


def _check_references(db: Session, category_id: int | None, instructor_id: int | None) -> None:
    if category_id is not None:
        if db.query(Category.id).filter(Category.id == category_id).first() is None:
            raise ValidationError("Category does not exist")
    if instructor_id is not None:
        if db.query(User.id).filter(User.id == instructor_id).first() is None:
            raise ValidationError("Instructor does not exist")


def create_course(
    db: Session,
    title: str | None,
    category_id: int | None,
    instructor_id: int | None,
    description: str | None = None,
    price: float | None = 0.0,
    duration: str | None = None,
    level: str | None = "beginner",
) -> Course:
    """Create a course; category and instructor must be supplied and exist."""
    clean_title = validate_course_title(title)
    clean_price = validate_price(price)
    clean_level = validate_level(level)
    if category_id is None:
        raise ValidationError("Category is required")
    if instructor_id is None:
        raise ValidationError("Instructor is required")
    _check_references(db, category_id, instructor_id)

    course = Course(
        title=clean_title,
        description=description.strip() if description else description,
        price=clean_price,
        duration=duration.strip() if duration else duration,
        level=clean_level,
        category_id=category_id,
        instructor_id=instructor_id,
    )
    db.add(course)
    db.commit()
    logger.info(
        "Created course: course_id=%s instructor_id=%s category_id=%s",
        course.id,
        instructor_id,
        category_id,
    )
    return get_course(db, course.id)


def update_course(db: Session, course_id: int, changes: dict[str, Any]) -> Course:
    """Apply a partial update; keys absent from changes are left unchanged."""
    course = get_course(db, course_id)
    if "title" in changes:
        course.title = validate_course_title(changes["title"])
    # price and level always have a value; null means unchanged.
    if changes.get("price") is not None:
        course.price = validate_price(changes["price"])
    if changes.get("level") is not None:
        course.level = validate_level(changes["level"])
    if "description" in changes:
        course.description = changes["description"]
    if "duration" in changes:
        course.duration = changes["duration"]
    category_id = changes.get("category_id")
    instructor_id = changes.get("instructor_id")
    _check_references(db, category_id, instructor_id)
    if category_id is not None:
        course.category_id = category_id
    if instructor_id is not None:
        course.instructor_id = instructor_id
    db.commit()
    return get_course(db, course_id)


def delete_course(db: Session, course_id: int) -> None:
    """Delete a course and every ledger row that references it."""
    course = get_course(db, course_id)
    removed = len(course.enrollments)
    db.delete(course)
    db.commit()
    logger.info(
        "Deleted course: course_id=%s enrollments_removed=%s", course_id, removed
    )
