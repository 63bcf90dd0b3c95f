"""Course CRUD. Reads are public and resolve category and instructor; writes need a signed-in caller."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from lms.api.routes.auth import get_current_user
from lms.core.database import get_db
from lms.schemas.auth import CurrentUser
from lms.schemas.catalog import CourseCreate, CourseOut, CourseUpdate
from lms.schemas.common import MessageResponse
from lms.services import catalog

router = APIRouter()


@router.get("", response_model=list[CourseOut])
def list_courses(
    db: Annotated[Session, Depends(get_db)],
    search: Annotated[str | None, Query(max_length=200)] = None,
    category: Annotated[int | None, Query(description="Category id")] = None,
    level: str | None = None,
    min_price: Annotated[float | None, Query(ge=0)] = None,
    max_price: Annotated[float | None, Query(ge=0)] = None,
) -> list[CourseOut]:
    """
    List courses, newest first.

    Optional filters: search (title or description, case-insensitive),
    category id, level, and an inclusive min_price/max_price range.
    """
    courses = catalog.list_courses(
        db,
        search=search,
        category_id=category,
        level=level,
        min_price=min_price,
        max_price=max_price,
    )
    return [CourseOut.model_validate(c) for c in courses]


@router.get("/{course_id}", response_model=CourseOut)
def get_course(
    course_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> CourseOut:
    return CourseOut.model_validate(catalog.get_course(db, course_id))


@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(
    body: CourseCreate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CourseOut:
    course = catalog.create_course(
        db,
        title=body.title,
        category_id=body.category_id,
        instructor_id=body.instructor_id,
        description=body.description,
        price=body.price,
        duration=body.duration,
        level=body.level,
    )
    return CourseOut.model_validate(course)


@router.put("/{course_id}", response_model=CourseOut)
def update_course(
    course_id: int,
    body: CourseUpdate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CourseOut:
    """Partial update: only fields present in the body change."""
    course = catalog.update_course(db, course_id, body.model_dump(exclude_unset=True))
    return CourseOut.model_validate(course)


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(
    course_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Delete a course together with its enrollments."""
    catalog.delete_course(db, course_id)
    return MessageResponse(message="Course deleted successfully")
