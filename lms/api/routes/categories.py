"""Category CRUD. Reads are public; writes need a signed-in caller."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from lms.api.routes.auth import get_current_user
from lms.core.database import get_db
from lms.schemas.auth import CurrentUser
from lms.schemas.catalog import CategoryCreate, CategoryOut, CategoryUpdate
from lms.schemas.common import MessageResponse
from lms.services import catalog

router = APIRouter()


@router.get("", response_model=list[CategoryOut])
def list_categories(db: Annotated[Session, Depends(get_db)]) -> list[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in catalog.list_categories(db)]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(
    category_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> CategoryOut:
    return CategoryOut.model_validate(catalog.get_category(db, category_id))


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CategoryOut:
    return CategoryOut.model_validate(catalog.create_category(db, body.name))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CategoryOut:
    return CategoryOut.model_validate(catalog.update_category(db, category_id, body.name))


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Delete a category. 409 while courses still reference it."""
    catalog.delete_category(db, category_id)
    return MessageResponse(message="Category deleted successfully")
