"""User profile and admin user-management endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from lms.api.routes.auth import get_current_user
from lms.core.database import get_db
from lms.schemas.auth import CurrentUser
from lms.schemas.common import MessageResponse
from lms.schemas.user import (
    AdminUserUpdate,
    UpdateProfileRequest,
    UserDetail,
    UserResponse,
    UsersListResponse,
    UserStatsResponse,
)
from lms.services import reporting, users

router = APIRouter()


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    user = users.get_profile(db, current_user)
    return UserResponse(
        message="User profile retrieved successfully",
        user=UserDetail.model_validate(user),
    )


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: UpdateProfileRequest,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Update the caller's name and/or email. 409 if the email belongs to someone else."""
    user = users.update_profile(db, current_user, name=body.name, email=body.email)
    return UserResponse(
        message="User profile updated successfully",
        user=UserDetail.model_validate(user),
    )


@router.get("", response_model=UsersListResponse)
def list_users(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    role: Annotated[str | None, Query(description="Only users with this role")] = None,
) -> UsersListResponse:
    """List all users (admin only)."""
    found = users.list_users(db, current_user, role=role)
    return UsersListResponse(
        message="Users retrieved successfully",
        count=len(found),
        users=[UserDetail.model_validate(u) for u in found],
    )


@router.get("/role/{role}", response_model=UsersListResponse)
def list_users_by_role(
    role: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List users with one role (admin only). 422 for an unknown role."""
    found = users.list_users(db, current_user, role=role)
    return UsersListResponse(
        message=f"Users with role '{role}' retrieved successfully",
        count=len(found),
        users=[UserDetail.model_validate(u) for u in found],
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    user = users.get_user(db, current_user, user_id)
    return UserResponse(
        message="User retrieved successfully",
        user=UserDetail.model_validate(user),
    )


@router.put("/{user_id}", response_model=UserResponse)
def admin_update_user(
    user_id: int,
    body: AdminUserUpdate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Change a user's role or active flag (admin only)."""
    user = users.admin_update_user(
        db, current_user, user_id, role=body.role, is_active=body.is_active
    )
    return UserResponse(
        message="User updated successfully",
        user=UserDetail.model_validate(user),
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    users.delete_user(db, current_user, user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/{user_id}/stats", response_model=UserStatsResponse)
def get_user_stats(
    user_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserStatsResponse:
    """Enrollment statistics for a student, teaching statistics for an instructor."""
    return reporting.user_stats(db, current_user, user_id)
