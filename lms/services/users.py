"""Identity and credential store: registration, login and account management."""

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
)
from lms.core.security import hash_password, verify_password
from lms.models import Course, Enrollment, User
from lms.services.access import Action, authorize
from lms.services.validation import (
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)

if TYPE_CHECKING:
    from lms.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)


def _email_taken(db: Session, email: str, exclude_user_id: int | None = None) -> bool:
    query = db.query(User.id).filter(User.email == email)
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def register_user(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    role: str = "student",
) -> User:
    """
    Create an account and return it. The role is chosen by the calling
    endpoint, never by the client.

    Raises ValidationError on a missing or malformed field and ConflictError if
    the email is already registered (case-insensitive).
    """
    clean_name = validate_name(name)
    clean_email = validate_email(email)
    clean_password = validate_password(password)
    clean_role = validate_role(role)

    if _email_taken(db, clean_email):
        raise ConflictError("User already exists")

    user = User(
        name=clean_name,
        email=clean_email,
        password_hash=hash_password(clean_password),
        role=clean_role,
        is_active=True,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same email.
        db.rollback()
        raise ConflictError("User already exists") from e
    db.refresh(user)
    logger.info("Registered user: user_id=%s role=%s", user.id, user.role)
    return user


def authenticate_user(db: Session, email: str | None, password: str | None) -> User:
    """Return the user for valid credentials; the same error covers unknown email and bad password."""
    clean_email = (email or "").strip().lower()
    if not clean_email or not password:
        raise InvalidCredentialsError("Invalid credentials")
    user = db.query(User).filter(User.email == clean_email).first()
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError("Invalid credentials")
    if not user.is_active:
        raise ForbiddenError("Account is disabled")
    return user


def get_profile(db: Session, caller: "CurrentUser") -> User:
    return get_user_or_404(db, caller.id)


def update_profile(
    db: Session,
    caller: "CurrentUser",
    name: str | None = None,
    email: str | None = None,
) -> User:
    """Update the caller's own name and/or email; omitted fields are left as they are."""
    user = get_user_or_404(db, caller.id)
    if name is not None:
        user.name = validate_name(name)
    if email is not None:
        clean_email = validate_email(email)
        if _email_taken(db, clean_email, exclude_user_id=user.id):
            raise ConflictError("Email is already in use")
        user.email = clean_email
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Email is already in use") from e
    db.refresh(user)
    return user


def list_users(db: Session, caller: "CurrentUser", role: str | None = None) -> list[User]:
    """List all users, optionally only those with the given role (admin only)."""
    authorize(caller, Action.LIST_USERS)
    query = db.query(User)
    if role is not None:
        query = query.filter(User.role == validate_role(role))
    return query.order_by(User.id).all()


def get_user(db: Session, caller: "CurrentUser", user_id: int) -> User:
    authorize(caller, Action.VIEW_USER, owner_id=user_id)
    return get_user_or_404(db, user_id)


def admin_update_user(
    db: Session,
    caller: "CurrentUser",
    user_id: int,
    role: str | None = None,
    is_active: bool | None = None,
) -> User:
    """Change another account's role or active flag (admin only)."""
    authorize(caller, Action.UPDATE_USER)
    user = get_user_or_404(db, user_id)
    if role is not None:
        user.role = validate_role(role)
    if is_active is not None:
        user.is_active = is_active
    db.commit()
    db.refresh(user)
    logger.info(
        "Admin updated user: admin_id=%s user_id=%s role=%s is_active=%s",
        caller.id,
        user.id,
        user.role,
        user.is_active,
    )
    return user


def delete_user(db: Session, caller: "CurrentUser", user_id: int) -> None:
    """
    Hard-delete an account (self or admin) together with its own ledger rows.

    A user who still teaches courses cannot be deleted; reassign or delete the
    courses first.
    """
    authorize(caller, Action.DELETE_USER, owner_id=user_id)
    user = get_user_or_404(db, user_id)
    taught = db.query(Course.id).filter(Course.instructor_id == user.id).count()
    if taught:
        raise ConflictError(
            f"User still teaches {taught} course(s); reassign or delete them first"
        )
    removed = (
        db.query(Enrollment)
        .filter(Enrollment.student_id == user.id)
        .delete(synchronize_session=False)
    )
    db.delete(user)
    db.commit()
    logger.info(
        "Deleted user: user_id=%s by=%s enrollments_removed=%s",
        user_id,
        caller.id,
        removed,
    )
