"""Registration, cookie login/logout, and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lms.core.config import settings
from lms.core.database import get_db
from lms.core.errors import ForbiddenError, InvalidTokenError, UnauthenticatedError
from lms.core.security import create_access_token, read_access_token, token_max_age_seconds
from lms.models.user import User
from lms.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    RegisterRequest,
    UserProfile,
)
from lms.schemas.common import MessageResponse
from lms.services.access import Action, authorize
from lms.services.users import authenticate_user, register_user

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.JWT_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
        samesite="lax",
        max_age=token_max_age_seconds(),
        path="/",
    )


def _clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.JWT_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.JWT_COOKIE_SECURE,
        samesite="lax",
    )


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: resolve the caller from the session cookie (or a Bearer header).

    Raises UnauthenticatedError when no token is sent and InvalidTokenError when
    it fails verification or its user no longer exists.
    """
    token = request.cookies.get(settings.JWT_COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials
    if not token:
        raise UnauthenticatedError("Not authenticated")
    claims = read_access_token(token)
    user = db.query(User).filter(User.id == claims.user_id).first()
    if user is None:
        raise InvalidTokenError("User not found")
    if not user.is_active:
        raise ForbiddenError("Account is disabled")
    return CurrentUser(id=user.id, name=user.name, email=user.email, role=user.role)


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    authorize(current_user, Action.VIEW_REPORTS)
    return current_user


def _register(db: Session, body: RegisterRequest, role: str, message: str) -> AuthResponse:
    user = register_user(db, body.name, body.email, body.password, role=role)
    return AuthResponse(message=message, user=UserProfile.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create a student account."""
    return _register(db, body, "student", "User registered successfully")


@router.post(
    "/register/instructor",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_instructor(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an instructor account."""
    return _register(db, body, "instructor", "Instructor registered successfully")


@router.post(
    "/register/admin",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def register_admin(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Create an admin account. Disabled when ADMIN_REGISTRATION_ENABLED is false."""
    if not settings.ADMIN_REGISTRATION_ENABLED:
        raise ForbiddenError("Admin registration is disabled")
    return _register(db, body, "admin", "Admin registered successfully")


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password. The JWT is set as an HTTP-only
    cookie and is not included in the body.
    """
    user = authenticate_user(db, body.email, body.password)
    token = create_access_token(user.id, user.role)
    _set_auth_cookie(response, token)
    return AuthResponse(
        message="User logged in successfully",
        user=UserProfile.model_validate(user),
    )


@router.get("/check", response_model=AuthResponse)
def check(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> AuthResponse:
    """Return the identity behind the session cookie."""
    return AuthResponse(
        message="Authenticated",
        user=UserProfile(
            id=current_user.id,
            name=current_user.name,
            email=current_user.email,
            role=current_user.role,
        ),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Clear the session cookie. The token itself stays valid until it expires."""
    _clear_auth_cookie(response)
    return MessageResponse(message="Logged out successfully")
