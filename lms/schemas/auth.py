"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Body for the register endpoints. Role is fixed by the endpoint."""

    name: str = Field(..., max_length=100, description="Display name")
    email: str = Field(..., max_length=255, description="Email address (case-insensitive)")
    password: str = Field(..., max_length=128, description="Password")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., max_length=255, description="Email address")
    password: str = Field(..., max_length=128, description="Password")


class UserProfile(BaseModel):
    """Public profile returned after register/login (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class AuthResponse(BaseModel):
    """Response for register, login and check."""

    message: str
    user: UserProfile


class CurrentUser(BaseModel):
    """Authenticated caller (id, name, email, role) passed into services."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
