"""Request/response schemas for categories and courses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

LevelName = Literal["beginner", "intermediate", "advanced"]


class CategoryCreate(BaseModel):
    name: str = Field(..., max_length=100)


class CategoryUpdate(BaseModel):
    name: str = Field(..., max_length=100)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class InstructorSummary(BaseModel):
    """Instructor fields resolved for display."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class CourseCreate(BaseModel):
    """Body for POST /courses."""

    title: str = Field(..., max_length=255)
    description: str | None = None
    price: float = Field(default=0.0, description="Non-negative price")
    duration: str | None = Field(default=None, max_length=255)
    level: LevelName = "beginner"
    category_id: int
    instructor_id: int


class CourseUpdate(BaseModel):
    """Body for PUT /courses/{id}; omitted fields are left unchanged."""

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: float | None = None
    duration: str | None = Field(default=None, max_length=255)
    level: LevelName | None = None
    category_id: int | None = None
    instructor_id: int | None = None


class CourseOut(BaseModel):
    """Course with its category and instructor resolved."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    price: float
    duration: str | None = None
    level: str
    category_id: int
    instructor_id: int
    category: CategoryOut | None = None
    instructor: InstructorSummary | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
