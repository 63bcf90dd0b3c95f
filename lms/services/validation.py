"""Field validation run before any store mutation. Each validator returns the normalized value or raises ValidationError."""

import math
import re

from lms.core.errors import ValidationError
from lms.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from lms.models.course import LEVELS
from lms.models.user import ROLES

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")

CATEGORY_NAME_MAX_LEN = 100
COURSE_TITLE_MAX_LEN = 255
PROGRESS_MIN = 0
PROGRESS_MAX = 100


def validate_name(name: str | None) -> str:
    value = (name or "").strip()
    if not value:
        raise ValidationError("Name is required.")
    if not (NAME_MIN_LEN <= len(value) <= NAME_MAX_LEN):
        raise ValidationError(
            f"Name must be between {NAME_MIN_LEN} and {NAME_MAX_LEN} characters."
        )
    return value


def validate_email(email: str | None) -> str:
    """Trim and lower-case; emails are unique case-insensitively."""
    value = (email or "").strip().lower()
    if not value:
        raise ValidationError("Email is required.")
    if not EMAIL_RE.match(value):
        raise ValidationError("Please use a valid email address.")
    return value


def validate_password(password: str | None) -> str:
    if not password:
        raise ValidationError("Password is required.")
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        raise ValidationError(
            f"Password must be between {PASSWORD_MIN_LEN} and {PASSWORD_MAX_LEN} characters."
        )
    return password


def validate_role(role: str | None) -> str:
    value = (role or "").strip().lower()
    if value not in ROLES:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(ROLES)}")
    return value


def validate_category_name(name: str | None) -> str:
    value = (name or "").strip()
    if not value:
        raise ValidationError("Category name is required.")
    if len(value) > CATEGORY_NAME_MAX_LEN:
        raise ValidationError(
            f"Category name must be at most {CATEGORY_NAME_MAX_LEN} characters."
        )
    return value


def validate_course_title(title: str | None) -> str:
    value = (title or "").strip()
    if not value:
        raise ValidationError("Course title is required.")
    if len(value) > COURSE_TITLE_MAX_LEN:
        raise ValidationError(
            f"Course title must be at most {COURSE_TITLE_MAX_LEN} characters."
        )
    return value


def validate_price(price: float | None) -> float:
    if price is None:
        return 0.0
    if math.isnan(price) or math.isinf(price) or price < 0:
        raise ValidationError("Price must be a non-negative number.")
    return float(price)


def validate_level(level: str | None) -> str:
    if level is None:
        return "beginner"
    value = level.strip().lower()
    if value not in LEVELS:
        raise ValidationError(f"Invalid level. Must be one of: {', '.join(LEVELS)}")
    return value


def validate_progress(progress: float | None) -> float:
    if progress is None:
        raise ValidationError("Progress is required.")
    if math.isnan(progress) or not (PROGRESS_MIN <= progress <= PROGRESS_MAX):
        raise ValidationError(
            f"Progress must be between {PROGRESS_MIN} and {PROGRESS_MAX}"
        )
    return float(progress)
