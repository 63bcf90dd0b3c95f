"""Shared helpers for tests: in-memory database, users and an HTTP client."""

from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lms.core.database import get_db
from lms.main import app
from lms.models import Base, Category, Course, User
from lms.schemas.auth import CurrentUser
from lms.services.users import register_user

PASSWORD = "secret-pass"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_user(
    db: Session,
    email: str,
    role: str = "student",
    name: str = "Test User",
    password: str = PASSWORD,
) -> User:
    return register_user(db, name, email, password, role=role)


def as_caller(user: User) -> CurrentUser:
    return CurrentUser(id=user.id, name=user.name, email=user.email, role=user.role)


def create_course(
    db: Session,
    instructor: User,
    title: str = "Intro to Python",
    category_name: str = "Programming",
    price: float = 0.0,
    level: str = "beginner",
) -> Course:
    category = db.query(Category).filter(Category.name == category_name).first()
    if category is None:
        category = Category(name=category_name)
        db.add(category)
        db.flush()
    course = Course(
        title=title,
        price=price,
        level=level,
        category_id=category.id,
        instructor_id=instructor.id,
    )
    db.add(course)
    db.commit()
    return course


def make_client(session_factory: sessionmaker) -> TestClient:
    """TestClient for the real app with get_db bound to the test database."""

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def clear_overrides() -> None:
    app.dependency_overrides.clear()


def login(client: TestClient, email: str, password: str = PASSWORD) -> None:
    """Log in; the session cookie is kept in the client's cookie jar."""
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
