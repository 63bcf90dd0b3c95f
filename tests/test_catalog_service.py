"""Tests for lms.services.catalog: categories and courses."""

import unittest

from lms.core.errors import ConflictError, NotFoundError, ValidationError
from lms.models import Enrollment
from lms.services import catalog
from lms.services import enrollment as ledger
from tests.support import as_caller, create_user, make_session_factory


class CatalogTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.instructor = create_user(self.db, "prof@example.com", role="instructor")

    def tearDown(self) -> None:
        self.db.close()


class TestCategories(CatalogTestCase):
    def test_create_trims_and_lists_by_name(self) -> None:
        catalog.create_category(self.db, "  Music ")
        catalog.create_category(self.db, "Art")
        self.assertEqual([c.name for c in catalog.list_categories(self.db)], ["Art", "Music"])

    def test_duplicate_name_conflicts(self) -> None:
        catalog.create_category(self.db, "Art")
        with self.assertRaises(ConflictError):
            catalog.create_category(self.db, " Art ")

    def test_rename_to_existing_name_conflicts(self) -> None:
        catalog.create_category(self.db, "Art")
        music = catalog.create_category(self.db, "Music")
        with self.assertRaises(ConflictError):
            catalog.update_category(self.db, music.id, "Art")
        self.assertEqual(catalog.update_category(self.db, music.id, "Sound").name, "Sound")

    def test_empty_name_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            catalog.create_category(self.db, "   ")

    def test_missing_category(self) -> None:
        with self.assertRaises(NotFoundError):
            catalog.get_category(self.db, 42)
        with self.assertRaises(NotFoundError):
            catalog.delete_category(self.db, 42)

    def test_delete_blocked_while_courses_reference_it(self) -> None:
        art = catalog.create_category(self.db, "Art")
        catalog.create_course(self.db, "Drawing", art.id, self.instructor.id)
        with self.assertRaises(ConflictError):
            catalog.delete_category(self.db, art.id)

    def test_delete_unused(self) -> None:
        art = catalog.create_category(self.db, "Art")
        catalog.delete_category(self.db, art.id)
        self.assertEqual(catalog.list_categories(self.db), [])


class TestCourses(CatalogTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.category = catalog.create_category(self.db, "Programming")

    def test_create_defaults_and_resolves_references(self) -> None:
        course = catalog.create_course(
            self.db, "  Intro to Python ", self.category.id, self.instructor.id
        )
        self.assertEqual(course.title, "Intro to Python")
        self.assertEqual(course.price, 0.0)
        self.assertEqual(course.level, "beginner")
        self.assertEqual(course.category.name, "Programming")
        self.assertEqual(course.instructor.email, "prof@example.com")

    def test_instructor_role_not_checked(self) -> None:
        student = create_user(self.db, "student@example.com")
        course = catalog.create_course(self.db, "Peer course", self.category.id, student.id)
        self.assertEqual(course.instructor_id, student.id)

    def test_field_validation(self) -> None:
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "", self.category.id, self.instructor.id)
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "X", self.category.id, self.instructor.id, price=-5)
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "X", self.category.id, self.instructor.id, level="guru")

    def test_references_required_and_must_exist(self) -> None:
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "X", None, self.instructor.id)
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "X", self.category.id, None)
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "X", 999, self.instructor.id)
        with self.assertRaises(ValidationError):
            catalog.create_course(self.db, "X", self.category.id, 999)

    def test_partial_update(self) -> None:
        course = catalog.create_course(
            self.db, "Python", self.category.id, self.instructor.id, price=10
        )
        updated = catalog.update_course(self.db, course.id, {"price": 25.0, "level": "advanced"})
        self.assertEqual(updated.title, "Python")
        self.assertEqual(updated.price, 25.0)
        self.assertEqual(updated.level, "advanced")

    def test_update_moves_category(self) -> None:
        design = catalog.create_category(self.db, "Design")
        course = catalog.create_course(self.db, "Python", self.category.id, self.instructor.id)
        updated = catalog.update_course(self.db, course.id, {"category_id": design.id})
        self.assertEqual(updated.category.name, "Design")
        with self.assertRaises(ValidationError):
            catalog.update_course(self.db, course.id, {"category_id": 999})

    def test_filters(self) -> None:
        design = catalog.create_category(self.db, "Design")
        catalog.create_course(
            self.db, "Python Basics", self.category.id, self.instructor.id, price=0
        )
        catalog.create_course(
            self.db,
            "Advanced Python",
            self.category.id,
            self.instructor.id,
            price=80,
            level="advanced",
        )
        catalog.create_course(
            self.db,
            "Typography",
            design.id,
            self.instructor.id,
            description="Working with python-like precision",
            price=40,
        )

        titles = lambda courses: sorted(c.title for c in courses)  # noqa: E731
        self.assertEqual(len(catalog.list_courses(self.db)), 3)
        self.assertEqual(
            titles(catalog.list_courses(self.db, search="PYTHON")),
            ["Advanced Python", "Python Basics", "Typography"],
        )
        self.assertEqual(
            titles(catalog.list_courses(self.db, category_id=design.id)), ["Typography"]
        )
        self.assertEqual(
            titles(catalog.list_courses(self.db, level="advanced")), ["Advanced Python"]
        )
        self.assertEqual(
            titles(catalog.list_courses(self.db, min_price=10, max_price=50)), ["Typography"]
        )

    def test_search_wildcards_match_literally(self) -> None:
        catalog.create_course(self.db, "100% Python", self.category.id, self.instructor.id)
        catalog.create_course(self.db, "1000 Exercises", self.category.id, self.instructor.id)
        catalog.create_course(self.db, "c_lang", self.category.id, self.instructor.id)
        catalog.create_course(self.db, "cobol", self.category.id, self.instructor.id)

        titles = lambda courses: sorted(c.title for c in courses)  # noqa: E731
        self.assertEqual(titles(catalog.list_courses(self.db, search="100%")), ["100% Python"])
        self.assertEqual(titles(catalog.list_courses(self.db, search="c_")), ["c_lang"])

    def test_null_price_and_level_leave_course_unchanged(self) -> None:
        course = catalog.create_course(
            self.db, "Python", self.category.id, self.instructor.id, price=25, level="advanced"
        )
        updated = catalog.update_course(self.db, course.id, {"price": None, "level": None})
        self.assertEqual(updated.price, 25.0)
        self.assertEqual(updated.level, "advanced")

    def test_newest_first(self) -> None:
        first = catalog.create_course(self.db, "First", self.category.id, self.instructor.id)
        second = catalog.create_course(self.db, "Second", self.category.id, self.instructor.id)
        self.assertEqual(
            [c.id for c in catalog.list_courses(self.db)], [second.id, first.id]
        )

    def test_delete_cascades_enrollments(self) -> None:
        student = create_user(self.db, "student@example.com")
        course = catalog.create_course(self.db, "Python", self.category.id, self.instructor.id)
        course_id = course.id
        ledger.enroll(self.db, as_caller(student), course_id)

        catalog.delete_course(self.db, course_id)

        with self.assertRaises(NotFoundError):
            catalog.get_course(self.db, course_id)
        self.assertEqual(self.db.query(Enrollment).count(), 0)


if __name__ == "__main__":
    unittest.main()
