"""Route tests for user management, the catalog and admin reports."""

import unittest
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from tests.support import (
    clear_overrides,
    create_course,
    create_user,
    login,
    make_client,
    make_session_factory,
)


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        factory = make_session_factory()
        with factory() as db:
            self.admin_id = create_user(db, "root@example.com", role="admin", name="Root").id
            prof = create_user(db, "prof@example.com", role="instructor", name="Prof One")
            self.prof_id = prof.id
            self.ada_id = create_user(db, "ada@example.com", name="Ada").id
            self.bob_id = create_user(db, "bob@example.com", name="Bob").id
            course = create_course(db, prof, price=20.0)
            self.course_id = course.id
            self.category_id = course.category_id
        self.client = make_client(factory)

    def tearDown(self) -> None:
        self.client.close()
        clear_overrides()


class TestUsersRoutes(ApiTestCase):
    def test_profile_roundtrip(self) -> None:
        login(self.client, "ada@example.com")
        profile = self.client.get("/api/users/profile").json()["user"]
        self.assertEqual(profile["email"], "ada@example.com")
        self.assertNotIn("password_hash", profile)

        response = self.client.put("/api/users/profile", json={"name": "Ada L."})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["name"], "Ada L.")
        self.assertEqual(response.json()["user"]["email"], "ada@example.com")

    def test_profile_email_taken(self) -> None:
        login(self.client, "ada@example.com")
        response = self.client.put("/api/users/profile", json={"email": "BOB@example.com"})
        self.assertEqual(response.status_code, 409)

    def test_list_users_admin_only(self) -> None:
        login(self.client, "ada@example.com")
        self.assertEqual(self.client.get("/api/users").status_code, 403)

        self.client.post("/api/auth/logout")
        login(self.client, "root@example.com")
        body = self.client.get("/api/users").json()
        self.assertEqual(body["count"], 4)
        students = self.client.get("/api/users", params={"role": "student"}).json()
        self.assertEqual(students["count"], 2)

    def test_list_by_role(self) -> None:
        login(self.client, "root@example.com")
        body = self.client.get("/api/users/role/instructor").json()
        self.assertEqual([u["email"] for u in body["users"]], ["prof@example.com"])
        self.assertEqual(self.client.get("/api/users/role/wizard").status_code, 422)

    def test_view_user_self_or_admin(self) -> None:
        login(self.client, "ada@example.com")
        self.assertEqual(self.client.get(f"/api/users/{self.ada_id}").status_code, 200)
        other = self.client.get(f"/api/users/{self.bob_id}")
        self.assertEqual(other.status_code, 403)
        self.assertEqual(other.json()["code"], "FORBIDDEN")

    def test_admin_updates_role(self) -> None:
        login(self.client, "root@example.com")
        response = self.client.put(f"/api/users/{self.bob_id}", json={"role": "instructor"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["user"]["role"], "instructor")
        self.assertEqual(self.client.put("/api/users/999", json={"is_active": False}).status_code, 404)

    def test_student_cannot_update_other_user(self) -> None:
        login(self.client, "ada@example.com")
        response = self.client.put(f"/api/users/{self.bob_id}", json={"role": "admin"})
        self.assertEqual(response.status_code, 403)

    def test_delete_own_account(self) -> None:
        login(self.client, "bob@example.com")
        self.assertEqual(self.client.delete(f"/api/users/{self.bob_id}").status_code, 200)
        # The cookie now names a user that no longer exists.
        self.assertEqual(self.client.get("/api/auth/check").json()["code"], "INVALID_TOKEN")

    def test_delete_instructor_with_courses_conflict(self) -> None:
        login(self.client, "root@example.com")
        self.assertEqual(self.client.delete(f"/api/users/{self.prof_id}").status_code, 409)

    def test_stats_by_role(self) -> None:
        login(self.client, "ada@example.com")
        self.client.post(f"/api/enrollments/courses/{self.course_id}/enroll")
        mine = self.client.get(f"/api/users/{self.ada_id}/stats").json()
        self.assertEqual(mine["student_stats"]["total_enrollments"], 1)
        self.assertIsNone(mine["instructor_stats"])
        self.assertEqual(self.client.get(f"/api/users/{self.prof_id}/stats").status_code, 403)

        self.client.post("/api/auth/logout")
        login(self.client, "root@example.com")
        prof = self.client.get(f"/api/users/{self.prof_id}/stats").json()
        self.assertEqual(prof["instructor_stats"]["total_students"], 1)
        self.assertIsNone(prof["student_stats"])


class TestCatalogRoutes(ApiTestCase):
    def test_reads_are_public(self) -> None:
        courses = self.client.get("/api/courses").json()
        self.assertEqual(len(courses), 1)
        self.assertEqual(courses[0]["category"]["name"], "Programming")
        self.assertEqual(courses[0]["instructor"]["name"], "Prof One")
        self.assertEqual(len(self.client.get("/api/categories").json()), 1)

    def test_writes_require_login(self) -> None:
        response = self.client.post("/api/categories", json={"name": "Design"})
        self.assertEqual(response.status_code, 401)

    def test_course_filters(self) -> None:
        self.assertEqual(len(self.client.get("/api/courses", params={"search": "PYTHON"}).json()), 1)
        self.assertEqual(len(self.client.get("/api/courses", params={"max_price": 10}).json()), 0)
        self.assertEqual(
            len(self.client.get("/api/courses", params={"category": self.category_id}).json()), 1
        )

    def test_create_update_delete_course(self) -> None:
        login(self.client, "prof@example.com")
        created = self.client.post(
            "/api/courses",
            json={
                "title": "Databases",
                "category_id": self.category_id,
                "instructor_id": self.prof_id,
                "price": 15,
            },
        )
        self.assertEqual(created.status_code, 201)
        self.assertEqual(created.json()["level"], "beginner")
        course_id = created.json()["id"]

        updated = self.client.put(f"/api/courses/{course_id}", json={"level": "advanced"})
        self.assertEqual(updated.json()["level"], "advanced")
        self.assertEqual(updated.json()["title"], "Databases")

        self.assertEqual(self.client.delete(f"/api/courses/{course_id}").status_code, 200)
        self.assertEqual(self.client.get(f"/api/courses/{course_id}").status_code, 404)

    def test_course_with_unknown_category(self) -> None:
        login(self.client, "prof@example.com")
        response = self.client.post(
            "/api/courses",
            json={"title": "Ghost", "category_id": 999, "instructor_id": self.prof_id},
        )
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["detail"], "Category does not exist")

    def test_category_in_use_cannot_be_deleted(self) -> None:
        login(self.client, "root@example.com")
        response = self.client.delete(f"/api/categories/{self.category_id}")
        self.assertEqual(response.status_code, 409)


class TestAdminRoutes(ApiTestCase):
    def test_reports_require_admin(self) -> None:
        self.assertEqual(self.client.get("/api/admin/stats").status_code, 401)
        login(self.client, "prof@example.com")
        response = self.client.get("/api/admin/stats")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["detail"], "Admin access required")

    def test_dashboard_and_rollups(self) -> None:
        login(self.client, "ada@example.com")
        self.client.post(f"/api/enrollments/courses/{self.course_id}/enroll")
        self.client.post("/api/auth/logout")

        login(self.client, "root@example.com")
        stats = self.client.get("/api/admin/stats").json()
        self.assertEqual(
            stats,
            {
                "total_users": 4,
                "total_students": 2,
                "total_instructors": 1,
                "total_courses": 1,
                "total_enrollments": 1,
            },
        )
        courses = self.client.get("/api/admin/courses").json()
        self.assertEqual(courses[0]["enrolled_students"], [self.ada_id])
        instructors = self.client.get("/api/admin/instructors").json()
        self.assertEqual(instructors[0]["total_students"], 1)
        students = self.client.get("/api/admin/students").json()
        self.assertEqual([s["email"] for s in students], ["bob@example.com", "ada@example.com"])


class TestStoreFailure(ApiTestCase):
    def test_database_error_becomes_500(self) -> None:
        failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
        with patch("lms.services.catalog.list_categories", side_effect=failure):
            with self.assertLogs("lms.api.errors", level="ERROR"):
                response = self.client.get("/api/categories")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(), {"detail": "Internal server error", "code": "INTERNAL_ERROR"}
        )


if __name__ == "__main__":
    unittest.main()
