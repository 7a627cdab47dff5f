import pytest

from app.core.exceptions import ConflictError
from app.services.catalog import CourseCatalog

from tests.helpers import auth_headers, sample_modules


def purchase(client, user, course_id):
    return client.post(
        "/api/users/purchase-course",
        json={"course_id": course_id},
        headers=auth_headers(user)
    )


class TestCatalog:
    def test_list_courses(self, client, make_course):
        make_course(course_id=1, category="Programming", price=19.99, rating=4.5)
        make_course(course_id=2, title="Data Science")

        response = client.get("/api/courses")

        assert response.status_code == 200
        courses = response.json()
        assert [c["id"] for c in courses] == [1, 2]
        assert courses[0]["category"] == "Programming"
        assert "modules" not in courses[0]

    def test_course_detail(self, client, make_course):
        make_course(course_id=7)

        response = client.get("/api/courses/7")

        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Python Basics"
        assert len(body["modules"]) == 2

    def test_missing_course(self, client):
        response = client.get("/api/courses/404")

        assert response.status_code == 404
        assert response.json()["detail"] == "Course not found"

    def test_stats_cards_from_first_course_that_has_them(self, client, make_course):
        make_course(course_id=1)
        make_course(course_id=2, stats_cards=[{"title": "Hours", "value": "12"}])

        response = client.get("/api/courses/stats/cards")

        assert response.status_code == 200
        assert response.json() == {"stats_cards": [{"title": "Hours", "value": "12"}]}

    def test_list_without_trailing_slash_is_not_redirected(self, client, make_course):
        make_course(course_id=1)

        response = client.get("/api/courses", follow_redirects=False)

        assert response.status_code == 200
        assert len(response.json()) == 1

    def test_stats_cards_missing(self, client, make_course):
        make_course(course_id=1)

        assert client.get("/api/courses/stats/cards").status_code == 404


class TestLearningContent:
    def test_requires_authentication(self, client, make_course):
        make_course(course_id=1)

        assert client.get("/api/courses/1/learning").status_code == 401

    def test_forbidden_without_purchase(self, client, user, make_course):
        make_course(course_id=1)

        response = client.get("/api/courses/1/learning", headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["detail"] == "Access denied. Course not purchased."

    def test_owner_gets_modules(self, client, user, make_course):
        make_course(course_id=1, curriculum=[{"title": "Intro"}])
        purchase(client, user, 1)

        response = client.get("/api/courses/1/learning", headers=auth_headers(user))

        assert response.status_code == 200
        body = response.json()
        assert set(body) == {"id", "title", "modules", "curriculum", "current_lesson"}
        assert body["curriculum"] == [{"title": "Intro"}]


class TestMyCourses:
    def test_progress_cards(self, client, user, make_course):
        make_course(course_id=1)
        make_course(course_id=2, title="Empty", modules=[], lessons_count=4)
        purchase(client, user, 1)
        purchase(client, user, 2)
        client.put(
            "/api/users/course-progress",
            json={"course_id": 1, "completed_lessons": ["l1"]},
            headers=auth_headers(user)
        )

        response = client.get("/api/courses/my-courses", headers=auth_headers(user))

        assert response.status_code == 200
        cards = response.json()
        assert [c["id"] for c in cards] == [1, 2]
        assert cards[0]["progress"] == 33
        assert cards[0]["status"] == "In Progress"
        assert cards[0]["lessons"] == "1 of 3 lessons"
        assert cards[1]["status"] == "Not Started"
        assert cards[1]["lessons"] == "0 of 4 lessons"

    def test_deleted_course_is_omitted(self, client, user, admin, make_course):
        make_course(course_id=1)
        purchase(client, user, 1)
        client.delete("/api/courses/1", headers=auth_headers(admin))

        response = client.get("/api/courses/my-courses", headers=auth_headers(user))

        assert response.json() == []


class TestAdminCourses:
    def course_payload(self, **fields):
        payload = {"id": 10, "title": "Rust for Pythonistas", "level": "Intermediate", "modules": sample_modules()}
        payload.update(fields)
        return payload

    def test_create_requires_admin(self, client, user):
        response = client.post("/api/courses", json=self.course_payload(), headers=auth_headers(user))

        assert response.status_code == 403

    def test_create_course(self, client, admin):
        response = client.post("/api/courses", json=self.course_payload(), headers=auth_headers(admin))

        assert response.status_code == 201
        assert response.json()["id"] == 10
        assert client.get("/api/courses/10").json()["level"] == "Intermediate"

    def test_create_without_trailing_slash_is_not_redirected(self, client, admin):
        response = client.post(
            "/api/courses",
            json=self.course_payload(),
            headers=auth_headers(admin),
            follow_redirects=False
        )

        assert response.status_code == 201

    def test_duplicate_id_caught_by_unique_constraint(self, db, make_course, monkeypatch):
        make_course(course_id=10)
        catalog = CourseCatalog(db)
        # Let the insert reach the database, as a concurrent request would
        monkeypatch.setattr(catalog, "find", lambda course_id: None)

        with pytest.raises(ConflictError):
            catalog.create(self.course_payload())

        assert CourseCatalog(db).get(10).title == "Python Basics"

    def test_duplicate_id_conflicts(self, client, admin, make_course):
        make_course(course_id=10)

        response = client.post("/api/courses", json=self.course_payload(), headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["detail"] == "Course with this ID already exists"

    def test_delete_course(self, client, admin, make_course):
        make_course(course_id=3)

        response = client.delete("/api/courses/3", headers=auth_headers(admin))

        assert response.status_code == 200
        assert response.json() == {"message": "Course removed"}
        assert client.get("/api/courses/3").status_code == 404
        assert client.delete("/api/courses/3", headers=auth_headers(admin)).status_code == 404

    def test_add_modules_and_lessons(self, client, admin, make_course):
        make_course(course_id=1)
        headers = auth_headers(admin)

        response = client.post(
            "/api/courses/1/modules",
            json={"modules": [{"id": "m3", "title": "Advanced", "lessons": []}]},
            headers=headers
        )
        assert response.status_code == 200
        assert [m["id"] for m in response.json()["modules"]] == ["m1", "m2", "m3"]

        response = client.post(
            "/api/courses/1/modules/m3/lessons",
            json={"lessons": [{"id": "l4", "title": "Decorators", "duration": "20:00"}]},
            headers=headers
        )
        assert response.status_code == 200
        assert response.json()["module"]["lessons"][0]["id"] == "l4"

        modules = client.get("/api/courses/1").json()["modules"]
        assert sum(len(m["lessons"]) for m in modules) == 4

    def test_add_lessons_to_missing_module(self, client, admin, make_course):
        make_course(course_id=1)

        response = client.post(
            "/api/courses/1/modules/nope/lessons",
            json={"lessons": [{"id": "l9", "title": "Lost"}]},
            headers=auth_headers(admin)
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "Module not found"

    def test_add_subtopics(self, client, admin, make_course):
        make_course(course_id=1, curriculum=[{"title": "Intro"}])

        response = client.post(
            "/api/courses/1/subtopics",
            json={"subtopics": [{"title": "Loops"}, {"title": "Functions"}]},
            headers=auth_headers(admin)
        )

        assert response.status_code == 200
        assert [s["title"] for s in response.json()["curriculum"]] == ["Intro", "Loops", "Functions"]

    def test_set_lesson_video(self, client, admin, make_course):
        make_course(course_id=1, current_lesson={"id": "l2", "title": "Setup"})
        url = "https://www.youtube.com/watch?v=abc"

        response = client.put(
            "/api/courses/1/lessons/l2/video",
            json={"youtube_url": url},
            headers=auth_headers(admin)
        )

        assert response.status_code == 200
        course = client.get("/api/courses/1").json()
        assert course["modules"][0]["lessons"][1]["youtube_url"] == url
        assert course["current_lesson"]["youtube_url"] == url

    def test_set_video_for_unknown_lesson(self, client, admin, make_course):
        make_course(course_id=1)

        response = client.put(
            "/api/courses/1/lessons/zzz/video",
            json={"youtube_url": "https://example.com/v"},
            headers=auth_headers(admin)
        )

        assert response.status_code == 404
