"""Tests for the links endpoints."""

import pytest

from clipkeeper.models.link import TITLE_MAX_LENGTH
from clipkeeper.models.tag import TAG_NAME_MAX_LENGTH
from clipkeeper.repository import LinkRepository

API = "/api/v1"
TIKTOK_URL = "https://www.tiktok.com/@demo/video/123"


@pytest.fixture
def add_link(session_factory):
    """Insert a link directly, bypassing ingestion."""

    def _add_link(user, url="https://youtube.com/shorts/abc", platform="youtube", category="Music"):
        session = session_factory()
        try:
            repository = LinkRepository(session)
            link = repository.create_link(
                user_id=user.id,
                url=url,
                title=f"Saved {url}",
                platform=platform,
                category=category,
            )
            repository.commit()
            return link
        finally:
            session.close()

    return _add_link


class TestCreateLink:
    def test_create_link(self, client, make_user, auth_headers):
        user = make_user()

        response = client.post(
            f"{API}/links/", json={"url": TIKTOK_URL}, headers=auth_headers(user)
        )

        assert response.status_code == 201
        data = response.json()
        assert data["url"] == TIKTOK_URL
        assert data["platform"] == "tiktok"
        assert data["category"] == "Cooking"
        assert data["user_id"] == user.id
        assert [tag["name"] for tag in data["tags"]] == ["pasta", "easy", "dinner"]
        assert data["metadata"]["category"] == "Cooking"

    def test_requires_authentication(self, client):
        response = client.post(f"{API}/links/", json={"url": TIKTOK_URL})

        assert response.status_code == 401

    def test_unsupported_platform(self, client, make_user, auth_headers):
        user = make_user()

        response = client.post(
            f"{API}/links/",
            json={"url": "https://vimeo.com/123"},
            headers=auth_headers(user),
        )

        assert response.status_code == 400
        assert "Unsupported link" in response.json()["detail"]

    def test_duplicate_returns_existing_id(self, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user)
        first = client.post(f"{API}/links/", json={"url": TIKTOK_URL}, headers=headers)

        response = client.post(f"{API}/links/", json={"url": TIKTOK_URL}, headers=headers)

        assert response.status_code == 409
        assert response.json()["detail"]["existing_link_id"] == first.json()["id"]

    def test_force_saves_duplicate(self, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user)
        client.post(f"{API}/links/", json={"url": TIKTOK_URL}, headers=headers)

        response = client.post(
            f"{API}/links/", json={"url": TIKTOK_URL, "force": True}, headers=headers
        )

        assert response.status_code == 201
        assert len(client.get(f"{API}/links/", headers=headers).json()) == 2

    def test_free_tier_limit(self, client, make_user, auth_headers, add_link):
        user = make_user()
        for i in range(50):
            add_link(user, url=f"https://youtube.com/shorts/n{i}")

        response = client.post(
            f"{API}/links/", json={"url": TIKTOK_URL}, headers=auth_headers(user)
        )

        assert response.status_code == 403
        assert "Free tier limit reached" in response.json()["detail"]

    def test_empty_url_is_validation_error(self, client, make_user, auth_headers):
        user = make_user()

        response = client.post(f"{API}/links/", json={"url": ""}, headers=auth_headers(user))

        assert response.status_code == 422


class TestListLinks:
    def test_only_own_links_newest_first(self, client, make_user, auth_headers, add_link):
        user = make_user()
        other = make_user()
        first = add_link(user, url="https://youtube.com/shorts/one")
        second = add_link(user, url="https://youtube.com/shorts/two")
        add_link(other)

        response = client.get(f"{API}/links/", headers=auth_headers(user))

        assert response.status_code == 200
        assert [link["id"] for link in response.json()] == [second.id, first.id]

    def test_recent_limited_to_five(self, client, make_user, auth_headers, add_link):
        user = make_user()
        for i in range(7):
            add_link(user, url=f"https://youtube.com/shorts/r{i}")

        response = client.get(
            f"{API}/links/", params={"type": "recent"}, headers=auth_headers(user)
        )

        assert len(response.json()) == 5

    def test_platform_filter(self, client, make_user, auth_headers, add_link):
        user = make_user()
        add_link(user)
        tiktok = add_link(user, url=TIKTOK_URL, platform="tiktok")

        response = client.get(
            f"{API}/links/", params={"platform": "tiktok"}, headers=auth_headers(user)
        )

        assert [link["id"] for link in response.json()] == [tiktok.id]


class TestSingleLink:
    def test_get_link(self, client, make_user, auth_headers, add_link):
        user = make_user()
        link = add_link(user)

        response = client.get(f"{API}/links/{link.id}", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["title"] == link.title

    def test_missing_link(self, client, make_user, auth_headers):
        user = make_user()

        response = client.get(f"{API}/links/999", headers=auth_headers(user))

        assert response.status_code == 404

    def test_other_users_link_forbidden(self, client, make_user, auth_headers, add_link):
        owner = make_user()
        intruder = make_user()
        link = add_link(owner)

        headers = auth_headers(intruder)
        assert client.get(f"{API}/links/{link.id}", headers=headers).status_code == 403
        assert client.delete(f"{API}/links/{link.id}", headers=headers).status_code == 403

    def test_update_category(self, client, make_user, auth_headers, add_link):
        user = make_user()
        link = add_link(user)

        response = client.patch(
            f"{API}/links/{link.id}/category",
            json={"category": " Education "},
            headers=auth_headers(user),
        )

        assert response.status_code == 200
        assert response.json()["category"] == "Education"

    def test_update_title(self, client, make_user, auth_headers, add_link):
        user = make_user()
        link = add_link(user)
        headers = auth_headers(user)

        blank = client.patch(
            f"{API}/links/{link.id}/title", json={"title": "   "}, headers=headers
        )
        assert blank.status_code == 400

        response = client.patch(
            f"{API}/links/{link.id}/title", json={"title": "Renamed"}, headers=headers
        )
        assert response.json()["title"] == "Renamed"

    def test_delete_link_removes_tags(self, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user)
        link_id = client.post(
            f"{API}/links/", json={"url": TIKTOK_URL}, headers=headers
        ).json()["id"]

        response = client.delete(f"{API}/links/{link_id}", headers=headers)

        assert response.status_code == 200
        assert client.get(f"{API}/links/{link_id}", headers=headers).status_code == 404
        assert client.get(f"{API}/tags/", headers=headers).json() == []

    def test_record_view(self, client, make_user, auth_headers, add_link, session_factory):
        user = make_user()
        link = add_link(user)

        response = client.post(f"{API}/links/{link.id}/view", headers=auth_headers(user))

        assert response.status_code == 200
        session = session_factory()
        try:
            refreshed = LinkRepository(session).get_link_by_id(link.id)
            assert refreshed.last_viewed > link.last_viewed
        finally:
            session.close()


class TestFieldLimits:
    def test_long_classifier_tag_still_created(self, client, make_user, auth_headers, fake_openai):
        fake_openai.completions.content = {
            "title": "Pasta",
            "category": "Cooking",
            "tags": ["a very long descriptive tag " * 5],
        }
        user = make_user()

        response = client.post(
            f"{API}/links/", json={"url": TIKTOK_URL}, headers=auth_headers(user)
        )

        assert response.status_code == 201
        tag_name = response.json()["tags"][0]["name"]
        assert tag_name.startswith("a very long descriptive tag")
        assert len(tag_name) <= TAG_NAME_MAX_LENGTH

    def test_title_update_too_long(self, client, make_user, auth_headers, add_link):
        user = make_user()
        link = add_link(user)

        response = client.patch(
            f"{API}/links/{link.id}/title",
            json={"title": "x" * (TITLE_MAX_LENGTH + 1)},
            headers=auth_headers(user),
        )

        assert response.status_code == 422
