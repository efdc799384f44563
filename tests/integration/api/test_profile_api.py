"""Tests for profile endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

PROFILE = {
    "status": "Developer",
    "skills": "HTML, CSS ,JavaScript",
    "company": "Acme",
    "githubusername": "octocat",
    "twitter": "https://twitter.com/ann",
}

EXPERIENCE = {
    "title": "Engineer",
    "company": "Acme",
    "location": "Berlin",
    "from": "2020-01-01",
    "current": True,
}

EDUCATION = {
    "school": "MIT",
    "degree": "BSc",
    "fieldofstudy": "Computer Science",
    "from": "2015-09-01",
    "to": "2019-06-30",
}


async def _with_profile(api_client: AsyncClient, register, name: str = "Ann"):
    user = await register(name)
    response = await api_client.post("/api/profile", json=PROFILE, headers=user["headers"])
    assert response.status_code == 200, response.text
    return user, response.json()


class TestMyProfile:
    @pytest.mark.asyncio
    async def test_no_profile_yet(self, api_client: AsyncClient, register) -> None:
        user = await register()

        response = await api_client.get("/api/profile/me", headers=user["headers"])

        assert response.status_code == 401
        assert response.json()["message"] == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_requires_token(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/me")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_returns_profile_with_owner(self, api_client: AsyncClient, register) -> None:
        user, _ = await _with_profile(api_client, register)

        response = await api_client.get("/api/profile/me", headers=user["headers"])

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["id"] == str(user["id"])
        assert body["user"]["name"] == "Ann"
        assert body["user"]["avatar"].startswith("https://www.gravatar.com/avatar/")


class TestUpsertProfile:
    @pytest.mark.asyncio
    async def test_create_parses_skills_and_social(
        self, api_client: AsyncClient, register
    ) -> None:
        _, body = await _with_profile(api_client, register)

        assert body["status"] == "Developer"
        assert body["skills"] == ["HTML", "CSS", "JavaScript"]
        assert body["company"] == "Acme"
        assert body["social"]["twitter"] == "https://twitter.com/ann"
        assert body["social"]["youtube"] is None
        assert body["experience"] == []
        assert body["education"] == []
        assert "date" in body

    @pytest.mark.asyncio
    async def test_repeat_upsert_is_idempotent(self, api_client: AsyncClient, register) -> None:
        user, first = await _with_profile(api_client, register)

        response = await api_client.post("/api/profile", json=PROFILE, headers=user["headers"])

        assert response.status_code == 200
        assert response.json() == first

    @pytest.mark.asyncio
    async def test_update_keeps_omitted_and_blank_fields(
        self, api_client: AsyncClient, register
    ) -> None:
        user, first = await _with_profile(api_client, register)

        response = await api_client.post(
            "/api/profile",
            json={
                "status": "Senior Developer",
                "skills": ["Go"],
                "company": "",
                "youtube": "https://youtube.com/ann",
            },
            headers=user["headers"],
        )

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == first["id"]
        assert body["status"] == "Senior Developer"
        assert body["skills"] == ["Go"]
        assert body["company"] == "Acme"
        assert body["githubusername"] == "octocat"
        assert body["social"]["twitter"] == "https://twitter.com/ann"
        assert body["social"]["youtube"] == "https://youtube.com/ann"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"skills": "Python"},
            {"status": "", "skills": "Python"},
            {"status": "Developer"},
            {"status": "Developer", "skills": " , "},
        ],
    )
    async def test_requires_status_and_skills(
        self, api_client: AsyncClient, register, payload: dict[str, str]
    ) -> None:
        user = await register()

        response = await api_client.post("/api/profile", json=payload, headers=user["headers"])

        assert response.status_code == 422

    @pytest.mark.asyncio
    @pytest.mark.parametrize("skills", [[1], [1, 2], ["Python", 3], {"a": "b"}])
    async def test_rejects_non_string_skills(
        self, api_client: AsyncClient, register, skills: object
    ) -> None:
        user = await register()

        response = await api_client.post(
            "/api/profile",
            json={"status": "Dev", "skills": skills},
            headers=user["headers"],
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"].startswith("skills")

    @pytest.mark.asyncio
    async def test_deleted_account_cannot_create_profile(
        self, api_client: AsyncClient, register
    ) -> None:
        user = await register()
        deleted = await api_client.delete("/api/profile", headers=user["headers"])
        assert deleted.status_code == 200

        response = await api_client.post(
            "/api/profile",
            json={"status": "Dev", "skills": "py"},
            headers=user["headers"],
        )

        assert response.status_code == 401
        assert response.json()["message"] == "User no longer exists"

        profile = await api_client.get(f"/api/profile/{user['id']}")
        assert profile.status_code == 404


class TestReadProfiles:
    @pytest.mark.asyncio
    async def test_list_includes_profile(self, api_client: AsyncClient, register) -> None:
        user, created = await _with_profile(api_client, register)

        response = await api_client.get("/api/profile")

        assert response.status_code == 200
        ids = [p["id"] for p in response.json()]
        assert created["id"] in ids

    @pytest.mark.asyncio
    async def test_get_by_user_id(self, api_client: AsyncClient, register) -> None:
        user, created = await _with_profile(api_client, register)

        response = await api_client.get(f"/api/profile/{user['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_get_unknown_user(self, api_client: AsyncClient) -> None:
        response = await api_client.get(f"/api/profile/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["message"] == "Profile not found"

    @pytest.mark.asyncio
    async def test_get_malformed_id(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/not-a-uuid")

        assert response.status_code == 422


class TestExperience:
    @pytest.mark.asyncio
    async def test_add_and_delete(self, api_client: AsyncClient, register) -> None:
        user, _ = await _with_profile(api_client, register)
        headers = user["headers"]

        added = await api_client.put("/api/profile/experience", json=EXPERIENCE, headers=headers)
        assert added.status_code == 200
        entry = added.json()["experience"][0]
        assert entry["title"] == "Engineer"
        assert entry["from"] == "2020-01-01"
        assert entry["to"] is None
        assert entry["current"] is True

        newer = await api_client.put(
            "/api/profile/experience",
            json={**EXPERIENCE, "title": "Lead", "from": "2022-01-01"},
            headers=headers,
        )
        assert [e["title"] for e in newer.json()["experience"]] == ["Lead", "Engineer"]

        removed = await api_client.delete(
            f"/api/profile/experience/{entry['id']}", headers=headers
        )
        assert removed.status_code == 200
        assert [e["title"] for e in removed.json()["experience"]] == ["Lead"]

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_noop(self, api_client: AsyncClient, register) -> None:
        user, _ = await _with_profile(api_client, register)
        headers = user["headers"]
        added = await api_client.put("/api/profile/experience", json=EXPERIENCE, headers=headers)

        response = await api_client.delete(f"/api/profile/experience/{uuid4()}", headers=headers)

        assert response.status_code == 200
        assert response.json()["experience"] == added.json()["experience"]

    @pytest.mark.asyncio
    async def test_missing_fields(self, api_client: AsyncClient, register) -> None:
        user, _ = await _with_profile(api_client, register)

        response = await api_client.put(
            "/api/profile/experience",
            json={"company": "Acme", "from": "2020-01-01"},
            headers=user["headers"],
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_requires_profile(self, api_client: AsyncClient, register) -> None:
        user = await register()

        response = await api_client.put(
            "/api/profile/experience", json=EXPERIENCE, headers=user["headers"]
        )

        assert response.status_code == 401


class TestEducation:
    @pytest.mark.asyncio
    async def test_add_and_delete(self, api_client: AsyncClient, register) -> None:
        user, _ = await _with_profile(api_client, register)
        headers = user["headers"]

        added = await api_client.put("/api/profile/education", json=EDUCATION, headers=headers)
        assert added.status_code == 200
        entry = added.json()["education"][0]
        assert entry["school"] == "MIT"
        assert entry["fieldofstudy"] == "Computer Science"
        assert entry["to"] == "2019-06-30"

        removed = await api_client.delete(f"/api/profile/education/{entry['id']}", headers=headers)
        assert removed.status_code == 200
        assert removed.json()["education"] == []


class TestGithub:
    @pytest.mark.asyncio
    async def test_lists_repos(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/github/octocat")

        assert response.status_code == 200
        repos = response.json()
        assert repos[0]["full_name"] == "octocat/hello-world"
        assert repos[0]["stargazers_count"] == 3

    @pytest.mark.asyncio
    async def test_unknown_username(self, api_client: AsyncClient) -> None:
        response = await api_client.get("/api/profile/github/ghost")

        assert response.status_code == 404
        assert response.json()["message"] == "No Github profile found"


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_removes_profile_and_user_but_keeps_posts(
        self, api_client: AsyncClient, register
    ) -> None:
        user, _ = await _with_profile(api_client, register)
        reader = await register("Bob")
        post = await api_client.post(
            "/api/posts", json={"text": "still here"}, headers=user["headers"]
        )
        assert post.status_code == 200

        response = await api_client.delete("/api/profile", headers=user["headers"])

        assert response.status_code == 200
        assert response.json() == {"message": "User deleted"}

        profile = await api_client.get(f"/api/profile/{user['id']}")
        assert profile.status_code == 404

        me = await api_client.get("/api/auth", headers=user["headers"])
        assert me.status_code == 401

        login = await api_client.post(
            "/api/auth", json={"email": user["email"], "password": "secret1"}
        )
        assert login.status_code == 401

        kept = await api_client.get(f"/api/posts/{post.json()['id']}", headers=reader["headers"])
        assert kept.status_code == 200
        assert kept.json()["name"] == "Ann"
