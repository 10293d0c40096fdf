"""
DevConnector Backend — Profile Endpoint Tests
===============================================

What we test:
    ✅ Upsert → /me round trip: trimming, skills split, owner joined in
    ✅ Social links are rebuilt on every save
    ✅ Public listing and lookup by user id (including malformed ids)
    ✅ Experience / education: validation, newest first, removal
    ✅ Editing entries before a profile exists is a server error
    ✅ Account deletion removes profile and user but keeps posts
    ✅ GitHub proxy: pass-through JSON, request shape, upstream failures
"""

import httpx
import pytest
from bson import ObjectId

PROFILE = {
    "status": "  Developer  ",
    "skills": " HTML, CSS ,, Python ",
    "company": "  Acme  ",
    "website": " https://acme.dev ",
    "githubusername": " octocat ",
    "twitter": "https://twitter.com/ada",
}

EXPERIENCE = {
    "title": "Engineer",
    "company": "Acme",
    "location": "Remote",
    "from": "2020-01-01T00:00:00Z",
    "current": True,
}

EDUCATION = {
    "school": "MIT",
    "degree": "BSc",
    "fieldofstudy": "CS",
    "from": "2015-09-01T00:00:00Z",
    "to": "2019-06-01T00:00:00Z",
}


@pytest.fixture
def create_profile(test_client):
    async def _create(headers, **overrides):
        response = await test_client.post("/api/profile", json={**PROFILE, **overrides}, headers=headers)
        assert response.status_code == 200, response.text
        return response.json()

    return _create


class TestProfileUpsert:
    @pytest.mark.asyncio
    async def test_create_then_fetch_me(self, test_client, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        created = await create_profile(headers)

        response = await test_client.get("/api/profile/me", headers=headers)
        assert response.status_code == 200
        profile = response.json()
        assert profile["_id"] == created["_id"]
        assert profile["status"] == "Developer"
        assert profile["company"] == "Acme"
        assert profile["website"] == "https://acme.dev"
        assert profile["githubusername"] == "octocat"
        assert profile["skills"] == ["HTML", "CSS", "Python"]
        assert profile["social"]["twitter"] == "https://twitter.com/ada"
        assert profile["user"]["name"] == "Ada"
        assert profile["user"]["avatar"].startswith("//www.gravatar.com/avatar/")

    @pytest.mark.asyncio
    async def test_me_without_profile(self, test_client, register_user):
        headers = await register_user("Ada", "ada@x.com")
        response = await test_client.get("/api/profile/me", headers=headers)
        assert response.status_code == 400
        assert response.json()["message"] == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_second_save_updates_same_profile(self, database, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        first = await create_profile(headers)
        second = await create_profile(headers, status="Senior Developer", bio="Hello")

        assert second["_id"] == first["_id"]
        assert second["status"] == "Senior Developer"
        assert second["bio"] == "Hello"
        assert await database.profiles.count_documents({}) == 1

    @pytest.mark.asyncio
    async def test_social_links_are_rebuilt(self, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers, youtube="https://youtube.com/ada")

        updated = await create_profile(headers, twitter=None)
        assert updated["social"]["twitter"] is None
        assert updated["social"]["youtube"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body, message",
        [
            ({"skills": "HTML"}, "Status is required"),
            ({"status": "Developer"}, "Skills is required"),
            ({"status": "Developer", "skills": "   "}, "Skills is required"),
        ],
    )
    async def test_required_fields(self, test_client, register_user, body, message):
        headers = await register_user("Ada", "ada@x.com")
        response = await test_client.post("/api/profile", json=body, headers=headers)
        assert response.status_code == 400
        assert message in [error["msg"] for error in response.json()["details"]["errors"]]

    @pytest.mark.asyncio
    async def test_only_commas_in_skills(self, test_client, register_user):
        headers = await register_user("Ada", "ada@x.com")
        response = await test_client.post(
            "/api/profile", json={"status": "Developer", "skills": " , ,"}, headers=headers
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client):
        response = await test_client.post("/api/profile", json=PROFILE)
        assert response.status_code == 401


class TestProfileLookup:
    @pytest.mark.asyncio
    async def test_list_profiles(self, test_client, register_user, create_profile):
        await create_profile(await register_user("Ada", "ada@x.com"))
        await create_profile(await register_user("Bob", "bob@x.com"))

        response = await test_client.get("/api/profile")
        assert response.status_code == 200
        names = sorted(profile["user"]["name"] for profile in response.json())
        assert names == ["Ada", "Bob"]

    @pytest.mark.asyncio
    async def test_lookup_by_user_id(self, test_client, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        created = await create_profile(headers)

        user_id = created["user"]["_id"]
        response = await test_client.get(f"/api/profile/user/{user_id}")
        assert response.status_code == 200
        assert response.json()["_id"] == created["_id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", ["not-an-id", str(ObjectId())])
    async def test_lookup_missing_or_malformed(self, test_client, user_id):
        response = await test_client.get(f"/api/profile/user/{user_id}")
        assert response.status_code == 400
        assert response.json()["error"] == "no_profile"
        assert response.json()["message"] == "No profile found for this user"


class TestExperienceAndEducation:
    @pytest.mark.asyncio
    async def test_experience_before_profile_is_server_error(self, test_client, register_user):
        headers = await register_user("Ada", "ada@x.com")
        response = await test_client.put("/api/profile/experience", json=EXPERIENCE, headers=headers)
        assert response.status_code == 500
        assert response.json()["message"] == "Server error"

    @pytest.mark.asyncio
    async def test_experience_newest_first_and_removal(self, test_client, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers)

        await test_client.put("/api/profile/experience", json=EXPERIENCE, headers=headers)
        response = await test_client.put(
            "/api/profile/experience", json={**EXPERIENCE, "title": "Lead"}, headers=headers
        )
        assert response.status_code == 200
        experience = response.json()["experience"]
        assert [entry["title"] for entry in experience] == ["Lead", "Engineer"]
        assert response.json()["user"]["name"] == "Ada"

        response = await test_client.delete(
            f"/api/profile/experience/{experience[0]['_id']}", headers=headers
        )
        assert response.status_code == 200
        assert [entry["title"] for entry in response.json()["experience"]] == ["Engineer"]

    @pytest.mark.asyncio
    async def test_removing_unknown_entry_is_a_no_op(self, test_client, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers)
        await test_client.put("/api/profile/education", json=EDUCATION, headers=headers)

        response = await test_client.delete(f"/api/profile/education/{ObjectId()}", headers=headers)
        assert response.status_code == 200
        assert [entry["school"] for entry in response.json()["education"]] == ["MIT"]

    @pytest.mark.asyncio
    async def test_education_round_trip(self, test_client, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers)

        response = await test_client.put("/api/profile/education", json=EDUCATION, headers=headers)
        assert response.status_code == 200
        entry = response.json()["education"][0]
        assert entry["degree"] == "BSc"
        assert entry["fieldofstudy"] == "CS"
        assert entry["from"].startswith("2015-09-01")
        assert entry["current"] is False

        response = await test_client.delete(f"/api/profile/education/{entry['_id']}", headers=headers)
        assert response.json()["education"] == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "missing, message",
        [
            ("title", "Title is required"),
            ("company", "Company is required"),
            ("location", "Location is required"),
            ("from", "From date is required"),
        ],
    )
    async def test_experience_validation(self, test_client, register_user, create_profile, missing, message):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers)

        body = {key: value for key, value in EXPERIENCE.items() if key != missing}
        response = await test_client.put("/api/profile/experience", json=body, headers=headers)
        assert response.status_code == 400
        assert message in [error["msg"] for error in response.json()["details"]["errors"]]

    @pytest.mark.asyncio
    async def test_education_validation(self, test_client, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers)

        response = await test_client.put(
            "/api/profile/education", json={"from": "2015-09-01T00:00:00Z"}, headers=headers
        )
        assert response.status_code == 400
        messages = [error["msg"] for error in response.json()["details"]["errors"]]
        assert "School is required" in messages
        assert "Degree is required" in messages
        assert "Field of study is required" in messages


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_delete_keeps_posts(self, test_client, database, register_user, create_profile):
        headers = await register_user("Ada", "ada@x.com")
        await create_profile(headers)
        post = await test_client.post("/api/posts", json={"text": "Hello"}, headers=headers)
        assert post.status_code == 200

        response = await test_client.delete("/api/profile", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"msg": "Profile deleted!"}

        assert await database.users.count_documents({}) == 0
        assert await database.profiles.count_documents({}) == 0
        assert await database.posts.count_documents({}) == 1

        # The token is still valid, but the user behind it is gone
        response = await test_client.get("/api/auth", headers=headers)
        assert response.status_code == 404


class TestGitHubProxy:
    @pytest.mark.asyncio
    async def test_passes_repositories_through(self, test_client, github_handler):
        seen = {}
        repos = [{"name": "hello-world", "stargazers_count": 3}]

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json=repos)

        github_handler["handler"] = handler

        response = await test_client.get("/api/profile/github/octocat")
        assert response.status_code == 200
        assert response.json() == repos

        request = seen["request"]
        assert request.url.host == "api.github.test"
        assert request.url.path == "/users/octocat/repos"
        assert request.url.params["per_page"] == "5"
        assert request.url.params["sort"] == "created:asc"
        assert request.headers["Authorization"] == "token test-github-token"
        assert request.headers["User-Agent"] == "devconnector-backend"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("upstream_status", [404, 403, 500])
    async def test_upstream_failure_is_not_found(self, test_client, github_handler, upstream_status):
        github_handler["handler"] = lambda request: httpx.Response(upstream_status, json={})

        response = await test_client.get("/api/profile/github/ghost")
        assert response.status_code == 404
        assert response.json()["message"] == "No Github profile found"
