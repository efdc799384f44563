"""Unit tests for the GitHub repository lookup client."""

import httpx
import pytest

from core.exceptions import GitHubProfileNotFoundError, StoreError
from infrastructure.github.client import GitHubClient

REPOS = [
    {
        "name": "hello-world",
        "full_name": "octocat/hello-world",
        "html_url": "https://github.com/octocat/hello-world",
        "description": "My first repository",
        "language": "Python",
        "stargazers_count": 7,
        "watchers_count": 7,
        "forks_count": 2,
        "owner": {"login": "octocat"},
    }
]


def _client(handler, token: str = "") -> GitHubClient:
    return GitHubClient(
        base_url="https://api.github.test/",
        token=token,
        repo_limit=5,
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestGitHubClient:
    @pytest.mark.asyncio
    async def test_lists_recent_repos(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=REPOS)

        repos = await _client(handler).list_repos("octocat")

        assert len(repos) == 1
        assert repos[0].full_name == "octocat/hello-world"
        assert repos[0].stargazers_count == 7

        request = seen[0]
        assert request.url.path == "/users/octocat/repos"
        assert request.url.params["per_page"] == "5"
        assert request.url.params["sort"] == "created:asc"
        assert "authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_sends_token_when_configured(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[])

        await _client(handler, token="gh-token").list_repos("octocat")

        assert seen[0].headers["authorization"] == "Bearer gh-token"

    @pytest.mark.asyncio
    async def test_non_success_means_no_profile(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"message": "Not Found"})

        with pytest.raises(GitHubProfileNotFoundError) as exc_info:
            await _client(handler).list_repos("ghost")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "No Github profile found"

    @pytest.mark.asyncio
    async def test_transport_failure_is_store_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreError) as exc_info:
            await _client(handler).list_repos("octocat")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Server error"

    @pytest.mark.asyncio
    async def test_non_list_payload_means_no_profile(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "API rate limit exceeded"})

        with pytest.raises(GitHubProfileNotFoundError):
            await _client(handler).list_repos("octocat")
