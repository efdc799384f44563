"""GitHub repository lookup client."""

from typing import Any, Protocol

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError, StoreError
from domain.entities.profile import RepoSummary

logger = structlog.get_logger()


class IRepositoryLookup(Protocol):
    """Protocol for services that list a developer's public repositories."""

    async def list_repos(self, username: str) -> list[RepoSummary]:
        """List a user's most recent public repositories."""
        ...


class GitHubClient:
    """Lists public repositories through the GitHub REST API.

    One request per call, no retries. Any non-2xx answer is reported as
    GitHubProfileNotFoundError; transport failures become StoreError.
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        token: str = settings.github_token,
        repo_limit: int = settings.github_repo_limit,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._repo_limit = repo_limit
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "connector-api",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def list_repos(self, username: str) -> list[RepoSummary]:
        url = f"{self._base_url}/users/{username}/repos"
        params = {"per_page": self._repo_limit, "sort": "created:asc"}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("github_lookup_failed", username=username, error=str(e))
            raise StoreError() from e

        if not response.is_success:
            logger.info(
                "github_profile_not_found",
                username=username,
                status_code=response.status_code,
            )
            raise GitHubProfileNotFoundError(username)

        payload = response.json()
        if not isinstance(payload, list):
            logger.info("github_unexpected_payload", username=username)
            raise GitHubProfileNotFoundError(username)

        return [self._to_summary(item) for item in payload]

    @staticmethod
    def _to_summary(item: dict[str, Any]) -> RepoSummary:
        return RepoSummary(
            name=item.get("name", ""),
            full_name=item.get("full_name", ""),
            html_url=item.get("html_url", ""),
            description=item.get("description"),
            language=item.get("language"),
            stargazers_count=item.get("stargazers_count", 0),
            watchers_count=item.get("watchers_count", 0),
            forks_count=item.get("forks_count", 0),
        )
