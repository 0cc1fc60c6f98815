"""GitHub API client."""

import time
from typing import Any

import httpx
import structlog

from src.core.exceptions import (
    GitHubAuthenticationError,
    GitHubError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from src.services.github.models import PullRequest, Review

logger = structlog.get_logger()

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github.v3+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        **kwargs: Any,
    ) -> dict[str, Any] | list[Any] | str:
        """Make an authenticated request to GitHub API."""
        client = await self._get_client()

        logger.debug("GitHub API request", method=method, endpoint=endpoint)

        start_time = time.perf_counter()
        response = await client.request(method, endpoint, **kwargs)
        logger.debug(
            "GitHub API response",
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
        )

        if response.status_code == 401:
            raise GitHubAuthenticationError("Invalid GitHub token")

        if response.status_code == 403:
            if "rate limit" in response.text.lower():
                reset_at = int(response.headers.get("X-RateLimit-Reset", 0))
                raise GitHubRateLimitError(reset_at=reset_at)
            raise GitHubAuthenticationError("Access forbidden")

        if response.status_code == 404:
            raise GitHubNotFoundError(f"Resource not found: {endpoint}")

        if response.status_code >= 400:
            raise GitHubError(
                f"GitHub API error: {response.status_code}",
                details={"response": response.text},
            )

        # Handle diff responses (plain text)
        headers = kwargs.get("headers", {})
        if isinstance(headers, dict) and DIFF_MEDIA_TYPE in headers.get("Accept", ""):
            return response.text

        result: dict[str, Any] | list[Any] = response.json()
        return result

    async def get_pull_request(self, owner: str, repo: str, pr_number: int) -> PullRequest:
        """Fetch pull request details."""
        data = await self._request("GET", f"/repos/{owner}/{repo}/pulls/{pr_number}")

        if not isinstance(data, dict):
            raise GitHubError("Unexpected response format")

        return PullRequest(
            number=data["number"],
            title=data.get("title") or "",
            body=data.get("body"),
        )

    async def get_pull_request_diff(
        self,
        owner: str,
        repo: str,
        pr_number: int,
    ) -> str:
        """Fetch the raw diff for a PR."""
        diff = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/pulls/{pr_number}",
            headers={"Accept": DIFF_MEDIA_TYPE},
        )

        if not isinstance(diff, str):
            raise GitHubError("Unexpected response format for diff")

        return diff

    async def compare_commits(
        self,
        owner: str,
        repo: str,
        base: str,
        head: str,
    ) -> str:
        """Fetch the raw diff between two commits."""
        diff = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/compare/{base}...{head}",
            headers={"Accept": DIFF_MEDIA_TYPE},
        )

        if not isinstance(diff, str):
            raise GitHubError("Unexpected response format for diff")

        return diff

    async def create_review(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        review: Review,
    ) -> dict[str, Any]:
        """Submit a review on a pull request."""
        payload: dict[str, Any] = {
            "event": review.event,
            "comments": [
                {
                    "path": c.path,
                    "line": c.line,
                    "body": c.body,
                }
                for c in review.comments
            ],
        }

        data = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/pulls/{pr_number}/reviews",
            json=payload,
        )

        if not isinstance(data, dict):
            raise GitHubError("Unexpected response format")

        logger.info(
            "Review submitted",
            owner=owner,
            repo=repo,
            pr_number=pr_number,
            comment_count=len(review.comments),
        )

        return data
