# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Async client for the two GitHub REST endpoints the pipeline needs.

A single AsyncClient is shared by every classification task; it is only read
from after construction.
"""

from typing import Any
from urllib.parse import quote, urlparse

import httpx
from loguru import logger

from changelog.constants import DEFAULT_TIMEOUT_S, GITHUB_API_URL, GITHUB_WEB_URL
from changelog.core.github.models import Comparison, PullRequest


class GitHubAPIError(Exception):
    """A GitHub request failed or returned an error status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


def api_base_url(enterprise: str | None) -> str:
    """
    API root for github.com or an Enterprise installation.

    Enterprise URLs without an /api segment get /api/v3 appended.
    """
    if not enterprise:
        return GITHUB_API_URL
    base = enterprise.rstrip("/")
    parsed = urlparse(base)
    if "/api" in parsed.path or parsed.netloc.startswith("api."):
        return base
    return f"{base}/api/v3"


def web_base_url(enterprise: str | None) -> str:
    """Browser-facing root, used for commit and compare links."""
    if not enterprise:
        return GITHUB_WEB_URL
    base = enterprise.rstrip("/")
    for suffix in ("/api/v3", "/api"):
        if base.endswith(suffix):
            return base[: -len(suffix)]
    return base


class GitHubClient:
    """Client for the GitHub REST API v3"""

    def __init__(
        self,
        token: str | None = None,
        enterprise: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_S,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.token = token
        self.base_url = api_base_url(enterprise)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._get_headers(),
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "changelog",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, endpoint: str) -> Any:
        logger.debug(f"GET {self.base_url}{endpoint}")
        try:
            response = await self._client.get(endpoint)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"Request to {endpoint} failed: {e}") from e

        if response.status_code >= 400:
            message = response.text or "Unknown error"
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message", "Unknown error")
            raise GitHubAPIError(
                f"GitHub API error ({response.status_code}) for {endpoint}: {message}",
                response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GitHub API returned a non-JSON body for {endpoint}",
                response.status_code,
            ) from e

    async def compare_commits(
        self, owner: str, repo: str, base: str, head: str
    ) -> Comparison:
        """Commits reachable from head but not base, oldest first."""
        endpoint = (
            f"/repos/{quote(owner)}/{quote(repo)}/compare/"
            f"{quote(base, safe='/')}...{quote(head, safe='/')}"
        )
        return Comparison.model_validate(await self._get(endpoint))

    async def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequest:
        endpoint = f"/repos/{quote(owner)}/{quote(repo)}/pulls/{number}"
        return PullRequest.model_validate(await self._get(endpoint))

    async def aclose(self) -> None:
        await self._client.aclose()
