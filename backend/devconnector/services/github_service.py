"""
DevConnector Backend — GitHub Repository Proxy
================================================

What:  Fetches a user's most recent public repositories from the GitHub API.
How:   One GET per call through a shared `httpx.AsyncClient`, authenticated
       with the configured service token. The upstream JSON is returned
       unchanged.
Who:   Called by GET /api/profile/github/{username}.

No retries and no explicit timeout: the call inherits the httpx client's
default timeout. Any non-200 answer is reported as a missing GitHub
profile; transport errors fall through to the generic 500 handler.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from devconnector.config import Settings
from devconnector.exceptions import UpstreamError

logger = logging.getLogger(__name__)

USER_AGENT = "devconnector-backend"


class GitHubService:
    def __init__(self, settings: Settings, client: httpx.AsyncClient):
        self.settings = settings
        self.client = client

    def _headers(self) -> dict:
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
        }
        if self.settings.github_token:
            headers["Authorization"] = f"token {self.settings.github_token}"
        return headers

    async def list_repositories(self, username: str) -> Any:
        """
        Returns the user's repositories, oldest-created first, one page of
        `github_repo_count` items (5 by default).

        Raises:
            UpstreamError: GitHub answered with anything but 200
        """
        url = f"{self.settings.github_api_url.rstrip('/')}/users/{quote(username, safe='')}/repos"
        params = {"per_page": self.settings.github_repo_count, "sort": "created:asc"}

        response = await self.client.get(url, params=params, headers=self._headers())
        if response.status_code != 200:
            logger.info(
                "GitHub returned %d for user %s", response.status_code, username
            )
            raise UpstreamError(upstream_status=response.status_code, username=username)

        return response.json()
