import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import httpx
from devconnect.core.config import Settings
from devconnect.core.errors import NotFound, UpstreamUnavailable

logger = logging.getLogger(__name__)

REPO_LIMIT = 5


class GithubClient:
    """
    Looks up a user's public repositories on GitHub.

    Any non-200 answer (unknown user, rate limit, ...) is reported as a
    missing GitHub profile. Only transport failures count as the upstream
    being unavailable. There are no retries.
    """

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "GithubClient":
        return cls(
            base_url=settings.GITHUB_API_URL,
            token=settings.GITHUB_TOKEN,
            timeout=settings.GITHUB_TIMEOUT_SECONDS,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": "devconnect-api",
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_repos(self, username: str) -> List[Dict[str, Any]]:
        """Return up to five repositories of username, oldest first"""
        params = {"per_page": REPO_LIMIT, "sort": "created", "direction": "asc"}
        path = f"/users/{quote(username, safe='')}/repos"

        try:
            with httpx.Client(base_url=self.base_url, timeout=self.timeout,
                              transport=self._transport) as client:
                response = client.get(path, params=params, headers=self._headers())
        except httpx.HTTPError as e:
            logger.error("GitHub request for %s failed: %s", username, e)
            raise UpstreamUnavailable()

        if response.status_code != 200:
            logger.info("GitHub returned %s for %s", response.status_code, username)
            raise NotFound("No Github profile found")

        return response.json()
