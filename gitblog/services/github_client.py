import logging
from typing import Dict, List, Optional

import httpx

from gitblog.settings import Settings
from gitblog.utils import preview

logger = logging.getLogger(__name__)

# Cache-duration hints, in seconds
POSTS_LISTING_MAX_AGE = 300
CONTENT_MAX_AGE = 1200
IMAGE_META_MAX_AGE = 3600 * 24 * 30
IMAGE_BLOB_MAX_AGE = 3600 * 24


class ContentNotFoundError(Exception):
    """Raised when content cannot be loaded; rendered as a 404."""

    def __init__(self, path: str, reason: str = "not found"):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class GitHubFetchError(ContentNotFoundError):
    """Raised when a directory listing cannot be retrieved."""


def get_headers(token: Optional[str] = None) -> Dict[str, str]:
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"token {token}"
    return headers


def cache_control(max_age: int) -> Dict[str, str]:
    return {"Cache-Control": f"max-age={max_age}"}


def is_not_found_payload(payload) -> bool:
    if not isinstance(payload, dict):
        return False
    return payload.get("message") == "Not Found" or str(payload.get("status")) == "404"


class GitHubClient:
    """
    Thin wrapper over an httpx.AsyncClient that speaks the GitHub contents API.
    """

    def __init__(self, http: httpx.AsyncClient, settings: Settings):
        self.http = http
        self.settings = settings

    def content_url(self, path: str) -> str:
        return f"{self.settings.git_content_url}/{path.lstrip('/')}"

    async def get(self, url: str, max_age: int) -> httpx.Response:
        headers = {**get_headers(self.settings.GIT_TOKEN), **cache_control(max_age)}
        return await self.http.get(url, headers=headers)

    async def get_content(self, path: str, max_age: int) -> httpx.Response:
        return await self.get(self.content_url(path), max_age)

    async def fetch_all(self, path: str, max_age: int) -> List[dict]:
        """Return every entry of a directory listing, following Link pagination."""
        url: Optional[str] = self.content_url(path)
        entries: List[dict] = []

        while url:
            try:
                response = await self.get(url, max_age)
            except httpx.HTTPError as e:
                logger.error(f"Error fetching directory ({path}): {e}")
                raise GitHubFetchError(path, f"request failed: {e}") from e

            if response.status_code == 404:
                logger.warning(f"Directory not found: {path}")
                raise ContentNotFoundError(path, "directory not found")

            if not response.is_success:
                logger.error(
                    f"Error fetching directory ({path}): {response.status_code} "
                    f"{response.reason_phrase} - {preview(response.text)}"
                )
                raise GitHubFetchError(path, f"HTTP {response.status_code}")

            try:
                page = response.json()
            except ValueError as e:
                logger.error(
                    f"Error parsing directory JSON ({path}): {e} "
                    f"body preview: {preview(response.text)}"
                )
                raise GitHubFetchError(path, "invalid JSON") from e

            if is_not_found_payload(page):
                logger.warning(f"Directory not found: {path}")
                raise ContentNotFoundError(path, "directory not found")

            if not isinstance(page, list):
                logger.error(
                    f"Directory listing for {path} is not a list: "
                    f"{preview(response.text)}"
                )
                raise GitHubFetchError(path, "not a directory")

            entries.extend(page)
            url = response.links.get("next", {}).get("url")

        return entries
