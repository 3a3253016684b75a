import base64
import json
import textwrap

import httpx

from gitblog.services.github_client import GitHubClient
from gitblog.services.posts_service import ContentService
from gitblog.settings import Settings

API_ROOT = "https://api.test"
CONTENT_PREFIX = "/repos/octo/blog/contents/"


def make_settings(**overrides) -> Settings:
    values = {
        "GIT_USERNAME": "octo",
        "GIT_REPO": "blog",
        "GIT_POSTS_DIR": "posts",
        "GIT_TOKEN": "tkn",
        "GIT_API_ROOT": API_ROOT,
        "LOG_POST_DATA": False,
    }
    values.update(overrides)
    return Settings(**values)


def encode(text: str) -> str:
    # mimic the contents API, which wraps Base64 at 60 columns
    raw = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return "\n".join(raw[i : i + 60] for i in range(0, len(raw), 60))


def file_entry(path: str) -> dict:
    return {"name": path.rsplit("/", 1)[-1], "path": path, "type": "file"}


def dir_entry(path: str) -> dict:
    return {"name": path.rsplit("/", 1)[-1], "path": path, "type": "dir"}


def markdown_file(raw: str) -> dict:
    return {"type": "file", "content": encode(textwrap.dedent(raw).lstrip())}


class FakeGitHub:
    """
    In-memory contents API. Routes map a repo path (or absolute URL) to a
    JSON payload, an httpx.Response, or an exception to raise.
    Unknown paths answer like GitHub does: 404 with a "Not Found" message.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.calls = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        key = url
        if url.startswith(API_ROOT + CONTENT_PREFIX):
            key = url[len(API_ROOT + CONTENT_PREFIX) :]

        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not Found", "status": "404"})

        value = self.routes[key]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, httpx.Response):
            return value
        return httpx.Response(200, text=json.dumps(value))

    def paths_called(self) -> list[str]:
        prefix = API_ROOT + CONTENT_PREFIX
        return [c[len(prefix) :] if c.startswith(prefix) else c for c in self.calls]

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def make_service(fake: FakeGitHub, **overrides) -> ContentService:
    settings = make_settings(**overrides)
    return ContentService(GitHubClient(fake.http_client(), settings), settings)


class FakeContentService:
    """
    Minimal content service stand-in for router tests.
    """

    posts_dir = "posts"

    def __init__(
        self,
        posts=None,
        post=None,
        series_names=None,
        series=None,
        image="",
        error=None,
    ):
        self._posts = posts or []
        self._post = post
        self._series_names = series_names or []
        self._series = series
        self._image = image
        self._error = error
        self.calls = []

    def _maybe_raise(self):
        if self._error is not None:
            raise self._error

    async def get_posts_props(self, dir=None):
        self.calls.append(("get_posts_props", dir))
        self._maybe_raise()
        return self._posts

    async def get_post(self, path):
        self.calls.append(("get_post", path))
        self._maybe_raise()
        return self._post

    async def get_series_props(self):
        self.calls.append(("get_series_props",))
        self._maybe_raise()
        return self._series_names

    async def get_series(self, dir):
        self.calls.append(("get_series", dir))
        self._maybe_raise()
        return self._series

    async def get_image(self, path):
        self.calls.append(("get_image", path))
        return self._image
