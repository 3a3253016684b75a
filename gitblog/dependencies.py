import httpx
from fastapi import Depends, Request

from gitblog.services.github_client import GitHubClient
from gitblog.services.posts_service import ContentService
from gitblog.services.render_cache import RenderCache
from gitblog.settings import Settings, settings


def get_settings() -> Settings:
    """Small wrapper to allow dependency overrides in tests."""
    return settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_github_client(
    http: httpx.AsyncClient = Depends(get_http_client),
    current_settings: Settings = Depends(get_settings),
) -> GitHubClient:
    return GitHubClient(http, current_settings)


def get_content_service(
    client: GitHubClient = Depends(get_github_client),
    current_settings: Settings = Depends(get_settings),
) -> ContentService:
    # a fresh cache per request keeps memoization scoped to one render pass
    return ContentService(client, current_settings, cache=RenderCache())
