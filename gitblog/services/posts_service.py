import asyncio
import json
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from gitblog.schemas.blog import Post, PostContent, PostData, Series, SeriesData
from gitblog.services import image_service
from gitblog.services.content_parser import (
    decode_base64_text,
    markdown_to_plain_text,
    split_front_matter,
)
from gitblog.services.github_client import (
    CONTENT_MAX_AGE,
    POSTS_LISTING_MAX_AGE,
    ContentNotFoundError,
    GitHubClient,
    is_not_found_payload,
)
from gitblog.services.post_sorter import sort_posts, sort_series_posts
from gitblog.services.render_cache import RenderCache, memoized
from gitblog.settings import Settings
from gitblog.utils import make_excerpt, preview

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 200


class ContentService:
    """
    Loads posts, series and images from the content repository.
    One instance serves one render pass; its cache dies with it.
    """

    def __init__(
        self,
        client: GitHubClient,
        settings: Settings,
        cache: Optional[RenderCache] = None,
    ):
        self.client = client
        self.settings = settings
        self.cache = cache if cache is not None else RenderCache()

    @property
    def posts_dir(self) -> str:
        return self.settings.GIT_POSTS_DIR

    @memoized
    async def get_post_content(self, path: str) -> PostContent:
        try:
            response = await self.client.get_content(path, CONTENT_MAX_AGE)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching post content ({path}): {e}")
            raise ContentNotFoundError(path, f"request failed: {e}") from e

        body = response.text
        if not response.is_success:
            logger.error(
                f"Error fetching post content ({path}): {response.status_code} "
                f"{response.reason_phrase} - {preview(body)}"
            )
            raise ContentNotFoundError(path, f"HTTP {response.status_code}")

        try:
            file_json = json.loads(body)
        except ValueError as e:
            logger.error(
                f"Error parsing post content JSON ({path}): {e} "
                f"body preview: {preview(body)}"
            )
            raise ContentNotFoundError(path, "invalid JSON") from e

        if is_not_found_payload(file_json):
            raise ContentNotFoundError(path)

        try:
            metadata, content = split_front_matter(
                decode_base64_text(file_json.get("content", ""))
            )
        except Exception as e:
            logger.error(f"Error decoding post content ({path}): {e}")
            raise ContentNotFoundError(path, "unreadable content") from e

        path_parts = path.split("/")
        if len(path_parts) > 2:
            metadata = {**metadata, "series": path_parts[1]}

        try:
            data = PostData.model_validate(metadata)
        except (ValidationError, TypeError) as e:
            logger.error(f"Invalid front matter ({path}): {e}")
            raise ContentNotFoundError(path, "invalid front matter") from e

        excerpt = make_excerpt(markdown_to_plain_text(content), EXCERPT_LENGTH)

        if self.settings.LOG_POST_DATA:
            summary = {
                "path": path,
                "title": data.title,
                "tags": data.tags,
                "hasThumbnail": bool(data.thumbnail),
                "excerptLength": len(excerpt),
            }
            logger.info(f"[post-fetched] {json.dumps(summary)}")

        return PostContent(data=data, content=content, excerpt=excerpt)

    @memoized
    async def get_series_props(self) -> List[str]:
        data = await self.client.fetch_all(self.posts_dir, CONTENT_MAX_AGE)
        return [item["name"] for item in data if item.get("type") == "dir"]

    async def _create_post_from_file(self, item: dict, dir: str) -> Optional[Post]:
        post = await self.get_post_content(f"{dir}/{item['name']}")
        if not post.data.title:
            return None
        slug = (
            item.get("path", "")
            .removeprefix(f"{self.posts_dir}/")
            .removesuffix(".md")
        )
        return Post(slug=slug, data=post.data, excerpt=post.excerpt, content=post.content)

    async def _create_posts_from_directory(self, item: dict) -> List[Post]:
        dir_path = f"{self.posts_dir}/{item['name']}"
        dir_content = await self.client.fetch_all(dir_path, CONTENT_MAX_AGE)

        markdown_files = [
            sub_item
            for sub_item in dir_content
            if sub_item.get("type") == "file" and _is_markdown(sub_item)
        ]
        dir_files = await asyncio.gather(
            *(self._create_post_from_file(sub_item, dir_path) for sub_item in markdown_files)
        )
        return [post for post in dir_files if post is not None]

    @memoized
    async def get_posts_props(self, dir: Optional[str] = None) -> List[Post]:
        target_dir = f"{self.posts_dir}/{dir}" if dir else self.posts_dir
        data = await self.client.fetch_all(target_dir, POSTS_LISTING_MAX_AGE)

        async def build(item: dict):
            if item.get("type") == "file" and _is_markdown(item):
                return await self._create_post_from_file(item, target_dir)
            if not dir and item.get("type") == "dir":
                return await self._create_posts_from_directory(item)
            return None

        results = await asyncio.gather(*(build(item) for item in data))

        posts: List[Post] = []
        for result in results:
            if result is None:
                continue
            if isinstance(result, list):
                posts.extend(result)
            else:
                posts.append(result)
        return sort_posts(posts)

    @memoized
    async def get_series(self, dir: str) -> Series:
        posts, meta = await asyncio.gather(
            self.get_posts_props(dir), self._get_series_meta(dir)
        )
        return Series(posts=sort_series_posts(posts), meta=meta)

    async def _get_series_meta(self, dir: str) -> SeriesData:
        path = f"{self.posts_dir}/{dir}/meta.json"
        default = SeriesData(name=dir)

        try:
            response = await self.client.get_content(path, CONTENT_MAX_AGE)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching series metadata ({path}): {e}")
            return default

        try:
            file_json = response.json()
        except ValueError as e:
            logger.error(
                f"Error parsing series metadata JSON ({path}): {e} "
                f"body preview: {preview(response.text)}"
            )
            return default

        if is_not_found_payload(file_json) or response.status_code == 404:
            logger.info(f"No metadata for series {dir}, using defaults")
            return default

        if not response.is_success:
            logger.error(
                f"Error fetching series metadata ({path}): {response.status_code} "
                f"{response.reason_phrase} - {preview(response.text)}"
            )
            return default

        try:
            meta = json.loads(decode_base64_text(file_json.get("content", "")))
            return SeriesData(**{"name": dir, **meta})
        except Exception as e:
            logger.warning(f"Unusable series metadata ({path}): {e}")
            return default

    async def get_post(self, path: str) -> PostContent:
        return await self.get_post_content(path)

    @memoized
    async def get_image(self, path: str) -> str:
        return await image_service.fetch_image_content(self.client, path)


def _is_markdown(item: dict) -> bool:
    return str(item.get("name", "")).endswith(".md")
