import argparse
import asyncio
import json
import logging
import sys

import httpx

from gitblog.services.github_client import GitHubClient
from gitblog.services.posts_service import ContentService
from gitblog.settings import settings

logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT)


async def render_listing(dir: str | None) -> list[dict]:
    async with create_http_client() as http:
        service = ContentService(GitHubClient(http, settings), settings)
        posts = await service.get_posts_props(dir)
        return [post.model_dump() for post in posts]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Print the post listing as JSON")
    parser.add_argument("--dir", help="only list posts of this sub-directory")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper()))
    try:
        posts = asyncio.run(render_listing(args.dir))
    except Exception as e:
        logger.error(f"Prefetch failed: {e}", exc_info=True)
        return 1

    json.dump(posts, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
