import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from gitblog import dependencies as deps
from gitblog.schemas.blog import Post, PostContent
from gitblog.services.github_client import ContentNotFoundError
from gitblog.services.posts_service import ContentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=List[Post])
async def list_posts(
    dir: Optional[str] = None,
    service: ContentService = Depends(deps.get_content_service),
):
    """Get all posts, or the posts of one sub-directory."""
    try:
        return await service.get_posts_props(dir)
    except ContentNotFoundError as e:
        logger.warning(f"Post listing hit missing content: {e}")
        raise HTTPException(status_code=404, detail="Post not found")
    except Exception as e:
        logger.error(f"Unexpected error listing posts: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve posts")


@router.get("/posts/{slug:path}", response_model=PostContent)
async def get_post(
    slug: str,
    service: ContentService = Depends(deps.get_content_service),
):
    """Get a single post by slug."""
    path = f"{service.posts_dir}/{slug}.md"
    try:
        return await service.get_post(path)
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    except Exception as e:
        logger.error(f"Unexpected error retrieving post {slug}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve post")
