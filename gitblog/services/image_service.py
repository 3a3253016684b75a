import json
import logging

import httpx

from gitblog.services.github_client import (
    IMAGE_BLOB_MAX_AGE,
    IMAGE_META_MAX_AGE,
    GitHubClient,
)
from gitblog.utils import preview

logger = logging.getLogger(__name__)


async def fetch_image_content(client: GitHubClient, path: str) -> str:
    """
    Resolve an image's blob through its contents-API metadata and return the
    blob's Base64 content. Any failure yields an empty string.
    """
    try:
        meta_res = await client.get_content(path, IMAGE_META_MAX_AGE)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching image content ({path}): {e}")
        return ""

    meta_text = meta_res.text
    if not meta_res.is_success:
        logger.error(
            f"Error fetching image content ({path}): {meta_res.status_code} "
            f"{meta_res.reason_phrase} - {preview(meta_text)}"
        )
        return ""

    try:
        meta_json = json.loads(meta_text)
    except ValueError as e:
        logger.error(
            f"Error parsing image content JSON ({path}): {e} "
            f"body preview: {preview(meta_text)}"
        )
        return ""

    git_url = meta_json.get("git_url") if isinstance(meta_json, dict) else None
    if not git_url:
        logger.warning(f"No blob URL for image: {path}")
        return ""

    try:
        blob_res = await client.get(git_url, IMAGE_BLOB_MAX_AGE)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error(f"Error fetching image blob ({path}): {e}")
        return ""

    blob_text = blob_res.text
    if not blob_res.is_success:
        logger.error(
            f"Error fetching image blob ({path}): {blob_res.status_code} "
            f"{blob_res.reason_phrase} - {preview(blob_text)}"
        )
        return ""

    try:
        blob_json = json.loads(blob_text)
    except ValueError as e:
        logger.error(
            f"Error parsing image blob JSON ({path}): {e} "
            f"body preview: {preview(blob_text)}"
        )
        return ""

    content = blob_json.get("content") if isinstance(blob_json, dict) else None
    return content or ""


def get_content_type_from_filename(filename: str) -> str:
    """
    Determine content type from file extension
    """
    filename = filename.lower()
    if filename.endswith((".jpg", ".jpeg")):
        return "image/jpeg"
    elif filename.endswith(".png"):
        return "image/png"
    elif filename.endswith(".gif"):
        return "image/gif"
    elif filename.endswith(".svg"):
        return "image/svg+xml"
    elif filename.endswith(".webp"):
        return "image/webp"
    else:
        return "application/octet-stream"
