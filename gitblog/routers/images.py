import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from gitblog import dependencies as deps
from gitblog.services.content_parser import decode_base64_bytes
from gitblog.services.image_service import get_content_type_from_filename
from gitblog.services.posts_service import ContentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/images/{image_path:path}")
async def get_image(
    image_path: str,
    service: ContentService = Depends(deps.get_content_service),
):
    """
    Serve images straight from the content repository
    """
    encoded = await service.get_image(image_path)
    image_data = decode_base64_bytes(encoded) if encoded else None

    if not image_data:
        raise HTTPException(status_code=404, detail="Image not found")

    # Set proper content length header
    headers = {
        "Content-Length": str(len(image_data)),
        "Accept-Ranges": "bytes",
    }

    return Response(
        content=image_data,
        media_type=get_content_type_from_filename(image_path),
        headers=headers,
    )
