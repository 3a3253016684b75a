import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from gitblog import dependencies as deps
from gitblog.schemas.blog import Series
from gitblog.services.github_client import ContentNotFoundError
from gitblog.services.posts_service import ContentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/series", response_model=List[str])
async def list_series(service: ContentService = Depends(deps.get_content_service)):
    """Get the names of all series directories."""
    try:
        return await service.get_series_props()
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Series not found")
    except Exception as e:
        logger.error(f"Unexpected error listing series: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve series")


@router.get("/series/{name}", response_model=Series)
async def get_series(
    name: str,
    service: ContentService = Depends(deps.get_content_service),
):
    try:
        return await service.get_series(name)
    except ContentNotFoundError:
        raise HTTPException(status_code=404, detail="Series not found")
    except Exception as e:
        logger.error(f"Unexpected error retrieving series {name}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve series")
