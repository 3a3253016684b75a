import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI

from gitblog.routers import images, posts, series
from gitblog.security import get_api_key
from gitblog.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT, follow_redirects=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = create_http_client()
    logger.info(f"Serving content from {settings.git_content_url}")

    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("HTTP client closed")


app = FastAPI(
    title="gitblog API",
    description="Blog posts and series served from a Git content repository",
    lifespan=lifespan,
)

app.include_router(images.router)
app.include_router(posts.router, dependencies=[Depends(get_api_key)])
app.include_router(series.router, dependencies=[Depends(get_api_key)])


@app.get("/")
async def root():
    return {"message": "gitblog API is running"}
