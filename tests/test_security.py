import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient

from gitblog.dependencies import get_settings
from gitblog.security import API_KEY_NAME, get_api_key
from gitblog.settings import Settings


def test_get_api_key_accepts_valid_key():
    settings = Settings(BLOG_API_KEY="secret")

    result = get_api_key(api_key_header="secret", current_settings=settings)
    assert result == "secret"


def test_get_api_key_rejects_invalid_key():
    settings = Settings(BLOG_API_KEY="secret")

    with pytest.raises(HTTPException):
        get_api_key(api_key_header="wrong", current_settings=settings)


def test_get_api_key_rejects_missing_header():
    settings = Settings(BLOG_API_KEY="secret")

    with pytest.raises(HTTPException):
        get_api_key(api_key_header=None, current_settings=settings)  # type: ignore


def test_get_api_key_rejects_everything_when_unconfigured():
    settings = Settings(BLOG_API_KEY="")

    with pytest.raises(HTTPException):
        get_api_key(api_key_header="", current_settings=settings)


def build_app(settings: Settings) -> FastAPI:
    app = FastAPI()
    app.dependency_overrides[get_settings] = lambda: settings

    @app.get("/secure")
    async def secure(key=Depends(get_api_key)):
        return {"ok": True}

    return app


def test_dependency_in_route_accepts_valid_key():
    client = TestClient(build_app(Settings(BLOG_API_KEY="secret")))
    res = client.get("/secure", headers={API_KEY_NAME: "secret"})
    assert res.status_code == 200
    assert res.json() == {"ok": True}


def test_dependency_in_route_rejects_invalid_key():
    client = TestClient(build_app(Settings(BLOG_API_KEY="secret")))
    res = client.get("/secure", headers={API_KEY_NAME: "wrong"})
    assert res.status_code == 403
