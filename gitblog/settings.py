from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content repository
    GIT_USERNAME: str = ""
    GIT_REPO: str = ""
    GIT_POSTS_DIR: str = "posts"
    GIT_TOKEN: str = ""
    GIT_API_ROOT: str = "https://api.github.com"

    # Outbound HTTP
    HTTP_TIMEOUT: float = 10.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_POST_DATA: bool = False

    # Our own API Key
    BLOG_API_KEY: str = ""

    @property
    def git_content_url(self) -> str:
        root = self.GIT_API_ROOT.rstrip("/")
        return f"{root}/repos/{self.GIT_USERNAME}/{self.GIT_REPO}/contents"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
