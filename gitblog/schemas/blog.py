import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostData(BaseModel):
    """Front-matter fields of a post. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    thumbnail: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    order: Optional[int] = None
    series: Optional[str] = None

    @field_validator("title", "thumbnail", "description", "series", mode="before")
    @classmethod
    def _stringify(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("date", mode="before")
    @classmethod
    def _convert_date(cls, value):
        if isinstance(value, (datetime.date, datetime.datetime)):
            return value.isoformat()
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("order", mode="before")
    @classmethod
    def _coerce_order(cls, value):
        # anything that is not a whole number is treated as unordered
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        if not value:
            return []
        if not isinstance(value, (list, tuple, set)):
            return [str(value)]
        return [str(item) for item in value if item]


class PostContent(BaseModel):
    data: PostData
    content: str  # Markdown body without front matter
    excerpt: str


class Post(BaseModel):
    slug: str
    data: PostData
    excerpt: str
    content: str


class SeriesData(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class Series(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    meta: SeriesData
