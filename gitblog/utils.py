import re

_WHITESPACE = re.compile(r"\s+")
_ELLIPSIS = "..."


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def make_excerpt(text: str, length: int = 200) -> str:
    """Plain-text summary of at most `length` characters, ellipsis included."""
    text = collapse_whitespace(text or "")
    if len(text) <= length:
        return text
    return text[: length - len(_ELLIPSIS)].rstrip() + _ELLIPSIS


def preview(body: str, length: int = 200) -> str:
    """First characters of a response body, for log lines."""
    return (body or "")[:length]
