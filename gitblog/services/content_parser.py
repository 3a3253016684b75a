import base64
import binascii
import logging
from typing import Tuple

import frontmatter
import markdown
from bs4 import BeautifulSoup

from gitblog.utils import collapse_whitespace

logger = logging.getLogger(__name__)


def decode_base64_text(encoded: str) -> str:
    """Decode a contents-API `content` field (Base64, newline-wrapped) to text."""
    return base64.b64decode(encoded or "").decode("utf-8")


def decode_base64_bytes(encoded: str) -> bytes | None:
    try:
        return base64.b64decode(encoded, validate=False)
    except (binascii.Error, ValueError):
        logger.warning("Failed to decode base64 payload")
        return None


def split_front_matter(text: str) -> Tuple[dict, str]:
    """Return (metadata, body) for a Markdown document with optional front matter."""
    parsed = frontmatter.loads(text)
    return dict(parsed.metadata or {}), parsed.content


def markdown_to_plain_text(md: str) -> str:
    html = markdown.markdown(md or "", extensions=["fenced_code", "tables"])
    text = BeautifulSoup(html, "html.parser").get_text(" ")
    return collapse_whitespace(text)
