# core/resources/embed.py
"""Rewrite provider share links into embeddable preview URLs."""

import re
from urllib.parse import parse_qs, urlsplit

from .classifier import parse_resource_url, presentation_provider
from .types import ResourceType


GDRIVE_FILE_PATH = re.compile(r"/file/d/([a-zA-Z0-9_-]+)")
GDRIVE_ID_PARAM = re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")

SLIDES_EMBED_SUFFIX = "/embed?start=false&loop=false&delayms=3000"
# Only an exact /edit or /preview last segment; ids may start with either word.
SLIDES_TAIL = re.compile(r"/(?:edit|preview)/?$")


def extract_gdrive_id(url: str) -> str | None:
    """Drive file id from a /file/d/{id} path, then from an id= parameter."""
    match = GDRIVE_FILE_PATH.search(url)
    if match:
        return match.group(1)
    match = GDRIVE_ID_PARAM.search(url)
    if match:
        return match.group(1)
    return None


def _gamma_embed(url: str) -> str:
    if "/embed/" in url:
        return url
    return url.replace("/docs/", "/embed/", 1)


def _canva_embed(url: str) -> str:
    parts = urlsplit(url)
    if parts.path.rstrip("/").endswith("/view") and "embed" in parse_qs(parts.query, keep_blank_values=True):
        return url
    base = url.split("?", 1)[0].split("#", 1)[0]
    if base.endswith("/view"):
        return f"{base}?embed"
    return f"{base.rstrip('/')}/view?embed"


def _slides_embed(url: str) -> str:
    base = url.split("#", 1)[0]
    path_part, _sep, _query = base.partition("?")
    if path_part.endswith("/embed"):
        return url
    if SLIDES_TAIL.search(path_part):
        return SLIDES_TAIL.sub("", path_part) + SLIDES_EMBED_SUFFIX
    # Bare presentation link (.../d/{id}) without a trailing action
    return path_part.rstrip("/") + SLIDES_EMBED_SUFFIX


def smart_presentation_embed(url: str) -> str:
    """Embed form of a Gamma, Canva, Google Slides or Pitch link."""
    parts = parse_resource_url(url)
    if parts is None:
        return url

    provider = presentation_provider(parts.hostname or "", parts.path)
    absolute = parts.geturl()
    if provider == "gamma":
        return _gamma_embed(absolute)
    if provider == "canva":
        return _canva_embed(absolute)
    if provider == "slides":
        return _slides_embed(absolute)
    # pitch.com links embed as-is
    return absolute


def to_embed_url(url: str, classification: ResourceType) -> str | None:
    """
    Transform a link into its embeddable form.

    Returns None when a Google Drive link carries no extractable file id;
    callers must treat that as untransformable and fall back. Applying the
    transform to its own output returns the same URL.
    """
    if classification == "gdrive":
        file_id = extract_gdrive_id(url)
        if not file_id:
            return None
        return f"https://drive.google.com/file/d/{file_id}/preview"

    if classification == "smart_presentation":
        return smart_presentation_embed(url)

    return url
