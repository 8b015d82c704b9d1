"""Pure URL helpers shared by the record model and enrichment heuristics.

Every function here is a deterministic string transformation — no
network access, no DNS lookups.
"""

from __future__ import annotations

import re
from urllib.parse import unquote, urlsplit

SUPPORTED_SCHEMES: frozenset[str] = frozenset(
    {"http", "https", "rtsp", "rtmp", "rtmps", "mms"}
)
"""URL schemes the player can stream from."""

VIDEO_EXTENSION_PATTERN: re.Pattern[str] = re.compile(r"\.(mp4|mkv|avi|mov|m4v|3gp|webm|flv)$")
"""Lower-case extensions only; ``Movie.MP4`` keeps its suffix in the title."""

FALLBACK_TITLE: str = "Network Video"


def is_supported_network_uri(url: str) -> bool:
    """Return ``True`` when *url* has a streamable scheme and a host."""
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return False
    return parts.scheme.lower() in SUPPORTED_SCHEMES and bool(parts.netloc)


def hostname_of(url: str) -> str | None:
    """Return the host component of *url*, or ``None``."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def title_from_url(url: str) -> str:
    """Derive a display title from the last path segment of *url*.

    Falls back to ``"Video from <host>"`` and finally to
    :data:`FALLBACK_TITLE`.
    """
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return FALLBACK_TITLE

    filename = unquote(parts.path).rsplit("/", 1)[-1]
    if filename:
        return VIDEO_EXTENSION_PATTERN.sub("", filename)
    if host:
        return f"Video from {host}"
    return FALLBACK_TITLE


def scrub_surrogates(text: str) -> str:
    """Replace lone surrogates with ``?`` so *text* is valid UTF-8.

    Undecodable bytes in ``sys.argv`` arrive as lone surrogates on POSIX.
    """
    return text.encode("utf-8", "replace").decode("utf-8")
