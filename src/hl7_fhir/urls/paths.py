"""URL path and query-string helpers."""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

_REPEATED_SLASHES = re.compile(r"/+")


def join_paths(*paths: str | None) -> str:
    """Join path fragments with '/' and collapse repeated slashes. None is skipped."""
    joined = "/".join(p for p in paths if p is not None)
    return _REPEATED_SLASHES.sub("/", joined)


def strip_query(url: str) -> str:
    return url.split("?", 1)[0]


def encode_query(params: Mapping[str, str | list[str]] | None) -> str:
    """URL-encode a parameter mapping. Sequence values become repeated keys."""
    if not params:
        return ""
    return urlencode(
        [(name, value) for name, value in params.items()],
        doseq=True,
        quote_via=quote,
    )


def build_url(base_url: str, path: str, query: str | None = None) -> str:
    """Append ``path`` to the path of ``base_url`` and set its query string."""
    parts = urlsplit(base_url)
    return urlunsplit(
        (parts.scheme, parts.netloc, join_paths(parts.path, path), query or "", "")
    )
