"""Parse and build FHIR resource URLs.

A resource is addressed as ``Type/id`` or ``Type/id/_history/version``,
either relative to a server base URL or as part of an absolute URL whose
path may start with any number of server-root segments.
"""

from __future__ import annotations

import re
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, Field

from ..errors import InvalidArgumentError
from .paths import build_url, strip_query

_HISTORY = "_history"
_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z0-9]+|[A-Z]")
_SEPARATORS_RE = re.compile(r"[^A-Za-z0-9]+")


class ResourceLocator(BaseModel):
    """Identity of a FHIR resource parsed from a URL."""

    type: str = Field(..., description="Resource type, CamelCase or keyword form")
    id: str = Field(..., description="Logical resource id")
    version: str | None = Field(default=None, description="Version id (vread)")

    def relative_url(self) -> str:
        """Render as ``Type/id`` or ``Type/id/_history/version``."""
        parts = [resource_type_name(self.type), self.id]
        if self.version is not None:
            parts += [_HISTORY, self.version]
        return "/".join(parts)


# ------------------------------------------------------------------
# Resource type names
# ------------------------------------------------------------------

def _words(name: str) -> list[str]:
    words: list[str] = []
    for chunk in _SEPARATORS_RE.split(name):
        words.extend(_WORD_RE.findall(chunk))
    return words


def resource_type_name(name: str) -> str:
    """Canonical CamelCase FHIR type name: 'diagnostic-report' -> 'DiagnosticReport'."""
    return "".join(w[:1].upper() + w[1:].lower() for w in _words(name))


def resource_type_keyword(name: str) -> str:
    """Lowercase-hyphenated form: 'DiagnosticReport' -> 'diagnostic-report'."""
    return "-".join(w.lower() for w in _words(name))


def _format_type(name: str, keywordize: bool) -> str:
    return resource_type_keyword(name) if keywordize else resource_type_name(name)


def _locator(parts: list[str], keywordize: bool) -> ResourceLocator | None:
    """Build a locator from exactly two or four (versioned) path segments."""
    if not all(parts):
        return None
    if len(parts) == 2 and _HISTORY not in parts:
        return ResourceLocator(type=_format_type(parts[0], keywordize), id=parts[1])
    if len(parts) == 4 and parts[2] == _HISTORY:
        return ResourceLocator(
            type=_format_type(parts[0], keywordize),
            id=parts[1],
            version=parts[3],
        )
    return None


# ------------------------------------------------------------------
# Parsing
# ------------------------------------------------------------------

def parse_relative_url(url: str, keywordize: bool = False) -> ResourceLocator | None:
    """Parse ``Type/id`` or ``Type/id/_history/version``; None if unparseable.

    If keywordize is True the returned type is in lowercase-hyphenated
    form instead of CamelCase.
    """
    return _locator(strip_query(url).split("/"), keywordize)


def parse_absolute_url(url: str, keywordize: bool = False) -> ResourceLocator | None:
    """Parse the trailing resource segments of an absolute URL; None if unparseable."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return None
    parts = path.rstrip("/").split("/")
    if len(parts) > 4 and parts[-2] == _HISTORY:
        return _locator(parts[-4:], keywordize)
    if len(parts) > 2:
        return _locator(parts[-2:], keywordize)
    return None


def is_absolute_url(value: Any) -> bool:
    """Return True if value parses as a fully-qualified URL.

    Raises:
        InvalidArgumentError: if value is not a non-empty string.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError("Invalid URL or non-string value.")
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return bool(parts.scheme and parts.netloc)


def parse_url(url: str, keywordize: bool = False) -> ResourceLocator | None:
    """Parse a relative or absolute FHIR resource URL.

    Detects which kind of URL was given; prefer this over the specific
    parsers unless the kind is already known.
    """
    if is_absolute_url(url):
        return parse_absolute_url(url, keywordize)
    return parse_relative_url(url, keywordize)


# ------------------------------------------------------------------
# Conversion
# ------------------------------------------------------------------

def absolute_to_relative_url(url: str | None) -> str | None:
    """'http://server/fhir/Patient/1' -> 'Patient/1'. None if blank or unparseable."""
    if not isinstance(url, str) or not url.strip():
        return None
    locator = parse_absolute_url(url)
    if locator is None:
        return None
    return locator.relative_url()


def relative_to_absolute_url(base_url: str | None, relative_url: str | None) -> str | None:
    """Combine a server base URL and a relative resource URL. None if either is blank."""
    if not base_url or not base_url.strip() or not relative_url or not relative_url.strip():
        return None
    path, _, query = relative_url.partition("?")
    try:
        return build_url(base_url, path, query)
    except ValueError:
        return None
