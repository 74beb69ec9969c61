"""FHIR extension value resolution.

An extension element carries its value in exactly one ``value[x]`` field
(or a nested ``extension`` list). The known shapes form a closed set,
``ExtensionValueKind``; anything else is ``UNRECOGNIZED`` and resolves to
``None`` rather than raising.

reference:
  http://hl7.org/fhir/extensibility.html
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from enum import Enum
from typing import Any

from .dates import parse_date, parse_timestamp


class ExtensionValueKind(str, Enum):
    INTEGER = "valueInteger"
    DECIMAL = "valueDecimal"
    DATE_TIME = "valueDateTime"
    DATE = "valueDate"
    INSTANT = "valueInstant"
    STRING = "valueString"
    URI = "valueUri"
    BOOLEAN = "valueBoolean"
    CODE = "valueCode"
    CODING = "valueCoding"
    RESOURCE = "valueResource"
    EXTENSION = "extension"
    UNRECOGNIZED = "unrecognized"


_KNOWN_FIELDS = {
    kind.value: kind
    for kind in ExtensionValueKind
    if kind is not ExtensionValueKind.UNRECOGNIZED
}


def extension_value_kind(extension: Mapping[str, Any] | None) -> ExtensionValueKind:
    """Classify an extension element by the value field it carries."""
    if not isinstance(extension, Mapping):
        return ExtensionValueKind.UNRECOGNIZED
    for key in extension:
        if key in _KNOWN_FIELDS:
            return _KNOWN_FIELDS[key]
    return ExtensionValueKind.UNRECOGNIZED


def _nested_value(extension: Mapping[str, Any]) -> Any:
    nested = extension["extension"]
    if isinstance(nested, Mapping):
        return get_extension_value(nested)
    if isinstance(nested, list) and nested:
        return get_extension_value(nested[0])
    return None


_RESOLVERS: dict[ExtensionValueKind, Callable[[Mapping[str, Any]], Any]] = {
    ExtensionValueKind.INTEGER:   lambda ext: ext["valueInteger"],
    ExtensionValueKind.DECIMAL:   lambda ext: ext["valueDecimal"],
    ExtensionValueKind.DATE_TIME: lambda ext: parse_timestamp(ext["valueDateTime"]),
    ExtensionValueKind.DATE:      lambda ext: parse_date(ext["valueDate"]),
    ExtensionValueKind.INSTANT:   lambda ext: parse_timestamp(ext["valueInstant"]),
    ExtensionValueKind.STRING:    lambda ext: ext["valueString"],
    ExtensionValueKind.URI:       lambda ext: ext["valueUri"],
    ExtensionValueKind.BOOLEAN:   lambda ext: bool(ext["valueBoolean"]),
    ExtensionValueKind.CODE:      lambda ext: ext["valueCode"],
    ExtensionValueKind.CODING:    lambda ext: (ext["valueCoding"] or {}).get("code"),
    ExtensionValueKind.RESOURCE:  lambda ext: (ext["valueResource"] or {}).get("reference"),
    ExtensionValueKind.EXTENSION: _nested_value,
}


def get_extension_value(extension: Mapping[str, Any] | None) -> Any:
    """Return the value of a single extension element, or None if unrecognized."""
    kind = extension_value_kind(extension)
    resolver = _RESOLVERS.get(kind)
    if resolver is None:
        return None
    return resolver(extension)  # type: ignore[arg-type]


def get_extension(extensions: Iterable[Mapping[str, Any]] | None, url: str) -> Any:
    """Return the value of the first extension whose ``url`` matches, else None."""
    for extension in extensions or []:
        if extension.get("url") == url:
            return get_extension_value(extension)
    return None
