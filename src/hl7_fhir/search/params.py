"""Search parameter builders and the FHIR query compiler.

Each operator helper returns a list of ``SearchParameter`` descriptors;
``compile_search`` flattens a sequence of those lists into the mapping
sent to the server. Multiple parameters are ANDed by the server.

    compile_search([
        eq("gender", "male"),
        between("birthdate", date(1970, 1, 1), date(1980, 1, 1)),
        eq(["subject", "identifier"], namespaced("urn:mrn", "12345")),
    ])

reference:
  http://hl7.org/fhir/search.html
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime
from typing import Any, Literal, Union

from pydantic import BaseModel, Field

from ..resources.dates import to_iso_date, to_iso_timestamp

Operator = Literal["=", "<", "<=", ">", ">="]
ParameterName = Union[str, Sequence[str]]

# Backslash first so escapes added by later replacements are not doubled.
_ESCAPES = (("\\", "\\\\"), ("$", "\\$"), (",", "\\,"), ("|", "\\|"))


class NamespacedValue(BaseModel):
    """A value qualified by a coding system, rendered as ``namespace|value``."""

    namespace: str | None = Field(default=None, description="System URI; empty if absent")
    value: Any = Field(..., description="Scalar value within the namespace")


class SearchParameter(BaseModel):
    """A single search predicate: parameter name, comparison operator and value."""

    name: str = Field(..., description="Rendered parameter name, including any :modifier")
    operator: Operator = Field(default="=", description="Comparison prefix")
    value: Any = Field(..., description="Scalar, sequence or NamespacedValue")


def search_param_name(parameter: ParameterName, modifier: str | None = None) -> str:
    """Render a parameter name; sequences are dot-joined field paths."""
    if isinstance(parameter, str):
        name = parameter
    else:
        name = ".".join(str(segment) for segment in parameter)
    if modifier:
        name = f"{name}:{modifier}"
    return name


def _descriptor(
    parameter: ParameterName,
    value: Any,
    operator: Operator,
    modifier: str | None,
) -> SearchParameter:
    return SearchParameter(
        name=search_param_name(parameter, modifier),
        operator=operator,
        value=value,
    )


def eq(parameter: ParameterName, value: Any, modifier: str | None = None) -> list[SearchParameter]:
    return [_descriptor(parameter, value, "=", modifier)]


def lt(parameter: ParameterName, value: Any, modifier: str | None = None) -> list[SearchParameter]:
    return [_descriptor(parameter, value, "<", modifier)]


def lte(parameter: ParameterName, value: Any, modifier: str | None = None) -> list[SearchParameter]:
    return [_descriptor(parameter, value, "<=", modifier)]


def gt(parameter: ParameterName, value: Any, modifier: str | None = None) -> list[SearchParameter]:
    return [_descriptor(parameter, value, ">", modifier)]


def gte(parameter: ParameterName, value: Any, modifier: str | None = None) -> list[SearchParameter]:
    return [_descriptor(parameter, value, ">=", modifier)]


def between(
    parameter: ParameterName,
    low: Any,
    high: Any,
    modifier: str | None = None,
) -> list[SearchParameter]:
    """Exclusive range: ``parameter > low`` and ``parameter < high``."""
    return [
        _descriptor(parameter, low, ">", modifier),
        _descriptor(parameter, high, "<", modifier),
    ]


def namespaced(*args: Any) -> NamespacedValue:
    """``namespaced(value)`` or ``namespaced(namespace, value)``."""
    if len(args) == 1:
        return NamespacedValue(namespace=None, value=args[0])
    if len(args) == 2:
        return NamespacedValue(namespace=args[0], value=args[1])
    raise TypeError(f"namespaced() takes 1 or 2 arguments ({len(args)} given)")


# ------------------------------------------------------------------
# Value formatting
# ------------------------------------------------------------------

def escape_search_value(value: str) -> str:
    for char, escaped in _ESCAPES:
        value = value.replace(char, escaped)
    return value


def format_search_value(value: Any, escape: bool = True) -> str:
    """Render a search value for the wire.

    Escaping applies to plain scalars only. A mapping with ``namespace``
    and ``value`` keys renders like ``namespaced()``. Pass ``escape=False``
    for raw ad-hoc parameters such as ``_count`` or ``_sort``.
    """
    if isinstance(value, (list, tuple)):
        return ",".join(format_search_value(v, escape) for v in value)
    if isinstance(value, Mapping) and "value" in value:
        value = NamespacedValue(namespace=value.get("namespace"), value=value["value"])
    if isinstance(value, NamespacedValue):
        return f"{value.namespace or ''}|{format_search_value(value.value, escape)}"
    if isinstance(value, datetime):
        return to_iso_timestamp(value)
    if isinstance(value, date):
        return to_iso_date(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return escape_search_value(str(value)) if escape else str(value)


def _render(param: SearchParameter) -> str:
    prefix = "" if param.operator == "=" else param.operator
    return prefix + format_search_value(param.value)


def add_query_value(query: dict[str, Any], name: str, value: str | list[str]) -> None:
    """Add a value under name; repeated names accumulate into a list in order."""
    values = value if isinstance(value, list) else [value]
    for v in values:
        if name not in query:
            query[name] = v
        elif isinstance(query[name], list):
            query[name].append(v)
        else:
            query[name] = [query[name], v]


def compile_search(groups: Iterable[Iterable[SearchParameter]]) -> dict[str, str | list[str]]:
    """Flatten descriptor groups into ``{name: value}`` / ``{name: [values...]}``."""
    query: dict[str, Any] = {}
    for group in groups:
        for param in group:
            add_query_value(query, param.name, _render(param))
    return query
