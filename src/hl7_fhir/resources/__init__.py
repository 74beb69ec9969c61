from .dates import parse_date, parse_timestamp, to_iso_date, to_iso_timestamp
from .extensions import (
    ExtensionValueKind,
    extension_value_kind,
    get_extension,
    get_extension_value,
)
from .predicates import is_bundle, is_resource, validate_bundle, validate_resource

__all__ = [
    "ExtensionValueKind",
    "extension_value_kind",
    "get_extension",
    "get_extension_value",
    "is_bundle",
    "is_resource",
    "parse_date",
    "parse_timestamp",
    "to_iso_date",
    "to_iso_timestamp",
    "validate_bundle",
    "validate_resource",
]
