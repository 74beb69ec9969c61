from .locator import (
    ResourceLocator,
    absolute_to_relative_url,
    is_absolute_url,
    parse_absolute_url,
    parse_relative_url,
    parse_url,
    relative_to_absolute_url,
    resource_type_keyword,
    resource_type_name,
)
from .paths import build_url, encode_query, join_paths, strip_query

__all__ = [
    "ResourceLocator",
    "absolute_to_relative_url",
    "build_url",
    "encode_query",
    "is_absolute_url",
    "join_paths",
    "parse_absolute_url",
    "parse_relative_url",
    "parse_url",
    "relative_to_absolute_url",
    "resource_type_keyword",
    "resource_type_name",
    "strip_query",
]
