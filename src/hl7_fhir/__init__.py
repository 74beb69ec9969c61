"""Client for HL7 FHIR RESTful servers speaking JSON."""

from .client import (
    FHIRClient,
    RequestOptions,
    collect_resources,
    find_resource_in,
    get_contained,
    next_page_url,
)
from .errors import (
    FHIRError,
    FHIRProtocolError,
    FHIRValidationError,
    InvalidArgumentError,
    PageLimitExceeded,
)
from .resources import get_extension, get_extension_value, is_bundle, is_resource
from .search import between, compile_search, eq, gt, gte, lt, lte, namespaced
from .urls import (
    ResourceLocator,
    absolute_to_relative_url,
    is_absolute_url,
    parse_absolute_url,
    parse_relative_url,
    parse_url,
    relative_to_absolute_url,
)

__all__ = [
    "FHIRClient",
    "FHIRError",
    "FHIRProtocolError",
    "FHIRValidationError",
    "InvalidArgumentError",
    "PageLimitExceeded",
    "RequestOptions",
    "ResourceLocator",
    "absolute_to_relative_url",
    "between",
    "collect_resources",
    "compile_search",
    "eq",
    "find_resource_in",
    "get_contained",
    "get_extension",
    "get_extension_value",
    "gt",
    "gte",
    "is_absolute_url",
    "is_bundle",
    "is_resource",
    "lt",
    "lte",
    "namespaced",
    "next_page_url",
    "parse_absolute_url",
    "parse_relative_url",
    "parse_url",
    "relative_to_absolute_url",
]
