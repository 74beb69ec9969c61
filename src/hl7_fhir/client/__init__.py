from .bundles import (
    base_url_from_bundle,
    collect_resources,
    fetch_all,
    fetch_next_page,
    find_resource_in,
    get_contained,
    next_page_url,
)
from .fhir_client import FHIRClient
from .options import RequestOptions
from .transport import FHIR_JSON, FHIRTransport, Method, is_fhir_response

__all__ = [
    "FHIRClient",
    "FHIRTransport",
    "FHIR_JSON",
    "Method",
    "RequestOptions",
    "base_url_from_bundle",
    "collect_resources",
    "fetch_all",
    "fetch_next_page",
    "find_resource_in",
    "get_contained",
    "is_fhir_response",
    "next_page_url",
]
