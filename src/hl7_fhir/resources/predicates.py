"""Structural predicates for FHIR JSON payloads.

These are the only checks this package applies to resource content:
a bundle is any mapping whose resourceType is "Bundle"; a resource is
any mapping with a string resourceType that is not "Bundle".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..errors import FHIRValidationError


def is_resource(value: Any) -> bool:
    """Return True if value is a FHIR resource (not a bundle)."""
    return (
        isinstance(value, Mapping)
        and isinstance(value.get("resourceType"), str)
        and value["resourceType"] != "Bundle"
    )


def is_bundle(value: Any) -> bool:
    """Return True if value is a FHIR bundle."""
    return isinstance(value, Mapping) and value.get("resourceType") == "Bundle"


def validate_resource(value: Any) -> None:
    if not is_resource(value):
        raise FHIRValidationError("Not a valid FHIR resource")


def validate_bundle(value: Any) -> None:
    if not is_bundle(value):
        raise FHIRValidationError("Not a valid FHIR bundle")
