"""Exception hierarchy for the FHIR client."""

from __future__ import annotations

from typing import Any


class FHIRError(Exception):
    """Base class for every error raised by this package."""


class FHIRValidationError(FHIRError, ValueError):
    """Raised locally when a value is not a valid FHIR resource or bundle."""


class InvalidArgumentError(FHIRError, ValueError):
    """Raised when a URL argument is not a non-empty string."""


class FHIRProtocolError(FHIRError):
    """A FHIR server answered with a non-2xx status.

    Attributes:
        status: HTTP status code of the failed response.
        is_fhir_resource: True if the body was FHIR JSON (usually an
            OperationOutcome) and ``response`` holds the decoded dict.
        response: The decoded resource, or the raw body string.
    """

    def __init__(self, status: int, is_fhir_resource: bool, response: Any) -> None:
        super().__init__(f"FHIR request failed: HTTP {status}")
        self.status = status
        self.is_fhir_resource = is_fhir_resource
        self.response = response


class PageLimitExceeded(FHIRError):
    """Raised by fetch_all when a bundle chain runs past ``max_pages``."""

    def __init__(self, max_pages: int) -> None:
        super().__init__(f"Bundle pagination exceeded {max_pages} page(s)")
        self.max_pages = max_pages
