"""FHIR REST client: read, search, create, update, delete and transactions.

All operations take resource types in either CamelCase ('DiagnosticReport')
or keyword form ('diagnostic-report') and address resources as
``/{Type}/{id}`` and ``/{Type}/{id}/_history/{version}``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import requests

from ..errors import FHIRProtocolError
from ..resources.predicates import validate_bundle, validate_resource
from ..search.params import SearchParameter, add_query_value, compile_search, format_search_value
from ..urls.locator import resource_type_name
from ..urls.paths import join_paths
from . import bundles
from .options import RequestOptions
from .transport import FHIRTransport, Method

logger = logging.getLogger(__name__)

_NOT_FOUND = 404
_GONE = 410


def _resource_path(resource_type: str, *parts: str | None) -> str:
    return join_paths("/", resource_type_name(resource_type), *parts)


class FHIRClient:
    """Client for a single FHIR server.

    Credentials, extra headers and TLS settings are bound once in
    ``options`` and applied to every request, including page fetches and
    followed Location redirects.

    Usage:

        client = FHIRClient("https://hapi.fhir.org/baseR4")
        bundle = client.search("Patient", [eq("family", "Smith")], _count=50)
        patients = collect_resources(client.fetch_all(bundle))
    """

    def __init__(
        self,
        base_url: str,
        options: RequestOptions | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.transport = FHIRTransport(options, session)

    @property
    def options(self) -> RequestOptions:
        return self.transport.options

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read_url(self, relative_url: str, base_url: str | None = None) -> dict | None:
        """Read a resource by relative URL ('Patient/1' or 'Patient/1/_history/2').

        Returns None if the server answers 404 or 410.
        """
        try:
            return self.transport.request(Method.GET, base_url or self.base_url, relative_url)
        except FHIRProtocolError as exc:
            # TODO: a 410 could tell the caller an earlier version is still readable
            if exc.status in (_NOT_FOUND, _GONE):
                logger.debug("Resource %s not available (HTTP %s)", relative_url, exc.status)
                return None
            raise

    def read(self, resource_type: str, resource_id: str, version: str | None = None) -> dict | None:
        """Read (or vread, if version is given) a single resource.

        reference:
          read:  http://hl7.org/fhir/http.html#read
          vread: http://hl7.org/fhir/http.html#vread
        """
        if version is not None:
            path = _resource_path(resource_type, resource_id, "_history", version)
        else:
            path = _resource_path(resource_type, resource_id)
        return self.read_url(path)

    def read_bundle(self, resource_type: str, resource_id: str) -> dict:
        """Read a resource wrapped in a bundle; absent resources give zero entries."""
        return self.transport.request(
            Method.GET,
            self.base_url,
            _resource_path(resource_type),
            params={"_id": resource_id},
        )

    def get_relative_resource(self, bundle: Mapping[str, Any], relative_url: str) -> dict | None:
        """Read a resource from the server named by the bundle's 'fhir-base' link."""
        base_url = bundles.base_url_from_bundle(bundle)
        return self.read_url(relative_url, base_url=base_url)

    def history(self, resource_type: str, resource_id: str, **params: Any) -> dict:
        """Return the (possibly paged) history bundle of a resource.

        History entries for deletions carry no resource content.

        reference:
          http://hl7.org/fhir/http.html#history
        """
        return self.transport.request(
            Method.GET,
            self.base_url,
            _resource_path(resource_type, resource_id, "_history"),
            params=params or None,
        )

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(
        self,
        resource_type: str,
        where: Iterable[Iterable[SearchParameter]] = (),
        **params: Any,
    ) -> dict:
        """Search resources of one type; all predicates are ANDed.

        Sent as a form-encoded POST to ``{Type}/_search`` so that large
        queries do not hit URL length limits. Extra keyword params (e.g.
        ``_count``) are added alongside the compiled predicates; a name
        given in both accumulates all values. Extra values are formatted like
        predicate values (booleans, dates) but not escaped.

        Returns:
            The first page of results as a bundle.
        """
        query = compile_search(where)
        for name, value in params.items():
            if isinstance(value, list):
                add_query_value(query, name, [format_search_value(v, escape=False) for v in value])
            else:
                add_query_value(query, name, format_search_value(value, escape=False))
        return self.transport.request(
            Method.FORM_POST,
            self.base_url,
            _resource_path(resource_type, "_search"),
            params=query,
            params_as_body=True,
        )

    def search_and_fetch(
        self,
        resource_type: str,
        where: Iterable[Iterable[SearchParameter]] = (),
        **params: Any,
    ) -> dict:
        """Search and merge every result page into a single bundle."""
        return self.fetch_all(self.search(resource_type, where, **params))

    def fetch_next_page(self, bundle: Mapping[str, Any]) -> dict | None:
        return bundles.fetch_next_page(self.transport, bundle)

    def fetch_all(self, bundle: Mapping[str, Any], max_pages: int | None = None) -> dict:
        return bundles.fetch_all(self.transport, bundle, max_pages=max_pages)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def create(
        self,
        resource_type: str,
        resource: Mapping[str, Any],
        return_resource: bool = True,
    ) -> Any:
        """Create a resource.

        Returns the created resource, or its Location URL if return_resource
        is False. Returns None if the server sent neither.

        Raises:
            FHIRValidationError: if resource is not a FHIR resource (no request is made).
        """
        validate_resource(resource)
        return self.transport.request(
            Method.POST,
            self.base_url,
            _resource_path(resource_type),
            body=resource,
            follow_location=return_resource,
        )

    def update(
        self,
        resource_type: str,
        resource_id: str,
        resource: Mapping[str, Any],
        version: str | None = None,
        return_resource: bool = True,
    ) -> Any:
        """Update a resource, optionally against a specific version.

        Version conflicts are reported by the server as FHIRProtocolError.
        """
        validate_resource(resource)
        if version is not None:
            path = _resource_path(resource_type, resource_id, "_history", version)
        else:
            path = _resource_path(resource_type, resource_id)
        return self.transport.request(
            Method.PUT,
            self.base_url,
            path,
            body=resource,
            follow_location=return_resource,
        )

    def delete(self, resource_type: str, resource_id: str) -> Any:
        """Delete a resource. Returns None, or an OperationOutcome if the server sends one."""
        return self.transport.request(
            Method.DELETE,
            self.base_url,
            _resource_path(resource_type, resource_id),
        )

    def is_deleted(self, resource_type: str, resource_id: str) -> bool:
        """True if reading the resource answers 410 Gone; False on success or 404."""
        try:
            self.transport.request(
                Method.GET, self.base_url, _resource_path(resource_type, resource_id)
            )
        except FHIRProtocolError as exc:
            if exc.status == _GONE:
                return True
            if exc.status == _NOT_FOUND:
                return False
            raise
        return False

    def transaction(self, bundle: Mapping[str, Any]) -> Any:
        """Submit a transaction bundle to the server root.

        reference:
          http://hl7.org/fhir/http.html#transaction
        """
        validate_bundle(bundle)
        return self.transport.request(Method.POST, self.base_url, "/", body=bundle)
