"""Dispatch of a single FHIR HTTP interaction.

``FHIRTransport.request`` is the one place where requests are built,
sent and their responses classified:

  * every request sends ``Accept: application/json+fhir``
  * JSON bodies are sent as ``application/json+fhir``; search parameters
    can be sent as an ``application/x-www-form-urlencoded`` POST body
  * a ``Location`` header on success is followed with a GET (or returned
    as-is when following is disabled)
  * non-2xx responses become ``FHIRProtocolError``; nothing is retried
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import requests

from ..errors import FHIRProtocolError
from ..urls.locator import is_absolute_url, relative_to_absolute_url
from ..urls.paths import build_url, encode_query
from .options import RequestOptions

logger = logging.getLogger(__name__)

FHIR_JSON = "application/json+fhir"
FORM_URLENCODED = "application/x-www-form-urlencoded"
_FHIR_CONTENT_TYPES = (FHIR_JSON, "application/fhir+json")
_PROTOCOL_HEADERS = {"accept", "content-type"}


class Method(str, Enum):
    GET = "GET"
    FORM_POST = "FORM_POST"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def is_fhir_response(response: requests.Response) -> bool:
    """True if the response Content-Type declares FHIR JSON."""
    content_type = response.headers.get("Content-Type") or ""
    return any(t in content_type for t in _FHIR_CONTENT_TYPES)


def _protocol_error(response: requests.Response) -> FHIRProtocolError:
    fhir_resource = is_fhir_response(response)
    body: Any = response.text
    if fhir_resource:
        try:
            body = response.json()
        except ValueError:
            logger.warning(
                "HTTP %s response declared FHIR JSON but could not be decoded",
                response.status_code,
            )
            fhir_resource = False
    return FHIRProtocolError(response.status_code, fhir_resource, body)


class FHIRTransport:
    """Sends FHIR requests over a requests.Session with fixed RequestOptions."""

    def __init__(
        self,
        options: RequestOptions | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.options = options or RequestOptions()
        self._session = session or requests.Session()

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        headers = {
            name: value
            for name, value in self.options.headers.items()
            if name.lower() not in _PROTOCOL_HEADERS
        }
        headers.update(self.options.auth_headers())
        headers["Accept"] = FHIR_JSON
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _send(
        self,
        http_method: str,
        url: str,
        *,
        content_type: str | None = None,
        data: str | None = None,
        json_body: Any = None,
    ) -> requests.Response:
        logger.debug("FHIR %s %s", http_method, url)
        response = self._session.request(
            http_method,
            url,
            headers=self._headers(content_type),
            data=data,
            json=json_body,
            auth=self.options.requests_auth(),
            verify=not self.options.insecure,
            timeout=self.options.timeout,
        )
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise _protocol_error(response) from exc
        return response

    def get_json(self, url: str) -> Any:
        """GET an absolute URL and decode its JSON body (None if empty)."""
        response = self._send("GET", url)
        if not response.content:
            return None
        return response.json()

    def request(
        self,
        method: Method,
        base_url: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: Any = None,
        params_as_body: bool = False,
        follow_location: bool = True,
    ) -> Any:
        """Perform one FHIR interaction and return its decoded result.

        Args:
            method: The interaction's HTTP method; FORM_POST sends params
                as a form-encoded POST body.
            base_url: FHIR server base URL.
            path: Path relative to base_url ('Patient/1', 'Patient/_search').
            params: Query parameters; values may be lists for repeated names.
            body: Resource or bundle sent as FHIR JSON (POST/PUT).
            params_as_body: Send params as the request body instead of the URL.
            follow_location: GET the Location header on success if present.

        Returns:
            The decoded FHIR JSON response, the raw Location or body string,
            or None for an empty non-FHIR body.

        Raises:
            FHIRProtocolError: on any non-2xx response.
        """
        query = encode_query(params)
        url = build_url(base_url, path, None if params_as_body else query)

        if method is Method.FORM_POST:
            response = self._send(
                "POST", url, content_type=FORM_URLENCODED, data=query if params_as_body else None
            )
        elif body is not None:
            response = self._send(method.value, url, content_type=FHIR_JSON, json_body=body)
        else:
            response = self._send(method.value, url)

        location = (response.headers.get("Location") or "").strip() or None
        if location and follow_location:
            if not is_absolute_url(location):
                location = relative_to_absolute_url(base_url, location) or location
            logger.debug("Following Location %s", location)
            return self.get_json(location)
        if is_fhir_response(response) and response.content:
            return response.json()
        if location:
            return location
        return response.text or None
