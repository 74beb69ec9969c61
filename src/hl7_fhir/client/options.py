"""Per-client request options: credentials, extra headers, TLS and timeout."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field
from requests.auth import AuthBase, HTTPBasicAuth, HTTPDigestAuth

_TRUTHY = {"1", "true", "yes", "on"}


class RequestOptions(BaseModel):
    """Options applied to every request made by a client.

    At most one of basic_auth, digest_auth or oauth_token is expected.
    """

    basic_auth: tuple[str, str] | None = Field(default=None, description="(user, password)")
    digest_auth: tuple[str, str] | None = Field(default=None, description="(user, password)")
    oauth_token: str | None = Field(default=None, description="Bearer token, without 'Bearer '")
    headers: dict[str, str] = Field(default_factory=dict, description="Extra request headers")
    insecure: bool = Field(default=False, description="Skip TLS certificate verification")
    timeout: float | None = Field(default=None, description="Transport timeout in seconds")

    @classmethod
    def from_env(cls) -> "RequestOptions":
        """Build options from FHIR_* environment variables.

        Reads FHIR_OAUTH_TOKEN, FHIR_BASIC_AUTH_USER / FHIR_BASIC_AUTH_PASSWORD,
        FHIR_INSECURE and FHIR_TIMEOUT. Unset variables leave defaults.
        """
        user = os.environ.get("FHIR_BASIC_AUTH_USER", "")
        timeout = os.environ.get("FHIR_TIMEOUT", "")
        return cls(
            oauth_token=os.environ.get("FHIR_OAUTH_TOKEN") or None,
            basic_auth=(user, os.environ.get("FHIR_BASIC_AUTH_PASSWORD", "")) if user else None,
            insecure=os.environ.get("FHIR_INSECURE", "").strip().lower() in _TRUTHY,
            timeout=float(timeout) if timeout else None,
        )

    def requests_auth(self) -> AuthBase | None:
        if self.basic_auth:
            return HTTPBasicAuth(*self.basic_auth)
        if self.digest_auth:
            return HTTPDigestAuth(*self.digest_auth)
        return None

    def auth_headers(self) -> dict[str, str]:
        if self.oauth_token:
            return {"Authorization": f"Bearer {self.oauth_token}"}
        return {}
