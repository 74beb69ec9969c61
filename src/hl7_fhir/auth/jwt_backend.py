"""SMART backend services authorization (signed JWT client assertion)."""

from __future__ import annotations

import time
import uuid
from pathlib import Path

import jwt

from .base import TokenProvider

_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"
_ASSERTION_LIFETIME_S = 300


def _signing_key(private_key: str | bytes | None, private_key_path: str | Path | None) -> str | bytes:
    if private_key is not None:
        return private_key
    if private_key_path is None:
        raise ValueError("Provide private_key or private_key_path")
    return Path(private_key_path).read_bytes()


class JWTBackendTokenProvider(TokenProvider):
    """Exchanges an RS384-signed client assertion for a bearer token."""

    def client_assertion(self, client_id: str, key: str | bytes) -> str:
        issued = int(time.time())
        return jwt.encode(
            {
                "iss": client_id,
                "sub": client_id,
                "aud": self._token_url,
                "jti": uuid.uuid4().hex,
                "iat": issued,
                "exp": issued + _ASSERTION_LIFETIME_S,
            },
            key,
            algorithm="RS384",
        )

    def authenticate(  # type: ignore[override]
        self,
        client_id: str,
        private_key: str | bytes | None = None,
        private_key_path: str | Path | None = None,
        scope: str | None = None,
    ) -> str:
        """Obtain an access token; the key comes from private_key or a PEM file."""
        assertion = self.client_assertion(client_id, _signing_key(private_key, private_key_path))
        form = {
            "grant_type": "client_credentials",
            "client_assertion_type": _ASSERTION_TYPE,
            "client_assertion": assertion,
        }
        if scope:
            form["scope"] = scope
        return self._request_token(form)
