"""Abstract base for OAuth2 token providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import requests

from ..client.options import RequestOptions


class TokenProvider(ABC):
    """Obtains a bearer token from an authorization server's token endpoint."""

    def __init__(self, token_url: str, session: requests.Session | None = None) -> None:
        self._token_url = token_url
        self._session = session or requests.Session()
        self._access_token: str | None = None

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @abstractmethod
    def authenticate(self, **kwargs: object) -> str:
        """Obtain an OAuth2 access token. Returns the token string."""

    def _request_token(self, data: dict[str, str]) -> str:
        response = self._session.post(
            self._token_url,
            data=data,
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        response.raise_for_status()
        self._access_token = response.json()["access_token"]
        return self._access_token

    def request_options(self, **overrides: Any) -> RequestOptions:
        """RequestOptions carrying the current token as a bearer credential."""
        if not self._access_token:
            raise RuntimeError("Not authenticated. Call authenticate() first.")
        return RequestOptions(oauth_token=self._access_token, **overrides)
