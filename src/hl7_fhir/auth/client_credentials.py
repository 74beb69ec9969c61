"""SMART on FHIR client credentials grant (client id + secret)."""

from __future__ import annotations

from .base import TokenProvider


class ClientCredentialsTokenProvider(TokenProvider):
    """Token provider for servers using the client_credentials grant with a shared secret."""

    def authenticate(  # type: ignore[override]
        self,
        client_id: str,
        client_secret: str,
        scope: str = "system/*.read",
    ) -> str:
        """Obtain an access token using client credentials grant.

        Args:
            client_id: OAuth2 client ID.
            client_secret: OAuth2 client secret.
            scope: OAuth2 scope(s) to request.

        Returns:
            The access token string.
        """
        return self._request_token(
            {
                "grant_type": "client_credentials",
                "client_id": client_id,
                "client_secret": client_secret,
                "scope": scope,
            }
        )
