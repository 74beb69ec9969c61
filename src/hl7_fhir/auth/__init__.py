from .base import TokenProvider
from .client_credentials import ClientCredentialsTokenProvider
from .jwt_backend import JWTBackendTokenProvider

__all__ = ["TokenProvider", "ClientCredentialsTokenProvider", "JWTBackendTokenProvider"]
