"""Authenticators that attach credentials to outgoing requests."""

from ._http_basic import HttpBasicAuthenticator
from ._protocol import Authenticator
from ._simple import SimpleAuthenticator
from ._token import (
    JwtAuthenticator,
    OAuth2AuthorizationRequestHeaderAuthenticator,
    TokenData,
)

__all__ = [
    "Authenticator",
    "HttpBasicAuthenticator",
    "JwtAuthenticator",
    "OAuth2AuthorizationRequestHeaderAuthenticator",
    "SimpleAuthenticator",
    "TokenData",
]
