"""Bearer-token authenticators."""

from typing import Optional

from pydantic import BaseModel

from .._utils.constants import HEADER_AUTHORIZATION
from ..models.enums import ParameterType
from ..models.request import RestRequest


class TokenData(BaseModel):
    """Pydantic model for an OAuth2 token endpoint response."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    id_token: Optional[str] = None


def _replace_authorization(request: RestRequest, value: str) -> None:
    request.parameters = [
        p
        for p in request.parameters
        if not (
            p.type == ParameterType.HTTP_HEADER
            and p.name is not None
            and p.name.lower() == HEADER_AUTHORIZATION.lower()
        )
    ]
    request.add_header(HEADER_AUTHORIZATION, value)


class JwtAuthenticator:
    """Sends ``Authorization: Bearer <token>``, replacing any existing header."""

    def __init__(self, access_token: str) -> None:
        self.set_bearer_token(access_token)

    def set_bearer_token(self, access_token: str) -> None:
        self._authorization = f"Bearer {access_token}"

    def authenticate(self, client, request: RestRequest) -> None:
        _replace_authorization(request, self._authorization)


class OAuth2AuthorizationRequestHeaderAuthenticator:
    """Sends an OAuth2 access token in the ``Authorization`` header.

    The scheme comes from ``token_type`` and defaults to ``OAuth``.
    """

    def __init__(self, access_token: str, token_type: str = "OAuth") -> None:
        self._authorization = f"{token_type} {access_token}"

    @classmethod
    def from_token(
        cls, token: TokenData
    ) -> "OAuth2AuthorizationRequestHeaderAuthenticator":
        return cls(token.access_token, token_type=token.token_type or "Bearer")

    def authenticate(self, client, request: RestRequest) -> None:
        if request.get_parameter(HEADER_AUTHORIZATION, ParameterType.HTTP_HEADER):
            return
        request.add_header(HEADER_AUTHORIZATION, self._authorization)
