import base64

from .._utils.constants import HEADER_AUTHORIZATION
from ..models.enums import ParameterType
from ..models.request import RestRequest


class HttpBasicAuthenticator:
    """RFC 7617 basic authentication.

    An ``Authorization`` header already present on the request is left alone.
    """

    def __init__(self, username: str, password: str) -> None:
        token = base64.b64encode(f"{username}:{password}".encode("utf-8"))
        self._authorization = f"Basic {token.decode('ascii')}"

    def authenticate(self, client, request: RestRequest) -> None:
        if request.get_parameter(HEADER_AUTHORIZATION, ParameterType.HTTP_HEADER):
            return
        request.add_header(HEADER_AUTHORIZATION, self._authorization)
