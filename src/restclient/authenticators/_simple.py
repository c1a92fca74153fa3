from ..models.request import RestRequest


class SimpleAuthenticator:
    """Sends credentials as two ordinary request parameters.

    They land in the query string or the form body depending on the verb.
    """

    def __init__(
        self, username_key: str, username: str, password_key: str, password: str
    ) -> None:
        self._username_key = username_key
        self._username = username
        self._password_key = password_key
        self._password = password

    def authenticate(self, client, request: RestRequest) -> None:
        request.add_parameter(self._username_key, self._username)
        request.add_parameter(self._password_key, self._password)
