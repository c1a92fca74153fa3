"""Protocol definition for request authenticators."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from ..models.request import RestRequest

if TYPE_CHECKING:
    from .._rest_client import RestClient


@runtime_checkable
class Authenticator(Protocol):
    """Adds credentials to a request right before it is dispatched.

    A client holds at most one authenticator. Implementations mutate the
    request's parameters in place.
    """

    def authenticate(self, client: "RestClient", request: RestRequest) -> None:
        """Attach credentials to ``request``."""
        ...
