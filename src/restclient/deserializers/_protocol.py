"""Protocol definition for response deserializers."""

from typing import Any, Protocol, TypeVar, runtime_checkable

from ..models.response import RestResponse

T = TypeVar("T")


@runtime_checkable
class Deserializer(Protocol):
    """Turns a response body of a known content type into an instance of ``model``.

    Deserializers are registered on the client by content type; the keys
    also build the ``Accept`` header of every request.
    """

    def deserialize(self, response: RestResponse[Any], model: type[T]) -> T:
        ...
