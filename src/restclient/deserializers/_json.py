from typing import Any, TypeVar

from ..models.response import RestResponse
from ._adapters import type_adapter

T = TypeVar("T")


class JsonDeserializer:
    """Validates a JSON body against ``model`` with pydantic.

    When ``root_element`` is set, only that top-level key of the document is
    validated.
    """

    def __init__(self, root_element: str | None = None) -> None:
        self.root_element = root_element

    def deserialize(self, response: RestResponse[Any], model: type[T]) -> T:
        adapter = type_adapter(model)
        if self.root_element is None:
            return adapter.validate_json(response.raw_bytes)

        document = type_adapter(dict[str, Any]).validate_json(response.raw_bytes)
        return adapter.validate_python(document.get(self.root_element))
