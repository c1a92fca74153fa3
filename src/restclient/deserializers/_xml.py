from typing import Any, TypeVar

from lxml import etree

from ..models.response import RestResponse
from ._adapters import type_adapter

T = TypeVar("T")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def element_to_python(element: Any) -> Any:
    """Convert an element to plain Python data.

    Leaf elements without attributes become their text. Otherwise attributes
    and child elements become keys of a dict; repeated children become lists.
    """
    children = [child for child in element if isinstance(child.tag, str)]
    if not children and not element.attrib:
        return (element.text or "").strip()

    result: dict[str, Any] = {
        _local_name(name): value for name, value in element.attrib.items()
    }
    for child in children:
        name = _local_name(child.tag)
        value = element_to_python(child)
        if name not in result:
            result[name] = value
        elif isinstance(result[name], list):
            result[name].append(value)
        else:
            result[name] = [result[name], value]

    text = (element.text or "").strip()
    if text and not children:
        result["value"] = text
    return result


class XmlDeserializer:
    """Validates an XML body against ``model`` with pydantic.

    The root element maps onto ``model``; pass ``root_element`` to start from
    the first descendant with that local name instead.
    """

    def __init__(self, root_element: str | None = None) -> None:
        self.root_element = root_element
        self._parser = etree.XMLParser(resolve_entities=False, no_network=True)

    def deserialize(self, response: RestResponse[Any], model: type[T]) -> T:
        root = etree.fromstring(response.raw_bytes, parser=self._parser)
        if self.root_element is not None:
            match = next(
                (
                    el
                    for el in root.iter()
                    if isinstance(el.tag, str)
                    and _local_name(el.tag) == self.root_element
                ),
                None,
            )
            if match is None:
                raise ValueError(f"Root element '{self.root_element}' not found")
            root = match
        return type_adapter(model).validate_python(element_to_python(root))
