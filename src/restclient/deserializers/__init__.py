"""Response deserializers keyed by content type."""

from ._json import JsonDeserializer
from ._protocol import Deserializer
from ._xml import XmlDeserializer, element_to_python

__all__ = [
    "Deserializer",
    "JsonDeserializer",
    "XmlDeserializer",
    "element_to_python",
]
