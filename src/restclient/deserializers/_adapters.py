from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter


@lru_cache(maxsize=256)
def type_adapter(model: Any) -> TypeAdapter[Any]:
    """Return a cached ``TypeAdapter`` for ``model``."""
    return TypeAdapter(model)
