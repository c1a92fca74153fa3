from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from .enums import ResponseStatus
from .request import RestRequest

T = TypeVar("T")


def _decode(raw_bytes: bytes, encoding: Optional[str]) -> str:
    if not raw_bytes:
        return ""
    try:
        return raw_bytes.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return raw_bytes.decode("utf-8", errors="replace")


class HttpResponse(BaseModel):
    """Raw result of a single transport call.

    The transport fills it in as the call progresses; ``response_status``
    tells whether the call completed, failed, timed out or was aborted.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    content_type: Optional[str] = None
    content_length: int = 0
    content_encoding: Optional[str] = None
    charset: Optional[str] = None
    raw_bytes: bytes = b""
    status_code: int = 0
    status_description: Optional[str] = None
    response_uri: Optional[str] = None
    server: Optional[str] = None
    headers: dict[str, str] = Field(default_factory=dict)
    response_status: ResponseStatus = ResponseStatus.NONE
    error_message: Optional[str] = None
    error_exception: Optional[Exception] = None

    @property
    def content(self) -> str:
        return _decode(self.raw_bytes, self.charset)


class RestResponse(BaseModel, Generic[T]):
    """Response handed to executor callbacks.

    ``data`` is only populated by the typed executor, and stays ``None``
    for aborted calls and empty bodies.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    request: Optional[InstanceOf[RestRequest]] = None
    content_type: Optional[str] = None
    content_length: int = 0
    content_encoding: Optional[str] = None
    content: str = ""
    raw_bytes: bytes = b""
    status_code: int = 0
    status_description: Optional[str] = None
    response_uri: Optional[str] = None
    server: Optional[str] = None
    headers: dict[str, str] = Field(default_factory=dict)
    response_status: ResponseStatus = ResponseStatus.NONE
    error_message: Optional[str] = None
    error_exception: Optional[Exception] = None
    data: Optional[T] = None

    @property
    def is_successful(self) -> bool:
        """True when the call completed with a 2xx status code."""
        return (
            self.response_status == ResponseStatus.COMPLETED
            and 200 <= self.status_code < 300
        )
