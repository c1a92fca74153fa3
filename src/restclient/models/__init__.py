"""Request, response and error models for the REST client."""

from .enums import Method, ParameterType, ResponseStatus
from .errors import (
    BaseUrlMissingError,
    DeserializerNotFoundError,
    RestClientError,
    UnsupportedMethodError,
)
from .request import Parameter, RestRequest
from .response import HttpResponse, RestResponse

__all__ = [
    "Method",
    "ParameterType",
    "ResponseStatus",
    "BaseUrlMissingError",
    "DeserializerNotFoundError",
    "RestClientError",
    "UnsupportedMethodError",
    "Parameter",
    "RestRequest",
    "HttpResponse",
    "RestResponse",
]
