"""Asynchronous REST client built on httpx and pydantic."""

from ._config import RestClientConfig
from ._http import Http, HttpFactory, RestRequestAsyncHandle
from ._rest_client import RestClient
from ._utils import setup_logging
from .authenticators import (
    Authenticator,
    HttpBasicAuthenticator,
    JwtAuthenticator,
    OAuth2AuthorizationRequestHeaderAuthenticator,
    SimpleAuthenticator,
    TokenData,
)
from .deserializers import Deserializer, JsonDeserializer, XmlDeserializer
from .models import (
    BaseUrlMissingError,
    DeserializerNotFoundError,
    HttpResponse,
    Method,
    Parameter,
    ParameterType,
    ResponseStatus,
    RestClientError,
    RestRequest,
    RestResponse,
    UnsupportedMethodError,
)

__all__ = [
    "RestClient",
    "RestClientConfig",
    "Http",
    "HttpFactory",
    "RestRequestAsyncHandle",
    "setup_logging",
    "Authenticator",
    "HttpBasicAuthenticator",
    "JwtAuthenticator",
    "OAuth2AuthorizationRequestHeaderAuthenticator",
    "SimpleAuthenticator",
    "TokenData",
    "Deserializer",
    "JsonDeserializer",
    "XmlDeserializer",
    "BaseUrlMissingError",
    "DeserializerNotFoundError",
    "HttpResponse",
    "Method",
    "Parameter",
    "ParameterType",
    "ResponseStatus",
    "RestClientError",
    "RestRequest",
    "RestResponse",
    "UnsupportedMethodError",
]
