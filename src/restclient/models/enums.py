from enum import Enum


class Method(str, Enum):
    """HTTP verbs the async executor can dispatch."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ParameterType(str, Enum):
    """Where a request parameter ends up on the wire."""

    COOKIE = "cookie"
    GET_OR_POST = "get_or_post"
    URL_SEGMENT = "url_segment"
    HTTP_HEADER = "http_header"
    REQUEST_BODY = "request_body"
    QUERY_STRING = "query_string"


class ResponseStatus(str, Enum):
    """Outcome of the transport call, independent of the HTTP status code."""

    NONE = "none"
    COMPLETED = "completed"
    ERROR = "error"
    TIMED_OUT = "timed_out"
    ABORTED = "aborted"
