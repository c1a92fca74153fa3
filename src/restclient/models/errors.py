class RestClientError(Exception):
    """Base class for errors raised by the REST client."""


class BaseUrlMissingError(RestClientError):
    def __init__(
        self,
        message="Base URL is required. Pass base_url explicitly or set the RESTCLIENT_BASE_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)


class UnsupportedMethodError(RestClientError):
    """Raised synchronously when a request uses a verb the async executor cannot dispatch."""

    def __init__(self, method: object):
        self.method = method
        self.message = f"Unsupported HTTP method: {method!r}"
        super().__init__(self.message)


class DeserializerNotFoundError(RestClientError):
    """Raised when a response body has a content type with no registered deserializer.

    The typed executor does not let this escape; it is recorded on the
    response as ``error_exception``.
    """

    def __init__(self, content_type: str | None):
        self.content_type = content_type
        self.message = (
            f"No deserializer registered for content type '{content_type or ''}'"
        )
        super().__init__(self.message)
