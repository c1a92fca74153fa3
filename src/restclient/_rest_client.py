from dataclasses import replace
from logging import getLogger
from typing import Any, Callable, Optional, TypeVar, Union, cast
from urllib.parse import quote

from httpx import URL

from ._config import RestClientConfig
from ._http import Http, HttpFactory, RestRequestAsyncHandle
from ._utils import setup_logging
from ._utils.constants import HEADER_ACCEPT, HEADER_AUTHORIZATION, LOGGER_NAME
from .authenticators import Authenticator
from .deserializers import Deserializer, JsonDeserializer, XmlDeserializer
from .models.enums import Method, ParameterType, ResponseStatus
from .models.errors import DeserializerNotFoundError, UnsupportedMethodError
from .models.request import Parameter, RestRequest
from .models.response import HttpResponse, RestResponse

T = TypeVar("T")

ResponseCallback = Callable[[RestResponse[Any]], Any]
ResponseHandleCallback = Callable[[RestResponse[Any], RestRequestAsyncHandle], Any]

_BODY_METHODS = (Method.POST, Method.PUT)

_DEFAULT_HANDLERS: tuple[tuple[str, Callable[[], Deserializer]], ...] = (
    ("application/json", JsonDeserializer),
    ("application/xml", XmlDeserializer),
    ("text/json", JsonDeserializer),
    ("text/x-json", JsonDeserializer),
    ("text/javascript", JsonDeserializer),
    ("text/xml", XmlDeserializer),
)


class RestClient:
    """Executes ``RestRequest`` objects asynchronously against one base URL.

    Every ``execute_async*`` call returns a ``RestRequestAsyncHandle`` right
    away and delivers the response to its callback from a task on the running
    event loop. The callback fires exactly once per call, whether the call
    completed, failed in the transport, timed out, or was aborted.

    Args:
        base_url: Root URL the request resources are appended to. Read from
            ``RESTCLIENT_BASE_URL`` when neither this nor ``config`` is given.
        config: Full client configuration; takes precedence over ``base_url``.
        authenticator: Optional authenticator applied to every request.
        http_factory: Object whose ``create()`` returns a fresh transport per call.
        register_default_handlers: Register the JSON and XML deserializers.

    Examples:
        ```python
        client = RestClient("https://api.example.com")
        request = RestRequest("users/{id}").add_url_segment("id", 1)

        handle = client.execute_async_typed(request, User, lambda r: print(r.data))
        response = await handle.wait()
        ```
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        config: Optional[RestClientConfig] = None,
        authenticator: Optional[Authenticator] = None,
        http_factory: Optional[Any] = None,
        register_default_handlers: bool = True,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)

        if config is None:
            config = (
                RestClientConfig(base_url=base_url)
                if base_url
                else RestClientConfig.from_env()
            )
        self._config = config

        if self._config.debug:
            setup_logging(should_debug=True)

        self.authenticator = authenticator
        self.http_factory = http_factory or HttpFactory(
            timeout=self._config.timeout,
            follow_redirects=self._config.follow_redirects,
        )
        self.default_parameters: list[Parameter] = []
        self._content_handlers: dict[str, Deserializer] = {}

        if register_default_handlers:
            for content_type, factory in _DEFAULT_HANDLERS:
                self.add_handler(content_type, factory())

        self._logger.debug(f"CONFIG: {self._config.model_dump()}")

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def config(self) -> RestClientConfig:
        return self._config

    # Deserializer registry

    @property
    def accept_types(self) -> list[str]:
        """Registered content types, in registration order."""
        return list(self._content_handlers)

    def add_handler(self, content_type: str, deserializer: Deserializer) -> None:
        """Register ``deserializer`` for ``content_type``, replacing any existing one.

        Re-registering a content type moves it to the end of ``accept_types``.
        """
        key = content_type.strip().lower()
        self._content_handlers.pop(key, None)
        self._content_handlers[key] = deserializer

    def remove_handler(self, content_type: str) -> None:
        self._content_handlers.pop(content_type.strip().lower(), None)

    def clear_handlers(self) -> None:
        self._content_handlers.clear()

    def get_handler(self, content_type: Optional[str]) -> Deserializer:
        """Find the deserializer for a response's ``Content-Type``.

        Tries the bare media type, then a structured-syntax suffix such as
        ``application/problem+json``, then a ``*`` handler.

        Raises:
            DeserializerNotFoundError: If nothing matches.
        """
        if content_type:
            media_type = content_type.split(";", 1)[0].strip().lower()
            if media_type in self._content_handlers:
                return self._content_handlers[media_type]

            if "+" in media_type:
                suffix = media_type.rsplit("+", 1)[1]
                for candidate in (f"application/{suffix}", f"text/{suffix}"):
                    if candidate in self._content_handlers:
                        return self._content_handlers[candidate]

        if "*" in self._content_handlers:
            return self._content_handlers["*"]

        raise DeserializerNotFoundError(content_type)

    # Default parameters

    def add_default_parameter(
        self,
        name: str,
        value: Any,
        type: ParameterType = ParameterType.GET_OR_POST,
    ) -> None:
        """Add a parameter sent with every request unless the request sets its own."""
        self.default_parameters.append(Parameter(name=name, value=value, type=type))

    def add_default_header(self, name: str, value: str) -> None:
        self.add_default_parameter(name, value, ParameterType.HTTP_HEADER)

    def remove_default_parameter(self, name: str) -> None:
        lowered = name.lower()
        self.default_parameters = [
            p
            for p in self.default_parameters
            if p.name is None or p.name.lower() != lowered
        ]

    # Async execution

    def execute_async(
        self, request: RestRequest, callback: Optional[ResponseCallback] = None
    ) -> RestRequestAsyncHandle:
        """Execute ``request`` and call ``callback(response)`` when it finishes.

        Raises:
            UnsupportedMethodError: If the request verb cannot be dispatched.
        """
        return self.execute_async_with_handle(
            request, None if callback is None else lambda r, _: callback(r)
        )

    def execute_async_with_handle(
        self,
        request: RestRequest,
        callback: Optional[ResponseHandleCallback] = None,
    ) -> RestRequestAsyncHandle:
        """Execute ``request`` and call ``callback(response, handle)`` when it finishes.

        Authentication, default parameters and the ``Accept`` header are
        applied to a copy, so ``request`` itself is left untouched.

        Raises:
            UnsupportedMethodError: If the request verb cannot be dispatched.
                Nothing is sent and the callback never fires.
        """
        method = self._resolve_method(request.method)

        http = self.http_factory.create()
        prepared = replace(request, parameters=list(request.parameters))
        self._authenticate_if_needed(prepared)
        self._configure_http(prepared, method, http)

        async_handle = RestRequestAsyncHandle()
        dispatch = {
            Method.GET: http.get_async,
            Method.POST: http.post_async,
            Method.PUT: http.put_async,
            Method.DELETE: http.delete_async,
            Method.HEAD: http.head_async,
            Method.OPTIONS: http.options_async,
        }[method]

        self._logger.debug(f"Request: {method.value} {http.url}")
        self._logger.debug(f"HEADERS: {self._redacted(http.headers)}")

        async_handle.task = dispatch(
            lambda r: self._process_response(request, r, async_handle, callback)
        )
        return async_handle

    def execute_async_typed(
        self,
        request: RestRequest,
        model: type[T],
        callback: Optional[Callable[[RestResponse[T]], Any]] = None,
    ) -> RestRequestAsyncHandle:
        """Like ``execute_async`` but deserializes the body into ``model``."""
        return self.execute_async_typed_with_handle(
            request, model, None if callback is None else lambda r, _: callback(r)
        )

    def execute_async_typed_with_handle(
        self,
        request: RestRequest,
        model: type[T],
        callback: Optional[
            Callable[[RestResponse[T], RestRequestAsyncHandle], Any]
        ] = None,
    ) -> RestRequestAsyncHandle:
        """Like ``execute_async_with_handle`` but deserializes the body into ``model``.

        Aborted calls are passed through without deserialization, leaving
        ``data`` as ``None``. Deserialization failures are reported on the
        response (``ERROR`` status plus ``error_exception``), not raised.
        """

        def on_response(
            response: RestResponse[Any], async_handle: RestRequestAsyncHandle
        ) -> None:
            typed_response = cast("RestResponse[T]", response)
            if response.response_status != ResponseStatus.ABORTED:
                typed_response = self.deserialize(request, response, model)
            async_handle.response = typed_response
            if callback is not None:
                callback(typed_response, async_handle)

        return self.execute_async_with_handle(request, on_response)

    def _process_response(
        self,
        request: RestRequest,
        http_response: HttpResponse,
        async_handle: RestRequestAsyncHandle,
        callback: Optional[ResponseHandleCallback],
    ) -> None:
        rest_response = self._convert_to_rest_response(http_response, request)
        async_handle.response = rest_response
        if callback is None:
            return
        try:
            callback(rest_response, async_handle)
        except Exception as e:
            # calls aborted before they start deliver outside the task
            async_handle.callback_error = e
            raise

    # Deserialization

    def deserialize(
        self, request: RestRequest, raw: RestResponse[Any], model: type[T]
    ) -> RestResponse[T]:
        """Return a copy of ``raw`` whose ``data`` holds the body parsed as ``model``.

        Empty bodies are not handed to a deserializer and leave ``data`` as
        ``None``.
        """
        response = cast("RestResponse[T]", raw.model_copy())
        if not raw.raw_bytes:
            return response

        try:
            handler = self.get_handler(raw.content_type)
            response.data = handler.deserialize(raw, model)
        except Exception as e:
            self._logger.warning(
                f"Failed to deserialize {raw.content_type} response from "
                f"{raw.response_uri or request.resource} into {model!r}: {e}"
            )
            response.response_status = ResponseStatus.ERROR
            response.error_message = str(e)
            response.error_exception = e
        return response

    # Request preparation

    def _authenticate_if_needed(self, request: RestRequest) -> None:
        if self.authenticator is not None:
            self.authenticator.authenticate(self, request)

    def _merge_parameters(self, request: RestRequest) -> list[Parameter]:
        parameters = list(request.parameters)

        defaults = [
            p
            for p in self.default_parameters
            if not (
                p.type == ParameterType.HTTP_HEADER
                and p.name is not None
                and p.name.lower() == HEADER_ACCEPT.lower()
            )
        ]
        # empty when nothing is registered, which also replaces httpx's "*/*"
        accepts = ", ".join(self.accept_types)
        defaults.append(Parameter(HEADER_ACCEPT, accepts, ParameterType.HTTP_HEADER))

        for default in defaults:
            if default.name is not None and request.get_parameter(
                default.name, default.type
            ):
                continue
            parameters.append(default)
        return parameters

    def build_uri(
        self,
        request: RestRequest,
        parameters: Optional[list[Parameter]] = None,
        method: Optional[Method] = None,
    ) -> URL:
        """Compose the absolute URL for ``request``.

        ``{name}`` placeholders in the resource are replaced by URL segment
        parameters. Query string parameters always go to the query;
        get-or-post parameters do too unless the verb sends a form body.
        """
        if parameters is None:
            parameters = self._merge_parameters(request)
        if method is None:
            method = self._resolve_method(request.method)

        resource = request.resource or ""
        for p in parameters:
            if p.type == ParameterType.URL_SEGMENT and p.name:
                resource = resource.replace(
                    "{" + p.name + "}", quote(str(p.value), safe="")
                )

        url = URL(
            f"{self.base_url}/{resource.lstrip('/')}" if resource else self.base_url
        )

        has_body = any(p.type == ParameterType.REQUEST_BODY for p in parameters)
        form_in_query = method not in _BODY_METHODS or has_body
        query = [
            (p.name, str(p.value))
            for p in parameters
            if p.name
            and (
                p.type == ParameterType.QUERY_STRING
                or (p.type == ParameterType.GET_OR_POST and form_in_query)
            )
        ]
        if query:
            url = url.copy_merge_params(query)
        return url

    def _configure_http(self, request: RestRequest, method: Method, http: Http) -> None:
        parameters = self._merge_parameters(request)

        http.url = str(self.build_uri(request, parameters, method))
        http.user_agent = self._config.user_agent
        if request.timeout:
            http.timeout = request.timeout

        http.headers = [
            (p.name, str(p.value))
            for p in parameters
            if p.type == ParameterType.HTTP_HEADER and p.name
        ]
        http.cookies = {
            p.name: str(p.value)
            for p in parameters
            if p.type == ParameterType.COOKIE and p.name
        }

        body = next(
            (p for p in parameters if p.type == ParameterType.REQUEST_BODY), None
        )
        if body is not None:
            http.request_body = body.value
            http.request_content_type = body.content_type or body.name
        elif method in _BODY_METHODS:
            http.parameters = [
                (p.name, str(p.value))
                for p in parameters
                if p.type == ParameterType.GET_OR_POST and p.name
            ]

    # Response conversion

    @staticmethod
    def _convert_to_rest_response(
        http_response: HttpResponse, request: Optional[RestRequest] = None
    ) -> RestResponse[Any]:
        return RestResponse(
            request=request,
            content_type=http_response.content_type,
            content_length=http_response.content_length,
            content_encoding=http_response.content_encoding,
            content=http_response.content,
            raw_bytes=http_response.raw_bytes,
            status_code=http_response.status_code,
            status_description=http_response.status_description,
            response_uri=http_response.response_uri,
            server=http_response.server,
            headers=dict(http_response.headers),
            response_status=http_response.response_status,
            error_message=http_response.error_message,
            error_exception=http_response.error_exception,
        )

    @staticmethod
    def _resolve_method(method: Union[Method, str]) -> Method:
        if isinstance(method, Method):
            return method
        try:
            return Method(str(method).upper())
        except ValueError:
            raise UnsupportedMethodError(method) from None

    @staticmethod
    def _redacted(headers: list[tuple[str, str]]) -> list[tuple[str, str]]:
        return [
            (name, "***" if name.lower() == HEADER_AUTHORIZATION.lower() else value)
            for name, value in headers
        ]
