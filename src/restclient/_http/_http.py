import asyncio
import ssl
from logging import getLogger
from typing import Any, Callable, Optional, Union

import httpx

from .._utils._ssl_context import create_ssl_context
from .._utils.constants import (
    DEFAULT_TIMEOUT,
    HEADER_CONTENT_TYPE,
    HEADER_USER_AGENT,
    LOGGER_NAME,
)
from ..models.enums import ResponseStatus
from ..models.response import HttpResponse

ResponseAction = Callable[[HttpResponse], Any]

_logger = getLogger(LOGGER_NAME)


class Http:
    """Performs one HTTP call on a background ``asyncio`` task.

    The executor fills in ``url``, headers, cookies, form parameters and body,
    then calls one of the ``*_async`` verb methods. Whatever happens to the
    call (a response, a network failure, a timeout or cancellation of the
    returned task), ``action`` receives exactly one ``HttpResponse``.
    """

    def __init__(
        self,
        *,
        verify: Union[ssl.SSLContext, bool] = True,
        timeout: float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
    ) -> None:
        self.url: str = ""
        self.headers: list[tuple[str, str]] = []
        self.parameters: list[tuple[str, str]] = []
        self.cookies: dict[str, str] = {}
        self.request_body: Optional[Union[str, bytes]] = None
        self.request_content_type: Optional[str] = None
        self.user_agent: Optional[str] = None
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self._verify = verify
        self._delivered = False

    @property
    def has_parameters(self) -> bool:
        return bool(self.parameters)

    @property
    def has_body(self) -> bool:
        return self.request_body is not None

    def get_async(self, action: ResponseAction) -> asyncio.Task:
        return self._dispatch("GET", action)

    def post_async(self, action: ResponseAction) -> asyncio.Task:
        return self._dispatch("POST", action)

    def put_async(self, action: ResponseAction) -> asyncio.Task:
        return self._dispatch("PUT", action)

    def delete_async(self, action: ResponseAction) -> asyncio.Task:
        return self._dispatch("DELETE", action)

    def head_async(self, action: ResponseAction) -> asyncio.Task:
        return self._dispatch("HEAD", action)

    def options_async(self, action: ResponseAction) -> asyncio.Task:
        return self._dispatch("OPTIONS", action)

    def _dispatch(self, method: str, action: ResponseAction) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        task = loop.create_task(
            self._perform(method, action), name=f"restclient {method} {self.url}"
        )
        # a task cancelled before its first step never runs the coroutine body
        task.add_done_callback(lambda t: self._on_task_done(t, action))
        return task

    def _deliver(self, action: ResponseAction, http_response: HttpResponse) -> Any:
        self._delivered = True
        return action(http_response)

    def _on_task_done(self, task: asyncio.Task, action: ResponseAction) -> None:
        if self._delivered or not task.cancelled():
            return
        _logger.debug(f"Request aborted before dispatch: {self.url}")
        try:
            self._deliver(action, HttpResponse(response_status=ResponseStatus.ABORTED))
        except Exception:
            # no task left to carry the error; RestClient keeps it on the handle
            _logger.exception(
                f"Completion callback failed for aborted request: {self.url}"
            )

    async def _perform(self, method: str, action: ResponseAction) -> Any:
        http_response = HttpResponse()
        try:
            async with httpx.AsyncClient(
                verify=self._verify,
                timeout=self.timeout,
                follow_redirects=self.follow_redirects,
                cookies=self.cookies or None,
            ) as client:
                response = await client.request(
                    method,
                    self.url,
                    headers=self._request_headers(),
                    **self._body_kwargs(method),
                )
            self._extract_response_data(http_response, response)
        except asyncio.CancelledError:
            _logger.debug(f"Request aborted: {method} {self.url}")
            http_response.response_status = ResponseStatus.ABORTED
            self._deliver(action, http_response)
            raise
        except httpx.TimeoutException as e:
            _logger.warning(f"Request timed out: {method} {self.url}: {e!r}")
            http_response.response_status = ResponseStatus.TIMED_OUT
            http_response.error_message = str(e) or type(e).__name__
            http_response.error_exception = e
        except (httpx.HTTPError, OSError) as e:
            _logger.warning(f"Request failed: {method} {self.url}: {e!r}")
            http_response.response_status = ResponseStatus.ERROR
            http_response.error_message = str(e) or type(e).__name__
            http_response.error_exception = e
        except Exception as e:
            # e.g. header values httpx cannot encode or an unsupported body type
            _logger.warning(f"Request could not be sent: {method} {self.url}: {e!r}")
            http_response.response_status = ResponseStatus.ERROR
            http_response.error_message = str(e) or type(e).__name__
            http_response.error_exception = e

        return self._deliver(action, http_response)

    def _request_headers(self) -> list[tuple[str, str]]:
        headers = list(self.headers)
        names = {name.lower() for name, _ in headers}
        if self.user_agent and HEADER_USER_AGENT.lower() not in names:
            headers.append((HEADER_USER_AGENT, self.user_agent))
        if (
            self.has_body
            and self.request_content_type
            and HEADER_CONTENT_TYPE.lower() not in names
        ):
            headers.append((HEADER_CONTENT_TYPE, self.request_content_type))
        return headers

    def _body_kwargs(self, method: str) -> dict[str, Any]:
        if self.has_body:
            return {"content": self.request_body}

        if self.has_parameters and method in ("POST", "PUT"):
            form: dict[str, Any] = {}
            for name, value in self.parameters:
                if name not in form:
                    form[name] = value
                elif isinstance(form[name], list):
                    form[name].append(value)
                else:
                    form[name] = [form[name], value]
            return {"data": form}

        return {}

    @staticmethod
    def _extract_response_data(
        http_response: HttpResponse, response: httpx.Response
    ) -> None:
        http_response.content_type = response.headers.get("content-type")
        http_response.content_encoding = response.headers.get("content-encoding")
        http_response.charset = response.charset_encoding
        http_response.raw_bytes = response.content
        http_response.content_length = len(response.content)
        http_response.status_code = response.status_code
        http_response.status_description = response.reason_phrase
        http_response.response_uri = str(response.url)
        http_response.server = response.headers.get("server")
        http_response.headers = dict(response.headers)
        http_response.response_status = ResponseStatus.COMPLETED


class HttpFactory:
    """Creates a fresh ``Http`` for every execution.

    The TLS context is built once and shared by the transports it creates.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        follow_redirects: bool = True,
        verify: Union[ssl.SSLContext, bool, None] = None,
    ) -> None:
        self.timeout = timeout
        self.follow_redirects = follow_redirects
        self._verify = verify

    def create(self) -> Http:
        if self._verify is None:
            self._verify = create_ssl_context()
        return Http(
            verify=self._verify,
            timeout=self.timeout,
            follow_redirects=self.follow_redirects,
        )
