import asyncio
from logging import getLogger
from typing import Any, Optional

from .._utils.constants import LOGGER_NAME
from ..models.response import RestResponse

_logger = getLogger(LOGGER_NAME)


class RestRequestAsyncHandle:
    """Returned by the async executor so callers can abort or await a call.

    The executor creates the handle before dispatching and attaches the
    transport task right after dispatch returns. An ``abort()`` that lands
    before the task is attached cannot reach the call and is only logged;
    callers racing the executor from another thread must retry the abort.
    """

    def __init__(self) -> None:
        self.task: Optional[asyncio.Task] = None
        self.response: Optional[RestResponse[Any]] = None
        self.callback_error: Optional[BaseException] = None

    @property
    def done(self) -> bool:
        return self.task is not None and self.task.done()

    def abort(self) -> None:
        """Cancel the in-flight call. Does nothing once the call has finished.

        Safe to call from any thread.
        """
        task = self.task
        if task is None:
            _logger.debug("Abort requested before the transport call was attached")
            return
        if task.done():
            return

        loop = task.get_loop()
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            task.cancel()
        else:
            loop.call_soon_threadsafe(task.cancel)

    async def wait(self) -> Optional[RestResponse[Any]]:
        """Wait for the call to finish and return the response given to the callback.

        Aborted calls return their ``ABORTED`` response instead of raising
        ``CancelledError``. An exception raised by the completion callback is
        re-raised here, including for calls aborted before they started.
        """
        if self.task is None:
            return self.response
        await asyncio.wait({self.task})
        if not self.task.cancelled():
            self.task.result()
        elif self.callback_error is not None:
            raise self.callback_error
        return self.response
