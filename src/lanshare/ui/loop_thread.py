import asyncio
import logging
import threading

from concurrent.futures import Future
from typing import Any, Callable, Coroutine

logger = logging.getLogger(__name__)

class LoopThread(threading.Thread):
    """Runs the controller's asyncio loop off the GUI thread."""

    def __init__(self):
        super().__init__(daemon = True, name = "lanshare-loop")
        self.loop: asyncio.AbstractEventLoop = asyncio.new_event_loop()
        self._started: threading.Event = threading.Event()

    def run(self):
        asyncio.set_event_loop(self.loop)
        self.loop.call_soon(self._started.set)

        try:
            self.loop.run_forever()
        finally:
            self._cancel_pending()
            self.loop.close()

    def start_and_wait(self, timeout: float | None = 5.0):
        self.start()
        self._started.wait(timeout)

    def submit(self, coro: Coroutine[Any, Any, Any]) -> Future:
        future = asyncio.run_coroutine_threadsafe(coro, self.loop)
        future.add_done_callback(self._log_failure)

        return future

    def call(self, fn: Callable[..., Any], *args: Any):
        self.loop.call_soon_threadsafe(fn, *args)

    def stop(self):
        if self.loop.is_running():
            self.loop.call_soon_threadsafe(self.loop.stop)

    def _cancel_pending(self):
        pending = asyncio.all_tasks(self.loop)

        for task in pending:
            task.cancel()

        if pending:
            self.loop.run_until_complete(asyncio.gather(*pending, return_exceptions=True))

    def _log_failure(self, future: Future):
        if future.cancelled():
            return

        error = future.exception()

        if error is not None:
            logger.error("Background task failed", exc_info=error)
