import asyncio
import logging

from enum import Enum, auto

from lanshare.bridge.backend import Backend
from lanshare.bridge.bridge import Bridge
from lanshare.constants import (
    BACKEND_MAX_WAIT,
    BACKEND_POLL_BACKOFF,
    BACKEND_POLL_INTERVAL,
    BACKEND_POLL_MAX_INTERVAL,
)

logger = logging.getLogger(__name__)

class GateState(Enum):
    UNINITIALIZED = auto()
    READY = auto()
    UNAVAILABLE = auto() # Gave up waiting

class BackendBindingGate:
    def __init__(
        self,
        bridge: Bridge,
        poll_interval: float = BACKEND_POLL_INTERVAL,
        backoff: float = BACKEND_POLL_BACKOFF,
        max_interval: float = BACKEND_POLL_MAX_INTERVAL,
        max_wait: float = BACKEND_MAX_WAIT,
    ):
        self._bridge: Bridge = bridge
        self._handle: Backend | None = None
        self._poll_task: asyncio.Task | None = None

        self.state: GateState = GateState.UNINITIALIZED
        self.poll_interval: float = poll_interval
        self.backoff: float = backoff
        self.max_interval: float = max_interval
        self.max_wait: float = max_wait

    @property
    def ready(self) -> bool:
        return self.state == GateState.READY

    def acquire(self) -> Backend | None:
        if self._handle is not None:
            return self._handle

        if self.state == GateState.UNAVAILABLE:
            return None

        return self._check()

    def start(self) -> asyncio.Task:
        # Must be called from the event loop
        if self._poll_task is None or self._poll_task.done():
            self._poll_task = asyncio.get_running_loop().create_task(self.wait_until_ready())

        return self._poll_task

    def cancel(self):
        if self._poll_task is not None and not self._poll_task.done():
            self._poll_task.cancel()

        self._poll_task = None

    async def wait_until_ready(self) -> Backend | None:
        interval = self.poll_interval
        waited = 0.0

        while True:
            handle = self.acquire()

            if handle is not None:
                return handle

            if waited >= self.max_wait:
                self.state = GateState.UNAVAILABLE
                logger.warning("Backend binding not available after %.1fs, giving up", waited)
                return None

            delay = min(interval, self.max_wait - waited)
            await asyncio.sleep(delay)

            waited += delay
            interval = min(interval * self.backoff, self.max_interval)

    def _check(self) -> Backend | None:
        handle = self._bridge.published_handle()

        if handle is None:
            return None

        # Stored once, never re-checked
        self._handle = handle
        self.state = GateState.READY
        logger.info("Backend binding ready")

        return handle
