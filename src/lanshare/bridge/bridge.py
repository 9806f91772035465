import logging
import threading

from lanshare.bridge.backend import Backend
from lanshare.bridge.events import EventChannel

logger = logging.getLogger(__name__)

class Bridge:
    """The boundary between the client and the backend process.

    The backend publishes its command handle here once it is up and pushes
    its events through ``events``. The client never reads the handle
    directly; it goes through a ``BackendBindingGate``.
    """

    def __init__(self):
        self.events: EventChannel = EventChannel()
        self._handle: Backend | None = None
        self._lock: threading.Lock = threading.Lock()

    def publish(self, handle: Backend):
        with self._lock:
            if self._handle is not None:
                logger.warning("Backend handle already published, ignoring the new one")
                return

            self._handle = handle

        logger.info("Backend handle published")

    def published_handle(self) -> Backend | None:
        with self._lock:
            return self._handle
