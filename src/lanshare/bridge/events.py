import asyncio
import logging
import threading

from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

STATUS_UPDATED = "status-updated"
OPERATION_COMPLETED = "operation-completed"
STATS_UPDATED = "stats-updated"

EVENT_TYPES: tuple[str, ...] = (STATUS_UPDATED, OPERATION_COMPLETED, STATS_UPDATED)

@dataclass
class BridgeEvent:
    type: str
    payload: Any = None

class Subscription:
    def __init__(self, channel: "EventChannel", event_type: str, callback: Callable[[BridgeEvent], None]):
        self._channel: EventChannel = channel
        self.event_type: str = event_type
        self.callback: Callable[[BridgeEvent], None] = callback
        self.active: bool = True

    def unsubscribe(self):
        if not self.active:
            return

        self.active = False
        self._channel._remove(self)

class EventChannel:
    """Typed push channel for backend events.

    When a loop is attached, events emitted from other threads are posted
    onto it with ``call_soon_threadsafe`` so subscribers always run on the
    loop, in emission order.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Subscription]] = {t: [] for t in EVENT_TYPES}
        self._lock: threading.Lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

    def attach_loop(self, loop: asyncio.AbstractEventLoop | None):
        self._loop = loop

    def subscribe(self, event_type: str, callback: Callable[[BridgeEvent], None]) -> Subscription:
        if event_type not in self._subscribers:
            raise ValueError(f"Unknown event type '{event_type}'")

        sub = Subscription(self, event_type, callback)

        with self._lock:
            self._subscribers[event_type].append(sub)

        return sub

    def subscriber_count(self, event_type: str | None = None) -> int:
        with self._lock:
            if event_type is not None:
                return len(self._subscribers.get(event_type, []))

            return sum(len(subs) for subs in self._subscribers.values())

    def emit(self, event_type: str, payload: Any = None):
        event = BridgeEvent(event_type, payload)
        loop = self._loop

        if loop is not None and not self._on_loop(loop):
            if loop.is_closed():
                logger.debug("Dropping %s, event loop is closed", event_type)
                return

            loop.call_soon_threadsafe(self._dispatch, event)
        else:
            self._dispatch(event)

    def _dispatch(self, event: BridgeEvent):
        with self._lock:
            subs = list(self._subscribers.get(event.type, []))

        if not subs:
            logger.debug("No subscriber for %s", event.type)

        for sub in subs:
            if sub.active:
                sub.callback(event)

    def _remove(self, sub: Subscription):
        with self._lock:
            subs = self._subscribers.get(sub.event_type, [])

            if sub in subs:
                subs.remove(sub)

    def _on_loop(self, loop: asyncio.AbstractEventLoop) -> bool:
        try:
            return asyncio.get_running_loop() is loop
        except RuntimeError:
            return False
