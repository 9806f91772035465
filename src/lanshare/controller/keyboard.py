import logging

from typing import Callable

logger = logging.getLogger(__name__)

KeyListener = Callable[[str], None]

class KeyboardHub:
    """Document level keydown listeners.

    The GUI forwards every key press to ``dispatch``; dialogs register and
    remove their own listeners here.
    """

    def __init__(self):
        self._listeners: list[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: KeyListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> bool:
        if listener not in self._listeners:
            return False

        self._listeners.remove(listener)
        return True

    def dispatch(self, key: str):
        # Copy, listeners may remove themselves while handling the key
        for listener in list(self._listeners):
            listener(key)
