import logging

from typing import Callable

from lanshare.controller.keyboard import KeyboardHub
from lanshare.data_models.dialog_handle import DialogHandle, DialogKind
from lanshare.ui.renderer import Renderer

logger = logging.getLogger(__name__)

ESCAPE_KEY = "Escape"

class ModalDialogManager:
    """Keeps at most one overlay dialog alive.

    Every way of dismissing a dialog (close control, overlay click, Escape,
    being replaced by a newer dialog) ends up in ``close()``, which removes
    the element and its key listener together.
    """

    def __init__(self, renderer: Renderer, keyboard: KeyboardHub):
        self._renderer: Renderer = renderer
        self._keyboard: KeyboardHub = keyboard
        self._current: DialogHandle | None = None

    @property
    def current(self) -> DialogHandle | None:
        return self._current

    @property
    def is_open(self) -> bool:
        return self._current is not None

    def open(self, kind: DialogKind, message: str | None = None, on_close: Callable[[], None] | None = None) -> DialogHandle:
        # Last request wins, never stacked
        if self._current is not None:
            logger.debug("Replacing open %s dialog with %s", self._current.kind.name, kind.name)
            self.close()

        element = self._renderer.show_dialog(kind, message)

        def key_listener(key: str):
            if key == ESCAPE_KEY and self._current is handle:
                self.close()

        handle = DialogHandle(
            kind=kind,
            element=element,
            key_listener=key_listener,
            message=message,
            on_close=on_close,
        )

        self._keyboard.add_listener(key_listener)
        self._current = handle

        return handle

    def close(self):
        handle = self._current

        if handle is None:
            return

        self._current = None

        self._keyboard.remove_listener(handle.key_listener)
        self._renderer.close_dialog(handle.element)

        if handle.on_close is not None:
            handle.on_close()

    def close_if(self, kind: DialogKind) -> bool:
        if self._current is None or self._current.kind != kind:
            return False

        self.close()
        return True
