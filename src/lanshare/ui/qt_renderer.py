import itertools
import threading

from PyQt6.QtCore import QObject, pyqtSignal

from lanshare.data_models.dialog_handle import DialogKind
from lanshare.data_models.page import Page
from lanshare.data_models.path_info import PathInfo
from lanshare.data_models.progress_snapshot import ProgressSnapshot

class QtRenderer(QObject):
    """Renderer used by the controller's event loop thread.

    Widgets can only be touched from the GUI thread, so every call is turned
    into a signal; connections to widgets living on the GUI thread are queued
    by Qt. Dialog elements are plain integer ids which the GUI maps to the
    overlay widgets it creates.
    """

    page_signal: pyqtSignal = pyqtSignal(object)
    status_signal: pyqtSignal = pyqtSignal(object, str)
    progress_signal: pyqtSignal = pyqtSignal(object, object)
    selection_signal: pyqtSignal = pyqtSignal(object)
    dialog_opened_signal: pyqtSignal = pyqtSignal(int, object, object)
    dialog_closed_signal: pyqtSignal = pyqtSignal(int)

    def __init__(self):
        super().__init__()
        self._ids = itertools.count(1)
        self._lock: threading.Lock = threading.Lock()

    def render(self, page: Page):
        self.page_signal.emit(page)

    def render_status(self, page: Page, text: str):
        self.status_signal.emit(page, text)

    def render_progress(self, page: Page, snapshot: ProgressSnapshot):
        self.progress_signal.emit(page, snapshot)

    def render_selection(self, info: PathInfo | None):
        self.selection_signal.emit(info)

    def show_dialog(self, kind: DialogKind, message: str | None) -> int:
        with self._lock:
            dialog_id = next(self._ids)

        self.dialog_opened_signal.emit(dialog_id, kind, message)
        return dialog_id

    def close_dialog(self, element: int):
        self.dialog_closed_signal.emit(element)
