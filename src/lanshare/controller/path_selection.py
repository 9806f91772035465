import logging

from enum import Enum, auto
from typing import Callable

from lanshare.bridge.backend import Backend
from lanshare.bridge.binding_gate import BackendBindingGate
from lanshare.constants import DIALOG_BACKEND_NOT_READY
from lanshare.controller.dialog_manager import ModalDialogManager
from lanshare.data_models.dialog_handle import DialogKind
from lanshare.data_models.path_info import PathInfo
from lanshare.errors import BackendNotReady, FileInfoError, OperationFailed, TransferError
from lanshare.ui.renderer import Renderer

logger = logging.getLogger(__name__)

class SelectionState(Enum):
    IDLE = auto()
    CHOOSER_OPEN = auto()
    FILE_PICKING = auto()
    FOLDER_PICKING = auto()
    RESOLVING_METADATA = auto()
    ERROR = auto()

class PathSelectionFlow:
    """Chooser dialog -> native picker -> metadata lookup.

    ``can_select`` tells whether the session currently allows a selection
    (Send page, nothing in flight). ``on_selected`` hands the resolved path
    back to the session controller, which owns ``selected_path``.
    """

    def __init__(
        self,
        gate: BackendBindingGate,
        dialogs: ModalDialogManager,
        renderer: Renderer,
        can_select: Callable[[], bool],
        on_selected: Callable[[str, PathInfo], None],
    ):
        self._gate: BackendBindingGate = gate
        self._dialogs: ModalDialogManager = dialogs
        self._renderer: Renderer = renderer
        self._can_select: Callable[[], bool] = can_select
        self._on_selected: Callable[[str, PathInfo], None] = on_selected

        self.state: SelectionState = SelectionState.IDLE
        self.last_info: PathInfo | None = None

    def open_chooser(self) -> bool:
        if self.state not in (SelectionState.IDLE, SelectionState.ERROR) or not self._can_select():
            return False

        self.state = SelectionState.CHOOSER_OPEN
        self._dialogs.open(DialogKind.CHOOSER, on_close=self._on_chooser_closed)

        return True

    def cancel_chooser(self):
        self._dialogs.close_if(DialogKind.CHOOSER)

    async def choose_file(self) -> TransferError | None:
        return await self._choose(SelectionState.FILE_PICKING)

    async def choose_folder(self) -> TransferError | None:
        return await self._choose(SelectionState.FOLDER_PICKING)

    def reset(self):
        # The summary list is cleared by the controller; only forget what we showed
        self.last_info = None

    async def _choose(self, picking: SelectionState) -> TransferError | None:
        if self.state != SelectionState.CHOOSER_OPEN:
            return None

        self.state = picking
        self._dialogs.close_if(DialogKind.CHOOSER)

        backend = self._gate.acquire()

        if backend is None:
            return self._fail(BackendNotReady(), DIALOG_BACKEND_NOT_READY)

        label = "file" if picking == SelectionState.FILE_PICKING else "folder"

        try:
            if picking == SelectionState.FILE_PICKING:
                path = await backend.select_file()
            else:
                path = await backend.select_folder()
        except Exception as e:
            logger.warning("Selecting %s failed: %s", label, e)
            return self._fail(OperationFailed(str(e)), f"Selecting {label} failed: {e}")

        # Cancelled in the native picker
        if not path:
            self.state = SelectionState.IDLE
            return None

        return await self._resolve(backend, path)

    async def _resolve(self, backend: Backend, path: str) -> TransferError | None:
        self.state = SelectionState.RESOLVING_METADATA

        try:
            data = await backend.get_file_info(path)
        except Exception as e:
            logger.warning("Getting file info for %s failed: %s", path, e)
            return self._fail(FileInfoError(str(e)), f"Getting file info failed: {e}")

        info = PathInfo.from_backend(data or {})

        if info.error:
            logger.warning("Getting file info for %s failed: %s", path, info.error)
            return self._fail(FileInfoError(info.error), f"Getting file info failed: {info.error}")

        if not self._can_select():
            # Page changed while the picker was open
            logger.info("Discarding selection of %s, session left the send page", path)
            self.state = SelectionState.IDLE
            return None

        # At most one item is ever shown
        self._renderer.render_selection(None)
        self._renderer.render_selection(info)

        self.last_info = info
        self._on_selected(path, info)
        self.state = SelectionState.IDLE

        logger.info("Selected %s (%s, %s)", path, "folder" if info.is_directory else "file", info.size_display)
        return None

    def _fail(self, error: TransferError, message: str) -> TransferError:
        if not self._can_select():
            # Nobody is on the send page to read the dialog
            logger.info("Not showing selection error, session left the send page: %s", message)
            self.state = SelectionState.IDLE
            return error

        self.state = SelectionState.ERROR
        self._dialogs.open(DialogKind.ERROR, message, on_close=self._on_error_closed)

        return error

    def _on_chooser_closed(self):
        if self.state == SelectionState.CHOOSER_OPEN:
            self.state = SelectionState.IDLE

    def _on_error_closed(self):
        if self.state == SelectionState.ERROR:
            self.state = SelectionState.IDLE
