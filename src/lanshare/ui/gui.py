import sys
import logging

from PyQt6.QtCore import QEvent, QObject, Qt
from PyQt6.QtWidgets import QApplication, QHBoxLayout, QLabel, QListWidgetItem, QMainWindow, QPushButton, QVBoxLayout, QWidget

from lanshare.bridge.binding_gate import BackendBindingGate
from lanshare.bridge.bridge import Bridge
from lanshare.config import Settings
from lanshare.controller.session_controller import TransferSessionController
from lanshare.data_models.dialog_handle import DialogKind
from lanshare.data_models.page import Page
from lanshare.data_models.path_info import PathInfo
from lanshare.data_models.progress_snapshot import ProgressSnapshot

from .gui_layout import Ui_MainWindow
from .loop_thread import LoopThread
from .qt_renderer import QtRenderer

logger = logging.getLogger(__name__)

ZOOM_KEYS: tuple = (Qt.Key.Key_Plus, Qt.Key.Key_Minus, Qt.Key.Key_0, Qt.Key.Key_Equal)

class _InputFilter(QObject):
    """Forwards Escape to the controller and blocks Ctrl zooming."""

    def __init__(self, on_key):
        super().__init__()
        self._on_key = on_key

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        if event.type() == QEvent.Type.KeyPress:
            ctrl = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)

            if ctrl and event.key() in ZOOM_KEYS:
                return True

            if event.key() == Qt.Key.Key_Escape and not event.isAutoRepeat():
                self._on_key("Escape")
                return True

        elif event.type() == QEvent.Type.Wheel:
            if event.modifiers() & Qt.KeyboardModifier.ControlModifier:
                return True

        return False

class _DialogOverlay(QWidget):
    def __init__(self, parent: QWidget, kind: DialogKind, message: str | None, gui: "GUI"):
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet("background-color: rgba(0, 0, 0, 150);")
        self.setGeometry(parent.rect())

        self._kind: DialogKind = kind
        self._gui: GUI = gui

        content = QWidget(self)
        content.setStyleSheet("background-color: rgb(40, 54, 74); border-radius: 8px;")
        layout = QVBoxLayout(content)

        header = QHBoxLayout()
        header.addWidget(QLabel("Choose a file or folder" if kind == DialogKind.CHOOSER else "Error", parent=content))
        close_button = QPushButton("×", parent=content)
        close_button.clicked.connect(self._request_close)
        header.addWidget(close_button)
        layout.addLayout(header)

        if kind == DialogKind.CHOOSER:
            file_button = QPushButton("Choose file", parent=content)
            file_button.clicked.connect(gui._choose_file)
            layout.addWidget(file_button)

            folder_button = QPushButton("Choose folder", parent=content)
            folder_button.clicked.connect(gui._choose_folder)
            layout.addWidget(folder_button)
        else:
            text = QLabel(message or "", parent=content)
            text.setWordWrap(True)
            layout.addWidget(text)

            ok_button = QPushButton("OK", parent=content)
            ok_button.clicked.connect(self._request_close)
            layout.addWidget(ok_button)

        outer = QVBoxLayout(self)
        outer.addStretch()
        outer.addWidget(content, alignment=Qt.AlignmentFlag.AlignCenter)
        outer.addStretch()

    # Clicking the overlay outside the content closes the dialog
    def mousePressEvent(self, event):
        if self.childAt(event.position().toPoint()) is None:
            self._request_close()

    def _request_close(self):
        if self._kind == DialogKind.CHOOSER:
            self._gui._submit_call(self._gui._session_controller.cancel_chooser)
        else:
            self._gui._submit_call(self._gui._session_controller.close_dialog)

class GUI():
    def __init__(self, settings: Settings | None = None):
        self._settings: Settings = settings or Settings()

        self._window: QMainWindow | None = None
        self._ui: Ui_MainWindow | None = None
        self._app: QApplication | None = None
        self._input_filter: _InputFilter | None = None
        self._dialogs: dict[int, _DialogOverlay] = {}

        self._bridge: Bridge = Bridge()
        self._loop_thread: LoopThread = LoopThread()
        self._renderer: QtRenderer = QtRenderer()
        self._gate: BackendBindingGate = BackendBindingGate(self._bridge, max_wait=self._settings.backend_max_wait)
        self._session_controller: TransferSessionController = TransferSessionController(
            self._gate, self._bridge.events, self._renderer
        )

    @property
    def bridge(self) -> Bridge:
        return self._bridge

    # Sets up the main window
    def window_setup(self):
        self._app = QApplication(sys.argv)
        self._window = QMainWindow()

        self._ui = Ui_MainWindow()
        self._ui.setupUi(self._window)

        self._setup_window_widgets()
        self._window.show()

        # The controller runs on its own loop so the GUI thread stays free
        self._loop_thread.start_and_wait()
        self._bridge.events.attach_loop(self._loop_thread.loop)
        self._submit_call(self._session_controller.start)
        self._publish_backend()

        self._app.aboutToQuit.connect(self._exit)
        sys.exit(self._app.exec())

    def _setup_window_widgets(self):
        controller = self._session_controller

        self._ui.goSendButton.clicked.connect(lambda: self._submit(controller.navigate(Page.SEND)))
        self._ui.goReceiveButton.clicked.connect(lambda: self._submit(controller.navigate(Page.RECEIVE)))
        self._ui.sendBackButton.clicked.connect(lambda: self._submit(controller.navigate(Page.HOME)))
        self._ui.receiveBackButton.clicked.connect(lambda: self._submit(controller.navigate(Page.HOME)))
        self._ui.dropZoneButton.clicked.connect(lambda: self._submit_call(controller.open_chooser))
        self._ui.sendButton.clicked.connect(lambda: self._submit(controller.send()))
        self._ui.resetSendButton.clicked.connect(lambda: self._submit_call(controller.reset_send))
        self._ui.resetReceiveButton.clicked.connect(lambda: self._submit(controller.reset_receive()))

        # Signals
        self._renderer.page_signal.connect(self._show_page)
        self._renderer.status_signal.connect(self._update_status)
        self._renderer.progress_signal.connect(self._update_progress)
        self._renderer.selection_signal.connect(self._update_selection)
        self._renderer.dialog_opened_signal.connect(self._open_dialog)
        self._renderer.dialog_closed_signal.connect(self._close_dialog)

        self._input_filter = _InputFilter(lambda key: self._submit_call(controller.handle_key, key))
        self._app.installEventFilter(self._input_filter)

    def _publish_backend(self):
        try:
            factory = self._settings.load_backend_factory()
        except (ImportError, AttributeError, ValueError) as e:
            logger.error("Could not load backend: %s", e)
            return

        if factory is None:
            logger.warning("No backend configured, set LANSHARE_BACKEND to 'module:factory'")
            return

        # The factory gets the event channel so it can push events
        self._bridge.publish(factory(self._bridge.events))

    # Used when program is about to exit
    def _exit(self):
        self._submit_call(self._session_controller.shutdown)
        self._loop_thread.stop()
        self._loop_thread.join(timeout=2)

    def _submit(self, coro):
        self._loop_thread.submit(coro)

    def _submit_call(self, fn, *args):
        self._loop_thread.call(fn, *args)

    def _choose_file(self):
        self._submit(self._session_controller.choose_file())

    def _choose_folder(self):
        self._submit(self._session_controller.choose_folder())

    #############
    # Rendering #
    #############

    def _show_page(self, page: Page):
        pages = {
            Page.HOME: self._ui.homePage,
            Page.SEND: self._ui.sendPage,
            Page.RECEIVE: self._ui.receivePage,
        }

        self._ui.stackedWidget.setCurrentWidget(pages[page])

    def _update_status(self, page: Page, text: str):
        if page == Page.SEND:
            self._ui.sendStatusLabel.setText(text)
        elif page == Page.RECEIVE:
            self._ui.receiveStatusLabel.setText(text)

    def _update_progress(self, page: Page, snapshot: ProgressSnapshot):
        widgets = self._ui.sendProgress if page == Page.SEND else self._ui.receiveProgress

        widgets["bar"].setValue(int(snapshot.progress_percent * 10))
        widgets["percent"].setText(snapshot.progress_text)
        widgets["speed"].setText(snapshot.current_speed_mbps)
        widgets["eta"].setText(snapshot.estimated_time_text)
        widgets["file"].setText(snapshot.current_file)

    def _update_selection(self, info: PathInfo | None):
        self._ui.fileList.clear()

        if info is None:
            self._ui.selectedFilesWidget.hide()
            return

        icon = "\U0001f4c1" if info.is_directory else "\U0001f4c4"
        self._ui.fileList.addItem(QListWidgetItem(f"{icon}  {info.name}    {info.size_display}"))
        self._ui.selectedFilesWidget.show()

    def _open_dialog(self, dialog_id: int, kind: DialogKind, message: str | None):
        overlay = _DialogOverlay(self._ui.centralwidget, kind, message, self)
        self._dialogs[dialog_id] = overlay
        overlay.show()
        overlay.raise_()

    def _close_dialog(self, dialog_id: int):
        overlay = self._dialogs.pop(dialog_id, None)

        if overlay is not None:
            overlay.hide()
            overlay.deleteLater()
