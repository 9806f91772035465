import asyncio
import logging

from lanshare.bridge.binding_gate import BackendBindingGate
from lanshare.bridge.events import (
    EVENT_TYPES,
    OPERATION_COMPLETED,
    STATS_UPDATED,
    STATUS_UPDATED,
    BridgeEvent,
    EventChannel,
    Subscription,
)
from lanshare.constants import (
    RESTART_RECEIVE_DELAY,
    STATUS_BACKEND_NOT_READY,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_NO_PATH,
    STATUS_READY,
    STATUS_RECEIVING,
    STATUS_RESTARTING_RECEIVE,
    STATUS_SENDING,
    STATUS_STARTING_RECEIVE,
)
from lanshare.controller.dialog_manager import ModalDialogManager
from lanshare.controller.keyboard import KeyboardHub
from lanshare.controller.path_selection import PathSelectionFlow
from lanshare.data_models.page import Page
from lanshare.data_models.path_info import PathInfo
from lanshare.data_models.session import OperationKind, Session
from lanshare.errors import (
    BackendNotReady,
    NoPathSelected,
    OperationFailed,
    OperationInProgress,
    TransferError,
)
from lanshare.progress.projector import ZERO_PROGRESS, project
from lanshare.ui.renderer import Renderer

logger = logging.getLogger(__name__)

class TransferSessionController:
    """Owns the ``Session`` and is the only thing that mutates it.

    Commands are coroutines meant to run on the controller's event loop.
    They never raise for transfer failures; the surfaced ``TransferError``
    (or ``None``) is returned so callers can inspect it.

    ``in_flight_operation`` is cleared only by the settling command itself.
    The ``operation-completed`` event only changes status text.
    """

    def __init__(
        self,
        gate: BackendBindingGate,
        events: EventChannel,
        renderer: Renderer,
        keyboard: KeyboardHub | None = None,
        restart_delay: float = RESTART_RECEIVE_DELAY,
    ):
        self._gate: BackendBindingGate = gate
        self._events: EventChannel = events
        self._renderer: Renderer = renderer
        self._subscriptions: list[Subscription] = []
        self._restart_generation: int = 0
        self._slot_owner: object | None = None

        self.keyboard: KeyboardHub = keyboard or KeyboardHub()
        self.dialogs: ModalDialogManager = ModalDialogManager(renderer, self.keyboard)
        self.selection: PathSelectionFlow = PathSelectionFlow(
            gate,
            self.dialogs,
            renderer,
            can_select=self._can_select,
            on_selected=self._on_path_selected,
        )
        self.restart_delay: float = restart_delay
        self.session: Session = Session()

    #############
    # Lifecycle #
    #############

    def start(self):
        if self._subscriptions:
            return

        for event_type in EVENT_TYPES:
            self._subscriptions.append(self._events.subscribe(event_type, self._on_bridge_event))

        self._gate.start()
        self._renderer.render(self.session.active_page)

        logger.info("Session controller started")

    def shutdown(self):
        for sub in self._subscriptions:
            sub.unsubscribe()

        self._subscriptions.clear()
        self._gate.cancel()
        self.dialogs.close()

        # Drops any restart still waiting out its delay
        self._restart_generation += 1

        logger.info("Session controller shut down")

    ############
    # Requests #
    ############

    async def navigate(self, page: Page) -> TransferError | None:
        previous = self.session.active_page
        self.session.active_page = page
        self._renderer.render(page)

        logger.debug("Navigated from %s to %s", previous.name, page.name)

        # The selection is scoped to the send page
        if previous == Page.SEND and page != Page.SEND:
            self.dialogs.close()
            self._clear_selection()

        if page == Page.SEND:
            self._set_status(Page.SEND, STATUS_READY)
        elif page == Page.RECEIVE:
            if self.session.in_flight_operation in (OperationKind.RECEIVE, OperationKind.RESTART_RECEIVE):
                self._set_status(Page.RECEIVE, STATUS_RECEIVING)
                return None

            # Receive has no manual start step
            self._set_status(Page.RECEIVE, STATUS_STARTING_RECEIVE)
            return await self.receive()

        return None

    async def send(self) -> TransferError | None:
        backend = self._gate.acquire()

        if backend is None:
            return self._reject(Page.SEND, BackendNotReady(), STATUS_BACKEND_NOT_READY)

        if self.session.in_flight_operation is not None:
            return self._reject(Page.SEND, OperationInProgress(self.session.in_flight_operation.name), STATUS_IN_PROGRESS)

        path = self.session.selected_path

        if not path:
            return self._reject(Page.SEND, NoPathSelected(), STATUS_NO_PATH)

        token = self._claim(OperationKind.SEND)
        self._set_status(Page.SEND, STATUS_SENDING)

        try:
            await backend.send(path)
        except Exception as e:
            logger.warning("Sending %s failed: %s", path, e)
            self._set_status(Page.SEND, f"Send failed: {e}")
            return OperationFailed(str(e))
        finally:
            self._settle(token)

        return None

    async def receive(self) -> TransferError | None:
        backend = self._gate.acquire()

        if backend is None:
            return self._reject(Page.RECEIVE, BackendNotReady(), STATUS_BACKEND_NOT_READY)

        if self.session.in_flight_operation is not None:
            return self._reject(Page.RECEIVE, OperationInProgress(self.session.in_flight_operation.name), STATUS_IN_PROGRESS)

        token = self._claim(OperationKind.RECEIVE)
        self._set_status(Page.RECEIVE, STATUS_RECEIVING)

        try:
            await backend.receive()
        except Exception as e:
            logger.warning("Receiving failed: %s", e)

            # A restart took this receive over, its status stands
            if self._slot_owner is token:
                self._set_status(Page.RECEIVE, f"Receive failed: {e}")

            return OperationFailed(str(e))
        finally:
            self._settle(token)

        return None

    async def restart_receive(self) -> TransferError | None:
        if self.session.active_page != Page.RECEIVE:
            return None

        if self._gate.acquire() is None:
            return self._reject(Page.RECEIVE, BackendNotReady(), STATUS_BACKEND_NOT_READY)

        if self.session.in_flight_operation == OperationKind.SEND:
            return self._reject(Page.RECEIVE, OperationInProgress(OperationKind.SEND.name), STATUS_IN_PROGRESS)

        if self.session.in_flight_operation == OperationKind.RESTART_RECEIVE:
            return self._restart_busy()

        self._restart_generation += 1
        generation = self._restart_generation

        self._set_status(Page.RECEIVE, STATUS_RESTARTING_RECEIVE)
        await asyncio.sleep(self.restart_delay)

        # Superseded by a newer restart, or the page changed during the delay
        if generation != self._restart_generation or self.session.active_page != Page.RECEIVE:
            logger.debug("Dropping stale receive restart")
            return None

        backend = self._gate.acquire()

        # Replaces a running receive, the backend tears that one down itself
        token = self._claim(OperationKind.RESTART_RECEIVE)

        try:
            await backend.restart_receive()
        except Exception as e:
            # Best effort, no retry and the page stays on receive
            logger.warning("Restarting receive failed: %s", e)
            self._set_status(Page.RECEIVE, f"{STATUS_RECEIVING} ({e})")
            return OperationFailed(str(e))
        finally:
            self._settle(token)

        self._set_status(Page.RECEIVE, STATUS_RECEIVING)
        return None

    def reset_send(self) -> TransferError | None:
        # Only the displayed state is reset, a running backend send keeps going
        if self._gate.acquire() is None:
            return self._reject(Page.SEND, BackendNotReady(), STATUS_BACKEND_NOT_READY)

        self._clear_selection()
        self._set_status(Page.SEND, STATUS_READY)
        self._reset_progress(Page.SEND)

        return None

    async def reset_receive(self) -> TransferError | None:
        if self._gate.acquire() is None:
            return self._reject(Page.RECEIVE, BackendNotReady(), STATUS_BACKEND_NOT_READY)

        self._reset_progress(Page.RECEIVE)

        return await self.restart_receive()

    #############
    # Selection #
    #############

    def open_chooser(self) -> bool:
        return self.selection.open_chooser()

    def cancel_chooser(self):
        self.selection.cancel_chooser()

    async def choose_file(self) -> TransferError | None:
        return await self.selection.choose_file()

    async def choose_folder(self) -> TransferError | None:
        return await self.selection.choose_folder()

    def close_dialog(self):
        self.dialogs.close()

    def handle_key(self, key: str):
        self.keyboard.dispatch(key)

    ##########
    # Events #
    ##########

    def _on_bridge_event(self, event: BridgeEvent):
        page = self.session.active_page

        # Nothing listens on the home page, events are dropped rather than queued
        if page == Page.HOME:
            logger.debug("Dropping %s on home page", event.type)
            return

        if event.type == STATUS_UPDATED:
            self._set_status(page, str(event.payload or ""))

        elif event.type == OPERATION_COMPLETED:
            self._set_status(page, STATUS_COMPLETED)

        elif event.type == STATS_UPDATED:
            snapshot = project(event.payload)
            self.session.last_progress = snapshot
            self._renderer.render_progress(page, snapshot)

    ###########
    # Helpers #
    ###########

    def _can_select(self) -> bool:
        return self.session.active_page == Page.SEND and self.session.in_flight_operation is None

    def _on_path_selected(self, path: str, info: PathInfo):
        self.session.selected_path = path

    def _clear_selection(self):
        self.session.selected_path = None
        self.selection.reset()
        self._renderer.render_selection(None)

    def _reset_progress(self, page: Page):
        self.session.last_progress = ZERO_PROGRESS
        self._renderer.render_progress(page, ZERO_PROGRESS)

    def _set_status(self, page: Page, text: str):
        if page == Page.SEND:
            self.session.send_status_text = text
        elif page == Page.RECEIVE:
            self.session.receive_status_text = text
        else:
            return

        self._renderer.render_status(page, text)

    def _reject(self, page: Page, error: TransferError, text: str) -> TransferError:
        logger.info("%s rejected locally: %s", page.name.lower(), type(error).__name__)
        self._set_status(page, text)

        return error

    def _restart_busy(self) -> TransferError:
        # The running restart sets the status once it settles
        logger.info("Rejecting receive restart, another restart is already running")
        return OperationInProgress(OperationKind.RESTART_RECEIVE.name)

    def _claim(self, kind: OperationKind) -> object:
        token = object()
        self._slot_owner = token
        self.session.in_flight_operation = kind

        return token

    def _settle(self, token: object):
        # Idempotent, a newer operation may already own the slot
        if self._slot_owner is token:
            self._slot_owner = None
            self.session.in_flight_operation = None
