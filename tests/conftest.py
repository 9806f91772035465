"""Pytest configuration to ensure the lanshare package is importable."""
from __future__ import annotations

import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

_SRC = Path(__file__).resolve().parents[1] / "src"
_src_str = str(_SRC)
if _src_str not in sys.path:
    sys.path.insert(0, _src_str)

from lanshare.bridge.binding_gate import BackendBindingGate  # noqa: E402
from lanshare.bridge.bridge import Bridge  # noqa: E402
from lanshare.controller.session_controller import TransferSessionController  # noqa: E402


class RecordingRenderer:
    """Renderer double that records every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.open_elements: list[object] = []

    def render(self, page):
        self.calls.append(("render", page))

    def render_status(self, page, text):
        self.calls.append(("status", page, text))

    def render_progress(self, page, snapshot):
        self.calls.append(("progress", page, snapshot))

    def render_selection(self, info):
        self.calls.append(("selection", info))

    def show_dialog(self, kind, message):
        element = object()
        self.open_elements.append(element)
        self.calls.append(("show_dialog", kind, message))
        return element

    def close_dialog(self, element):
        self.open_elements.remove(element)
        self.calls.append(("close_dialog", element))

    def of(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    @property
    def rendered_selection(self):
        """Items currently shown in the single-item selection list."""
        shown = []
        for call in self.of("selection"):
            if call[1] is None:
                shown = []
            else:
                shown.append(call[1])
        return shown


class FakeBackend:
    def __init__(self) -> None:
        self.send = AsyncMock(return_value=None)
        self.receive = AsyncMock(return_value=None)
        self.restart_receive = AsyncMock(return_value=None)
        self.select_file = AsyncMock(return_value="")
        self.select_folder = AsyncMock(return_value="")
        self.get_file_info = AsyncMock(return_value={})


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def bridge(backend) -> Bridge:
    bridge = Bridge()
    bridge.publish(backend)
    return bridge


@pytest.fixture
def controller(bridge, renderer) -> TransferSessionController:
    gate = BackendBindingGate(bridge, poll_interval=0.001, max_wait=0.01)
    return TransferSessionController(gate, bridge.events, renderer, restart_delay=0)


@pytest.fixture
def offline_controller(renderer) -> TransferSessionController:
    bridge = Bridge()
    gate = BackendBindingGate(bridge, poll_interval=0.001, max_wait=0.01)
    return TransferSessionController(gate, bridge.events, renderer, restart_delay=0)
