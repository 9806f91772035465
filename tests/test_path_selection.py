import asyncio

from lanshare.controller.path_selection import SelectionState
from lanshare.data_models.dialog_handle import DialogKind
from lanshare.data_models.page import Page
from lanshare.data_models.session import OperationKind
from lanshare.errors import BackendNotReady, FileInfoError, OperationFailed


def _on_send_page(controller):
    asyncio.run(controller.navigate(Page.SEND))


def test_chooser_only_opens_on_send_page(controller, renderer):
    assert controller.open_chooser() is False
    assert renderer.of("show_dialog") == []

    _on_send_page(controller)

    assert controller.open_chooser() is True
    assert controller.selection.state == SelectionState.CHOOSER_OPEN
    assert controller.dialogs.current.kind == DialogKind.CHOOSER


def test_chooser_refused_while_operation_in_flight(controller):
    _on_send_page(controller)
    controller.session.in_flight_operation = OperationKind.SEND

    assert controller.open_chooser() is False


def test_folder_selection_renders_single_item(controller, backend, renderer):
    backend.select_folder.return_value = "/home/me/photos"
    backend.get_file_info.return_value = {"isDirectory": True, "name": "photos", "sizeDisplay": "128.4 MB"}
    _on_send_page(controller)
    controller.open_chooser()

    assert asyncio.run(controller.choose_folder()) is None

    shown = renderer.rendered_selection
    assert len(shown) == 1
    assert shown[0].name == "photos"
    assert shown[0].size_display == "128.4 MB"
    assert shown[0].is_directory
    assert controller.session.selected_path == "/home/me/photos"
    assert controller.selection.state == SelectionState.IDLE
    assert not controller.dialogs.is_open
    backend.get_file_info.assert_awaited_once_with("/home/me/photos")


def test_new_selection_replaces_previous_item(controller, backend, renderer):
    _on_send_page(controller)

    for name in ("a.txt", "b.txt"):
        backend.select_file.return_value = f"/tmp/{name}"
        backend.get_file_info.return_value = {"isDirectory": False, "name": name, "sizeDisplay": "1 KB"}
        controller.open_chooser()
        asyncio.run(controller.choose_file())

    assert [info.name for info in renderer.rendered_selection] == ["b.txt"]
    assert controller.session.selected_path == "/tmp/b.txt"


def test_cancelled_picker_returns_to_idle_silently(controller, backend, renderer):
    backend.select_file.return_value = ""
    _on_send_page(controller)
    controller.open_chooser()

    assert asyncio.run(controller.choose_file()) is None

    assert controller.selection.state == SelectionState.IDLE
    assert controller.session.selected_path is None
    assert not controller.dialogs.is_open
    backend.get_file_info.assert_not_awaited()
    assert [call[1] for call in renderer.of("show_dialog")] == [DialogKind.CHOOSER]


def test_file_info_error_opens_error_dialog(controller, backend, renderer):
    backend.select_file.return_value = "/root/secret"
    backend.get_file_info.return_value = {"error": "permission denied"}
    _on_send_page(controller)
    controller.open_chooser()

    error = asyncio.run(controller.choose_file())

    assert isinstance(error, FileInfoError)
    assert error.reason == "permission denied"
    assert controller.session.selected_path is None
    assert controller.dialogs.current.kind == DialogKind.ERROR
    assert "permission denied" in controller.dialogs.current.message
    assert controller.selection.state == SelectionState.ERROR
    assert renderer.rendered_selection == []


def test_error_dialog_close_returns_to_idle(controller, backend):
    backend.select_file.return_value = "/root/secret"
    backend.get_file_info.side_effect = RuntimeError("gone")
    _on_send_page(controller)
    controller.open_chooser()

    error = asyncio.run(controller.choose_file())
    controller.close_dialog()

    assert isinstance(error, FileInfoError)
    assert controller.selection.state == SelectionState.IDLE
    assert controller.keyboard.listener_count == 0


def test_picker_failure_is_operation_failed(controller, backend):
    backend.select_folder.side_effect = RuntimeError("dialog crashed")
    _on_send_page(controller)
    controller.open_chooser()

    error = asyncio.run(controller.choose_folder())

    assert isinstance(error, OperationFailed)
    assert controller.dialogs.current.kind == DialogKind.ERROR


def test_backend_not_ready_shows_error_dialog(offline_controller):
    _on_send_page(offline_controller)
    offline_controller.open_chooser()

    error = asyncio.run(offline_controller.choose_file())

    assert isinstance(error, BackendNotReady)
    assert offline_controller.dialogs.current.kind == DialogKind.ERROR


def test_escape_on_chooser_leaves_nothing_behind(controller, renderer):
    _on_send_page(controller)
    controller.open_chooser()

    controller.handle_key("Escape")

    assert not controller.dialogs.is_open
    assert renderer.open_elements == []
    assert controller.keyboard.listener_count == 0
    assert controller.selection.state == SelectionState.IDLE


def test_cancel_chooser_routes_through_close(controller, renderer):
    _on_send_page(controller)
    controller.open_chooser()

    controller.cancel_chooser()

    assert renderer.open_elements == []
    assert controller.keyboard.listener_count == 0
    assert controller.selection.state == SelectionState.IDLE


def test_picker_failure_after_leaving_send_page_opens_no_dialog(controller, backend, renderer):
    _on_send_page(controller)
    controller.open_chooser()

    async def exercise():
        release = asyncio.Event()

        async def crash_later():
            await release.wait()
            raise RuntimeError("dialog crashed")

        backend.select_file.side_effect = crash_later
        picking = asyncio.create_task(controller.choose_file())
        await asyncio.sleep(0)

        await controller.navigate(Page.HOME)
        release.set()

        return await picking

    error = asyncio.run(exercise())

    assert isinstance(error, OperationFailed)
    assert not controller.dialogs.is_open
    assert renderer.open_elements == []
    assert controller.selection.state == SelectionState.IDLE
