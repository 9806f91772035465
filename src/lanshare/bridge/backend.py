from typing import Any, Mapping, Protocol, runtime_checkable

@runtime_checkable
class Backend(Protocol):
    """Command surface the backend process exposes over the bridge.

    Every method is a coroutine and may raise; the session controller
    converts failures into status text or an error dialog.
    """

    async def send(self, path: str) -> None: ...

    async def receive(self) -> None: ...

    async def restart_receive(self) -> None: ...

    # Both return "" when the user cancels the native picker
    async def select_file(self) -> str: ...

    async def select_folder(self) -> str: ...

    # Keys: name, isDirectory, sizeDisplay and optionally error
    async def get_file_info(self, path: str) -> Mapping[str, Any]: ...
