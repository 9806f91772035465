from typing import Any, Protocol

from lanshare.data_models.dialog_handle import DialogKind
from lanshare.data_models.page import Page
from lanshare.data_models.path_info import PathInfo
from lanshare.data_models.progress_snapshot import ProgressSnapshot

class Renderer(Protocol):
    """What the controller needs from the presentation layer.

    Implementations must not call back into the controller synchronously;
    user input goes through the controller's own entry points.
    """

    def render(self, page: Page) -> None: ...

    def render_status(self, page: Page, text: str) -> None: ...

    def render_progress(self, page: Page, snapshot: ProgressSnapshot) -> None: ...

    def render_selection(self, info: PathInfo | None) -> None: ...

    def show_dialog(self, kind: DialogKind, message: str | None) -> Any: ...

    def close_dialog(self, element: Any) -> None: ...
