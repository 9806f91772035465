from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable

class DialogKind(Enum):
    CHOOSER = auto()
    ERROR = auto()

@dataclass
class DialogHandle:
    kind: DialogKind
    element: Any # Whatever the renderer returned from show_dialog
    key_listener: Callable[[str], None]
    message: str | None = None
    on_close: Callable[[], None] | None = None
