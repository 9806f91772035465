from dataclasses import dataclass
from enum import Enum, auto

from lanshare.constants import STATUS_READY
from lanshare.data_models.page import Page
from lanshare.data_models.progress_snapshot import ProgressSnapshot

class OperationKind(Enum):
    SEND = auto()
    RECEIVE = auto()
    RESTART_RECEIVE = auto()

@dataclass
class Session:
    active_page: Page = Page.HOME
    send_status_text: str = STATUS_READY
    receive_status_text: str = ""
    selected_path: str | None = None
    last_progress: ProgressSnapshot | None = None
    in_flight_operation: OperationKind | None = None
