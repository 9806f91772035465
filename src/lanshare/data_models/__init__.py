from lanshare.data_models.page import Page
from lanshare.data_models.session import Session, OperationKind
from lanshare.data_models.progress_snapshot import ProgressSnapshot
from lanshare.data_models.path_info import PathInfo
from lanshare.data_models.dialog_handle import DialogHandle, DialogKind
