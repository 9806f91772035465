class TransferError(Exception):
    """Base class for every failure the session surfaces to the user."""

    def __init__(self, reason: str = ""):
        super().__init__(reason)
        self.reason: str = reason


class BackendNotReady(TransferError):
    pass


class OperationInProgress(TransferError):
    pass


class NoPathSelected(TransferError):
    pass


class OperationFailed(TransferError):
    """Wraps a rejected backend call."""


class FileInfoError(TransferError):
    """The backend could not resolve metadata for a selected path."""
