from __future__ import annotations


class WorkerError(Exception):
    """Base class for job-level failures raised inside the worker."""
    pass


class WorkspaceError(WorkerError):
    """Raised when a job workspace cannot be created."""
    pass


class FetchError(WorkerError):
    """
    Raised when the repository cannot be cloned.

    `detail` carries the git stderr (non-zero exit) or the invocation
    error text (git could not be started at all).
    """

    def __init__(self, message: str, detail: str, *, invoked: bool = True):
        super().__init__(message)
        self.detail = detail
        self.invoked = invoked
