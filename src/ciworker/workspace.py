# workspace.py
from __future__ import annotations

import shutil
import uuid
from pathlib import Path

from .errors import WorkspaceError
from .ui.console import get_console

WORKSPACE_PREFIX = "work_"


class WorkspaceManager:
    """Creates and removes one throwaway directory per job."""

    def __init__(self, root: str | Path = "."):
        self.root = Path(root)

    def create(self) -> Path:
        """
        Create a fresh, empty workspace directory under the root.

        Raises:
            WorkspaceError: If the directory cannot be created
        """
        path = self.root / f"{WORKSPACE_PREFIX}{uuid.uuid4().hex}"
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            # exist_ok=False: a workspace is never shared between jobs
            path.mkdir()
        except OSError as e:
            raise WorkspaceError(f"Failed to create work directory {path}: {e}") from e
        get_console().print_debug(f"workspace created: {path}")
        return path

    def destroy(self, path: Path) -> bool:
        """
        Recursively remove a workspace.

        Never raises: a failed removal is reported as a warning so one bad
        teardown cannot take the worker down. Returns True on success.
        """
        console = get_console()
        console.print_cleanup(str(path))
        try:
            shutil.rmtree(path)
        except OSError as e:
            console.print_warning(f"Failed to remove work directory {path}: {e}")
            return False
        return True
