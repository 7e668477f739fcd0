"""Console output formatting utilities for the worker."""

from __future__ import annotations

import sys
from typing import Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_server_started(self, host: str, port: int, work_root: str) -> None:
        """Print server start information."""
        print("\nWORKER STARTED")
        print(f"Listening on: {host}:{port}")
        print(f"Work root: {work_root}")
        print()

    def print_job_received(self, name: str, repository: str, branch: str) -> None:
        """Print job arrival message."""
        print(f"\nJOB RECEIVED: {name}")
        print(f"Repository: {repository}")
        print(f"Branch: {branch}")

    def print_clone_started(self, repository: str) -> None:
        print(f"CLONE: {repository}")

    def print_clone_ok(self) -> None:
        print("CLONE: ok")

    def print_command(self, index: int, total: int, cmd: str) -> None:
        """Print command start message (1-based index)."""
        print(f"COMMAND {index}/{total}: {cmd}")

    def print_command_ok(self) -> None:
        print("COMMAND: ok")

    def print_failure(
        self,
        name: str,
        reason: str,
        exit_code: Optional[int] = None,
        hint: Optional[str] = None,
    ) -> None:
        """
        Print failure message.

        Args:
            name: What failed (clone, command, workspace, ...)
            reason: Failure reason/error message
            exit_code: Optional exit code
            hint: Optional hint for user
        """
        print(f"FAILED: {name}")
        if exit_code is not None:
            print(f"Exit code: {exit_code}")
        if hint:
            print(f"Hint: {hint}")
        if self.debug:
            print(f"Error details: {reason}")
        else:
            # Show first line of error for non-debug mode
            error_line = reason.strip().split("\n")[0] if reason else "Unknown error"
            print(f"Error: {error_line}")

    def print_artifact_collected(self, name: str) -> None:
        print(f"ARTIFACT: {name}")

    def print_artifact_skipped(self, name: str, reason: str) -> None:
        print(f"ARTIFACT SKIPPED: {name} ({reason})")

    def print_cleanup(self, path: str) -> None:
        print(f"CLEANUP: {path}")

    def print_warning(self, message: str) -> None:
        """Print a non-fatal warning."""
        print(f"WARNING: {message}", file=sys.stderr)

    def print_job_finished(self, status: str, duration: Optional[float] = None) -> None:
        """Print job completion message."""
        print("\nJOB FINISHED")
        print(f"Status: {status}")
        if duration is not None:
            print(f"Duration: {duration:.1f}s")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
