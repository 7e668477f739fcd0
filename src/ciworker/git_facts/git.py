# git.py
# Small, focused wrapper around the Git CLI.
# This module centralizes all Git interactions so the rest of the worker
# never needs to call subprocess("git ...") directly.

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from ..errors import FetchError


def _git(args: list[str], cwd: Optional[str | Path] = None) -> subprocess.CompletedProcess:
    """
    Execute a git command and return the completed process.

    This is the single low-level entry point for all Git operations in this file.
    Unlike a check_output wrapper it never raises on a non-zero exit: the clone
    path needs git's stderr text to report back to the client.

    Args:
        args: List of git arguments (e.g. ["clone", "--branch", "main", url, dest])
        cwd: Optional working directory in which to run the git command.

    Returns:
        CompletedProcess with text stdout/stderr.

    Raises:
        OSError: If git cannot be started at all (e.g. not installed).
        ValueError: If an argument cannot be passed to a process (embedded NUL).
    """
    # bytes in, lossy UTF-8 out: text mode would rewrite \r and \r\n
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd) if cwd is not None else None,
        check=False,
        capture_output=True,
    )
    return subprocess.CompletedProcess(
        proc.args,
        proc.returncode,
        stdout=proc.stdout.decode("utf-8", errors="replace"),
        stderr=proc.stderr.decode("utf-8", errors="replace"),
    )


def clone_branch(repository: str, branch: str, into: str | Path) -> None:
    """
    Clone exactly one branch of a repository into an existing, empty directory.

    Args:
        repository: Remote URL or local path of the repository
        branch: Branch (or tag) name to check out
        into: Target directory; must exist and be empty

    Raises:
        FetchError: If git exits non-zero (detail = stderr) or cannot be invoked
                    (detail = invocation error)
    """
    try:
        # --branch makes the clone fail outright when the branch is missing,
        # rather than silently checking out the default branch.
        result = _git(["clone", "--branch", branch, "--", repository, str(into)])
    except (OSError, ValueError) as e:
        raise FetchError(
            f"Error cloning repository: {e}",
            detail=str(e),
            invoked=False,
        ) from e

    if result.returncode != 0:
        raise FetchError(
            f"Failed to clone repository: {result.stderr}",
            detail=result.stderr,
        )


def head_sha(repo: str | Path) -> Optional[str]:
    """
    Return the full SHA of HEAD in a checked-out repository, or None if git
    cannot resolve it.

    Used for provenance in debug output after a clone.
    """
    # `git rev-parse HEAD` resolves HEAD to its commit hash
    try:
        result = _git(["rev-parse", "HEAD"], cwd=repo)
    except (OSError, ValueError):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()
