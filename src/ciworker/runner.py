# runner.py
from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .model import JobLog, JobStatus
from .ui.console import get_console


@dataclass
class StepFailure(Exception):
    cmd: str
    exit_code: int

    def __str__(self) -> str:
        return f"command failed (exit={self.exit_code}): {self.cmd}"


@dataclass(frozen=True)
class RunOutcome:
    """
    What happened when a command list ran.

    executed: number of commands that were started (including the failing one)
    failed_command/exit_code: set only when status is FAILED; exit_code stays
    None for a command that could not be launched.
    """
    status: JobStatus
    executed: int
    failed_command: Optional[str] = None
    exit_code: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status is JobStatus.SUCCESS


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _run_step(cmd: str, cwd: Path, log: JobLog) -> None:
    """
    Run one shell command in `cwd`, appending its output to the log.

    Raises StepFailure on non-zero exit, OSError or ValueError (embedded NUL)
    if it cannot be launched.
    """
    proc = subprocess.run(
        cmd,
        shell=True,
        cwd=str(cwd),
        capture_output=True,
    )

    # each stream is captured whole: stdout first, then stderr.
    # Decoded from bytes so \r and \r\n survive as the tool wrote them.
    log.append("run", proc.stdout.decode("utf-8", errors="replace"), command=cmd, stream="stdout")
    log.append("run", proc.stderr.decode("utf-8", errors="replace"), command=cmd, stream="stderr")

    if proc.returncode != 0:
        raise StepFailure(cmd=cmd, exit_code=proc.returncode)


def run_commands(commands: Sequence[str], cwd: str | Path, *, log: JobLog) -> RunOutcome:
    """
    Run shell commands in order inside `cwd`, stopping at the first failure.

    Commands inherit the process environment; only the working directory
    is overridden.
    """
    console = get_console()
    cwd_p = Path(cwd)
    total = len(commands)

    for i, cmd in enumerate(commands, start=1):
        console.print_command(i, total, cmd)
        log.append("run", f"Command: {cmd}\n", command=cmd)
        try:
            _run_step(cmd, cwd_p, log)
        except StepFailure as e:
            console.print_failure("command", str(e), exit_code=e.exit_code)
            return RunOutcome(JobStatus.FAILED, executed=i, failed_command=cmd, exit_code=e.exit_code)
        except (OSError, ValueError) as e:
            log.append("run", f"Error executing command: {e}\n", command=cmd)
            console.print_failure("command", f"Error executing command: {e}")
            return RunOutcome(JobStatus.FAILED, executed=i, failed_command=cmd)
        console.print_command_ok()

    return RunOutcome(JobStatus.SUCCESS, executed=total)
