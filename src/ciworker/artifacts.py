# artifacts.py
from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .model import Artifact, JobLog, JobOutput
from .ui.console import get_console


def _resolve_inside(workspace: Path, rel: str) -> Path:
    root = workspace.resolve()
    path = (root / rel).resolve()
    if path != root and root not in path.parents:
        raise ValueError(f"path {rel!r} is outside the workspace")
    return path


def read_artifact(output: JobOutput, workspace: Path) -> Artifact:
    """
    Read one declared output as UTF-8 text.

    Raises:
        ValueError: path escapes the workspace, or content is not valid UTF-8
        OSError: missing, unreadable, or a directory
    """
    path = _resolve_inside(workspace, output.path)
    # read_bytes: text mode would fold \r\n and \r into \n
    return Artifact(name=output.name, content=path.read_bytes().decode("utf-8"))


def collect_artifacts(
    outputs: Sequence[JobOutput],
    workspace: str | Path,
    *,
    log: JobLog,
) -> List[Artifact]:
    """
    Collect declared outputs from the workspace, in declaration order.

    An output that cannot be read is skipped and noted in the log; it never
    fails the job.
    """
    console = get_console()
    workspace_p = Path(workspace)
    artifacts: List[Artifact] = []

    for output in outputs:
        try:
            # UnicodeDecodeError is a ValueError
            artifact = read_artifact(output, workspace_p)
        except (OSError, ValueError) as e:
            log.append("collect", f"Error reading output {output.name}: {e}\n")
            console.print_artifact_skipped(output.name, str(e))
            continue
        artifacts.append(artifact)
        console.print_artifact_collected(output.name)

    return artifacts
