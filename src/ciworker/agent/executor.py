# agent/executor.py
from __future__ import annotations

import time
import uuid
from pathlib import Path
from typing import List

from ciworker.artifacts import collect_artifacts
from ciworker.errors import FetchError, WorkspaceError
from ciworker.git_facts.git import clone_branch, head_sha
from ciworker.model import Artifact, Job, JobLog, JobResult, JobStatus
from ciworker.runner import run_commands
from ciworker.ui.console import get_console
from ciworker.workspace import WorkspaceManager


def _finish(status: JobStatus, log: JobLog, artifacts: List[Artifact]) -> JobResult:
    # the result id is always fresh; nothing from the request is echoed back
    return JobResult(
        id=str(uuid.uuid4()),
        status=status,
        output=log.render(),
        artifacts=tuple(artifacts),
    )


def execute_job(
    job: Job,
    work_root: str | Path = ".",
    *,
    workspaces: WorkspaceManager | None = None,
) -> JobResult:
    """
    Execute a job end to end.

    Steps:
      1. create a workspace
      2. clone `job.branch` of `job.repository` into it
      3. run `job.commands` (only if the clone succeeded)
      4. collect `job.outputs` (only if every command succeeded)
      5. remove the workspace, whatever happened above

    Every failure short of an unexpected bug is reported through the
    returned JobResult rather than raised.

    Args:
        job: Job to run
        work_root: Directory under which the workspace is created
        workspaces: Optional manager override (defaults to one rooted at work_root)

    Returns:
        JobResult with status, flattened log and collected artifacts
    """
    console = get_console()
    manager = workspaces or WorkspaceManager(work_root)
    log = JobLog()
    artifacts: List[Artifact] = []
    start_time = time.time()

    console.print_job_received(job.name, job.repository, job.branch)

    try:
        workspace = manager.create()
    except WorkspaceError as e:
        log.append("setup", f"{e}\n")
        console.print_failure("workspace", str(e))
        console.print_job_finished(JobStatus.FAILED.value, time.time() - start_time)
        return _finish(JobStatus.FAILED, log, artifacts)

    status = JobStatus.SUCCESS
    try:
        console.print_clone_started(job.repository)
        try:
            clone_branch(job.repository, job.branch, workspace)
        except FetchError as e:
            status = JobStatus.FAILED
            log.append("fetch", str(e))
            console.print_failure(
                "clone",
                e.detail,
                hint=None if e.invoked else "Install Git or fix PATH.",
            )
        else:
            console.print_clone_ok()
            if console.debug:
                console.print_debug(f"checked out {job.branch} at {head_sha(workspace)}")

            outcome = run_commands(job.commands, workspace, log=log)
            if not outcome.succeeded:
                status = JobStatus.FAILED
            else:
                artifacts = collect_artifacts(job.outputs, workspace, log=log)
    finally:
        if not manager.destroy(workspace):
            log.append("teardown", f"Warning: failed to remove work directory {workspace}\n")

    console.print_job_finished(status.value, time.time() - start_time)
    return _finish(status, log, artifacts)
