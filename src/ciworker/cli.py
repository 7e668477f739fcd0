# cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from ciworker.agent.api_client import APIClient, APIError
from ciworker.agent.executor import execute_job
from ciworker.model import Job, JobResult
from ciworker.server import settings
from ciworker.server.schemas import JobRequest
from ciworker.ui.console import Console, get_console, set_console


def load_job(path: str | Path) -> Job:
    """
    Load a job description from a JSON file.

    The file uses the same shape as the body of `POST /job`.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content is not a valid job description
    """
    job_path = Path(path)
    if not job_path.exists():
        raise FileNotFoundError(f"Job file not found: {job_path}")
    try:
        return JobRequest.model_validate_json(job_path.read_text(encoding="utf-8")).to_job()
    except ValidationError as e:
        raise ValueError(f"Invalid job file {job_path}:\n{e}") from e


def _load_job_or_exit(path: str) -> Job:
    console = get_console()
    try:
        return load_job(path)
    except (FileNotFoundError, ValueError) as e:
        console.print_error(
            "Failed to load job",
            f"Could not load job from {path}",
            details=[str(e)],
            suggestion="A job file is JSON with name, repository, branch, commands, "
                       "and optional inputs/outputs.",
        )
        sys.exit(1)


def _emit_result(result: JobResult) -> None:
    click.echo(json.dumps(result.to_dict(), indent=2))
    if not result.succeeded:
        sys.exit(1)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """ciworker: clone a branch, run its commands, hand back artifacts."""
    # Initialize console with debug flag
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--host", default=None, help="Bind address (default: CIWORKER_HOST or 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Bind port (default: CIWORKER_PORT or 8080)")
@click.option("--work-root", default=None, help="Directory for job workspaces (default: CIWORKER_WORK_ROOT or .)")
@click.pass_context
def serve(ctx, host, port, work_root):
    """Run the worker HTTP server."""
    import uvicorn

    console = get_console()

    host = host or settings.HOST
    port = port or settings.PORT
    if work_root:
        settings.WORK_ROOT = work_root

    console.print_server_started(host, port, str(Path(settings.WORK_ROOT).resolve()))
    try:
        uvicorn.run(
            "ciworker.server.main:app",
            host=host,
            port=port,
            log_level="debug" if ctx.obj.get("debug", False) else "info",
        )
    except KeyboardInterrupt:
        console.print_info("\nWorker stopped by user")


@cli.command()
@click.argument("job_file")
@click.option("--work-root", default=None, help="Directory for the job workspace (default: CIWORKER_WORK_ROOT or .)")
def run(job_file, work_root):
    """Execute a job file locally and print its result."""
    console = get_console()
    job = _load_job_or_exit(job_file)

    try:
        result = execute_job(job, work_root or settings.WORK_ROOT)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    _emit_result(result)


@cli.command()
@click.argument("job_file")
@click.option("--api", required=True, help="Worker base URL (e.g., http://localhost:8080)")
@click.option("--timeout", default=None, type=float, help="Seconds to wait for the result (default: no limit)")
def submit(job_file, api, timeout):
    """Submit a job file to a running worker and print its result."""
    console = get_console()
    job = _load_job_or_exit(job_file)
    client = APIClient(api, timeout=timeout)

    console.print_debug(f"submitting {job.name} to {client.base_url}")
    try:
        result = client.submit_job(job)
    except APIError as e:
        console.print_error(
            "API request failed",
            str(e),
            suggestion=f"Check that the worker at {client.base_url} is running.",
        )
        sys.exit(1)

    _emit_result(result)


if __name__ == "__main__":
    cli()
