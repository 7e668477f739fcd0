# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class JobStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class JobInput:
    """A name/value pair passed along with a job. Carried, not consumed."""
    name: str
    value: str


@dataclass(frozen=True)
class JobOutput:
    """A declared output file, path relative to the workspace root."""
    name: str
    path: str


@dataclass(frozen=True)
class Job:
    """
    A remote job: which repository/branch to check out, what to run there,
    and which files to hand back.

    `name` is descriptive only and never echoed in the result.
    """
    name: str
    repository: str
    branch: str
    commands: tuple[str, ...] = ()
    inputs: tuple[JobInput, ...] = ()
    outputs: tuple[JobOutput, ...] = ()


@dataclass(frozen=True)
class Artifact:
    name: str
    content: str


@dataclass(frozen=True)
class JobResult:
    id: str
    status: JobStatus
    output: str
    artifacts: tuple[Artifact, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status is JobStatus.SUCCESS

    def to_dict(self) -> dict:
        """Convert to the wire shape returned by the worker."""
        return {
            "id": self.id,
            "status": self.status.value,
            "output": self.output,
            "artifacts": [{"name": a.name, "content": a.content} for a in self.artifacts],
        }

    @classmethod
    def from_dict(cls, data: dict) -> JobResult:
        return cls(
            id=data["id"],
            status=JobStatus(data["status"]),
            output=data.get("output", ""),
            artifacts=tuple(
                Artifact(name=a["name"], content=a["content"])
                for a in data.get("artifacts", [])
            ),
        )


# ----------------------------------------------------------------------
# Job log
# ----------------------------------------------------------------------

STAGES = ("setup", "fetch", "run", "collect", "teardown")


@dataclass(frozen=True)
class LogEntry:
    stage: str
    text: str
    command: Optional[str] = None
    stream: Optional[str] = None  # "stdout" | "stderr" | None


@dataclass
class JobLog:
    """
    Ordered log of everything a job produced.

    Kept as structured entries while the job runs and flattened into the
    single `output` string only when the result is built.
    """
    entries: List[LogEntry] = field(default_factory=list)

    def append(
        self,
        stage: str,
        text: str,
        *,
        command: str | None = None,
        stream: str | None = None,
    ) -> None:
        if stage not in STAGES:
            raise ValueError(f"Unknown log stage: {stage!r}")
        if not text:
            return
        self.entries.append(LogEntry(stage=stage, text=text, command=command, stream=stream))

    def for_stage(self, stage: str) -> List[LogEntry]:
        return [e for e in self.entries if e.stage == stage]

    def render(self) -> str:
        return "".join(e.text for e in self.entries)
