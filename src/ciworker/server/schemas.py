from __future__ import annotations

from pydantic import BaseModel, Field

from ciworker.model import Job, JobInput, JobOutput, JobResult

# -------------------- Requests --------------------

class JobInputSchema(BaseModel):
    name: str
    value: str

class JobOutputSchema(BaseModel):
    name: str
    path: str

class JobRequest(BaseModel):
    name: str
    repository: str
    branch: str
    commands: list[str]
    inputs: list[JobInputSchema] = Field(default_factory=list)
    outputs: list[JobOutputSchema] = Field(default_factory=list)

    def to_job(self) -> Job:
        return Job(
            name=self.name,
            repository=self.repository,
            branch=self.branch,
            commands=tuple(self.commands),
            inputs=tuple(JobInput(name=i.name, value=i.value) for i in self.inputs),
            outputs=tuple(JobOutput(name=o.name, path=o.path) for o in self.outputs),
        )

    @classmethod
    def from_job(cls, job: Job) -> JobRequest:
        return cls(
            name=job.name,
            repository=job.repository,
            branch=job.branch,
            commands=list(job.commands),
            inputs=[JobInputSchema(name=i.name, value=i.value) for i in job.inputs],
            outputs=[JobOutputSchema(name=o.name, path=o.path) for o in job.outputs],
        )

# -------------------- Responses --------------------

class ArtifactSchema(BaseModel):
    name: str
    content: str

class JobResultResponse(BaseModel):
    id: str
    status: str  # success|failed
    output: str
    artifacts: list[ArtifactSchema]

    @classmethod
    def from_result(cls, result: JobResult) -> JobResultResponse:
        return cls.model_validate(result.to_dict())
