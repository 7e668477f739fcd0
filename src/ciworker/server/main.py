from __future__ import annotations

from fastapi import FastAPI

from ciworker.agent.executor import execute_job
from ciworker.ui.console import get_console

from . import settings
from .schemas import JobRequest, JobResultResponse

app = FastAPI(title="ciworker")

# -------------------- Endpoints --------------------

@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}

# Plain `def`: FastAPI runs it in its threadpool, so a long job blocks only
# its own request and concurrent jobs each get their own workspace.
@app.post("/job", response_model=JobResultResponse)
def process_job(req: JobRequest):
    job = req.to_job()
    result = execute_job(job, settings.WORK_ROOT)
    get_console().print_debug(f"sending result {result.id} ({result.status.value})")
    return JobResultResponse.from_result(result)
