from .agent.executor import execute_job
from .model import Artifact, Job, JobInput, JobOutput, JobResult, JobStatus

__version__ = "0.1.0"

__all__ = ["execute_job", "Job", "JobInput", "JobOutput", "JobResult", "JobStatus", "Artifact", "__version__"]
