# agent/api_client.py
from __future__ import annotations

import json
import urllib.error
import urllib.request
from typing import Optional
from urllib.parse import urljoin

from ciworker.model import Job, JobResult
from ciworker.server.schemas import JobRequest


class APIError(Exception):
    """Raised when API requests fail."""
    pass


class APIClient:
    """HTTP client for submitting jobs to a running worker."""

    def __init__(self, base_url: str, timeout: Optional[float] = None):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the worker (e.g., "http://localhost:8080")
            timeout: Optional socket timeout in seconds. Jobs have no
                     server-side timeout, so the default is to wait forever.
        """
        # Ensure base_url doesn't end with /
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _post_json(self, path: str, data: dict) -> dict:
        """
        POST a JSON body to the worker and return the parsed JSON reply.

        Raises:
            APIError: If the request fails or the reply is not JSON
        """
        req = urllib.request.Request(
            urljoin(self.base_url + "/", path.lstrip("/")),
            data=json.dumps(data).encode("utf-8"),
            headers={"Content-Type": "application/json"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return json.loads(response.read().decode("utf-8") or "{}")
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8") if e.fp else ""
            raise APIError(f"API request failed: {e.code} {e.reason}. {error_body}")
        except urllib.error.URLError as e:
            raise APIError(f"Network error: {e.reason}")
        except json.JSONDecodeError as e:
            raise APIError(f"Invalid JSON response: {e}")

    def submit_job(self, job: Job) -> JobResult:
        """
        Run a job on the worker and wait for its result.

        Raises:
            APIError: On transport errors or a response that is not a job result
        """
        response = self._post_json("/job", JobRequest.from_job(job).model_dump())
        try:
            return JobResult.from_dict(response)
        except (KeyError, TypeError, ValueError) as e:
            raise APIError(f"Invalid job result: {e}")
