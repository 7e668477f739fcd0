from __future__ import annotations
import os

HOST = os.environ.get("CIWORKER_HOST", "0.0.0.0")
PORT = int(os.environ.get("CIWORKER_PORT", "8080"))
WORK_ROOT = os.environ.get("CIWORKER_WORK_ROOT", ".")
