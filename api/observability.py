from __future__ import annotations

import contextvars
import json
import logging
import re
import sys
import time
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


SERVICE_NAME = "pathfinder-api"

_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)
_logging_configured = False
_STANDARD_LOG_RECORD_FIELDS = set(logging.makeLogRecord({}).__dict__.keys()) | {"message", "asctime"}
_REQUEST_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,128}")


def get_request_id() -> Optional[str]:
    return _request_id_var.get()


def set_request_id(value: Optional[str]):
    return _request_id_var.set(value)


def reset_request_id(token) -> None:
    _request_id_var.reset(token)


def new_request_id() -> str:
    return uuid4().hex


def resolve_request_id(incoming: Optional[str]) -> str:
    """Echo a well-formed client id, otherwise mint a fresh one."""
    candidate = (incoming or "").strip()
    if candidate and _REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return new_request_id()


class JsonFormatter(logging.Formatter):
    def __init__(self, service: str = SERVICE_NAME, app_env: Optional[str] = None):
        super().__init__()
        self.service = service
        self.app_env = app_env

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        if self.app_env:
            payload["env"] = self.app_env
        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key in _STANDARD_LOG_RECORD_FIELDS or key.startswith("_") or key in payload:
                continue
            payload[key] = value
        return json.dumps(payload, default=str, separators=(",", ":"))


def configure_logging(level: str = "INFO", app_env: Optional[str] = None, force: bool = False) -> None:
    global _logging_configured
    if _logging_configured and not force:
        return

    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    root.handlers.clear()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter(app_env=app_env))
    root.addHandler(handler)

    # uvicorn installs its own handlers; route everything through the JSON one
    for logger_name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logger = logging.getLogger(logger_name)
        logger.handlers.clear()
        logger.propagate = True
    logging.getLogger("uvicorn.access").disabled = True

    _logging_configured = True


def request_log_fields(*, method: str, path: str, status_code: int, duration_ms: float, client_ip: Optional[str]) -> dict[str, object]:
    return {
        "method": method,
        "path": path,
        "status_code": int(status_code),
        "duration_ms": round(float(duration_ms), 2),
        "client_ip": client_ip or "",
    }


def monotonic_ms() -> float:
    return time.perf_counter() * 1000.0
