"""Tests for structured logging and request ids."""

from __future__ import annotations

import json
import logging

from api.observability import (
    JsonFormatter,
    request_log_fields,
    reset_request_id,
    resolve_request_id,
    set_request_id,
)


def _record(msg="hello", **extra):
    record = logging.makeLogRecord({"name": "core.services.profile_store", "levelname": "INFO", "msg": msg})
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    payload = json.loads(JsonFormatter(app_env="test").format(_record("checkin_submitted", profile_id="u1", adaptation="reduce")))
    assert payload["message"] == "checkin_submitted"
    assert payload["logger"] == "core.services.profile_store"
    assert payload["service"] == "pathfinder-api"
    assert payload["env"] == "test"
    assert payload["profile_id"] == "u1"
    assert payload["adaptation"] == "reduce"
    assert "request_id" not in payload


def test_json_formatter_adds_request_id_from_context():
    token = set_request_id("req-123")
    try:
        payload = json.loads(JsonFormatter().format(_record()))
    finally:
        reset_request_id(token)
    assert payload["request_id"] == "req-123"


def test_json_formatter_serializes_unknown_types():
    from datetime import date

    payload = json.loads(JsonFormatter().format(_record(on=date(2026, 10, 19))))
    assert payload["on"] == "2026-10-19"


def test_resolve_request_id_echoes_clean_ids():
    assert resolve_request_id("abc-123_x.y") == "abc-123_x.y"


def test_resolve_request_id_replaces_bad_ids():
    for bad in (None, "", "   ", "has space", "x" * 200, "inject\nnewline"):
        rid = resolve_request_id(bad)
        assert len(rid) == 32
        int(rid, 16)


def test_request_log_fields_rounding():
    fields = request_log_fields(method="GET", path="/api/v1/health", status_code=200, duration_ms=1.23456, client_ip=None)
    assert fields == {"method": "GET", "path": "/api/v1/health", "status_code": 200, "duration_ms": 1.23, "client_ip": ""}
