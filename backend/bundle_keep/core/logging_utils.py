"""Structured JSON logging utilities for bundle validation tracing."""
from __future__ import annotations

import contextvars
import json
import logging
import math
import sys
import threading
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "bundle_request_id",
    default=None,
)
_entry_index_ctx: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "bundle_entry_index",
    default=None,
)

_metrics_lock = threading.Lock()
_request_stage_metrics: dict[str, dict[str, list[float]]] = {}
_request_stage_status_counts: dict[str, dict[str, dict[str, int]]] = {}

_level_map: dict[LogLevelName, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _get_logger() -> logging.Logger:
    logger = logging.getLogger("bundle_keep.structured")
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


def set_request_id(request_id: str | None) -> None:
    """Store the active request id for the current context."""
    _request_id_ctx.set(request_id)


def get_request_id() -> str | None:
    """Return the active request id."""
    return _request_id_ctx.get()


def set_entry_index(entry_index: int | None) -> None:
    """Store the bundle entry index currently being validated."""
    _entry_index_ctx.set(entry_index)


def get_entry_index() -> int | None:
    return _entry_index_ctx.get()


def clear_log_context() -> None:
    """Reset request and entry tracing metadata for the current context."""
    set_request_id(None)
    set_entry_index(None)


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def log_event(
    *,
    component: str,
    event: str,
    level: LogLevelName = "INFO",
    request_id: str | None = None,
    entry_index: int | None = None,
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit a structured JSON log line to stdout."""
    resolved_request_id = request_id if request_id is not None else get_request_id()
    resolved_entry_index = entry_index if entry_index is not None else get_entry_index()
    payload: dict[str, Any] = {
        "ts": _iso_timestamp(),
        "level": level,
        "component": component,
        "event": event,
        "request_id": resolved_request_id,
        "entry_index": resolved_entry_index,
        "details": dict(details or {}),
    }
    _get_logger().log(_level_map[level], json.dumps(payload, ensure_ascii=True, separators=(",", ":")))


def _record_latency_metric(stage: str, duration_ms: float, status: str) -> None:
    request_id = _request_id_ctx.get()
    if not request_id:
        return

    with _metrics_lock:
        stage_metrics = _request_stage_metrics.setdefault(request_id, {})
        stage_status_counts = _request_stage_status_counts.setdefault(request_id, {})

        stage_metrics.setdefault(stage, []).append(duration_ms)
        status_counts = stage_status_counts.setdefault(stage, {})
        status_counts[status] = status_counts.get(status, 0) + 1


def _duration_to_ms(duration_s: float) -> float:
    if duration_s < 0:
        return 0.0
    return round(duration_s * 1000.0, 3)


def log_latency_event(
    *,
    component: str,
    event: str,
    stage: str,
    duration_s: float,
    status: str,
    entry_index: int | None = None,
    level: LogLevelName = "INFO",
    details: Mapping[str, Any] | None = None,
) -> None:
    """Emit latency metric log event and track per-request summary stats."""
    duration_ms = _duration_to_ms(duration_s)
    payload_details = dict(details or {})
    payload_details.update(
        {
            "stage": stage,
            "status": status,
            "duration_ms": duration_ms,
        }
    )
    _record_latency_metric(stage=stage, duration_ms=duration_ms, status=status)
    log_event(
        component=component,
        event=event,
        level=level,
        entry_index=entry_index,
        details=payload_details,
    )


def _percentile(values: list[float], percentile: float) -> float:
    if not values:
        return 0.0
    if len(values) == 1:
        return values[0]
    sorted_values = sorted(values)
    position = percentile * (len(sorted_values) - 1)
    lower_index = int(math.floor(position))
    upper_index = int(math.ceil(position))
    if lower_index == upper_index:
        return sorted_values[lower_index]
    lower_value = sorted_values[lower_index]
    upper_value = sorted_values[upper_index]
    weight = position - lower_index
    return lower_value + (upper_value - lower_value) * weight


def pop_request_metrics_summary(request_id: str) -> dict[str, Any]:
    """Pop collected latency metrics for one request and return summary stats."""
    with _metrics_lock:
        stage_metrics = _request_stage_metrics.pop(request_id, {})
        stage_status_counts = _request_stage_status_counts.pop(request_id, {})

    stages_summary: dict[str, dict[str, Any]] = {}
    for stage, durations in stage_metrics.items():
        if not durations:
            continue
        count = len(durations)
        stages_summary[stage] = {
            "count": count,
            "avg_ms": round(sum(durations) / count, 3),
            "p95_ms": round(_percentile(durations, 0.95), 3),
            "max_ms": round(max(durations), 3),
            "status_counts": dict(stage_status_counts.get(stage, {})),
        }

    return {"stages": stages_summary}
