"""JSONL metric events for shift starts and HTTP requests.

One event per line in <LOGS_DIR>/metrics/<UTC date>/api.jsonl. Writing an event
never fails the caller: filesystem errors are logged and dropped.
"""
from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

METRICS_FILE = "api.jsonl"


def _metrics_dir(now: datetime) -> Path:
    """Per-day folder under LOGS_DIR (default ./logs), created on demand."""
    day_dir = Path(os.getenv("LOGS_DIR", "logs")) / "metrics" / now.strftime("%Y-%m-%d")
    day_dir.mkdir(parents=True, exist_ok=True)
    return day_dir


def record_metric(
    kind: str,
    fields: Dict[str, Any] | None = None,
    outcome: str | None = None,
    latency_ms: float | None = None,
) -> None:
    """Append one event.

    Args:
        kind: "shift.start" or "http.request".
        fields: Event data such as user_id, path, method, status.
        outcome: accepted, rejected, invalid or failed (shift starts only).
        latency_ms: Request duration (HTTP events only).
    """
    now = datetime.now(timezone.utc)
    event: Dict[str, Any] = {"ts": now.isoformat(), "kind": kind, "fields": fields or {}}
    if outcome:
        event["outcome"] = outcome
    if latency_ms is not None:
        event["latency_ms"] = latency_ms

    try:
        with (_metrics_dir(now) / METRICS_FILE).open("a", encoding="utf-8") as f:
            f.write(json.dumps(event, ensure_ascii=False, default=str) + "\n")
    except OSError:
        logger.warning(f"Dropped metric event {kind}", exc_info=True)
