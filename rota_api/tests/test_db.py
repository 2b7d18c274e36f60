"""DB_PATH handling and metric file layout."""
import json

from rota_api.db import sqlite_url
from rota_api.utils.audit import record_metric


def test_sqlite_url_memory():
    assert sqlite_url(":memory:") == "sqlite://"


def test_sqlite_url_absolute_path_creates_parent(tmp_path):
    db_file = tmp_path / "nested" / "rota.db"

    assert sqlite_url(str(db_file)) == f"sqlite:///{db_file.as_posix()}"
    assert db_file.parent.is_dir()


def test_record_metric_appends_one_line_per_event(tmp_path, monkeypatch):
    monkeypatch.setenv("LOGS_DIR", str(tmp_path))

    record_metric("http.request", {"path": "/health"}, latency_ms=1.5)
    record_metric("shift.start", {"user_id": 1}, outcome="rejected")

    files = list(tmp_path.glob("metrics/*/api.jsonl"))
    assert len(files) == 1
    events = [json.loads(line) for line in files[0].read_text(encoding="utf-8").splitlines()]
    assert [e["kind"] for e in events] == ["http.request", "shift.start"]
    assert events[0]["latency_ms"] == 1.5
    assert events[1]["outcome"] == "rejected"
    assert "latency_ms" not in events[1]
