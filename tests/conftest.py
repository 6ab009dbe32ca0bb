"""
Shared fixtures: Alertmanager payloads, a temp log directory wired into
the webhook app, and helpers to read back the day files.
"""

import json

import pytest

import alert_webhook
from alert_log_writer import AlertLogWriter


@pytest.fixture
def high_cpu_alert():
    """Firing alert without hostname/scope labels."""
    return {
        "status": "firing",
        "startsAt": "2024-03-05T10:00:00Z",
        "endsAt": "0001-01-01T00:00:00Z",
        "labels": {"alertname": "HighCPU", "instance": "host1:9100"},
        "annotations": {"current_value": "87", "summary": "CPU high"},
    }


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path


@pytest.fixture
def webhook(monkeypatch, log_dir):
    """alert_webhook module writing into log_dir with fresh counters."""
    monkeypatch.setattr(alert_webhook, "log_writer", AlertLogWriter(str(log_dir)))
    monkeypatch.setattr(alert_webhook, "metrics", alert_webhook.WebhookMetrics())
    return alert_webhook


@pytest.fixture
def client(webhook):
    webhook.app.config["TESTING"] = True
    with webhook.app.test_client() as client:
        yield client


def read_log_lines(log_dir):
    """All lines across every day file in log_dir, decoded as JSON."""
    records = []
    for path in sorted(log_dir.glob("app_hivemq_*.log")):
        for line in path.read_text(encoding="utf-8").splitlines():
            records.append(json.loads(line))
    return records
