from datetime import datetime
import threading

from flask import Flask, request, jsonify
from pydantic import ValidationError

from alert_fields import build_log_record
from alert_log_writer import AlertLogWriter
from alert_models import decode_payload


class WebhookMetrics:
    def __init__(self):
        self.lock = threading.Lock()
        self.counters = {
            'alert_webhook_requests_total': 0,
            'alert_webhook_rejected_requests_total': 0,
            'alert_webhook_alerts_received_total': 0,
            'alert_webhook_records_written_total': 0,
            'alert_webhook_write_failures_total': 0,
        }

    def inc(self, name, amount=1):
        with self.lock:
            self.counters[name] += amount

    def get(self, name):
        with self.lock:
            return self.counters[name]

    def get_prometheus_metrics(self):
        """Format counters in Prometheus format"""
        with self.lock:
            lines = [
                "# HELP alert_webhook_requests_total Alert notifications received on /alerts",
                "# TYPE alert_webhook_requests_total counter",
                "# HELP alert_webhook_rejected_requests_total Notifications rejected as malformed",
                "# TYPE alert_webhook_rejected_requests_total counter",
                "# HELP alert_webhook_alerts_received_total Alerts decoded from accepted notifications",
                "# TYPE alert_webhook_alerts_received_total counter",
                "# HELP alert_webhook_records_written_total Log lines appended to the day file",
                "# TYPE alert_webhook_records_written_total counter",
                "# HELP alert_webhook_write_failures_total Log lines dropped because the file could not be written",
                "# TYPE alert_webhook_write_failures_total counter",
            ]

            for metric, value in self.counters.items():
                lines.append(f"{metric} {value}")

            return '\n'.join(lines) + '\n'


app = Flask(__name__)
log_writer = AlertLogWriter()
metrics = WebhookMetrics()


@app.route('/alerts', methods=['POST'])
def receive_alerts():
    metrics.inc('alert_webhook_requests_total')

    try:
        payload = decode_payload(request.get_data())
    except ValidationError as e:
        print(f"Rejected alert payload: {e.error_count()} validation error(s)")
        metrics.inc('alert_webhook_rejected_requests_total')
        return '', 400
    except ValueError as e:
        print(f"Rejected alert payload: {e}")
        metrics.inc('alert_webhook_rejected_requests_total')
        return '', 400

    for alert in payload.alerts:
        metrics.inc('alert_webhook_alerts_received_total')
        now = datetime.now()
        record = build_log_record(alert, now)
        if log_writer.append(record, now):
            metrics.inc('alert_webhook_records_written_total')
        else:
            metrics.inc('alert_webhook_write_failures_total')

    return '', 200


@app.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "healthy"}), 200


@app.route('/metrics', methods=['GET'])
def prometheus_metrics():
    return metrics.get_prometheus_metrics(), 200, {
        'Content-Type': 'text/plain; version=0.0.4; charset=utf-8'
    }
