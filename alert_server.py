#!/usr/bin/env python3

import signal
import threading

from werkzeug.serving import ThreadedWSGIServer, WSGIRequestHandler

from alert_webhook import app

HOST = '0.0.0.0'
PORT = 8080
REQUEST_TIMEOUT_SECONDS = 5
SHUTDOWN_GRACE_SECONDS = 10


class InFlightRequests:
    """Counts connections currently being served so shutdown can wait for them"""

    def __init__(self):
        self.count = 0
        self.condition = threading.Condition()

    def begin(self):
        with self.condition:
            self.count += 1

    def end(self):
        with self.condition:
            self.count -= 1
            if self.count == 0:
                self.condition.notify_all()

    def wait_idle(self, timeout):
        """Block until no request is in flight; False if timeout elapsed first"""
        with self.condition:
            return self.condition.wait_for(lambda: self.count == 0, timeout=timeout)


class AlertRequestHandler(WSGIRequestHandler):
    # Socket timeout, applies to every read and write on the connection
    timeout = REQUEST_TIMEOUT_SECONDS

    def handle(self):
        self.server.in_flight.begin()
        try:
            super().handle()
        finally:
            self.server.in_flight.end()


class AlertWebhookServer(ThreadedWSGIServer):
    def __init__(self, host, port, wsgi_app):
        self.in_flight = InFlightRequests()
        super().__init__(host, port, wsgi_app, handler=AlertRequestHandler)


def create_server(host=HOST, port=PORT, wsgi_app=app):
    return AlertWebhookServer(host, port, wsgi_app)


def shutdown_server(server, grace_seconds=SHUTDOWN_GRACE_SECONDS):
    """Stop accepting, wait for in-flight requests up to the grace period, close"""
    server.shutdown()
    drained = server.in_flight.wait_idle(grace_seconds)
    if not drained:
        print(f"Grace period of {grace_seconds}s elapsed, abandoning in-flight requests")
    server.server_close()
    return drained


def main():
    stop_requested = threading.Event()

    def on_interrupt(signum, frame):
        stop_requested.set()

    signal.signal(signal.SIGINT, on_interrupt)

    server = create_server(HOST, PORT)
    server_thread = threading.Thread(target=server.serve_forever, daemon=True)
    server_thread.start()
    print(f"Alert webhook server starting on port {server.server_port}...")
    print(f"Alerts accepted at http://localhost:{server.server_port}/alerts")

    stop_requested.wait()

    print("Shutting down...")
    shutdown_server(server)


if __name__ == '__main__':
    main()
