from __future__ import annotations

import argparse
import json
import logging
import os
import re
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any
from urllib.parse import parse_qs, urlparse

from expense_tracker.config import load_config
from expense_tracker.core.serialization import transaction_to_dict
from expense_tracker.notifications import RecordingNotifier
from expense_tracker.outputs.html_output import render_page
from expense_tracker.tracker import ExpenseTracker

logger = logging.getLogger(__name__)

_TRANSACTION_PATH = re.compile(r"^/api/transactions/(?P<id>[^/]+)(?P<delete>/delete)?$")
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _json_response(handler: BaseHTTPRequestHandler, payload: Any, status: int = 200) -> None:
    body = json.dumps(payload).encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "application/json")
    handler.send_header("Cache-Control", "no-store")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


def _html_response(handler: BaseHTTPRequestHandler, html: str, status: int = 200) -> None:
    body = html.encode("utf-8")
    handler.send_response(status)
    handler.send_header("Content-Type", "text/html; charset=utf-8")
    handler.send_header("Cache-Control", "no-store")
    handler.send_header("Content-Length", str(len(body)))
    handler.end_headers()
    handler.wfile.write(body)


def _redirect(handler: BaseHTTPRequestHandler, location: str = "/") -> None:
    handler.send_response(303)
    handler.send_header("Location", location)
    handler.send_header("Content-Length", "0")
    handler.end_headers()


def _first(values: dict[str, list[str]], key: str) -> str | None:
    found = values.get(key)
    return found[0] if found else None


class ExpenseTrackerHandler(BaseHTTPRequestHandler):
    tracker: ExpenseTracker | None = None
    currency: str = "INR"

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    @property
    def notifier(self) -> RecordingNotifier:
        return self.tracker.notifier

    def do_GET(self) -> None:
        path = urlparse(self.path).path
        ledger = self.tracker.ledger
        if path in ("/", "/index.html"):
            notifications = self.notifier.drain()
            page = render_page(
                ledger,
                self.currency,
                notification=notifications[-1] if notifications else None,
                interactive=True,
            )
            _html_response(self, page)
            return
        if path == "/api/transactions":
            _json_response(self, [transaction_to_dict(tx) for tx in ledger.sorted_for_display()])
            return
        if path == "/api/summary":
            _json_response(self, ledger.summarize().to_dict())
            return
        if path == "/api/breakdown":
            _json_response(self, [row.to_dict() for row in ledger.category_breakdown()])
            return
        _json_response(self, {"error": "not found"}, status=404)

    def do_POST(self) -> None:
        path = urlparse(self.path).path
        try:
            if path == "/api/transactions":
                self._handle_submit()
                return
            match = _TRANSACTION_PATH.match(path)
            if match and match.group("delete"):
                self._handle_delete(match.group("id"))
                return
        except ValueError as exc:
            _json_response(self, {"error": str(exc)}, status=400)
            return
        except Exception as exc:
            logger.exception("Unhandled error for POST %s", path)
            _json_response(self, {"error": str(exc)}, status=500)
            return
        _json_response(self, {"error": "not found"}, status=404)

    def do_DELETE(self) -> None:
        path = urlparse(self.path).path
        match = _TRANSACTION_PATH.match(path)
        if not match or match.group("delete"):
            _json_response(self, {"error": "not found"}, status=404)
            return
        try:
            self._handle_delete(match.group("id"))
        except Exception as exc:
            logger.exception("Unhandled error for DELETE %s", path)
            _json_response(self, {"error": str(exc)}, status=500)

    def _is_form(self) -> bool:
        content_type = self.headers.get("Content-Type") or ""
        return content_type.split(";", 1)[0].strip() == FORM_CONTENT_TYPE

    def _read_fields(self) -> dict[str, Any]:
        length = int(self.headers.get("Content-Length") or 0)
        raw = self.rfile.read(length).decode("utf-8") if length else ""
        if self._is_form():
            values = parse_qs(raw)
            return {key: _first(values, key) for key in values}
        if not raw:
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("request body must be a JSON object")
        return data

    def _handle_submit(self) -> None:
        fields = self._read_fields()
        tx = self.tracker.submit(
            fields.get("amount"),
            fields.get("description"),
            fields.get("category"),
            fields.get("type"),
        )
        if self._is_form():
            _redirect(self)
            return
        notification = self.notifier.drain()[-1]
        if tx is None:
            _json_response(
                self,
                {"error": notification.message, "notification": notification.to_dict()},
                status=400,
            )
            return
        _json_response(
            self,
            {"transaction": transaction_to_dict(tx), "notification": notification.to_dict()},
            status=201,
        )

    def _handle_delete(self, tx_id: str) -> None:
        removed = self.tracker.delete(tx_id)
        if self._is_form():
            _redirect(self)
            return
        notification = self.notifier.drain()[-1]
        _json_response(
            self,
            {"removed": removed, "notification": notification.to_dict()},
            status=200 if removed else 404,
        )


def make_server(
    tracker: ExpenseTracker, config: dict, host: str = "127.0.0.1", port: int = 8000
) -> HTTPServer:
    """Build a single-threaded server around *tracker*.

    Requests are handled one at a time, so the ledger only ever has one
    writer. Responses carry the notifications each request produced, so the
    tracker is switched to a recording notifier.
    """
    if not isinstance(tracker.notifier, RecordingNotifier):
        tracker.notifier = RecordingNotifier()
    handler = type(
        "ExpenseTrackerHandler",
        (ExpenseTrackerHandler,),
        {
            "tracker": tracker,
            "currency": config.get("currency", "INR"),
        },
    )
    return HTTPServer((host, port), handler)


def serve(tracker: ExpenseTracker, config: dict, host: str = "127.0.0.1", port: int = 8000) -> None:
    server = make_server(tracker, config, host, port)
    print(f"Expense tracker running at http://{host}:{port} (data: {config.get('data_file')})")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()


def main() -> None:
    parser = argparse.ArgumentParser(description="Expense tracker web dashboard")
    parser.add_argument("--config", dest="config_path", default="config.yaml", help="Path to config.yaml")
    parser.add_argument("--data-file", dest="data_file", default=None, help="JSON file holding the ledger")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind (default: 8000)")
    args = parser.parse_args()

    config = load_config(args.config_path)
    if args.data_file:
        config["data_file"] = args.data_file
    logging.basicConfig(level=os.getenv("EXPENSE_TRACKER_LOG_LEVEL", config["log_level"]).upper())
    tracker = ExpenseTracker.from_config(config, RecordingNotifier())
    serve(tracker, config, args.host, args.port)


if __name__ == "__main__":
    main()
