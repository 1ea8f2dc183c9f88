from __future__ import annotations

import json
import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Iterator, Optional

import pytest

from http_api_handler import ApiHandler

DOWNLOAD_PAYLOAD = bytes(range(256))


@pytest.fixture
def local_api_server() -> Iterator[str]:
    class Handler(BaseHTTPRequestHandler):
        def _read_body(self) -> bytes:
            length = int(self.headers.get("Content-Length") or 0)
            return self.rfile.read(length) if length else b""

        def _send(self, status: int, payload: Any = None, raw: Optional[bytes] = None) -> None:
            body = raw if raw is not None else json.dumps(payload).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def _echo(self, body: bytes) -> None:
            self._send(
                200,
                {
                    "method": self.command,
                    "path": self.path,
                    "headers": {k.lower(): v for k, v in self.headers.items()},
                    "body": body.decode("latin-1"),
                },
            )

        def _route(self) -> None:
            body = self._read_body()
            if self.path.startswith("/bad-request"):
                self._send(400, {"message": "bad name"})
            elif self.path.startswith("/unauthorized"):
                self._send(401, {})
            elif self.path.startswith("/server-error"):
                self._send(500, {"message": "db down"})
            elif self.path.startswith("/teapot"):
                self._send(418, {"message": "short and stout"})
            elif self.path.startswith("/not-json"):
                self._send(200, raw=b"<html></html>")
            elif self.path.startswith("/download"):
                self._send(200, raw=DOWNLOAD_PAYLOAD)
            elif self.path.startswith("/missing-file"):
                self._send(404, raw=b"")
            elif self.path.startswith("/slow"):
                time.sleep(0.3)
                self._send(200, {"slow": True})
            else:
                self._echo(body)

        do_GET = _route  # noqa: N815
        do_POST = _route  # noqa: N815
        do_PUT = _route  # noqa: N815
        do_DELETE = _route  # noqa: N815

        def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
            return

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=1)


@pytest.fixture
def api(local_api_server: str) -> ApiHandler:
    return ApiHandler(local_api_server, auth_token="it-token", enable_logs=False)
