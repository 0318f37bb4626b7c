"""
Shared fixtures: a threaded stub of the Cloud.ru HTTP APIs and a matching Config.
"""
import json
import threading
from dataclasses import dataclass, field
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

import pytest

from cloudru_mcp.CONFIG.settings import ApiUrls, Config

TOKEN_PATH = "/api/v1/auth/token"


@dataclass
class RecordedRequest:
    method: str
    path: str
    query: Dict[str, List[str]]
    headers: Dict[str, str]
    body: bytes = b""

    @property
    def json(self) -> Any:
        return json.loads(self.body) if self.body else None


@dataclass
class StubUpstream:
    """Serves canned responses keyed by (method, path) and records every request."""

    routes: Dict[Tuple[str, str], Tuple[int, bytes]] = field(default_factory=dict)
    requests: List[RecordedRequest] = field(default_factory=list)
    server: Optional[ThreadingHTTPServer] = None

    @property
    def url(self) -> str:
        return f"http://127.0.0.1:{self.server.server_address[1]}"

    def route(self, method: str, path: str, status: int = 200, body: Any = b""):
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[(method, path)] = (status, body)

    def requests_to(self, path: str) -> List[RecordedRequest]:
        return [r for r in self.requests if r.path == path]


def _handler_for(stub: StubUpstream):
    class Handler(BaseHTTPRequestHandler):
        def _handle(self):
            parts = urlsplit(self.path)
            length = int(self.headers.get("Content-Length") or 0)
            body = self.rfile.read(length) if length else b""
            stub.requests.append(
                RecordedRequest(self.command, parts.path, parse_qs(parts.query),
                                {k.lower(): v for k, v in self.headers.items()}, body)
            )

            status, payload = stub.routes.get((self.command, parts.path), (404, b'{"message":"not found"}'))
            self.send_response(status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            if payload:
                self.wfile.write(payload)

        do_GET = _handle
        do_POST = _handle
        do_DELETE = _handle

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def upstream(monkeypatch):
    monkeypatch.setenv("no_proxy", "*")
    monkeypatch.setenv("NO_PROXY", "*")
    stub = StubUpstream()
    stub.server = ThreadingHTTPServer(("127.0.0.1", 0), _handler_for(stub))
    thread = threading.Thread(target=stub.server.serve_forever, daemon=True)
    thread.start()
    stub.route("POST", TOKEN_PATH, 200, {"access_token": "test-token", "expires_in": 3600})
    yield stub
    stub.server.shutdown()
    stub.server.server_close()


@pytest.fixture
def config(upstream):
    return Config(
        key_id="key-id-123",
        key_secret="key-secret-456",
        registry_name="myreg",
        project_id="proj-1",
        current_dir="myapp",
        api=ApiUrls(containers=upstream.url, iam=upstream.url, artifact=upstream.url),
    )
