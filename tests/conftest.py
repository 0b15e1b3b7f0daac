import http.server
import json
import os
import socketserver
import tempfile
import threading

import pytest

from unixroute import ADDRESS_FAMILY
from unixroute.routing import Directory, defaults


class UnixHTTPServer(socketserver.ThreadingMixIn, socketserver.UnixStreamServer):
    address_family = ADDRESS_FAMILY
    daemon_threads = True


class EchoHandler(http.server.BaseHTTPRequestHandler):
    """Odpowiada JSON-em z metodą, ścieżką, nagłówkiem Host i body requestu."""

    protocol_version = "HTTP/1.1"

    def do_GET(self):
        self._reply(b"")

    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        self._reply(self.rfile.read(length))

    def _reply(self, body: bytes) -> None:
        payload = json.dumps(
            {
                "method": self.command,
                "path": self.path,
                "host": self.headers.get("Host"),
                "body": body.decode(),
                "socket": self.server.server_address,
            }
        ).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def unix_server():
    """Serwer HTTP nasłuchujący na gnieździe Unix; zwraca ścieżkę gniazda."""
    # Krótka ścieżka - limit długości adresu gniazda Unix
    with tempfile.TemporaryDirectory(prefix="ur-") as tmp_dir:
        socket_path = os.path.join(tmp_dir, "service.sock")
        server = UnixHTTPServer(socket_path, EchoHandler)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        try:
            yield socket_path
        finally:
            server.shutdown()
            server.server_close()
            thread.join(timeout=5)


@pytest.fixture
def default_directory(monkeypatch):
    """Izolowany domyślny Directory procesu."""
    directory = Directory()
    monkeypatch.setattr(defaults, "_default_directory", directory)
    return directory
