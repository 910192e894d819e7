"""Minimal Battlesnake server for the minimax strategy.
Usage: python -m snake_minimax.server [port]
"""

import json
import sys
from http.server import HTTPServer, BaseHTTPRequestHandler

from snake_minimax.strategy import decide_move

MOVES = ("up", "down", "left", "right")

INFO = {
    "apiversion": "1",
    "author": "snake-minimax",
    "color": "#3b7dd8",
    "head": "default",
    "tail": "default",
}


def make_handler(fn):
    """Build a request handler class bound to a decide_move function."""

    class H(BaseHTTPRequestHandler):
        def do_GET(self):
            self._reply(INFO)

        def do_POST(self):
            length = int(self.headers.get("Content-Length", 0))
            body = json.loads(self.rfile.read(length)) if length else {}
            if self.path == "/move":
                try:
                    move = fn(body)
                    if move not in MOVES:
                        move = "up"
                except Exception:
                    move = "up"
                resp = {"move": move}
            else:
                resp = {"ok": True}
            self._reply(resp)

        def _reply(self, payload):
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.end_headers()
            self.wfile.write(json.dumps(payload).encode())

        def log_message(self, format, *args):
            pass

    return H


def serve(fn=decide_move, port: int = 8080, host: str = "0.0.0.0") -> None:
    server = HTTPServer((host, port), make_handler(fn))
    print(f"Snake server on port {port}", flush=True)
    server.serve_forever()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    port = int(argv[0]) if argv else 8080
    serve(decide_move, port)


if __name__ == "__main__":
    main()
