"""TCP server answering the pipe-separated poll protocol."""

from __future__ import annotations

import argparse
import re
import socketserver
from collections.abc import Sequence

from pollhub.common import BUFFER_SIZE, Command, ItemKind
from pollhub.registry import PollError, PollRegistry
from pollhub.storage import PollStorage

SERVER_PORT = 9000
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def handle_message(registry: PollRegistry, message: str) -> str:
    """Carry out one protocol request and return the reply text."""
    try:
        command = Command.from_message(message)
    except ValueError:
        return "[ERROR] Unknown command"

    fields = [part for part in message.split("|") if part][1:]
    kind = command.kind
    action = command.action
    invalid = f"[ERROR] Invalid format for {command.value}"

    try:
        if action == "list":
            return registry.list_text(kind)
        if action == "create":
            if len(fields) < 2:
                return invalid
            poll = registry.create(kind, fields[0], fields[1])
            return f"[OK] {kind.display_name} created with ID: {poll.id}"
        if action == "respond":
            if len(fields) < 3:
                return invalid
            poll_id, selection, username = fields[:3]
            if kind is ItemKind.SURVEY:
                choices = [_atoi(token) for token in selection.split(",") if token]
            else:
                choices = [_atoi(selection)]
            registry.respond(kind, poll_id, choices, username)
            if kind is ItemKind.SURVEY:
                return "[OK] Your response has been recorded."
            return "[OK] Your vote has been recorded."
        if not fields:
            return invalid
        if action == "close":
            registry.close(kind, fields[0])
            return f"[OK] {kind.display_name} {fields[0]} is now closed."
        return registry.result_text(kind, fields[0])
    except PollError as exc:
        return f"[ERROR] {exc}"


def _encode_reply(reply: str) -> bytes:
    """Encode a reply, cut to what fits in one protocol buffer."""
    data = reply.encode("utf-8")[: BUFFER_SIZE - 1]
    return data.decode("utf-8", errors="ignore").encode("utf-8")


class PollRequestHandler(socketserver.BaseRequestHandler):
    """Serves one client connection until it closes."""

    server: PollServer

    def handle(self) -> None:
        host, port = self.client_address[:2]
        print(f">> Client connected: {host}:{port}")
        try:
            while True:
                data = self.request.recv(BUFFER_SIZE - 1)
                if not data:
                    break
                message = data.decode("utf-8", errors="replace")
                reply = handle_message(self.server.registry, message)
                self.request.sendall(_encode_reply(reply))
        except OSError:
            pass
        print(">> Client disconnected")


class PollServer(socketserver.ThreadingTCPServer):
    """Threaded TCP server sharing one registry between connections."""

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], registry: PollRegistry) -> None:
        self.registry = registry
        super().__init__(address, PollRequestHandler)


def serve(host: str = "0.0.0.0", port: int = SERVER_PORT, data_dir: str = "data") -> None:
    """Load stored polls and serve clients until interrupted."""
    storage = PollStorage(data_dir)
    storage.ensure_dirs()
    registry = PollRegistry(storage)
    registry.load()
    with PollServer((host, port), registry) as server:
        print(f">> Server listening on port {server.server_address[1]}")
        server.serve_forever()


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Survey and vote server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--data-dir", default="data")
    args = parser.parse_args(argv)
    try:
        serve(args.host, args.port, args.data_dir)
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"server failed: {exc}")
        return 1
    return 0