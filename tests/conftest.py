# tests/conftest.py
import json
import os
import shutil
import socket
import struct
import sys
import tempfile
import threading
from pathlib import Path

import pytest

# make sure the package is importable without installing it
root_path = Path(__file__).resolve().parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from discord_ipc.channel import IPCChannel
from discord_ipc.exc import ReadError, WriteError

CLIENT_ID = "771124766517755954"

READY = {"cmd": "DISPATCH", "evt": "READY", "data": {}, "nonce": None}


def frame(opcode: int, data) -> bytes:
    """Builds a raw frame the way Discord sends it."""
    body = json.dumps(data).encode("utf-8")
    return struct.pack("<II", opcode, len(body)) + body


def split_frames(raw: bytes):
    """Splits raw bytes written by the client into (opcode, json) pairs."""
    frames = []
    pos = 0
    while pos < len(raw):
        opcode, length = struct.unpack("<II", raw[pos:pos + 8])
        body = raw[pos + 8:pos + 8 + length]
        frames.append((opcode, json.loads(body.decode("utf-8"))))
        pos += 8 + length

    return frames


def default_responder(opcode: int, payload):
    """Behaves like a well-mannered Discord client."""
    if opcode == 0:
        return 1, READY
    if opcode == 1:
        return 1, {"cmd": payload["cmd"], "evt": None, "data": payload["args"],
                   "nonce": payload["nonce"]}
    if opcode == 3:
        return 4, {}
    return None


class FakeChannel(IPCChannel):
    """
    An in-memory channel. Every complete frame written is answered by ``responder``, which
    returns an (opcode, data) pair, raw bytes, or None for no answer.
    """

    def __init__(self, responder=default_responder):
        self.responder = responder
        self.written = bytearray()
        self.incoming = bytearray()
        self.closed = False
        self.flushed = 0
        self.path = "fake"
        self._pending = bytearray()

    @property
    def frames(self):
        return split_frames(bytes(self.written))

    def write(self, data: bytes) -> None:
        if self.closed:
            raise WriteError(BrokenPipeError(32, "Broken pipe"))

        self.written += data
        self._pending += data

        while len(self._pending) >= 8:
            opcode, length = struct.unpack("<II", self._pending[:8])
            if len(self._pending) < 8 + length:
                break

            body = bytes(self._pending[8:8 + length])
            del self._pending[:8 + length]

            response = self.responder(opcode, json.loads(body.decode("utf-8")))
            if response is None:
                continue
            if isinstance(response, bytes):
                self.incoming += response
            else:
                self.incoming += frame(*response)

    def read(self, size: int) -> bytes:
        if len(self.incoming) < size:
            raise ReadError(ConnectionResetError(104, "Connection reset by peer"))

        data = bytes(self.incoming[:size])
        del self.incoming[:size]
        return data

    def flush(self) -> None:
        self.flushed += 1

    def _shutdown(self) -> None:
        self.closed = True


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def nonces():
    """A deterministic nonce source: nonce-1, nonce-2, ..."""
    counter = iter(range(1, 1000))
    return lambda: "nonce-{}".format(next(counter))


class FakeDiscordServer(object):
    """
    A fake Discord client listening on a real Unix socket, served from a background thread.
    """

    def __init__(self, path: str, responder=default_responder):
        self.path = path
        self.responder = responder
        self.received = []
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._sock.bind(path)
        self._sock.listen(1)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _recv_exactly(self, conn, size):
        data = b""
        while len(data) < size:
            chunk = conn.recv(size - len(data))
            if not chunk:
                return None
            data += chunk
        return data

    def _serve(self):
        conn, _ = self._sock.accept()
        with conn:
            while True:
                header = self._recv_exactly(conn, 8)
                if header is None:
                    return

                opcode, length = struct.unpack("<II", header)
                body = self._recv_exactly(conn, length) if length else b""
                if body is None:
                    return

                payload = json.loads(body.decode("utf-8"))
                self.received.append((opcode, payload))
                if opcode == 2:
                    return

                response = self.responder(opcode, payload)
                if response is None:
                    continue
                if isinstance(response, bytes):
                    conn.sendall(response)
                else:
                    conn.sendall(frame(*response))

    def stop(self):
        self._thread.join(timeout=5)
        self._sock.close()


@pytest.fixture
def ipc_dir(monkeypatch):
    """A temporary runtime directory, set as the only IPC base directory."""
    # kept short, unix socket paths are limited to ~100 bytes
    path = tempfile.mkdtemp(prefix="ipc")
    for key in ("XDG_RUNTIME_DIR", "TMP", "TEMP", "SNAP"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("TMPDIR", path)
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def discord_server(ipc_dir):
    """Starts a fake Discord server on discord-ipc-0. Call it with an optional responder."""
    servers = []

    def _start(responder=default_responder, slot=0):
        server = FakeDiscordServer(os.path.join(ipc_dir, "discord-ipc-{}".format(slot)),
                                   responder)
        servers.append(server)
        return server

    yield _start

    for server in servers:
        server.stop()


unix_only = pytest.mark.skipif(sys.platform == "win32", reason="needs unix sockets")
