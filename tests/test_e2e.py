# tests/test_e2e.py
"""
End-to-end scenarios against a fake Discord client on a real Unix socket.
"""
import json
import os
import socket
import struct
import threading

import pytest

from conftest import CLIENT_ID, READY, unix_only
from discord_ipc.client import IPCClient
from discord_ipc.dataclasses.presence import RichPresence
from discord_ipc.exc import CommandError, EndpointNotFound, NonceMismatch

pytestmark = unix_only


def after_handshake(answer):
    """Accepts the handshake, then answers every other frame with ``answer(opcode, payload)``."""
    def responder(opcode, payload):
        if opcode == 0:
            return 1, READY
        return answer(opcode, payload)

    return responder


def echo(opcode, payload):
    return 1, {"cmd": payload["cmd"], "evt": None, "data": payload["args"],
               "nonce": payload["nonce"]}


def test_connect_set_close(discord_server):
    server = discord_server()
    client = IPCClient(CLIENT_ID)
    client.connect()

    data = client.set_activity(RichPresence(state="foo", details="bar"))
    client.close()
    server.stop()

    assert data["activity"] == {"state": "foo", "details": "bar"}
    assert server.received[0] == (0, {"v": 1, "client_id": CLIENT_ID})
    assert server.received[1][1]["args"] == {"pid": os.getpid(),
                                             "activity": {"state": "foo", "details": "bar"}}
    assert server.received[-1] == (2, {})
    assert not client.is_connected


def test_error_event(discord_server):
    def answer(opcode, payload):
        return 1, {"cmd": "SET_ACTIVITY", "evt": "ERROR",
                   "data": {"code": 4000, "message": "Invalid Payload"},
                   "nonce": payload["nonce"]}

    discord_server(after_handshake(answer))

    with IPCClient(CLIENT_ID) as client:
        with pytest.raises(CommandError) as e:
            client.set_activity(RichPresence(state="foo"))

    assert (e.value.code, e.value.message) == (4000, "Invalid Payload")


def test_close_frame(discord_server):
    discord_server(after_handshake(lambda opcode, payload: (2, {"code": 4004,
                                                                "message": "Invalid Version"})))

    with IPCClient(CLIENT_ID) as client:
        with pytest.raises(CommandError) as e:
            client.set_activity(RichPresence(state="foo"))

    assert (e.value.code, e.value.message) == (4004, "Invalid Version")


def test_nonce_mismatch(discord_server):
    def answer(opcode, payload):
        return 1, {"cmd": payload["cmd"], "evt": None, "data": {}, "nonce": "X"}

    discord_server(after_handshake(answer))

    with IPCClient(CLIENT_ID, nonce_factory=lambda: "mine") as client:
        with pytest.raises(NonceMismatch):
            client.set_activity(RichPresence(state="foo"))


def test_ping_pong(discord_server):
    discord_server(after_handshake(lambda opcode, payload: (4, {})))

    with IPCClient(CLIENT_ID) as client:
        assert client.connected() is True


def test_ping_answered_with_frame(discord_server):
    discord_server(after_handshake(lambda opcode, payload: (1, {})))

    with IPCClient(CLIENT_ID) as client:
        assert client.connected() is False


def test_discovery_skips_missing_slots(discord_server, monkeypatch):
    monkeypatch.setenv("XDG_RUNTIME_DIR", "/nonexistent")
    server = discord_server(after_handshake(echo), slot=4)

    with IPCClient(CLIENT_ID) as client:
        client.set_activity({"state": "foo"})

    server.stop()
    assert server.received[1][1]["args"]["activity"] == {"state": "foo"}


def test_discovery_without_env(monkeypatch):
    for key in ("XDG_RUNTIME_DIR", "TMPDIR", "TMP", "TEMP"):
        monkeypatch.delenv(key, raising=False)

    with pytest.raises(EndpointNotFound):
        IPCClient(CLIENT_ID).connect()


def test_handshake_is_first_on_the_wire(ipc_dir):
    path = os.path.join(ipc_dir, "discord-ipc-0")
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(path)
    listener.listen(1)
    captured = []

    def serve():
        conn, _ = listener.accept()
        with conn:
            body = json.dumps({"v": 1, "client_id": CLIENT_ID}, separators=(",", ":"))
            expected = 8 + len(body.encode("utf-8"))
            data = b""
            while len(data) < expected:
                data += conn.recv(expected - len(data))
            captured.append(data)
            ready = json.dumps(READY).encode("utf-8")
            conn.sendall(struct.pack("<II", 1, len(ready)) + ready)
            conn.recv(1024)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()

    client = IPCClient(CLIENT_ID)
    client.connect()
    client.close()
    thread.join(timeout=5)
    listener.close()

    body = b'{"v":1,"client_id":"771124766517755954"}'
    assert captured[0] == b"\x00\x00\x00\x00" + struct.pack("<I", len(body)) + body
