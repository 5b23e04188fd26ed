"""Shared test fixtures for hyprland."""

import socket
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path

import pytest

from hyprland import EventClient, EventHandler


@pytest.fixture
def short_tmp_path():
    """Create a short temporary path for Unix sockets.

    Unix socket paths are limited to ~108 characters and pytest's
    tmp_path can be longer, so we use /tmp directly.
    """
    with tempfile.TemporaryDirectory(dir="/tmp", prefix="hy_") as tmpdir:
        yield Path(tmpdir)


class FakeHyprland:
    """Request socket stand-in: one frame in, one reply out, then close."""

    def __init__(
        self,
        path: Path,
        reply: Callable[[bytes], bytes],
        hang_up_after: int | None = None,
    ):
        self.path = str(path)
        self.reply = reply
        self.hang_up_after = hang_up_after
        self.received: list[bytes] = []
        self._stop = threading.Event()
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self._sock.bind(self.path)
        self._sock.listen()
        self._sock.settimeout(0.05)
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _ = self._sock.accept()
            except TimeoutError:
                continue
            with conn:
                conn.settimeout(2.0)
                frame = conn.recv(65536)
                self.received.append(frame)
                conn.sendall(self.reply(frame))
                if len(self.received) == self.hang_up_after:
                    # Stop listening before this reply completes
                    self._sock.close()
                    return

    def close(self) -> None:
        self._stop.set()
        self._thread.join(timeout=2.0)
        self._sock.close()


@pytest.fixture
def fake_hyprland(short_tmp_path):
    """Factory starting a FakeHyprland on `.socket.sock`."""
    servers = []

    def start(
        reply: Callable[[bytes], bytes] = lambda frame: b"ok",
        hang_up_after: int | None = None,
    ) -> FakeHyprland:
        server = FakeHyprland(short_tmp_path / ".socket.sock", reply, hang_up_after)
        servers.append(server)
        return server

    yield start
    for server in servers:
        server.close()


@pytest.fixture
def event_listener(short_tmp_path):
    """Listening event socket; tests connect an EventClient then accept()."""
    path = short_tmp_path / ".socket2.sock"
    listener = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    listener.bind(str(path))
    listener.listen()
    listener.settimeout(2.0)
    yield str(path), listener
    listener.close()


class FakeEventClient(EventClient):
    """EventClient fed from a list of prepared batches instead of a socket.

    Cancels itself once the batches run out.
    """

    def __post_init__(self) -> None:
        self.batches = []
        self.reads = 0

    def receive(self):
        self.reads += 1
        if not self.batches:
            self.cancel.set()
            return []
        return self.batches.pop(0)


class RecordingHandler(EventHandler):
    """Records every callback as (method name, payload)."""

    def __init__(self):
        self.calls = []


def _recorder(name: str):
    def method(self, payload):
        self.calls.append((name, payload))

    return method


for _name in [n for n in vars(EventHandler) if not n.startswith("_")]:
    setattr(RecordingHandler, _name, _recorder(_name))


@pytest.fixture
def fake_event_client():
    return FakeEventClient("unused")


@pytest.fixture
def handler():
    return RecordingHandler()
