"""Low-level socket communication with Hyprland IPC."""

import os
import socket
from dataclasses import dataclass, field
from enum import StrEnum

from .errors import TransportError


class SocketKind(StrEnum):
    REQUEST = ".socket.sock"
    EVENT = ".socket2.sock"


def get_socket_path(kind: SocketKind) -> str | None:
    """Get Hyprland socket path for the current session from environment."""
    signature = os.environ.get("HYPRLAND_INSTANCE_SIGNATURE")
    if not signature:
        return None

    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    if runtime_dir and os.path.isdir(os.path.join(runtime_dir, "hypr", signature)):
        base = os.path.join(runtime_dir, "hypr", signature)
    else:
        # Hyprland < 0.40 kept its sockets under /tmp
        base = os.path.join("/tmp", "hypr", signature)
    return os.path.join(base, kind)


@dataclass
class HyprSocket:
    """Unix socket connection to Hyprland compositor."""

    socket_path: str
    timeout: float | None = None
    buffer_size: int = 8192
    _socket: socket.socket | None = field(default=None, init=False, repr=False)

    def open(self) -> None:
        if not self.socket_path:
            raise ValueError("Cannot connect to Hyprland, no socket path given")
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.timeout)
        try:
            sock.connect(self.socket_path)
        except OSError as err:
            sock.close()
            raise TransportError(
                f"error while connecting to socket {self.socket_path}: {err}"
            ) from err
        self._socket = sock

    def close(self) -> None:
        sock, self._socket = self._socket, None
        if sock is None:
            return
        try:
            # Wakes up a recv() blocked in another thread
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()

    @property
    def closed(self) -> bool:
        return self._socket is None

    def __enter__(self):
        if self._socket is None:
            self.open()
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def _require(self) -> socket.socket:
        if self._socket is None:
            raise TransportError("socket is closed")
        return self._socket

    def send(self, data: bytes) -> None:
        try:
            self._require().sendall(data)
        except TransportError:
            raise
        except OSError as err:
            raise TransportError(f"error while writing to socket: {err}") from err

    def recv_chunk(self) -> bytes:
        """Read one chunk; empty bytes means the peer closed the connection.

        Raises TimeoutError when a timeout is set and no data arrived.
        """
        sock = self._require()
        try:
            return sock.recv(self.buffer_size)
        except TimeoutError:
            raise
        except OSError as err:
            raise TransportError(f"error while reading from socket: {err}") from err

    def recv_all(self) -> bytes:
        """Read until the peer closes the connection."""
        chunks = []
        while True:
            try:
                chunk = self.recv_chunk()
            except TimeoutError as err:
                raise TransportError(f"timed out reading from socket: {err}") from err
            if not chunk:
                break
            chunks.append(chunk)
        return b"".join(chunks)
