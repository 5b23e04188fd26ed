"""Hyprland request socket: commands, batching and queries."""

import json
import logging
import threading
from dataclasses import dataclass, field

from ._socket import HyprSocket, SocketKind, get_socket_path
from ._types import (
    Bind,
    Client,
    CursorPos,
    Layer,
    Monitor,
    Option,
    Version,
    Window,
    Workspace,
    from_json,
)
from .errors import ResponseError, ValidationError

logger = logging.getLogger(__name__)

# Hyprland silently drops commands from batches that are too large; the limit
# is undocumented, 30 is known to go through.
MAX_COMMANDS = 30
BATCH_PREFIX = "[[BATCH]]"
SUCCESS_MARKER = b"ok"


def prepare_requests(command: str, params: list[str]) -> list[bytes]:
    """Build the frames needed to send `command` once per param.

    No params or a single param fit in one plain frame. Two or more params
    are split into `[[BATCH]]` frames of at most MAX_COMMANDS commands each.
    """
    if not command:
        raise ValueError("command must not be empty")

    match params:
        case []:
            return [command.encode("utf-8")]
        case [param]:
            return [f"{command} {param}".encode("utf-8")]

    requests = []
    for i in range(0, len(params), MAX_COMMANDS):
        batch = "".join(f"{command} {p};" for p in params[i : i + MAX_COMMANDS])
        requests.append(f"{BATCH_PREFIX}{batch}".encode("utf-8"))
    return requests


@dataclass
class RequestClient:
    """Client for Hyprland's request socket (`.socket.sock`).

    Hyprland answers exactly one frame per connection, so every request
    opens its own connection. Set `validate` to False to skip counting
    success markers in responses; rejected commands then go unreported.
    """

    socket_path: str
    validate: bool = True
    timeout: float | None = None
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if not self.socket_path:
            raise ValueError("Cannot connect to Hyprland, no socket path given")

    @classmethod
    def connect(cls, validate: bool = True, timeout: float | None = None):
        path = get_socket_path(SocketKind.REQUEST)
        if not path:
            raise RuntimeError("HYPRLAND_INSTANCE_SIGNATURE not set")
        return cls(path, validate=validate, timeout=timeout)

    def request(self, raw: bytes) -> bytes:
        """Send one raw frame and return the full response."""
        if not raw:
            raise ValueError("request frame must not be empty")

        with self._lock, HyprSocket(self.socket_path, timeout=self.timeout) as conn:
            logger.debug("-> %r", raw)
            conn.send(raw)
            response = conn.recv_all()
        logger.debug("<- %r", response)
        return response

    def validate_response(self, params: list[str], response: bytes) -> None:
        if not self.validate:
            return
        # Lower bound only: responses may carry extra markers or whitespace
        count = response.strip().count(SUCCESS_MARKER)
        if count < len(params):
            raise ValidationError(list(params), response)

    def raw_request(self, command: str, *params: str) -> bytes:
        """Send `command` once per param, batching as needed.

        Frames go out in order and the first failure stops the sequence.
        Frames sent before the failure have already been applied.
        """
        responses = []
        for i, raw in enumerate(prepare_requests(command, list(params))):
            response = self.request(raw)
            self.validate_response(
                list(params[i * MAX_COMMANDS : (i + 1) * MAX_COMMANDS]), response
            )
            responses.append(response)
        return b"".join(responses)

    def _query(self, command: str):
        response = self.request(f"j/{command}".encode("utf-8"))
        try:
            return json.loads(response)
        except json.JSONDecodeError as err:
            raise ResponseError(f"invalid JSON in {command!r} response: {response!r}") from err

    # --- Commands ---

    def dispatch(self, *params: str) -> bytes:
        return self.raw_request("dispatch", *params)

    def keyword(self, *params: str) -> bytes:
        return self.raw_request("keyword", *params)

    def kill(self) -> bytes:
        """Enter kill mode; the next clicked window is closed."""
        return self.raw_request("kill")

    def reload(self) -> bytes:
        return self.raw_request("reload")

    def set_cursor(self, theme: str, size: int) -> bytes:
        return self.raw_request("setcursor", f"{theme} {size}")

    def splash(self) -> str:
        response = self.request(b"splash")
        try:
            return response.decode("utf-8")
        except UnicodeDecodeError as err:
            raise ResponseError(f"invalid UTF-8 in splash response: {response!r}") from err

    # --- Queries ---

    def active_window(self) -> Window:
        return from_json(Window, self._query("activewindow"))

    def active_workspace(self) -> Workspace:
        return from_json(Workspace, self._query("activeworkspace"))

    def binds(self) -> list[Bind]:
        return [from_json(Bind, b) for b in self._query("binds")]

    def clients(self) -> list[Client]:
        return [from_json(Client, c) for c in self._query("clients")]

    def cursor_pos(self) -> CursorPos:
        return from_json(CursorPos, self._query("cursorpos"))

    def get_option(self, name: str) -> Option:
        return from_json(Option, self._query(f"getoption {name}"))

    def layers(self) -> dict[str, Layer]:
        return {out: from_json(Layer, lay) for out, lay in self._query("layers").items()}

    def monitors(self) -> list[Monitor]:
        return [from_json(Monitor, m) for m in self._query("monitors")]

    def workspaces(self) -> list[Workspace]:
        return [from_json(Workspace, w) for w in self._query("workspaces")]

    def version(self) -> Version:
        return from_json(Version, self._query("version"))
