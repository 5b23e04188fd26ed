"""Event handling and dispatch for Hyprland IPC."""

import logging
import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

from ._socket import HyprSocket, SocketKind, get_socket_path
from ._types import (
    ActiveLayout,
    ActiveWindow,
    CloseWindow,
    EventType,
    FocusedMonitor,
    MoveWindow,
    MoveWorkspace,
    OpenWindow,
    ReceivedEvent,
    Screencast,
)
from .errors import ContextEndedError, MalformedEventError, TransportError

logger = logging.getLogger(__name__)

SEPARATOR = ">>"

Payload = (
    str
    | bool
    | FocusedMonitor
    | ActiveWindow
    | MoveWorkspace
    | ActiveLayout
    | OpenWindow
    | CloseWindow
    | MoveWindow
    | Screencast
)


class EventHandler:
    """Callbacks for each Hyprland event, all no-ops by default.

    Subclass and override only the events you care about:

        class Printer(EventHandler):
            def workspace(self, name):
                print("now on", name)
    """

    def workspace(self, name: str) -> None: ...

    def focused_monitor(self, event: FocusedMonitor) -> None: ...

    def active_window(self, event: ActiveWindow) -> None: ...

    def fullscreen(self, enabled: bool) -> None: ...

    def monitor_removed(self, name: str) -> None: ...

    def monitor_added(self, name: str) -> None: ...

    def create_workspace(self, name: str) -> None: ...

    def destroy_workspace(self, name: str) -> None: ...

    def move_workspace(self, event: MoveWorkspace) -> None: ...

    def active_layout(self, event: ActiveLayout) -> None: ...

    def open_window(self, event: OpenWindow) -> None: ...

    def close_window(self, event: CloseWindow) -> None: ...

    def move_window(self, event: MoveWindow) -> None: ...

    def open_layer(self, namespace: str) -> None: ...

    def close_layer(self, namespace: str) -> None: ...

    def sub_map(self, name: str) -> None: ...

    def screencast(self, event: Screencast) -> None: ...


NoopEventHandler = EventHandler


def _split(data: str, count: int) -> list[str]:
    # The last field keeps any commas (window titles often contain them)
    raw = data.split(",", count - 1)
    if len(raw) < count:
        raise MalformedEventError(f"expected {count} field(s), got {data!r}")
    return raw


# event type -> (field count, payload builder, handler method name)
_DECODERS: dict[EventType, tuple[int, Callable[[list[str]], Payload], str]] = {
    EventType.WORKSPACE: (1, lambda r: r[0], "workspace"),
    EventType.FOCUSED_MONITOR: (2, lambda r: FocusedMonitor(*r), "focused_monitor"),
    EventType.ACTIVE_WINDOW: (2, lambda r: ActiveWindow(*r), "active_window"),
    EventType.FULLSCREEN: (1, lambda r: r[0] == "1", "fullscreen"),
    EventType.MONITOR_REMOVED: (1, lambda r: r[0], "monitor_removed"),
    EventType.MONITOR_ADDED: (1, lambda r: r[0], "monitor_added"),
    EventType.CREATE_WORKSPACE: (1, lambda r: r[0], "create_workspace"),
    EventType.DESTROY_WORKSPACE: (1, lambda r: r[0], "destroy_workspace"),
    EventType.MOVE_WORKSPACE: (2, lambda r: MoveWorkspace(*r), "move_workspace"),
    EventType.ACTIVE_LAYOUT: (2, lambda r: ActiveLayout(*r), "active_layout"),
    EventType.OPEN_WINDOW: (4, lambda r: OpenWindow(*r), "open_window"),
    EventType.CLOSE_WINDOW: (1, lambda r: CloseWindow(r[0]), "close_window"),
    EventType.MOVE_WINDOW: (2, lambda r: MoveWindow(*r), "move_window"),
    EventType.OPEN_LAYER: (1, lambda r: r[0], "open_layer"),
    EventType.CLOSE_LAYER: (1, lambda r: r[0], "close_layer"),
    EventType.SUB_MAP: (1, lambda r: r[0], "sub_map"),
    EventType.SCREENCAST: (2, lambda r: Screencast(r[0] == "1", r[1]), "screencast"),
}


def all_events() -> list[EventType]:
    return list(EventType)


def decode_event(event: ReceivedEvent) -> Payload:
    """Decode the comma-separated payload of `event` into its typed value."""
    count, build, _ = _DECODERS[event.type]
    return build(_split(event.data, count))


def parse_events(chunk: str) -> list[ReceivedEvent]:
    """Split a chunk of the event stream into records.

    Empty, unseparated or partial records are dropped, as are event types
    this client does not know about.
    """
    events = []
    for record in chunk.split("\n"):
        name, sep, data = record.partition(SEPARATOR)
        if not sep or not name or not data or data in (",", SEPARATOR):
            continue
        try:
            event_type = EventType(name)
        except ValueError:
            continue
        events.append(ReceivedEvent(event_type, data))
    return events


@dataclass
class EventClient(HyprSocket):
    """Client for Hyprland's event socket (`.socket2.sock`).

    One instance serves one caller; use a separate RequestClient to send
    commands while subscribed. Setting `cancel` stops `subscribe` before its
    next read. With a `timeout`, reads wake up at least that often so a
    cancellation is noticed even when no events arrive.
    """

    cancel: threading.Event = field(default_factory=threading.Event)
    _incomplete: bytes = field(default=b"", init=False, repr=False)

    def __post_init__(self) -> None:
        self.open()

    @classmethod
    def connect(cls, cancel: threading.Event | None = None, timeout: float | None = None):
        path = get_socket_path(SocketKind.EVENT)
        if not path:
            raise RuntimeError("HYPRLAND_INSTANCE_SIGNATURE not set")
        if cancel is None:
            return cls(path, timeout=timeout)
        return cls(path, timeout=timeout, cancel=cancel)

    def receive(self) -> list[ReceivedEvent]:
        """Read one chunk from the socket and return the events it completes."""
        try:
            chunk = self.recv_chunk()
        except TimeoutError:
            return []
        if not chunk:
            if self.closed:
                raise TransportError("event socket closed")
            raise TransportError("event socket closed by Hyprland")

        lines, _, self._incomplete = (self._incomplete + chunk).rpartition(b"\n")
        if len(self._incomplete) > self.buffer_size:
            # Carry-over is capped at one read, longer records are dropped
            logger.debug("Dropping %d byte partial record", len(self._incomplete))
            self._incomplete = b""
        return parse_events(lines.decode("utf-8", errors="replace"))

    def events(self, *event_types: EventType) -> Iterator[tuple[EventType, Payload]]:
        """Yield (event_type, payload) for subscribed events until cancelled."""
        wanted = frozenset(event_types)
        while True:
            if self.cancel.is_set():
                raise ContextEndedError("context is done")
            for event in self.receive():
                if event.type not in wanted:
                    continue
                try:
                    payload = decode_event(event)
                except MalformedEventError as err:
                    logger.warning("Skipping %s event: %s", event.type, err)
                    continue
                yield event.type, payload

    def subscribe(self, handler: EventHandler, *event_types: EventType) -> None:
        """Dispatch subscribed events to `handler`.

        Never returns normally: ends with ContextEndedError once `cancel` is
        set, or TransportError when the connection fails.
        """
        for event_type, payload in self.events(*event_types):
            logger.debug("dispatch %s: %r", event_type, payload)
            getattr(handler, _DECODERS[event_type][2])(payload)
