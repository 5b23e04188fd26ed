"""Type definitions for Hyprland IPC."""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import StrEnum
from typing import Any, get_args, get_origin, get_type_hints

# Version of Hyprland the response records below were last checked against.
HYPRLAND_VERSION = "0.41.2"


class EventType(StrEnum):
    WORKSPACE = "workspace"
    FOCUSED_MONITOR = "focusedmon"
    ACTIVE_WINDOW = "activewindow"
    FULLSCREEN = "fullscreen"
    MONITOR_REMOVED = "monitorremoved"
    MONITOR_ADDED = "monitoradded"
    CREATE_WORKSPACE = "createworkspace"
    DESTROY_WORKSPACE = "destroyworkspace"
    MOVE_WORKSPACE = "moveworkspace"
    ACTIVE_LAYOUT = "activelayout"
    OPEN_WINDOW = "openwindow"
    CLOSE_WINDOW = "closewindow"
    MOVE_WINDOW = "movewindow"
    OPEN_LAYER = "openlayer"
    CLOSE_LAYER = "closelayer"
    SUB_MAP = "submap"
    SCREENCAST = "screencast"


@dataclass(frozen=True)
class ReceivedEvent:
    """One framed record read from the event socket."""

    type: EventType
    data: str


# --- Event payloads ---


@dataclass(frozen=True)
class FocusedMonitor:
    monitor_name: str
    workspace_name: str


@dataclass(frozen=True)
class ActiveWindow:
    name: str
    title: str


@dataclass(frozen=True)
class MoveWorkspace:
    workspace_name: str
    monitor_name: str


@dataclass(frozen=True)
class ActiveLayout:
    type: str
    name: str


@dataclass(frozen=True)
class OpenWindow:
    address: str
    workspace_name: str
    class_: str
    title: str


@dataclass(frozen=True)
class CloseWindow:
    address: str


@dataclass(frozen=True)
class MoveWindow:
    address: str
    workspace_name: str


@dataclass(frozen=True)
class Screencast:
    sharing: bool
    owner: str


# --- Query responses (`hyprctl -j` output) ---


def _json(key: str, default: Any) -> Any:
    return field(default=default, metadata={"json": key})


@dataclass
class WorkspaceType:
    id: int = 0
    name: str = ""


@dataclass
class Bind:
    locked: bool = False
    mouse: bool = False
    release: bool = False
    repeat: bool = False
    non_consuming: bool = False
    has_description: bool = False
    modmask: int = 0
    submap: str = ""
    key: str = ""
    keycode: int = 0
    catch_all: bool = False
    description: str = ""
    dispatcher: str = ""
    arg: str = ""


@dataclass
class Client:
    address: str = ""
    mapped: bool = False
    hidden: bool = False
    at: list[int] = field(default_factory=list)
    size: list[int] = field(default_factory=list)
    workspace: WorkspaceType = field(default_factory=WorkspaceType)
    floating: bool = False
    pseudo: bool = False
    monitor: int = 0
    class_: str = field(default="", metadata={"json": "class"})
    title: str = ""
    initial_class: str = _json("initialClass", "")
    initial_title: str = _json("initialTitle", "")
    pid: int = 0
    xwayland: bool = False
    pinned: bool = False
    fullscreen: bool = False
    fullscreen_mode: int = _json("fullscreenMode", 0)
    grouped: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    swallowing: str = ""
    focus_history_id: int = _json("focusHistoryID", -1)


Window = Client


@dataclass
class CursorPos:
    x: int = 0
    y: int = 0


@dataclass
class LayerField:
    address: str = ""
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    namespace: str = ""


@dataclass
class Layer:
    levels: dict[int, list[LayerField]] = field(default_factory=dict)


@dataclass
class Monitor:
    id: int = 0
    name: str = ""
    description: str = ""
    make: str = ""
    model: str = ""
    serial: str = ""
    width: int = 0
    height: int = 0
    refresh_rate: float = _json("refreshRate", 0.0)
    x: int = 0
    y: int = 0
    active_workspace: WorkspaceType = field(
        default_factory=WorkspaceType, metadata={"json": "activeWorkspace"}
    )
    special_workspace: WorkspaceType = field(
        default_factory=WorkspaceType, metadata={"json": "specialWorkspace"}
    )
    reserved: list[int] = field(default_factory=list)
    scale: float = 1.0
    transform: int = 0
    focused: bool = False
    dpms_status: bool = _json("dpmsStatus", False)
    vrr: bool = False
    actively_tearing: bool = _json("activelyTearing", False)
    current_format: str = _json("currentFormat", "")
    available_modes: list[str] = field(
        default_factory=list, metadata={"json": "availableModes"}
    )


@dataclass
class Option:
    option: str = ""
    int_value: int = _json("int", 0)
    is_set: bool = _json("set", False)


@dataclass
class Version:
    branch: str = ""
    commit: str = ""
    dirty: bool = False
    commit_message: str = ""
    commit_date: str = ""
    tag: str = ""
    commits: str = ""
    flags: list[str] = field(default_factory=list)


@dataclass
class Workspace:
    id: int = 0
    name: str = ""
    monitor: str = ""
    monitor_id: int = _json("monitorID", -1)
    windows: int = 0
    has_fullscreen: bool = _json("hasfullscreen", False)
    last_window: str = _json("lastwindow", "")
    last_window_title: str = _json("lastwindowtitle", "")


def from_json(cls, data: dict):
    """Build dataclass `cls` from a decoded JSON object.

    Unknown keys are ignored, missing or null keys keep the field default.
    """
    hints = get_type_hints(cls)
    kwargs = {}
    for f in fields(cls):
        key = f.metadata.get("json", f.name)
        if data.get(key) is not None:
            kwargs[f.name] = _convert(hints[f.name], data[key])
    return cls(**kwargs)


def _convert(tp, value):
    if tp is float:
        return float(value)
    if is_dataclass(tp):
        return from_json(tp, value)
    origin = get_origin(tp)
    if origin is list:
        (item_tp,) = get_args(tp)
        return [_convert(item_tp, v) for v in value]
    if origin is dict:
        key_tp, value_tp = get_args(tp)
        return {key_tp(k): _convert(value_tp, v) for k, v in value.items()}
    return value
