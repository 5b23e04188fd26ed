"""Hyprland IPC client library."""

import logging

from ._socket import SocketKind, get_socket_path
from ._types import HYPRLAND_VERSION, EventType, ReceivedEvent
from .errors import (
    ContextEndedError,
    HyprlandError,
    MalformedEventError,
    ResponseError,
    TransportError,
    ValidationError,
)
from .events import EventClient, EventHandler, NoopEventHandler, all_events
from .ipc import RequestClient, prepare_requests

logger = logging.getLogger(__name__)

__all__ = [
    "RequestClient",
    "EventClient",
    "EventHandler",
    "NoopEventHandler",
    "EventType",
    "ReceivedEvent",
    "HYPRLAND_VERSION",
    "SocketKind",
    "get_socket_path",
    "prepare_requests",
    "all_events",
    "HyprlandError",
    "TransportError",
    "ValidationError",
    "ResponseError",
    "MalformedEventError",
    "ContextEndedError",
    "logger",
]
