"""Exceptions raised by the Hyprland IPC client."""


class HyprlandError(Exception):
    """Base class for every error raised by this package."""


class TransportError(HyprlandError, OSError):
    """Socket connect, write or read failed."""


class ValidationError(HyprlandError):
    """Hyprland rejected (or partially rejected) a command."""

    def __init__(self, params: list[str], response: bytes):
        self.params = params
        self.response = response
        super().__init__(
            f"command rejected: {len(params)} param(s), response: {response!r}"
        )


class ResponseError(HyprlandError):
    """A query response could not be decoded."""


class MalformedEventError(HyprlandError):
    """An event payload is missing fields for its type."""


class ContextEndedError(HyprlandError):
    """The subscription loop was cancelled."""
