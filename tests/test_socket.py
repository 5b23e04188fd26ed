"""Tests for socket discovery and the low-level connection."""

import pytest

from hyprland import SocketKind, TransportError, get_socket_path
from hyprland._socket import HyprSocket


def test_socket_path_without_signature(monkeypatch):
    monkeypatch.delenv("HYPRLAND_INSTANCE_SIGNATURE", raising=False)
    assert get_socket_path(SocketKind.REQUEST) is None


def test_socket_path_in_runtime_dir(monkeypatch, tmp_path):
    (tmp_path / "hypr" / "sig").mkdir(parents=True)
    monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "sig")
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))

    assert get_socket_path(SocketKind.REQUEST) == str(tmp_path / "hypr" / "sig" / ".socket.sock")
    assert get_socket_path(SocketKind.EVENT) == str(tmp_path / "hypr" / "sig" / ".socket2.sock")


def test_socket_path_legacy_tmp(monkeypatch, tmp_path):
    """Without a runtime dir for the instance, fall back to /tmp/hypr."""
    monkeypatch.setenv("HYPRLAND_INSTANCE_SIGNATURE", "sig")
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))

    assert get_socket_path(SocketKind.EVENT) == "/tmp/hypr/sig/.socket2.sock"


def test_hypr_socket_requires_path():
    with pytest.raises(ValueError):
        HyprSocket("").open()


def test_hypr_socket_send_after_close(event_listener):
    path, listener = event_listener
    conn = HyprSocket(path)
    conn.open()
    listener.accept()[0].close()
    conn.close()

    with pytest.raises(TransportError):
        conn.send(b"dispatch exec true")
