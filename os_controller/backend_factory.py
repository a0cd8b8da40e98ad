"""Native backend factory."""

from __future__ import annotations

from typing import Any

from os_controller.base_controller import NativeBackend
from os_controller.mock_backend import MockBackend
from os_controller.window_manager import PyGetWindowBackend


def build_backend(config: dict[str, Any]) -> NativeBackend:
    """Build the native backend from configuration, defaulting to mock."""
    backend_cfg = config.get("backend", {}) or {}
    backend_type = str(backend_cfg.get("type", "mock")).lower()

    if backend_type == "pygetwindow":
        return PyGetWindowBackend()
    if backend_type == "mock":
        return MockBackend(permission=bool(backend_cfg.get("mock_permission", True)))
    raise ValueError(f"Unknown backend type: {backend_type}")
