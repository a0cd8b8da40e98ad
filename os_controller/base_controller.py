"""Base interface for native window-control backends."""

from __future__ import annotations

from abc import ABC, abstractmethod

from world_model.desktop_state import WindowDescriptor


class NativeCommandError(RuntimeError):
    """Raised by a backend when a native command fails."""


class NativeBackend(ABC):
    """Command interface to the platform window manager."""

    @abstractmethod
    def check_permission(self) -> bool:
        """Return whether this process may move and resize other windows."""

    @abstractmethod
    def list_windows(self) -> list[WindowDescriptor]:
        """Return the windows currently on screen."""

    @abstractmethod
    def resize_frontmost(self, width: int, height: int, center: bool) -> None:
        """Resize the foreground window."""

    @abstractmethod
    def resize_window(self, window_id: int, width: int, height: int, center: bool) -> None:
        """Resize the window with the given native handle."""
