"""Deterministic in-memory backend for offline use and demos."""

from __future__ import annotations

from os_controller.base_controller import NativeBackend, NativeCommandError
from world_model.desktop_state import WindowDescriptor

SCREEN_SIZE = (1920, 1080)


def _default_windows() -> list[WindowDescriptor]:
    return [
        WindowDescriptor(id=101, title="notes.txt", app_name="Notepad", x=40, y=40, width=900, height=700),
        WindowDescriptor(id=102, title="Inbox", app_name="Mail", x=120, y=80, width=1200, height=800),
        WindowDescriptor(id=103, title="", app_name="Terminal", x=300, y=200, width=640, height=480),
    ]


class MockBackend(NativeBackend):
    """Simulates a desktop; the first window is treated as frontmost."""

    def __init__(
        self,
        windows: list[WindowDescriptor] | None = None,
        permission: bool = True,
    ) -> None:
        self.windows = list(windows) if windows is not None else _default_windows()
        self.permission = permission

    def check_permission(self) -> bool:
        return self.permission

    def list_windows(self) -> list[WindowDescriptor]:
        return list(self.windows)

    def resize_frontmost(self, width: int, height: int, center: bool) -> None:
        if not self.windows:
            raise NativeCommandError("No suitable window found. Please open another application.")
        self._resize(0, width, height, center)

    def resize_window(self, window_id: int, width: int, height: int, center: bool) -> None:
        for index, window in enumerate(self.windows):
            if window.id == window_id:
                self._resize(index, width, height, center)
                return
        raise NativeCommandError("Window not found")

    def _resize(self, index: int, width: int, height: int, center: bool) -> None:
        if not self.permission:
            raise NativeCommandError("Accessibility permission denied")
        window = self.windows[index]
        x, y = window.x, window.y
        if center:
            x = max(0, (SCREEN_SIZE[0] - width) // 2)
            y = max(0, (SCREEN_SIZE[1] - height) // 2)
        self.windows[index] = window.model_copy(update={"x": x, "y": y, "width": width, "height": height})
