"""Native backend built on PyGetWindow, with pyautogui for screen size."""

from __future__ import annotations

import logging
from typing import Any

from os_controller.base_controller import NativeBackend, NativeCommandError
from world_model.desktop_state import WindowDescriptor

try:
    import pygetwindow as gw
except ImportError:
    gw = None

try:
    import pyautogui
except ImportError:
    pyautogui = None

MIN_WINDOW_SIZE = 50
EXCLUDED_APPS = ("Dock", "Window Server", "FrameFit")


def _app_name(title: str) -> str:
    # Most desktop apps title their windows "<document> - <application>".
    return title.rsplit(" - ", 1)[-1].strip()


def _is_excluded(app_name: str) -> bool:
    return any(app_name.lower() == excluded.lower() for excluded in EXCLUDED_APPS)


class PyGetWindowBackend(NativeBackend):
    """Moves and resizes desktop windows through PyGetWindow."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("framefit.window_manager")
        if not gw:
            self.logger.warning("pygetwindow is not installed.")

    def _check_available(self) -> None:
        if not gw:
            raise NativeCommandError("Cannot execute window operation: pygetwindow missing.")

    def check_permission(self) -> bool:
        # PyGetWindow needs no accessibility grant; availability is the permission.
        return gw is not None

    def _describe(self, window: Any) -> WindowDescriptor | None:
        handle = getattr(window, "_hWnd", None)
        if handle is None:
            return None
        title = str(window.title or "")
        return WindowDescriptor(
            id=int(handle),
            title=title,
            app_name=_app_name(title),
            x=int(window.left),
            y=int(window.top),
            width=int(window.width),
            height=int(window.height),
        )

    def list_windows(self) -> list[WindowDescriptor]:
        self._check_available()
        try:
            windows = gw.getAllWindows()
        except Exception as exc:
            raise NativeCommandError(f"Failed to get window list: {exc}") from exc
        result: list[WindowDescriptor] = []
        for window in windows:
            if not str(window.title or "").strip():
                continue
            descriptor = self._describe(window)
            if descriptor is None:
                continue
            if descriptor.width <= MIN_WINDOW_SIZE or descriptor.height <= MIN_WINDOW_SIZE:
                continue
            if _is_excluded(descriptor.app_name):
                continue
            result.append(descriptor)
        return result

    def resize_frontmost(self, width: int, height: int, center: bool) -> None:
        self._check_available()
        window = gw.getActiveWindow()
        if window is None:
            raise NativeCommandError("No suitable window found. Please open another application.")
        self._resize(window, width, height, center)

    def resize_window(self, window_id: int, width: int, height: int, center: bool) -> None:
        self._check_available()
        for window in gw.getAllWindows():
            if getattr(window, "_hWnd", None) == window_id:
                self._resize(window, width, height, center)
                return
        raise NativeCommandError("Window not found")

    def _resize(self, window: Any, width: int, height: int, center: bool) -> None:
        if _is_excluded(_app_name(str(window.title or ""))):
            raise NativeCommandError("Cannot resize the FrameFit app itself")
        try:
            if window.isMaximized:
                window.restore()
            window.resizeTo(width, height)
            if center:
                x, y = self._centered_origin(width, height)
                window.moveTo(x, y)
        except Exception as exc:
            raise NativeCommandError(f"Resize failed: {exc}") from exc
        self.logger.info("Resized '%s' to %sx%s (center=%s)", window.title, width, height, center)

    @staticmethod
    def _centered_origin(width: int, height: int) -> tuple[int, int]:
        if pyautogui is None:
            raise NativeCommandError("Cannot center window: pyautogui missing.")
        screen_w, screen_h = pyautogui.size()
        return max(0, (screen_w - width) // 2), max(0, (screen_h - height) // 2)
