"""Native backend adapter tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from os_controller import window_manager
from os_controller.backend_factory import build_backend
from os_controller.base_controller import NativeCommandError
from os_controller.mock_backend import MockBackend
from os_controller.window_manager import PyGetWindowBackend


def _fake_window(handle: int, title: str, width: int = 800, height: int = 600) -> MagicMock:
    window = MagicMock()
    window._hWnd = handle
    window.title = title
    window.left, window.top = 10, 20
    window.width, window.height = width, height
    window.isMaximized = False
    return window


def test_mock_backend_centers_resized_window() -> None:
    backend = MockBackend()

    backend.resize_window(102, 1280, 720, center=True)

    resized = next(w for w in backend.list_windows() if w.id == 102)
    assert (resized.x, resized.y, resized.width, resized.height) == (320, 180, 1280, 720)


def test_mock_backend_unknown_window() -> None:
    with pytest.raises(NativeCommandError, match="Window not found"):
        MockBackend().resize_window(999, 100, 100, center=False)


def test_build_backend_from_config() -> None:
    assert isinstance(build_backend({}), MockBackend)
    assert build_backend({"backend": {"type": "mock", "mock_permission": False}}).check_permission() is False
    assert isinstance(build_backend({"backend": {"type": "pygetwindow"}}), PyGetWindowBackend)
    with pytest.raises(ValueError):
        build_backend({"backend": {"type": "x11"}})


def test_pygetwindow_listing_filters_small_untitled_and_own_windows(monkeypatch: pytest.MonkeyPatch) -> None:
    gw = MagicMock()
    gw.getAllWindows.return_value = [
        _fake_window(1, "report.docx - Word"),
        _fake_window(2, ""),
        _fake_window(3, "tooltip", width=40, height=20),
        _fake_window(4, "FrameFit"),
    ]
    monkeypatch.setattr(window_manager, "gw", gw)

    windows = PyGetWindowBackend().list_windows()

    assert [(w.id, w.app_name) for w in windows] == [(1, "Word")]


def test_pygetwindow_resize_by_id(monkeypatch: pytest.MonkeyPatch) -> None:
    target = _fake_window(7, "notes - Notepad")
    gw = MagicMock()
    gw.getAllWindows.return_value = [target]
    monkeypatch.setattr(window_manager, "gw", gw)

    PyGetWindowBackend().resize_window(7, 640, 480, center=False)

    target.resizeTo.assert_called_once_with(640, 480)
    target.moveTo.assert_not_called()
    with pytest.raises(NativeCommandError, match="Window not found"):
        PyGetWindowBackend().resize_window(8, 640, 480, center=False)


def test_pygetwindow_refuses_own_window(monkeypatch: pytest.MonkeyPatch) -> None:
    gw = MagicMock()
    gw.getActiveWindow.return_value = _fake_window(1, "FrameFit")
    monkeypatch.setattr(window_manager, "gw", gw)

    with pytest.raises(NativeCommandError, match="itself"):
        PyGetWindowBackend().resize_frontmost(800, 600, center=False)


def test_pygetwindow_missing_library(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(window_manager, "gw", None)
    backend = PyGetWindowBackend()

    assert backend.check_permission() is False
    with pytest.raises(NativeCommandError):
        backend.list_windows()
