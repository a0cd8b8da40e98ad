"""Command gateway tests with a mocked native backend."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

from core.messages import MessageKind
from core.state_manager import StateManager
from executor.command_gateway import SELECT_WINDOW_FIRST, CommandGateway
from os_controller.base_controller import NativeBackend, NativeCommandError
from world_model.desktop_state import WindowDescriptor


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _window(window_id: int, title: str = "doc") -> WindowDescriptor:
    return WindowDescriptor(id=window_id, title=title, app_name="Editor", x=0, y=0, width=500, height=400)


def _gateway() -> tuple[CommandGateway, MagicMock, StateManager, FakeClock]:
    clock = FakeClock()
    manager = StateManager(clock=clock)
    backend = MagicMock(spec=NativeBackend)
    return CommandGateway(backend, manager.window_access()), backend, manager, clock


def test_resize_frontmost_error_is_visible_until_long_ttl() -> None:
    gateway, backend, manager, clock = _gateway()
    backend.resize_frontmost.side_effect = NativeCommandError("window not found")

    outcome = gateway.resize_frontmost()

    assert outcome.success is False
    assert manager.state.busy is False
    message = manager.state.message
    assert message is not None
    assert message.kind is MessageKind.ERROR
    assert "window not found" in message.text

    manager.tick()
    assert manager.state.message is message
    clock.now = 9.9
    manager.tick()
    assert manager.state.message is message
    clock.now = 10.0
    assert manager.tick() is True
    assert manager.state.message is None


def test_resize_success_message_clears_after_short_ttl() -> None:
    gateway, backend, manager, clock = _gateway()

    outcome = gateway.resize_frontmost()

    assert outcome.success is True
    assert manager.state.message.kind is MessageKind.SUCCESS
    clock.now = 1.5
    manager.tick()
    assert manager.state.message is not None
    clock.now = 2.0
    manager.tick()
    assert manager.state.message is None


def test_error_can_be_dismissed_early() -> None:
    gateway, backend, manager, _ = _gateway()
    backend.resize_frontmost.side_effect = RuntimeError("boom")

    gateway.resize_frontmost()
    manager.dismiss_message()

    assert manager.state.message is None


def test_resize_reads_dimensions_at_call_time() -> None:
    gateway, backend, manager, _ = _gateway()
    manager.set_dimensions(1024, 768)
    manager.set_center_window(False)

    gateway.resize_frontmost()

    backend.resize_frontmost.assert_called_once_with(1024, 768, False)


def test_resize_selected_without_selection_never_reaches_backend() -> None:
    gateway, backend, manager, _ = _gateway()
    changed: list[str] = []
    manager.event_bus.subscribe("state.changed", lambda payload: changed.append(payload["field"]))

    outcome = gateway.resize_selected()

    assert outcome.success is False
    assert outcome.reached_backend is False
    backend.resize_window.assert_not_called()
    assert "busy" not in changed
    assert manager.state.message.text == SELECT_WINDOW_FIRST


def test_resize_selected_uses_selection() -> None:
    gateway, backend, manager, _ = _gateway()
    manager.select_window(42)
    manager.set_dimensions(390, 844)

    outcome = gateway.resize_selected()

    assert outcome.success is True
    backend.resize_window.assert_called_once_with(42, 390, 844, True)
    assert manager.state.message.text == "Resized!"


def test_busy_is_set_and_message_cleared_during_call() -> None:
    gateway, backend, manager, _ = _gateway()
    manager.post_info("stale")
    seen: dict[str, Any] = {}

    def _observe(width: int, height: int, center: bool) -> None:
        seen["busy"] = manager.state.busy
        seen["message"] = manager.state.message

    backend.resize_frontmost.side_effect = _observe
    gateway.resize_frontmost()

    assert seen == {"busy": True, "message": None}
    assert manager.state.busy is False


def test_load_windows_replaces_list_wholesale() -> None:
    gateway, backend, manager, _ = _gateway()
    backend.list_windows.return_value = [_window(1), _window(2)]
    gateway.load_windows()
    backend.list_windows.return_value = [_window(3)]

    outcome = gateway.load_windows()

    assert outcome.success is True
    assert [w.id for w in manager.state.windows] == [3]
    assert manager.state.message is None


def test_load_windows_drops_vanished_selection() -> None:
    gateway, backend, manager, _ = _gateway()
    manager.select_window(2)
    backend.list_windows.return_value = [_window(1)]

    gateway.load_windows()

    assert manager.state.selected_window is None


def test_load_windows_failure_reports_error_and_empties_list() -> None:
    gateway, backend, manager, _ = _gateway()
    backend.list_windows.return_value = [_window(1)]
    gateway.load_windows()
    backend.list_windows.side_effect = NativeCommandError("Failed to get window list")

    outcome = gateway.load_windows()

    assert outcome.success is False
    assert manager.state.windows == []
    assert manager.state.busy is False
    assert manager.state.message.text == "Error: Failed to get window list"
    assert manager.state.message.kind is MessageKind.ERROR


def test_failures_are_not_retried() -> None:
    gateway, backend, _, _ = _gateway()
    backend.resize_window.side_effect = NativeCommandError("Window not found")

    gateway.resize_selected(window_id=7)

    assert backend.resize_window.call_count == 1
