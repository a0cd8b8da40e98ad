"""Application state container and the per-component views onto it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.event_bus import EventBus
from core.messages import Clock, MessageKind, StatusMessage, default_clock
from presets.types import BUILTIN_PRESETS, Preset
from world_model.desktop_state import WindowDescriptor

DEFAULT_SUCCESS_TTL = 2.0
DEFAULT_ERROR_TTL = 10.0


@dataclass
class AppState:
    """Mutable state shared by the whole process."""

    width: int = 800
    height: int = 600
    windows: list[WindowDescriptor] = field(default_factory=list)
    selected_window: int | None = None
    has_permission: bool = False
    busy: bool = False
    message: StatusMessage | None = None
    show_window_list: bool = False
    presets: list[Preset] = field(default_factory=lambda: list(BUILTIN_PRESETS))
    show_add_preset: bool = False
    new_preset_name: str = ""
    center_window: bool = True


class StateManager:
    """Owns the single AppState and publishes a change event for every write."""

    def __init__(
        self,
        event_bus: EventBus | None = None,
        clock: Clock = default_clock,
        success_ttl: float = DEFAULT_SUCCESS_TTL,
        error_ttl: float = DEFAULT_ERROR_TTL,
        width: int = 800,
        height: int = 600,
        center_window: bool = True,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.clock = clock
        self.success_ttl = success_ttl
        self.error_ttl = error_ttl
        self.state = AppState(width=width, height=height, center_window=center_window)

    def _set(self, name: str, value: Any) -> None:
        setattr(self.state, name, value)
        self.event_bus.emit("state.changed", {"field": name})

    # View-owned fields

    def set_dimensions(self, width: int, height: int) -> None:
        self._set("width", int(width))
        self._set("height", int(height))

    def select_window(self, window_id: int | None) -> None:
        self._set("selected_window", window_id)

    def set_center_window(self, center: bool) -> None:
        self._set("center_window", bool(center))

    def set_show_window_list(self, show: bool) -> None:
        self._set("show_window_list", bool(show))

    def set_show_add_preset(self, show: bool) -> None:
        self._set("show_add_preset", bool(show))

    def set_new_preset_name(self, name: str) -> None:
        self._set("new_preset_name", name)

    def apply_preset(self, index: int) -> Preset | None:
        """Copy a preset's size into the target dimensions."""
        if index < 0 or index >= len(self.state.presets):
            return None
        preset = self.state.presets[index]
        self.set_dimensions(preset.width, preset.height)
        return preset

    def set_permission(self, granted: bool) -> None:
        self._set("has_permission", bool(granted))

    # Messages

    def publish_message(self, text: str, kind: MessageKind, ttl: float | None = None) -> StatusMessage:
        message = StatusMessage(text=text, kind=kind, posted_at=self.clock(), ttl=ttl)
        self._set("message", message)
        self.event_bus.emit("message.published", {"text": text, "kind": kind.value})
        return message

    def post_success(self, text: str) -> StatusMessage:
        return self.publish_message(text, MessageKind.SUCCESS, self.success_ttl)

    def post_error(self, text: str) -> StatusMessage:
        return self.publish_message(text, MessageKind.ERROR, self.error_ttl)

    def post_warning(self, text: str) -> StatusMessage:
        return self.publish_message(text, MessageKind.WARNING)

    def post_info(self, text: str) -> StatusMessage:
        return self.publish_message(text, MessageKind.INFO)

    def clear_message(self) -> None:
        if self.state.message is not None:
            self._set("message", None)

    def dismiss_message(self) -> None:
        """User dismissal; does not affect any call in flight."""
        self.clear_message()

    def tick(self) -> bool:
        """Drop the current message once its TTL has elapsed."""
        message = self.state.message
        if message is not None and message.expired(self.clock()):
            self.clear_message()
            return True
        return False

    def window_access(self) -> WindowStateAccess:
        return WindowStateAccess(self)

    def preset_access(self) -> PresetStateAccess:
        return PresetStateAccess(self)


class _MessageAccess:
    def __init__(self, manager: StateManager) -> None:
        self._manager = manager

    def post_success(self, text: str) -> StatusMessage:
        return self._manager.post_success(text)

    def post_error(self, text: str) -> StatusMessage:
        return self._manager.post_error(text)

    def post_info(self, text: str) -> StatusMessage:
        return self._manager.post_info(text)

    def clear_message(self) -> None:
        self._manager.clear_message()


class WindowStateAccess(_MessageAccess):
    """Fields the command gateway reads and writes."""

    @property
    def width(self) -> int:
        return self._manager.state.width

    @property
    def height(self) -> int:
        return self._manager.state.height

    @property
    def center_window(self) -> bool:
        return self._manager.state.center_window

    @property
    def selected_window(self) -> int | None:
        return self._manager.state.selected_window

    def set_busy(self, busy: bool) -> None:
        self._manager._set("busy", busy)

    def set_windows(self, windows: list[WindowDescriptor]) -> None:
        self._manager._set("windows", list(windows))
        selected = self._manager.state.selected_window
        if selected is not None and all(w.id != selected for w in windows):
            self._manager.select_window(None)


class PresetStateAccess(_MessageAccess):
    """Fields the preset catalog reads and writes."""

    @property
    def presets(self) -> list[Preset]:
        return list(self._manager.state.presets)

    @property
    def new_preset_name(self) -> str:
        return self._manager.state.new_preset_name

    def set_presets(self, presets: list[Preset]) -> None:
        self._manager._set("presets", list(presets))

    def close_add_form(self) -> None:
        self._manager.set_new_preset_name("")
        self._manager.set_show_add_preset(False)
