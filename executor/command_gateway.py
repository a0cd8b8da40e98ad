"""Fail-safe gateway for native window commands."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from core.state_manager import WindowStateAccess
from os_controller.base_controller import NativeBackend
from world_model.desktop_state import WindowDescriptor

SELECT_WINDOW_FIRST = "Please select a window first"
RESIZED = "Resized!"


@dataclass
class CommandOutcome:
    """Normalized result of one native command."""

    success: bool
    action: str
    detail: str = ""
    windows: list[WindowDescriptor] = field(default_factory=list)
    reached_backend: bool = True


class CommandGateway:
    """Runs one native command per call and keeps busy/message state in step.

    Arguments are read from state when the call is made. Commands are never
    retried; the busy flag is a display hint, not a lock.
    """

    def __init__(self, backend: NativeBackend, state: WindowStateAccess) -> None:
        self.backend = backend
        self.state = state
        self.logger = logging.getLogger("framefit.gateway")

    def _run(self, action: str, execute: Callable[[], Any]) -> tuple[bool, Any, str]:
        self.state.set_busy(True)
        self.state.clear_message()
        try:
            result = execute()
        except Exception as exc:
            detail = str(exc) or exc.__class__.__name__
            self.logger.warning("%s failed: %s", action, detail)
            self.state.set_busy(False)
            return False, None, detail
        self.state.set_busy(False)
        return True, result, ""

    def load_windows(self) -> CommandOutcome:
        ok, result, detail = self._run("list_windows", self.backend.list_windows)
        if not ok:
            self.state.set_windows([])
            self.state.post_error(f"Error: {detail}")
            return CommandOutcome(success=False, action="list_windows", detail=detail)
        windows = list(result or [])
        self.state.set_windows(windows)
        self.logger.debug("Loaded %d windows", len(windows))
        return CommandOutcome(success=True, action="list_windows", windows=windows)

    def resize_frontmost(self) -> CommandOutcome:
        width, height, center = self.state.width, self.state.height, self.state.center_window
        ok, _, detail = self._run(
            "resize_frontmost",
            lambda: self.backend.resize_frontmost(width, height, center),
        )
        return self._finish_resize("resize_frontmost", ok, detail)

    def resize_selected(self, window_id: int | None = None) -> CommandOutcome:
        """Resize a specific window; defaults to the current selection."""
        target = window_id if window_id is not None else self.state.selected_window
        if target is None:
            self.logger.debug("resize_window rejected: no window selected")
            self.state.post_info(SELECT_WINDOW_FIRST)
            return CommandOutcome(
                success=False,
                action="resize_window",
                detail=SELECT_WINDOW_FIRST,
                reached_backend=False,
            )
        width, height, center = self.state.width, self.state.height, self.state.center_window
        ok, _, detail = self._run(
            "resize_window",
            lambda: self.backend.resize_window(target, width, height, center),
        )
        return self._finish_resize("resize_window", ok, detail)

    def _finish_resize(self, action: str, ok: bool, detail: str) -> CommandOutcome:
        if ok:
            self.state.post_success(RESIZED)
            return CommandOutcome(success=True, action=action, detail=RESIZED)
        self.state.post_error(detail)
        return CommandOutcome(success=False, action=action, detail=detail)
