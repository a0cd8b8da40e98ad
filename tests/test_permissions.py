"""Permission guard and startup sequence tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from core.messages import MessageKind
from core.orchestrator import Orchestrator
from governance.permission_guard import PERMISSION_WARNING, PermissionGuard
from os_controller.base_controller import NativeBackend
from os_controller.mock_backend import MockBackend


def test_guard_returns_false_when_backend_fails() -> None:
    backend = MagicMock(spec=NativeBackend)
    backend.check_permission.side_effect = OSError("bridge down")

    assert PermissionGuard(backend).check_permission() is False


def test_guard_queries_backend_every_call() -> None:
    backend = MagicMock(spec=NativeBackend)
    backend.check_permission.side_effect = [False, True]
    guard = PermissionGuard(backend)

    assert guard.check_permission() is False
    assert guard.check_permission() is True
    assert backend.check_permission.call_count == 2


def test_startup_without_permission_sets_flag_and_warning(tmp_path: Path) -> None:
    bundle = Orchestrator(root=tmp_path, backend=MockBackend(permission=False)).build()

    bundle.start()

    assert bundle.state.state.has_permission is False
    assert bundle.can_resize is False
    message = bundle.state.state.message
    assert message is not None
    assert message.kind is MessageKind.WARNING
    assert message.text == PERMISSION_WARNING
    assert len(bundle.state.state.windows) == 3


def test_startup_with_permission_loads_presets_and_windows(tmp_path: Path) -> None:
    bundle = Orchestrator(root=tmp_path, backend=MockBackend()).build()

    bundle.start()

    assert bundle.can_resize is True
    assert bundle.state.state.message is None
    assert bundle.state.state.presets[0].name == "iPhone SE"
    assert [w.id for w in bundle.state.state.windows] == [101, 102, 103]


def test_refresh_permission_clears_warning_once_granted(tmp_path: Path) -> None:
    backend = MockBackend(permission=False)
    bundle = Orchestrator(root=tmp_path, backend=backend).build()
    bundle.start()

    backend.permission = True
    assert bundle.refresh_permission() is True

    assert bundle.state.state.has_permission is True
    assert bundle.state.state.message is None
