"""Top-level wiring and startup sequence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.event_bus import EventBus
from core.messages import Clock, MessageKind, default_clock
from core.policy_runtime import ensure_runtime_dirs, load_effective_config
from core.state_manager import StateManager
from executor.command_gateway import CommandGateway
from governance.permission_guard import PERMISSION_WARNING, PermissionGuard
from os_controller.backend_factory import build_backend
from os_controller.base_controller import NativeBackend
from presets.preset_catalog import PresetCatalog
from presets.preset_store import PresetStore, PresetStoreError
from presets.stores.document_store import SQLDocumentStore
from presets.stores.sql_store import SQLStore

logger = logging.getLogger("framefit.orchestrator")


@dataclass
class RuntimeBundle:
    """Holds initialized runtime components."""

    config: dict[str, Any]
    state: StateManager
    backend: NativeBackend
    store: PresetStore | None
    catalog: PresetCatalog
    permissions: PermissionGuard
    gateway: CommandGateway

    def refresh_permission(self) -> bool:
        """Re-query permission and mirror the answer into state."""
        granted = self.permissions.check_permission()
        self.state.set_permission(granted)
        message = self.state.state.message
        if not granted:
            self.state.post_warning(PERMISSION_WARNING)
        elif message is not None and message.kind is MessageKind.WARNING and message.text == PERMISSION_WARNING:
            self.state.clear_message()
        return granted

    def start(self) -> None:
        """Load presets, check permission, then load the window list."""
        self.catalog.load()
        granted = self.permissions.check_permission()
        self.state.set_permission(granted)
        self.gateway.load_windows()
        # Published after the window query, whose first step clears the message.
        if not granted:
            self.state.post_warning(PERMISSION_WARNING)

    @property
    def can_resize(self) -> bool:
        return self.state.state.has_permission


class Orchestrator:
    """Creates and wires runtime components from configuration."""

    def __init__(
        self,
        root: Path | None = None,
        backend: NativeBackend | None = None,
        clock: Clock = default_clock,
        event_bus: EventBus | None = None,
    ) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self.backend = backend
        self.clock = clock
        self.event_bus = event_bus

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        paths = ensure_runtime_dirs(self.root, config)
        messages_cfg = config.get("messages", {})
        defaults_cfg = config.get("defaults", {})

        state = StateManager(
            event_bus=self.event_bus,
            clock=self.clock,
            success_ttl=float(messages_cfg.get("success_ttl_seconds", 2)),
            error_ttl=float(messages_cfg.get("error_ttl_seconds", 10)),
            width=int(defaults_cfg.get("width", 800)),
            height=int(defaults_cfg.get("height", 600)),
            center_window=bool(defaults_cfg.get("center_window", True)),
        )
        backend = self.backend or build_backend(config)
        store = self._open_store(paths["store_path"], config)

        return RuntimeBundle(
            config=config,
            state=state,
            backend=backend,
            store=store,
            catalog=PresetCatalog(store=store, state=state.preset_access()),
            permissions=PermissionGuard(backend),
            gateway=CommandGateway(backend, state.window_access()),
        )

    @staticmethod
    def _open_store(store_path: Path, config: dict[str, Any]) -> PresetStore | None:
        document_name = str(config.get("paths", {}).get("document_name", "presets"))
        try:
            return PresetStore.open(SQLDocumentStore(SQLStore(store_path)), document_name)
        except (PresetStoreError, OSError) as exc:
            logger.warning("Failed to open preset store at %s: %s", store_path, exc)
            return None
