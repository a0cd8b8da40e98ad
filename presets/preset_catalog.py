"""Preset catalog: built-in presets followed by persisted custom presets."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from core.state_manager import PresetStateAccess
from presets.file_io import SaveCancelled, SaveDestinationChooser, TextFiles
from presets.preset_store import Absent, Loaded, Malformed, PresetStore, PresetStoreError
from presets.types import BUILTIN_PRESETS, Preset, parse_presets

EXPORT_FILE_NAME = "framefit-presets.json"


class PresetCatalog:
    """Owns the working set ``builtins + customs`` and keeps it persisted.

    The working set in state only changes after the store confirms a write;
    the single exception is ``load``, which falls back to the built-ins when
    the store cannot be read.
    """

    def __init__(
        self,
        store: PresetStore | None,
        state: PresetStateAccess,
        files: TextFiles | None = None,
        builtins: Sequence[Preset] = BUILTIN_PRESETS,
    ) -> None:
        self.store = store
        self.state = state
        self.files = files or TextFiles()
        self.builtins: tuple[Preset, ...] = tuple(builtins)
        self.logger = logging.getLogger("framefit.catalog")

    def custom_presets(self) -> list[Preset]:
        return self.state.presets[len(self.builtins):]

    def _working_set(self, customs: Sequence[Preset]) -> list[Preset]:
        return [*self.builtins, *customs]

    def load(self) -> list[Preset]:
        """Reconcile stored custom presets into state."""
        if self.store is None:
            self.logger.error("Preset store not initialized")
            self.state.set_presets(self._working_set([]))
            return self.state.presets
        try:
            stored = self.store.read()
            if isinstance(stored, Loaded) and stored.presets:
                self.state.set_presets(self._working_set(stored.presets))
            else:
                self.state.set_presets(self._working_set([]))
                if isinstance(stored, Absent):
                    self.store.write([])
                elif isinstance(stored, Malformed):
                    self.logger.info("Using built-in presets only: %s", stored.reason)
        except PresetStoreError as exc:
            self.logger.warning("Failed to load presets: %s", exc)
            self.state.set_presets(self._working_set([]))
        return self.state.presets

    def _persist(self, customs: Sequence[Preset]) -> bool:
        if self.store is None:
            self.logger.error("Preset store not initialized")
            self.state.post_error("Failed to save presets")
            return False
        try:
            self.store.write(customs)
        except PresetStoreError as exc:
            self.logger.warning("Failed to save presets: %s", exc)
            self.state.post_error("Failed to save presets")
            return False
        self.state.set_presets(self._working_set(customs))
        return True

    def add_preset(self, width: int, height: int, name: str | None = None) -> bool:
        """Append a custom preset; ``name`` defaults to the draft name in state."""
        raw_name = self.state.new_preset_name if name is None else name
        trimmed = raw_name.strip()
        if not trimmed:
            self.logger.debug("add_preset rejected: empty name")
            self.state.post_info("Please enter a preset name")
            return False
        try:
            preset = Preset(name=trimmed, width=width, height=height)
        except ValueError:
            self.logger.debug("add_preset rejected: %sx%s", width, height)
            self.state.post_info("Width and height must be positive")
            return False

        if not self._persist([*self.custom_presets(), preset]):
            return False
        self.state.close_add_form()
        self.state.post_success("Preset saved!")
        return True

    def delete_preset(self, index: int) -> bool:
        """Delete the custom preset at a working-set index.

        Indices inside the built-in range, or past the end, are ignored.
        """
        if index < len(self.builtins):
            return False
        customs = self.custom_presets()
        custom_index = index - len(self.builtins)
        if custom_index >= len(customs):
            return False
        updated = customs[:custom_index] + customs[custom_index + 1:]
        if not self._persist(updated):
            return False
        self.state.post_success("Preset deleted!")
        return True

    def export_presets(self, chooser: SaveDestinationChooser) -> bool:
        """Write the custom presets (never the built-ins) as pretty JSON."""
        customs = [preset.to_record() for preset in self.custom_presets()]
        destination = chooser.choose_save_destination(EXPORT_FILE_NAME, "json")
        if isinstance(destination, SaveCancelled):
            return False
        try:
            self.files.write_text(destination.path, json.dumps(customs, indent=2))
        except OSError as exc:
            self.logger.warning("Failed to export presets: %s", exc)
            self.state.post_error("Failed to export presets")
            return False
        self.state.post_success("Presets exported!")
        return True

    def import_presets(self, source: Path) -> bool:
        try:
            text = self.files.read_all_text(source)
        except (OSError, UnicodeDecodeError) as exc:
            self.logger.warning("Failed to import presets: %s", exc)
            self.state.post_error("Failed to import presets")
            return False
        return self.import_presets_text(text)

    def import_presets_text(self, text: str) -> bool:
        """Replace all custom presets with the records in ``text``.

        Any invalid record rejects the whole payload before the store is touched.
        """
        try:
            imported = parse_presets(json.loads(text))
        except ValueError as exc:
            self.logger.debug("Rejected preset import: %s", exc)
            self.state.post_error("Invalid preset file")
            return False
        if not self._persist(imported):
            return False
        self.state.post_success("Presets imported!")
        return True

    def reset_presets(self) -> bool:
        """Drop every custom preset. Callers confirm with the user first."""
        if not self._persist([]):
            return False
        self.state.post_success("Presets reset!")
        return True
