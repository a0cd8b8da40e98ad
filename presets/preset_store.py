"""Typed persistence of the custom-preset sequence."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from presets.stores.document_store import MISSING, DocumentHandle, DocumentStore, DocumentStoreError
from presets.types import Preset, parse_presets

PRESETS_KEY = "customPresets"


class PresetStoreError(RuntimeError):
    """Raised when the custom presets cannot be read or persisted."""


@dataclass(frozen=True)
class Absent:
    """The key was never written."""


@dataclass(frozen=True)
class Malformed:
    """The key holds something that is not a valid preset list."""

    reason: str


@dataclass(frozen=True)
class Loaded:
    presets: tuple[Preset, ...]


StoredPresets = Absent | Malformed | Loaded


class PresetStore:
    """Reads and writes the custom presets under a single document key.

    Built-in presets are never written here.
    """

    def __init__(self, documents: DocumentStore, handle: DocumentHandle) -> None:
        self.documents = documents
        self.handle = handle
        self.logger = logging.getLogger("framefit.preset_store")

    @classmethod
    def open(cls, documents: DocumentStore, name: str) -> PresetStore:
        try:
            handle = documents.open(name)
        except DocumentStoreError as exc:
            raise PresetStoreError(str(exc)) from exc
        return cls(documents, handle)

    def read(self) -> StoredPresets:
        try:
            raw = self.documents.get(self.handle, PRESETS_KEY)
        except DocumentStoreError as exc:
            raise PresetStoreError(str(exc)) from exc
        # A stored null is treated the same as a key that was never set.
        if raw is MISSING or raw is None:
            return Absent()
        try:
            presets = parse_presets(raw)
        except ValueError as exc:
            self.logger.warning("Ignoring malformed '%s' entry: %s", PRESETS_KEY, exc)
            return Malformed(reason=str(exc))
        return Loaded(presets=tuple(presets))

    def write(self, presets: Sequence[Preset]) -> None:
        """Replace the stored sequence and flush it."""
        records = [preset.to_record() for preset in presets]
        try:
            self.documents.set(self.handle, PRESETS_KEY, records)
            self.documents.flush(self.handle)
        except DocumentStoreError as exc:
            raise PresetStoreError(str(exc)) from exc
