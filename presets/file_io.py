"""File collaborators for preset export and import."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class SaveSelected:
    path: Path


@dataclass(frozen=True)
class SaveCancelled:
    pass


SaveDestination = SaveSelected | SaveCancelled


class SaveDestinationChooser(Protocol):
    def choose_save_destination(self, suggested_name: str, allowed_extension: str) -> SaveDestination:
        ...


class FixedDestination:
    """Chooser that answers with a path decided up front, or cancels."""

    def __init__(self, path: Path | None) -> None:
        self.path = path

    def choose_save_destination(self, suggested_name: str, allowed_extension: str) -> SaveDestination:
        _ = suggested_name, allowed_extension
        if self.path is None:
            return SaveCancelled()
        return SaveSelected(self.path)


class TextFiles:
    """UTF-8 reads and writes on the local file system."""

    def write_text(self, path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def read_all_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")
