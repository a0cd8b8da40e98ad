"""Opaque key-value document store with explicit flush."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from presets.schemas import DocumentEntry
from presets.stores.sql_store import SQLStore


class DocumentStoreError(RuntimeError):
    """Raised when a document cannot be opened, read or written."""


class _Missing:
    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass
class DocumentHandle:
    """An opened document plus writes staged since the last flush."""

    name: str
    pending: dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """Keyed access to named JSON documents."""

    @abstractmethod
    def open(self, name: str) -> DocumentHandle:
        """Open (creating if needed) the named document."""

    @abstractmethod
    def get(self, handle: DocumentHandle, key: str) -> Any:
        """Return the stored value or ``MISSING``."""

    @abstractmethod
    def set(self, handle: DocumentHandle, key: str, value: Any) -> None:
        """Stage a value; it is durable only after ``flush``."""

    @abstractmethod
    def flush(self, handle: DocumentHandle) -> None:
        """Persist every staged value in one transaction."""


def _json_copy(value: Any) -> Any:
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as exc:
        raise DocumentStoreError(f"Value is not JSON serializable: {exc}") from exc


class SQLDocumentStore(DocumentStore):
    """Documents kept as rows of a SQLite table."""

    def __init__(self, sql_store: SQLStore) -> None:
        self.sql_store = sql_store
        self.logger = logging.getLogger("framefit.document_store")

    def open(self, name: str) -> DocumentHandle:
        try:
            self.sql_store.create_all()
        except SQLAlchemyError as exc:
            raise DocumentStoreError(f"Failed to open document '{name}': {exc}") from exc
        return DocumentHandle(name=name)

    def get(self, handle: DocumentHandle, key: str) -> Any:
        if key in handle.pending:
            return _json_copy(handle.pending[key])
        try:
            with self.sql_store.session() as sess:
                entry = sess.scalar(
                    select(DocumentEntry).where(
                        DocumentEntry.document == handle.name,
                        DocumentEntry.key == key,
                    )
                )
                if entry is None:
                    return MISSING
                return entry.value
        except SQLAlchemyError as exc:
            raise DocumentStoreError(f"Failed to read '{key}': {exc}") from exc

    def set(self, handle: DocumentHandle, key: str, value: Any) -> None:
        handle.pending[key] = _json_copy(value)

    def flush(self, handle: DocumentHandle) -> None:
        if not handle.pending:
            return
        staged = dict(handle.pending)
        handle.pending.clear()
        try:
            with self.sql_store.session() as sess:
                for key, value in staged.items():
                    entry = sess.scalar(
                        select(DocumentEntry).where(
                            DocumentEntry.document == handle.name,
                            DocumentEntry.key == key,
                        )
                    )
                    if entry is None:
                        sess.add(DocumentEntry(document=handle.name, key=key, value=value))
                    else:
                        entry.value = value
        except SQLAlchemyError as exc:
            raise DocumentStoreError(f"Failed to flush document '{handle.name}': {exc}") from exc
        self.logger.debug("Flushed %d key(s) to '%s'", len(staged), handle.name)
