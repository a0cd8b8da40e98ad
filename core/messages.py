"""Transient status messages with logical expiry."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

Clock = Callable[[], float]


def default_clock() -> float:
    return time.monotonic()


class MessageKind(str, Enum):
    """Display class of a status message."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class StatusMessage:
    """A message posted at ``posted_at`` that lives for ``ttl`` seconds.

    A ``ttl`` of ``None`` keeps the message until it is replaced or dismissed.
    """

    text: str
    kind: MessageKind
    posted_at: float
    ttl: float | None = None

    def expired(self, now: float) -> bool:
        if self.ttl is None:
            return False
        return now - self.posted_at >= self.ttl

    @property
    def is_error(self) -> bool:
        return self.kind is MessageKind.ERROR
