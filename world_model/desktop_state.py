"""Desktop window snapshot schema."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WindowDescriptor(BaseModel):
    """One window as reported by a single window-list query."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str = ""
    app_name: str = ""
    x: int = 0
    y: int = 0
    width: int
    height: int

    @property
    def label(self) -> str:
        if self.title:
            return f"{self.app_name} - {self.title}"
        return self.app_name
