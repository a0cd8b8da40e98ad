"""Size preset models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Preset(BaseModel):
    """Named target size for a window."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    width: int = Field(gt=0)
    height: int = Field(gt=0)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("preset name must not be blank")
        return value

    def to_record(self) -> dict[str, object]:
        return {"name": self.name, "width": self.width, "height": self.height}


BUILTIN_PRESETS: tuple[Preset, ...] = (
    Preset(name="iPhone SE", width=375, height=667),
    Preset(name="iPhone 14", width=390, height=844),
    Preset(name="iPad", width=768, height=1024),
    Preset(name="HD", width=1280, height=720),
    Preset(name="FHD", width=1920, height=1080),
)


def parse_presets(raw: object) -> list[Preset]:
    """Validate a sequence of preset-shaped records.

    Raises ``ValueError`` (pydantic's ``ValidationError`` included) when the
    input is not a list or any element is invalid.
    """
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of presets, got {type(raw).__name__}")
    return [item if isinstance(item, Preset) else Preset.model_validate(item) for item in raw]
