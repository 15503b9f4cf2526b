"""Runtime settings for tablekit, read from ``TABLEKIT_*`` environment variables."""

import os
from typing import Literal
from pydantic import BaseModel, Field, field_validator

from .sinks import Color


class Palette(BaseModel):
    """Printer colors per value category."""

    string: Color = Color.PURPLE
    number: Color = Color.RED
    table: Color = Color.LIGHT_BLUE
    function: Color = Color.YELLOW
    true: Color = Color.LIME
    false: Color = Color.BLUE
    default: Color = Color.WHITE


class Settings(BaseModel):
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    INDENT: str = "  "
    PALETTE: Palette = Field(default_factory=Palette)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @classmethod
    def load(cls) -> "Settings":
        overrides = {}
        for name in ("LOG_LEVEL", "INDENT"):
            value = os.getenv(f"TABLEKIT_{name}")
            if value is not None:
                overrides[name] = value
        return cls(**overrides)


settings = Settings.load()
