"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, intercast.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from intercast.domain.zone import resolve_time_zone


class CastingConfig(BaseModel):
    """[casting] section."""

    model_config = {"frozen": True}

    time_zone: str = "UTC"

    @field_validator("time_zone")
    @classmethod
    def _known_zone(cls, value: str) -> str:
        resolve_time_zone(value)
        return value


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class IntercastConfig(BaseModel):
    """Schema of the ``intercast.toml`` section tables.

    Top-level keys (``verbose``, ``json_output``) are settings fields and are
    ignored here.
    """

    model_config = {"frozen": True}

    casting: CastingConfig = Field(default_factory=CastingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
