"""Tests for config models — defaults and sparse overrides."""

import pytest
from pydantic import ValidationError

from intercast.config.models import CastingConfig, IntercastConfig, PluginsConfig


class TestIntercastConfig:
    def test_full_defaults(self) -> None:
        cfg = IntercastConfig()
        assert cfg.casting.time_zone == "UTC"
        assert cfg.plugins.enabled is True

    def test_sparse_override(self) -> None:
        cfg = IntercastConfig.model_validate({"casting": {"time_zone": "Asia/Tokyo"}})
        assert cfg.casting.time_zone == "Asia/Tokyo"
        assert cfg.plugins == PluginsConfig()

    def test_frozen(self) -> None:
        cfg = IntercastConfig()
        with pytest.raises(ValidationError):
            cfg.casting = CastingConfig()  # type: ignore[misc]


class TestCastingConfig:
    def test_unknown_zone_rejected(self) -> None:
        with pytest.raises(ValidationError, match="Unknown time zone"):
            CastingConfig(time_zone="Nowhere/Special")

    def test_iana_zone_accepted(self) -> None:
        assert CastingConfig(time_zone="America/New_York").time_zone == "America/New_York"
