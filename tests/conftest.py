"""Shared pytest fixtures for intercast tests."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from intercast.domain.registry import TYPE_REGISTRY
from intercast.domain.zone import set_default_time_zone

INTERACTIONS_SOURCE = '''
from intercast import Input, Interaction


class AddInteraction(Interaction):
    desc = "Add two numbers"

    x = Input("float")
    y = Input("float", default=0)

    def execute(self):
        return self.x + self.y


class TagInteraction(Interaction):
    tags = Input("array", Input("integer"))
    address = Input("hash", zip=Input("string"), city=Input("string", default=""))


NotAnInteraction = object()
'''


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_type_registry() -> Generator[None]:
    """Drop filter types registered by a test and reset the default zone."""
    before = dict(TYPE_REGISTRY)
    yield
    TYPE_REGISTRY.clear()
    TYPE_REGISTRY.update(before)
    set_default_time_zone("UTC")


@pytest.fixture
def interactions_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """Write an importable module of sample interactions; return its name.

    Each test gets a unique module name so imports never leak between tests.
    """
    name = f"sample_interactions_{tmp_path.name.replace('-', '_')}"
    (tmp_path / f"{name}.py").write_text(textwrap.dedent(INTERACTIONS_SOURCE), encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return name


@pytest.fixture
def _no_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    """Disable entry-point plugin loading for CLI tests."""
    monkeypatch.setenv("INTERCAST_PLUGINS__ENABLED", "false")


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler and level changes made by configure_logging."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lib = logging.getLogger("intercast")
    lib_level = lib.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lib.setLevel(lib_level)
