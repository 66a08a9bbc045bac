"""Shared test fixtures."""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from script_exporter.scripts.models import ScriptSpec


@pytest.fixture
def probe_scripts() -> list[ScriptSpec]:
    """The success / failure / timeout trio used across engine and filter tests."""
    return [
        ScriptSpec("success", "exit 0", 1),
        ScriptSpec("failure", "exit 1", 1),
        ScriptSpec("timeout", "sleep 5", 2),
    ]


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a dedented YAML config file and return its path."""

    def _write(name: str, content: str, directory: Path | None = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(textwrap.dedent(content), encoding="utf-8")
        return target

    return _write
