"""Error types raised by the config merger, store and filter.

Script-level failures (non-zero exit, timeout, spawn error) are never raised;
they are reported as failed measurements by the engine.
"""

from __future__ import annotations


class ScriptExporterError(Exception):
    """Base class for all script exporter errors."""


# ── Configuration ────────────────────────────────────────────────────────────


class ConfigError(ScriptExporterError):
    """Raised when configuration sources cannot be loaded or merged."""


class ConfigIOError(ConfigError):
    """A configuration source path could not be read."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Cannot read config source {source}: {reason}")


class ConfigParseError(ConfigError):
    """A configuration source is not a valid script list."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Invalid config source {source}: {reason}")


# ── Filtering ────────────────────────────────────────────────────────────────


class FilterError(ScriptExporterError):
    """Raised when a probe request cannot select scripts."""


class MissingSelectorError(FilterError):
    def __init__(self) -> None:
        super().__init__("name or pattern required")


class InvalidPatternError(FilterError):
    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
