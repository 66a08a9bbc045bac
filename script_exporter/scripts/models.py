from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ScriptSpec:
    """A named check command with an optional timeout (0 = none set)."""

    name: str
    command: str
    timeout: int = 0

    def to_dict(self) -> dict[str, Any]:
        # Key order is the canonical field order
        return {"name": self.name, "script": self.command, "timeout": self.timeout}


@dataclass
class Measurement:
    """Outcome of a single script execution."""

    script: ScriptSpec
    success: bool
    duration: float
    timed_out: bool = False
    error: str = ""
