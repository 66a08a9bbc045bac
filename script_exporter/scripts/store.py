"""Live script store — an immutable snapshot swapped wholesale on reload."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from script_exporter.scripts.filter import filter_scripts
from script_exporter.scripts.merge import dump_scripts, merge_configs, parse_canonical
from script_exporter.scripts.models import ScriptSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    scripts: tuple[ScriptSpec, ...]
    canonical: bytes


_EMPTY = Snapshot(scripts=(), canonical=b"scripts: []\n")


class ScriptStore:
    """Holds the merged script list currently served to probe requests.

    Readers grab the snapshot reference once and work on it; ``reload`` builds
    a complete new snapshot before replacing the reference, so a failed or
    in-progress reload is never visible to readers.
    """

    def __init__(self, paths: Iterable[str | Path] = ()) -> None:
        self._paths = [Path(p) for p in paths]
        self._snapshot = _EMPTY
        self._lock = threading.Lock()

    @classmethod
    def from_scripts(cls, scripts: Iterable[ScriptSpec]) -> ScriptStore:
        store = cls()
        specs = tuple(scripts)
        canonical = dump_scripts(specs)
        store._snapshot = Snapshot(scripts=specs, canonical=canonical)
        return store

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def scripts(self) -> tuple[ScriptSpec, ...]:
        return self._snapshot.scripts

    @property
    def canonical(self) -> bytes:
        return self._snapshot.canonical

    def load(self) -> tuple[ScriptSpec, ...]:
        """Merge all sources and replace the live snapshot.

        Raises ConfigError on failure; the previous snapshot stays live.
        """
        with self._lock:
            canonical = merge_configs(self._paths)
            scripts = tuple(parse_canonical(canonical))
            self._snapshot = Snapshot(scripts=scripts, canonical=canonical)

        logger.info(
            "Loaded %d scripts from %s",
            len(scripts),
            ", ".join(str(p) for p in self._paths) or "<none>",
        )
        return scripts

    def reload(self) -> tuple[ScriptSpec, ...]:
        """Force reload from disk."""
        return self.load()

    def filter(self, name: str = "", pattern: str = "") -> list[ScriptSpec]:
        return filter_scripts(self._snapshot.scripts, name=name, pattern=pattern)
