"""Config merger — reads script sources and merges them into canonical YAML.

A source is either a file or a directory. Directories contribute their
regular files in lexicographic order; subdirectories are ignored. Entries are
concatenated in source order and re-serialized as::

    scripts:
    - name: <name>
      script: <command>
      timeout: <seconds>
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from script_exporter.errors import ConfigIOError, ConfigParseError
from script_exporter.scripts.models import ScriptSpec

logger = logging.getLogger(__name__)

_NULL_TAG = "tag:yaml.org,2002:null"


# ── Public API ───────────────────────────────────────────────────────────────


def read_configs(path: str | Path) -> bytes:
    """Merge a single file, or every file in a directory, into canonical YAML."""
    return dump_scripts(_collect(_expand(Path(path))))


def merge_configs(paths: Iterable[str | Path]) -> bytes:
    """Merge several sources (files or directories) in the given order."""
    files: list[Path] = []
    for p in paths:
        files.extend(_expand(Path(p)))
    return dump_scripts(_collect(files))


def load_scripts(paths: Iterable[str | Path]) -> list[ScriptSpec]:
    """Merge sources and return the resulting script definitions."""
    return parse_canonical(merge_configs(paths))


def parse_canonical(data: bytes | str, source: str = "<merged>") -> list[ScriptSpec]:
    """Parse a script document (canonical or hand-written) into ScriptSpecs."""
    return [_parse_entry(e, source) for e in _entries(_load_yaml(data, source), source)]


# ── Source discovery ─────────────────────────────────────────────────────────


def _expand(path: Path) -> list[Path]:
    if path.is_dir():
        try:
            children = sorted(path.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise ConfigIOError(str(path), e.strerror or str(e)) from e
        files = [c for c in children if c.is_file()]
        logger.debug("Expanded %s into %d config files", path, len(files))
        return files
    return [path]


def _read(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise ConfigIOError(str(path), e.strerror or str(e)) from e


# ── Parsing ──────────────────────────────────────────────────────────────────


def _collect(files: list[Path]) -> list[ScriptSpec]:
    merged: list[ScriptSpec] = []
    for f in files:
        source = str(f)
        raw = _load_yaml(_read(f), source)
        specs = [_parse_entry(e, source) for e in _entries(raw, source)]
        logger.debug("Read %d scripts from %s", len(specs), source)
        merged.extend(specs)
    return merged


def _load_yaml(data: bytes | str, source: str) -> yaml.Node | None:
    # Composed nodes keep each scalar's source text, so `name: 8080` or
    # `script: true` stay the strings the operator wrote.
    try:
        return yaml.compose(data, Loader=yaml.SafeLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(source, f"YAML error: {e}") from e


def _is_null(node: yaml.Node | None) -> bool:
    return node is None or (isinstance(node, yaml.ScalarNode) and node.tag == _NULL_TAG)


def _fields(node: yaml.MappingNode) -> dict[str, yaml.Node]:
    return {k.value: v for k, v in node.value if isinstance(k, yaml.ScalarNode)}


def _entries(root: yaml.Node | None, source: str) -> list[yaml.Node]:
    if _is_null(root):
        return []
    if not isinstance(root, yaml.MappingNode):
        raise ConfigParseError(source, "top level must be a mapping with a 'scripts' key")
    entries = _fields(root).get("scripts")
    if _is_null(entries):
        return []
    if not isinstance(entries, yaml.SequenceNode):
        raise ConfigParseError(source, "'scripts' must be a list")
    return entries.value


def _text(fields: dict[str, yaml.Node], key: str, label: str, source: str) -> str:
    node = fields.get(key)
    if _is_null(node):
        raise ConfigParseError(source, f"{label} is missing '{key}'")
    if not isinstance(node, yaml.ScalarNode):
        raise ConfigParseError(source, f"{label} has non-scalar '{key}' (expected text)")
    return node.value


def _parse_entry(entry: yaml.Node, source: str) -> ScriptSpec:
    if not isinstance(entry, yaml.MappingNode):
        raise ConfigParseError(source, "script entry must be a mapping")
    fields = _fields(entry)

    name = _text(fields, "name", "script entry", source)
    if not name:
        raise ConfigParseError(source, "script entry is missing 'name'")
    command = _text(fields, "script", f"script '{name}'", source)

    timeout: Any = 0
    node = fields.get("timeout")
    if not _is_null(node):
        if not isinstance(node, yaml.ScalarNode):
            raise ConfigParseError(source, f"script '{name}' has non-scalar 'timeout'")
        timeout = yaml.SafeLoader("").construct_object(node)
    # bool is an int subclass
    if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout < 0:
        raise ConfigParseError(
            source, f"script '{name}' has invalid timeout {timeout!r} (non-negative integer seconds)"
        )

    return ScriptSpec(name=name, command=command, timeout=timeout)


# ── Serialization ────────────────────────────────────────────────────────────


def dump_scripts(scripts: Iterable[ScriptSpec]) -> bytes:
    """Serialize scripts in canonical form (name, script, timeout per entry)."""
    text = yaml.safe_dump(
        {"scripts": [s.to_dict() for s in scripts]},
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=float("inf"),
    )
    return text.encode("utf-8")
