"""Script definitions — models, config merging, filtering, live store."""

from script_exporter.scripts.filter import filter_scripts
from script_exporter.scripts.merge import (
    dump_scripts,
    load_scripts,
    merge_configs,
    parse_canonical,
    read_configs,
)
from script_exporter.scripts.models import Measurement, ScriptSpec
from script_exporter.scripts.store import ScriptStore

__all__ = [
    "Measurement",
    "ScriptSpec",
    "ScriptStore",
    "dump_scripts",
    "filter_scripts",
    "load_scripts",
    "merge_configs",
    "parse_canonical",
    "read_configs",
]
