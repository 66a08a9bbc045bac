from __future__ import annotations

import re
from collections.abc import Sequence

from script_exporter.errors import InvalidPatternError, MissingSelectorError
from script_exporter.scripts.models import ScriptSpec


def filter_scripts(scripts: Sequence[ScriptSpec], name: str = "", pattern: str = "") -> list[ScriptSpec]:
    """Select scripts by exact name and/or regex search on the name.

    With both selectors the result is their union. Store order is kept and a
    script matched by both selectors appears once.
    """
    if not name and not pattern:
        raise MissingSelectorError()

    regex: re.Pattern[str] | None = None
    if pattern:
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise InvalidPatternError(pattern, str(e)) from e

    return [
        s for s in scripts
        if (name and s.name == name) or (regex is not None and regex.search(s.name))
    ]
