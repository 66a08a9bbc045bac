"""Render measurements in the Prometheus text exposition format (0.0.4)."""

from __future__ import annotations

from collections.abc import Sequence

from script_exporter.scripts.models import Measurement

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def escape_label(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _format_value(value: float) -> str:
    return repr(float(value))


def _gauge(name: str, help_text: str, samples: list[tuple[dict[str, str], float]]) -> list[str]:
    lines = [f"# HELP {name} {help_text}", f"# TYPE {name} gauge"]
    for labels, value in samples:
        if labels:
            rendered = ",".join(f'{k}="{escape_label(v)}"' for k, v in labels.items())
            lines.append(f"{name}{{{rendered}}} {_format_value(value)}")
        else:
            lines.append(f"{name} {_format_value(value)}")
    return lines


def render_measurements(measurements: Sequence[Measurement], scripts_total: int | None = None) -> str:
    """Render success and duration gauges, one sample per measurement."""
    lines: list[str] = []
    lines += _gauge(
        "script_success",
        "Script exit status (0 = error, 1 = success).",
        [({"script": m.script.name}, 1 if m.success else 0) for m in measurements],
    )
    lines += _gauge(
        "script_duration_seconds",
        "Script execution time, in seconds.",
        [({"script": m.script.name}, m.duration) for m in measurements],
    )
    if scripts_total is not None:
        lines += _gauge(
            "script_exporter_scripts_total",
            "Number of scripts in the loaded configuration.",
            [({}, scripts_total)],
        )
    return "\n".join(lines) + "\n"
