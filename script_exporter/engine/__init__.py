"""Execution engine — runs scripts concurrently with per-script deadlines."""

from .runner import run_script, run_scripts
