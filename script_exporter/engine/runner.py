"""Script runner — one subprocess per script, fanned out over a thread pool.

Each script runs as ``<shell> -c <command>`` in its own process session. The
whole process group is killed when its deadline passes and again after the
shell exits, so forked children (pipelines, ``cmd &``) never outlive the run.

Deadline resolution: the script's own ``timeout`` if > 0, else the caller's
``default_timeout`` if > 0, else the run waits for the script to exit.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from script_exporter.scripts.models import Measurement, ScriptSpec

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "/bin/sh"


def effective_timeout(spec: ScriptSpec, default_timeout: float | None = None) -> float | None:
    """Return the deadline in seconds for *spec*, or None for no deadline."""
    if spec.timeout > 0:
        return float(spec.timeout)
    if default_timeout is not None and default_timeout > 0:
        return float(default_timeout)
    return None


def run_script(
    spec: ScriptSpec,
    default_timeout: float | None = None,
    shell: str = DEFAULT_SHELL,
) -> Measurement:
    """Run a single script and measure it. Never raises for script failures."""
    timeout = effective_timeout(spec, default_timeout)
    t0 = time.perf_counter()

    try:
        proc = subprocess.Popen(
            [shell, "-c", spec.command],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        duration = time.perf_counter() - t0
        logger.warning("Script %s failed to start: %s", spec.name, e)
        return Measurement(script=spec, success=False, duration=duration, error=str(e))

    try:
        exit_code = proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        duration = time.perf_counter() - t0
        _kill_group(proc)
        logger.warning("Script %s timed out after %.1fs", spec.name, timeout)
        return Measurement(script=spec, success=False, duration=duration, timed_out=True)
    except BaseException:
        _kill_group(proc)
        raise

    duration = time.perf_counter() - t0
    # Background children left by the shell must not outlive the run
    _kill_group(proc)
    logger.debug("Script %s exited %d in %.3fs", spec.name, exit_code, duration)
    return Measurement(script=spec, success=exit_code == 0, duration=duration)


def run_scripts(
    scripts: Sequence[ScriptSpec],
    default_timeout: float | None = None,
    shell: str = DEFAULT_SHELL,
) -> list[Measurement]:
    """Run all scripts concurrently and wait for every one to finish.

    Returns one measurement per script, in input order.
    """
    if not scripts:
        return []

    with ThreadPoolExecutor(max_workers=len(scripts), thread_name_prefix="script") as pool:
        futures = [pool.submit(run_script, s, default_timeout, shell) for s in scripts]
        return [f.result() for f in futures]


def _kill_group(proc: subprocess.Popen[bytes]) -> None:
    """SIGKILL the script's process group and reap the shell."""
    try:
        os.killpg(proc.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass  # already gone
    except PermissionError:
        proc.kill()
    proc.wait()
