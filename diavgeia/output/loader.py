"""Runs the external loader that posts a file into the triple store."""

from __future__ import annotations

import logging
from pathlib import Path

import anyio

from diavgeia.exceptions import LoaderError

log = logging.getLogger(__name__)


async def run_loader(
    executable: str,
    dataset_url: str,
    graph: str,
    path: Path,
    *,
    timeout: float,
) -> str:
    """Invoke ``<executable> <dataset_url> <graph> <path>`` and return its stdout.

    A missing executable is fatal; a non-zero exit or a timeout is
    reported as retryable.
    """
    args = [executable, dataset_url, graph, str(path)]
    log.debug("Running: %s", " ".join(args))
    try:
        with anyio.fail_after(timeout):
            result = await anyio.run_process(args, check=False)
    except TimeoutError as exc:
        raise LoaderError(f"Loader timed out after {timeout:g}s for {path.name}", retryable=True) from exc
    except OSError as exc:
        raise LoaderError(f"Could not start loader {executable}: {exc}") from exc

    stdout = result.stdout.decode("utf-8", errors="replace")
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        log.error("Loader failed for %s (rc=%d)\nstderr: %s", path.name, result.returncode, stderr)
        raise LoaderError(
            f"Loader exited with {result.returncode} for {path.name}: {stderr}",
            retryable=True,
        )
    log.info("Loaded %s into %s (graph %s)", path.name, dataset_url, graph)
    return stdout
