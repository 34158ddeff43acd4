"""File sink — writes the N3 document and a gzip-compressed copy."""

from __future__ import annotations

import gzip
import logging
import shutil
from pathlib import Path

import anyio

from diavgeia.exceptions import StorageError

log = logging.getLogger(__name__)


def decision_filename(iun: str, version: object) -> str:
    return f"{iun}_{version}.n3"


def _gzip_file(source: Path, target: Path) -> None:
    with source.open("rb") as src, gzip.open(target, "wb") as dst:
        shutil.copyfileobj(src, dst)


async def _discard(path: Path) -> None:
    try:
        await anyio.Path(path).unlink(missing_ok=True)
    except OSError as exc:
        log.warning("Could not remove %s: %s", path, exc)


async def write_decision_file(text: str, directory: Path, iun: str, version: object) -> tuple[Path, Path]:
    """Write ``<iun>_<version>.n3`` and its ``.gz`` sibling into *directory*.

    Returns ``(plain_path, gzip_path)``. The plain file is kept for the
    loader; call ``remove_uncompressed`` once it is no longer needed. On
    failure neither file is left behind.
    """
    plain = directory / decision_filename(iun, version)
    compressed = plain.with_name(plain.name + ".gz")
    try:
        await anyio.Path(directory).mkdir(parents=True, exist_ok=True)
        await anyio.Path(plain).write_text(text, encoding="utf-8")
        await anyio.to_thread.run_sync(_gzip_file, plain, compressed)
    except OSError as exc:
        await _discard(plain)
        await _discard(compressed)
        raise StorageError(f"Could not store {plain.name}: {exc}") from exc
    log.info("Stored %s (%d bytes)", compressed, compressed.stat().st_size)
    return plain, compressed


async def remove_uncompressed(path: Path) -> None:
    """Delete the plain copy; a file that is already gone is not an error."""
    await _discard(path)
