"""Read-only lookup from municipality names to Kallikratis entity IRIs."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources
from pathlib import Path

log = logging.getLogger(__name__)

_BUNDLED = "kallikratis.json"


@lru_cache(maxsize=8)
def load_municipalities(path: Path | None = None) -> Mapping[str, str]:
    """Load the municipality table, from *path* or the bundled copy.

    The table is cached per path and must be treated as read-only.
    """
    if path is None:
        text = resources.files("diavgeia.data").joinpath(_BUNDLED).read_text(encoding="utf-8")
        source = _BUNDLED
    else:
        text = path.read_text(encoding="utf-8")
        source = str(path)
    table = json.loads(text)
    log.debug("Loaded %d municipalities from %s", len(table), source)
    return table
