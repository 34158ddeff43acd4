"""Decision index and error log models with JSONL I/O."""

from __future__ import annotations

import json
import traceback as _tb
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from pathlib import Path

_DEFAULT_MAX_AGE_DAYS = 30


class DecisionIndexEntry(BaseModel):
    """One published decision, as recorded in the decision index."""

    iun: str
    version: int | str
    title: str = ""
    date: datetime = Field(default_factory=lambda: datetime.now(UTC))


class ErrorEntry(BaseModel):
    """One structured publishing error, serialized as JSONL."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    step: str
    iun: str | None = None
    version: int | str | None = None
    error_type: str = ""
    message: str = ""
    retryable: bool = False
    traceback: str = ""

    @classmethod
    def from_exception(
        cls,
        step: str,
        exc: BaseException,
        *,
        iun: str | None = None,
        version: int | str | None = None,
    ) -> ErrorEntry:
        """Build an ErrorEntry from a caught exception."""
        return cls(
            step=step,
            iun=iun,
            version=version,
            error_type=type(exc).__name__,
            message=str(exc),
            retryable=bool(getattr(exc, "retryable", False)),
            traceback="".join(_tb.format_exception(exc)),
        )


# ---------------------------------------------------------------------------
# JSONL I/O
# ---------------------------------------------------------------------------


def _append_jsonl(path: Path, entry: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(entry + "\n")


def _append_jsonl_rolling(path: Path, entry: str, *, max_age_days: int = _DEFAULT_MAX_AGE_DAYS) -> None:
    """Append a JSONL entry and prune entries older than *max_age_days*."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines: list[str] = []
    cutoff = datetime.now(UTC) - timedelta(days=max_age_days)
    if path.exists():
        for line in path.read_text(encoding="utf-8").splitlines():
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
                ts = obj.get("timestamp", "")
                if ts and datetime.fromisoformat(ts) >= cutoff:
                    lines.append(line)
            except (json.JSONDecodeError, ValueError):
                lines.append(line)  # keep unparseable lines
    lines.append(entry)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _read_jsonl_lines(path: Path, last_n: int) -> list[str]:
    if not path.exists():
        return []
    lines = [line.strip() for line in path.read_text(encoding="utf-8").splitlines()]
    lines = [line for line in lines if line]
    if last_n > 0:
        lines = lines[-last_n:]
    return lines


def append_index_entry(path: Path, entry: DecisionIndexEntry) -> None:
    """Append a published decision to the index. Index entries are never pruned."""
    _append_jsonl(path, entry.model_dump_json())


def load_index(path: Path, *, last_n: int = 0) -> list[DecisionIndexEntry]:
    """Load index entries from a JSONL file.

    Args:
        path: Path to the JSONL file.
        last_n: If > 0, return only the last N entries.
    """
    return [DecisionIndexEntry.model_validate_json(line) for line in _read_jsonl_lines(path, last_n)]


def append_error(path: Path, entry: ErrorEntry, *, max_age_days: int = _DEFAULT_MAX_AGE_DAYS) -> None:
    """Append a single error entry as one JSON line, pruning old entries."""
    _append_jsonl_rolling(path, entry.model_dump_json(), max_age_days=max_age_days)


def load_errors(path: Path, *, last_n: int = 0) -> list[ErrorEntry]:
    """Load error entries from a JSONL file.

    Args:
        path: Path to the JSONL file.
        last_n: If > 0, return only the last N entries.
    """
    return [ErrorEntry.model_validate_json(line) for line in _read_jsonl_lines(path, last_n)]
