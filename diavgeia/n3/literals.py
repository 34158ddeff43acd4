"""Literal encoder — renders one value as an N3 object and terminates the line."""

from __future__ import annotations

from typing import Any

from diavgeia.models.enums import Range

XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"
XSD_DATE = "http://www.w3.org/2001/XMLSchema#date"


def _as_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_object(value: Any, range_: Range | str, *, greek: bool = True) -> str:
    """Render *value* as an N3 object of the given range.

    Strings are Greek language-tagged unless ``greek`` is False. The value
    is not escaped or validated; callers only pass values they have already
    checked for presence. An unknown range raises ``ValueError``.
    """
    range_ = Range(range_)
    if range_ is Range.STRING:
        text = f'"{_as_text(value)}"'
        return f"{text}@el" if greek else text
    if range_ is Range.NUMBER:
        return _as_text(value)
    if range_ is Range.BOOLEAN:
        return "true" if value else "false"
    if range_ is Range.INTEGER:
        return f'"{_as_text(value)}"^^<{XSD_INTEGER}>'
    if range_ is Range.DATE:
        return f'"{_as_text(value)}"^^<{XSD_DATE}>'
    return f"<{value}>"


def terminate(line: str, *, last: bool = False) -> str:
    """End a statement: ``;`` inside a block, ``.`` plus a blank line after its last triple."""
    return line + (".\n\n" if last else ";\n")

