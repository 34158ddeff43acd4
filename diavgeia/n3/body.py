"""Body text builder — preconsideration, considerations, decisions, afterconsideration."""

from __future__ import annotations

from diavgeia.models.entries import BodyEntry
from diavgeia.n3.context import GenerationContext
from diavgeia.n3.legislation import format_linking, has_legislation_linking


def _write_text(ctx: GenerationContext, subject: str, rdf_type: str, text: str, entry: BodyEntry | None = None) -> None:
    block = ctx.document.block(subject, rdf_type)
    if entry is not None and has_legislation_linking(entry):
        block.add_raw(*format_linking(entry))
    block.add("ont:has_text", text)


def write_body(ctx: GenerationContext) -> None:
    """Write one block per narrative part that has text.

    Considerations and decisions are named by their own ``index``, while the
    root block refers to them by position.
    """
    record = ctx.record
    if record.preconsideration:
        _write_text(ctx, "PreConsideration", "PreConsideration", record.preconsideration)
    for entry in record.considerations:
        if entry.text:
            _write_text(ctx, f"Consideration/{entry.index}", "Consideration", entry.text, entry)
    for entry in record.decisions:
        if entry.text:
            _write_text(ctx, f"Decision/{entry.index}", "Decision", entry.text, entry)
    if record.afterconsideration:
        _write_text(ctx, "AfterConsideration", "AfterConsideration", record.afterconsideration)
