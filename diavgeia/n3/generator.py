"""Decision → N3 document generation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime

from diavgeia.models.decision import DecisionRecord
from diavgeia.n3.body import write_body
from diavgeia.n3.context import GenerationContext
from diavgeia.n3.document import N3Document
from diavgeia.n3.entities import write_entities
from diavgeia.n3.header import write_header
from diavgeia.n3.municipalities import load_municipalities

log = logging.getLogger(__name__)


def generate_n3(
    record: DecisionRecord,
    *,
    benchmark: bool = False,
    strict: bool = False,
    now: datetime | None = None,
    municipalities: Mapping[str, str] | None = None,
) -> N3Document:
    """Serialize *record* into an N3 document.

    Missing optional fields drop the triples and entities gated on them;
    nothing in the record makes generation fail. In benchmark mode the
    type-specific triples and all auxiliary entities are left out, so only
    the generic header and the body text remain.

    Args:
        record: The decision to serialize.
        benchmark: Skip type-specific and auxiliary content.
        strict: Report local references that no block defines as warnings.
        now: Submission time; defaults to the current UTC time.
        municipalities: Municipality name → IRI table; defaults to the
            bundled Kallikratis table.
    """
    ctx = GenerationContext(
        record=record,
        benchmark=benchmark,
        now=now or datetime.now(UTC),
        municipalities=load_municipalities() if municipalities is None else municipalities,
    )
    write_header(ctx)
    write_body(ctx)
    if not benchmark:
        write_entities(ctx)

    document = ctx.document
    if strict:
        for subject, predicate, target in document.unresolved_references():
            message = f"<{subject}> {predicate} <{target}> has no matching block"
            log.warning("%s/%s: %s", record.iun, record.version, message)
            document.warnings.append(message)

    log.debug(
        "Generated %s/%s (%s): %d blocks, %d warnings",
        record.iun, record.version, record.decision_type, len(document.blocks), len(document.warnings),
    )
    return document
