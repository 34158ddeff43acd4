"""Header builder — prefixes and the decision's own triple block."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

from diavgeia.models.enums import Range
from diavgeia.n3.context import GenerationContext
from diavgeia.n3.document import ROOT, TripleBlock
from diavgeia.n3.legislation import decision_iri
from diavgeia.n3.type_rules import apply_type_rules

log = logging.getLogger(__name__)

ONT = "http://diavgeia.gov.gr/ontology/"
ELI = "http://data.europa.eu/eli/ontology#"
LEG = "http://legislation.di.uoa.gr/eli/"

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# (field, Greek language tag) in emission order.
_INSTITUTION_FIELDS: tuple[tuple[str, bool], ...] = (
    ("government_institution_general_administration", True),
    ("government_institution_department", True),
    ("government_institution_address", True),
    ("government_institution_postalcode", False),
    ("government_institution_phone", False),
    ("government_institution_fax", False),
    ("government_institution_website", False),
    ("government_institution_email", False),
    ("government_institution_information", True),
)


def write_prologue(ctx: GenerationContext) -> None:
    record = ctx.record
    ctx.document.prologue = [
        f"@base <{decision_iri(record.iun, record.version)}/>.\n",
        f"@prefix ont: <{ONT}>.\n",
        f"@prefix eli: <{ELI}>.\n",
        f"@prefix leg: <{LEG}>.\n\n",
    ]


def _write_institution(ctx: GenerationContext, block: TripleBlock) -> None:
    for name, greek in _INSTITUTION_FIELDS:
        value = getattr(ctx.record, name)
        if value:
            block.add(f"ont:{name}", value, greek=greek)


def _write_body_links(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    if record.preconsideration:
        block.add("ont:has_preconsideration", "PreConsideration", Range.ENTITY)
    for i, entry in enumerate(record.considerations):
        if entry.text:
            block.add("ont:has_considered", f"Consideration/{i + 1}", Range.ENTITY)
    for i, entry in enumerate(record.decisions):
        if entry.text:
            block.add("ont:has_decided", f"Decision/{i + 1}", Range.ENTITY)
    if record.afterconsideration:
        block.add("ont:has_afterdecision", "AfterConsideration", Range.ENTITY)


def _write_recipients(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    for predicate, recipients in (
        ("ont:internal_distribution", record.internal_distr),
        ("ont:recipient_for_share", record.recipient_for_share),
        ("ont:recipient", record.recipient),
    ):
        for recipient in recipients:
            if recipient.name:
                block.add(predicate, recipient.name)


def _write_party_links(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    # Signers and present parties are referenced when the form filled in
    # their text, even though their entities are written from name/job.
    for i, signer in enumerate(record.signer):
        if signer.text:
            block.add("ont:signed_by", f"Signer/{i + 1}", Range.ENTITY)
    for i, present in enumerate(record.present):
        if present.text:
            block.add("ont:has_present", f"Present/{i + 1}", Range.ENTITY)
    for group in record.verification:
        if not group.is_listed:
            continue
        if any(slot.is_complete for _, slot in group.slots()):
            block.add("ont:has_verified", f"Verification/{group.index}", Range.ENTITY)


def write_header(ctx: GenerationContext) -> TripleBlock:
    """Write the prologue and the root block ``<> a ont:<decision_type>``."""
    record = ctx.record
    write_prologue(ctx)
    block = ctx.document.block(ROOT, record.decision_type)

    block.add("ont:version", record.version, greek=False)
    block.add("ont:iun", record.iun)
    block.add("eli:title", record.title)
    block.add("ont:has_private_data", record.has_private_data, Range.BOOLEAN)
    block.add("ont:government_institution_name", record.government_institution_name)
    block.add("ont:protocol_number", record.protocol_number)
    _write_institution(ctx, block)
    if record.decision_call:
        block.add("ont:decision_call", record.decision_call)
    for category in record.thematic_category:
        block.add("ont:thematic_category", category, greek=False)
    for unit_id in record.unit_ids:
        block.add("ont:unit_id", unit_id, greek=False)
    block.add("ont:organization_id", record.organization_id, greek=False)

    _write_body_links(ctx, block)
    _write_recipients(ctx, block)
    _write_party_links(ctx, block)

    if not ctx.benchmark:
        apply_type_rules(ctx, block)

    now = ctx.now.astimezone(UTC)
    block.add("ont:submission_timestamp", (now - _EPOCH) // timedelta(milliseconds=1), greek=False)
    block.add("eli:date_publication", now.date().isoformat(), Range.DATE)
    log.debug("Header for %s/%s has %d triples", record.iun, record.version, len(block.triples))
    return block
