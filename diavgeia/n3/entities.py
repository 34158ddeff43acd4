"""Auxiliary entity builder — signers, verifiers, expenses and sponsors.

``ENTITY_RULES`` is independent of the type rule engine but keyed on the
same decision type. Each layout reuses the gate of the matching type rule so
that ``Expense/1`` style references written in the root block resolve.
Where a layout numbers ``Sponsored/N`` or ``Expense/N`` by the row's
``index`` instead of its position, the comment on the layout says so.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

from diavgeia.models.decision import DecisionRecord
from diavgeia.models.enums import DecisionType, Range
from diavgeia.models.expense import Expense, KaeSubExpense, Withholding
from diavgeia.n3.context import GenerationContext
from diavgeia.n3.type_rules import (
    commision_warrant_expense,
    expenditure_expense,
    has_amount_and_currency,
    has_sponsored_amount,
    ownership_transfer_qualifies,
    payment_expense,
    work_assignment_qualifies,
)

log = logging.getLogger(__name__)

ORGANIZATION_SPONSOR = "OrganizationSponsor/1"


class EntityRule(NamedTuple):
    when: Callable[[DecisionRecord], bool]
    emit: Callable[[GenerationContext], None]


def _always(record: DecisionRecord) -> bool:
    return True


# ---------------------------------------------------------------------------
# Parties
# ---------------------------------------------------------------------------


def write_signers(ctx: GenerationContext) -> None:
    for signer in ctx.record.signer:
        if signer.name:
            block = ctx.document.block(f"Signer/{signer.index}", "Signer")
            block.add("ont:signer_name", signer.name)
            block.add("ont:signer_job", signer.job)


def write_present(ctx: GenerationContext) -> None:
    for present in ctx.record.present:
        if present.name:
            block = ctx.document.block(f"Present/{present.index}", "Present")
            block.add("ont:present_name", present.name)
            block.add("ont:present_title", present.role)


def write_verifications(ctx: GenerationContext) -> None:
    """Write each listed verification group followed by its verifiers.

    Groups are named by position; verifiers draw numbers from the
    document-wide counter so they never repeat across groups.
    """
    for position, group in enumerate(ctx.record.verification):
        if not group.is_listed:
            continue
        block = ctx.document.block(f"Verification/{position + 1}", "Verification")
        verifiers = []
        for slot in group.complete_slots():
            number = ctx.next_verifier()
            block.add("ont:verified_by", f"Verifier/{number}", Range.ENTITY)
            verifiers.append((number, slot))
        block.add("ont:has_text", group.has_text)
        for number, slot in verifiers:
            verifier = ctx.document.block(f"Verifier/{number}", "Verifier")
            verifier.add("ont:verifier_job", slot.signer_job)
            verifier.add("ont:verifier_name", slot.signer_name)


# ---------------------------------------------------------------------------
# Expense layouts
# ---------------------------------------------------------------------------


def _write_sponsored(ctx: GenerationContext, number: object, expense: Expense, name: object) -> None:
    block = ctx.document.block(f"Sponsored/{number}", "Sponsored")
    block.add("ont:afm", expense.afm, greek=False)
    block.add("ont:afm_type", expense.afm_type)
    block.add("ont:name", name)


def _write_organization_sponsor(ctx: GenerationContext) -> None:
    # Organisations without an AFM are written without one.
    record = ctx.record
    block = ctx.document.block(ORGANIZATION_SPONSOR, "OrganizationSponsor")
    block.add("ont:afm_type", record.sponsor_afm_type)
    if record.sponsor_afm:
        block.add("ont:afm", record.sponsor_afm, greek=False)
    block.add("ont:name", record.sponsor_name)


def _sponsored_expense(ctx: GenerationContext) -> None:
    """Award and Contract: one total with every sponsored party.

    ``has_sponsored`` is numbered by position, the Sponsored entities by index.
    """
    record = ctx.record
    block = ctx.document.block("Expense/1", "Expense")
    block.add("ont:expense_amount", record.expense_amount, greek=False)
    for i, expense in enumerate(record.expense):
        if expense.afm:
            block.add("ont:has_sponsored", f"Sponsored/{i + 1}", Range.ENTITY)
    block.add("ont:expense_amount_currency", record.expense_currency)
    for expense in record.expense:
        if expense.afm and expense.afm_type and expense.name and expense.index:
            _write_sponsored(ctx, expense.index, expense, expense.name)


def _commision_warrant_expenses(ctx: GenerationContext) -> None:
    # Named by index; the root block refers to them by position.
    for expense in ctx.record.expense:
        if commision_warrant_expense(ctx.record, expense):
            block = ctx.document.block(f"ExpenseWithKae/{expense.index}", "ExpenseWithKae")
            block.add("ont:expense_amount", expense.expense_amount, greek=False)
            block.add("ont:expense_amount_currency", expense.expense_currency)
            block.add("ont:kae", expense.kae, greek=False)


def _declaration_expense(ctx: GenerationContext) -> None:
    record = ctx.record
    block = ctx.document.block("Expense/1", "Expense")
    if record.cpv:
        block.add("ont:cpv", record.cpv, greek=False)
    block.add("ont:expense_amount", record.expense_amount, greek=False)
    block.add("ont:expense_amount_currency", record.expense_currency)


def _donation_expenses(ctx: GenerationContext) -> None:
    """One Expense per row, all sharing the single organisation sponsor.

    Rows are written whether or not the root block references them.
    """
    record = ctx.record
    for i, expense in enumerate(record.expense):
        block = ctx.document.block(f"Expense/{i + 1}", "Expense")
        if expense.afm and expense.afm_type and expense.expense_amount and expense.expense_currency:
            block.add("ont:has_sponsored", f"Sponsored/{i + 1}", Range.ENTITY)
        block.add("ont:has_organization_sponsor", ORGANIZATION_SPONSOR, Range.ENTITY)
        block.add("ont:expense_amount", expense.expense_amount, greek=False)
        block.add("ont:expense_amount_currency", expense.expense_currency)

    _write_organization_sponsor(ctx)

    for i, expense in enumerate(record.expense):
        if expense.has_sponsored_party and expense.index:
            _write_sponsored(ctx, i + 1, expense, expense.sponsored)


def _expenditure_expenses(ctx: GenerationContext) -> None:
    # Expense and Sponsored both named by index; the root block uses position.
    record = ctx.record
    for expense in record.expense:
        if not expenditure_expense(record, expense):
            continue
        block = ctx.document.block(f"Expense/{expense.index}", "Expense")
        block.add("ont:expense_amount", expense.expense_amount, greek=False)
        block.add("ont:expense_amount_currency", expense.expense_currency)
        if expense.kae:
            block.add("ont:kae", expense.kae, greek=False)
        if expense.cpv:
            block.add("ont:cpv", expense.cpv)
        block.add("ont:has_sponsored", f"Sponsored/{expense.index}", Range.ENTITY)
        block.add("ont:has_organization_sponsor", ORGANIZATION_SPONSOR, Range.ENTITY)
        _write_sponsored(ctx, expense.index, expense, expense.sponsored)

    _write_organization_sponsor(ctx)


def _monocratic_expense(ctx: GenerationContext) -> None:
    record = ctx.record
    block = ctx.document.block("Expense/1", "Expense")
    block.add("ont:expense_amount", record.expense_amount)
    block.add("ont:expense_amount_currency", record.expense_currency)


def _ownership_transfer_expense(ctx: GenerationContext) -> None:
    # has_sponsored by position, Sponsored entities by index.
    record = ctx.record
    block = ctx.document.block("Expense/1", "Expense")
    for i, expense in enumerate(record.expense):
        if expense.has_sponsored_party:
            block.add("ont:has_sponsored", f"Sponsored/{i + 1}", Range.ENTITY)
    block.add("ont:has_organization_sponsor", ORGANIZATION_SPONSOR, Range.ENTITY)

    _write_organization_sponsor(ctx)

    for expense in record.expense:
        if expense.has_sponsored_party:
            _write_sponsored(ctx, expense.index, expense, expense.sponsored)


def _undertaking_expenses(ctx: GenerationContext) -> None:
    # ExpenseWithKae named by index; Sponsored by position.
    for i, expense in enumerate(ctx.record.expense):
        if (
            expense.kae
            and expense.expense_amount
            and expense.expense_currency
            and expense.kae_budget_remainder
            and expense.kae_credit_remainder
            and expense.index
        ):
            block = ctx.document.block(f"ExpenseWithKae/{expense.index}", "ExpenseWithKae")
            block.add("ont:expense_amount", expense.expense_amount, greek=False)
            block.add("ont:expense_amount_currency", expense.expense_currency)
            block.add("ont:kae", expense.kae, greek=False)
            block.add("ont:kae_budget_remainder", expense.kae_budget_remainder, greek=False)
            if expense.has_sponsored_party:
                block.add("ont:has_sponsored", f"Sponsored/{i + 1}", Range.ENTITY)
            block.add("ont:kae_credit_remainder", expense.kae_credit_remainder, greek=False)
        if expense.has_sponsored_party:
            _write_sponsored(ctx, i + 1, expense, expense.sponsored)


def _work_assignment_expense(ctx: GenerationContext) -> None:
    # All rows share the decision's CPV. has_sponsored by position, Sponsored by index.
    record = ctx.record
    listed = [
        (i, e) for i, e in enumerate(record.expense)
        if e.afm and e.sponsored and e.index and e.afm_type
    ]
    block = ctx.document.block("Expense/1", "Expense")
    if record.cpv:
        block.add("ont:cpv", record.cpv, greek=False)
    for i, _ in listed:
        block.add("ont:has_sponsored", f"Sponsored/{i + 1}", Range.ENTITY)
    block.add("ont:expense_amount", record.expense_amount, greek=False)
    block.add("ont:expense_amount_currency", record.expense_currency)
    for _, expense in listed:
        _write_sponsored(ctx, expense.index, expense, expense.sponsored)


def _payment_expenses(ctx: GenerationContext) -> None:
    """Payments with their withholdings and per-KAE sub-expenses.

    Withholdings and sub-expenses are numbered by two running counters over
    all qualifying rows and written after the organisation sponsor.
    """
    record = ctx.record
    withholdings: list[Withholding] = []
    sub_expenses: list[KaeSubExpense] = []
    written = 0

    for i, expense in enumerate(record.expense):
        if not payment_expense(record, expense):
            continue
        block = ctx.document.block(f"Expense/{i + 1}", "Expense")
        block.add("ont:expense_amount", expense.expense_amount, greek=False)
        block.add("ont:expense_amount_currency", expense.expense_currency)
        if expense.payment_reason:
            block.add("ont:payment_reason", expense.payment_reason)
        if expense.cpv:
            block.add("ont:cpv", expense.cpv, greek=False)
        if expense.payment_with_withholdings and expense.payment_with_withholdings_currency:
            block.add("ont:payment_with_withholdings", expense.payment_with_withholdings, greek=False)
            block.add("ont:payment_with_withholdings_currency", expense.payment_with_withholdings_currency)
        for document in expense.document:
            block.add("ont:has_document", document)
        for withholding in expense.withholding:
            if withholding.is_complete:
                withholdings.append(withholding)
                block.add("ont:has_withHolding", f"WithHolding/{len(withholdings)}", Range.ENTITY)
        for sub_expense in expense.with_kae_sub_expense:
            if sub_expense.is_complete:
                sub_expenses.append(sub_expense)
                block.add("ont:has_withkaesubexpense", f"WithKaeSubExpense/{len(sub_expenses)}", Range.ENTITY)
        block.add("ont:has_organization_sponsor", ORGANIZATION_SPONSOR, Range.ENTITY)

        if not record.reason_multiple_afm_ignorance:
            sponsored = ctx.document.block(f"Sponsored/{i + 1}", "Sponsored")
            sponsored.add("ont:name", expense.name)
            sponsored.add("ont:afm", expense.afm, greek=False)
            sponsored.add("ont:afm_type", expense.afm_type)
        written += 1

    if not written:
        return

    sponsor = ctx.document.block(ORGANIZATION_SPONSOR, "OrganizationSponsor")
    sponsor.add("ont:afm", record.organization_sponsor_afm)
    sponsor.add("ont:afm_type", record.organization_sponsor_afm_type)
    sponsor.add("ont:name", record.organization_sponsor_name)

    for number, withholding in enumerate(withholdings, start=1):
        block = ctx.document.block(f"WithHolding/{number}", "WithHolding")
        block.add("ont:withholding_text", withholding.withholding_text)
        block.add("ont:withholding_expense", withholding.withholding_expense, greek=False)
        block.add("ont:withholding_expense_currency", withholding.withholding_expense_currency)

    for number, sub_expense in enumerate(sub_expenses, start=1):
        block = ctx.document.block(f"WithKaeSubExpense/{number}", "WithKaeSubExpense")
        block.add("ont:kae", sub_expense.kae, greek=False)
        block.add("ont:expense_amount", sub_expense.expense_amount, greek=False)
        block.add("ont:expense_amount_currency", sub_expense.expense_amount_currency)


ENTITY_RULES: dict[DecisionType, tuple[EntityRule, ...]] = {
    DecisionType.AWARD: (EntityRule(has_sponsored_amount, _sponsored_expense),),
    DecisionType.COMMISION_WARRANT: (EntityRule(_always, _commision_warrant_expenses),),
    DecisionType.CONTRACT: (EntityRule(has_sponsored_amount, _sponsored_expense),),
    DecisionType.DECLARATION_SUMMARY: (EntityRule(has_amount_and_currency, _declaration_expense),),
    DecisionType.DONATION_GRANT: (EntityRule(_always, _donation_expenses),),
    DecisionType.EXPENDITURE_APPROVAL: (EntityRule(_always, _expenditure_expenses),),
    DecisionType.MONOCRATIC_BODY: (EntityRule(has_amount_and_currency, _monocratic_expense),),
    DecisionType.OWNERSHIP_TRANSFER: (EntityRule(ownership_transfer_qualifies, _ownership_transfer_expense),),
    DecisionType.UNDERTAKING: (EntityRule(_always, _undertaking_expenses),),
    DecisionType.WORK_ASSIGNMENT: (EntityRule(work_assignment_qualifies, _work_assignment_expense),),
    DecisionType.PAYMENT_FINALISATION: (
        EntityRule(lambda record: record.has_organization_sponsor, _payment_expenses),
    ),
}


def write_entities(ctx: GenerationContext) -> None:
    """Write signers, present parties, verifications and the expense graph."""
    write_signers(ctx)
    write_present(ctx)
    write_verifications(ctx)
    kind = ctx.record.kind
    if kind is None:
        return
    before = len(ctx.document.blocks)
    for rule in ENTITY_RULES.get(kind, ()):
        if rule.when(ctx.record):
            rule.emit(ctx)
    log.debug("%s expense layout wrote %d blocks", kind, len(ctx.document.blocks) - before)
