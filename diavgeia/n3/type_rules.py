"""Type rule engine — decision-type specific triples of the root block.

``TYPE_RULES`` maps each decision type to an ordered tuple of rules. A rule
is a presence predicate over the record and an emission that appends to the
root block; every rule of the selected type is evaluated independently.

Expense references use two numbering schemes and both are kept as the form
produces them: the header numbers ``Expense/N`` and ``ExpenseWithKae/N`` by
array position, while several entity layouts in ``entities`` number by the
row's own ``index``. The two agree whenever ``index`` equals position + 1.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

from diavgeia.models.decision import DecisionRecord
from diavgeia.models.enums import DecisionType, Range
from diavgeia.models.expense import Expense
from diavgeia.n3.context import GenerationContext
from diavgeia.n3.document import TripleBlock
from diavgeia.n3.legislation import decision_iri

log = logging.getLogger(__name__)

PUBLISHED_IN_FEK = "Στο ΦΕΚ"
OPEN_ENDED_PRIVATE_CONTRACT = "Σύμβαση Ιδιωτικού Δικαίου Αορίστου Χρόνου"
WORK_CONTRACT = "Σύμβαση Έργου"


class Rule(NamedTuple):
    when: Callable[[DecisionRecord], bool]
    emit: Callable[[GenerationContext, TripleBlock], None]


def _always(record: DecisionRecord) -> bool:
    return True


def _present(*names: str) -> Callable[[DecisionRecord], bool]:
    def check(record: DecisionRecord) -> bool:
        return all(getattr(record, name) for name in names)

    return check


def scalar(name: str, range_: Range = Range.STRING, *, greek: bool = True) -> Rule:
    """Emit ``ont:<name>`` with the record's value when that value is present."""

    def emit(ctx: GenerationContext, block: TripleBlock) -> None:
        block.add(f"ont:{name}", getattr(ctx.record, name), range_, greek=greek)

    return Rule(_present(name), emit)


def flag(name: str) -> Rule:
    """Always emit ``ont:<name>`` as a boolean, false when the field is unset."""

    def emit(ctx: GenerationContext, block: TripleBlock) -> None:
        block.add(f"ont:{name}", getattr(ctx.record, name), Range.BOOLEAN)

    return Rule(_always, emit)


def related_decision(name: str) -> Rule:
    """Link to another decision by IUN, e.g. ``ont:has_related_undertaking``."""

    def emit(ctx: GenerationContext, block: TripleBlock) -> None:
        block.add(f"ont:{name}", decision_iri(getattr(ctx.record, name)), Range.ENTITY)

    return Rule(_present(name), emit)


def each_expense(
    predicate: str,
    local_name: str,
    qualifies: Callable[[DecisionRecord, Expense], bool],
) -> Rule:
    """Reference ``<local_name>/<position + 1>`` for every qualifying expense row."""

    def emit(ctx: GenerationContext, block: TripleBlock) -> None:
        for i, expense in enumerate(ctx.record.expense):
            if qualifies(ctx.record, expense):
                block.add(predicate, f"{local_name}/{i + 1}", Range.ENTITY)

    return Rule(_always, emit)


def single_expense(qualifies: Callable[[DecisionRecord], bool]) -> Rule:
    def emit(ctx: GenerationContext, block: TripleBlock) -> None:
        block.add("ont:has_expense", "Expense/1", Range.ENTITY)

    return Rule(qualifies, emit)


# ---------------------------------------------------------------------------
# Expense gates shared with the entity builder
# ---------------------------------------------------------------------------


def has_sponsored_amount(record: DecisionRecord) -> bool:
    """Award and work contracts: a total amount and a first sponsored AFM."""
    return bool(record.expense_amount and record.first_expense.afm)


def has_amount_and_currency(record: DecisionRecord) -> bool:
    return bool(record.expense_amount and record.expense_currency)


def ownership_transfer_qualifies(record: DecisionRecord) -> bool:
    first = record.first_expense
    sponsor = record.sponsor_afm and record.sponsor_name and record.sponsor_afm_type
    sponsored = first.afm and first.afm_type and first.index
    return bool(sponsor and sponsored and record.asset_name)


def work_assignment_qualifies(record: DecisionRecord) -> bool:
    first = record.first_expense
    return bool(
        first.afm
        and first.sponsored
        and first.index
        and first.afm_type
        and record.expense_amount
        and record.expense_currency
    )


def commision_warrant_expense(record: DecisionRecord, expense: Expense) -> bool:
    return bool(expense.kae and expense.expense_amount and expense.expense_currency and expense.index)


def donation_expense(record: DecisionRecord, expense: Expense) -> bool:
    return bool(
        expense.expense_amount
        and expense.expense_currency
        and record.sponsor_afm
        and record.sponsor_name
    )


def expenditure_expense(record: DecisionRecord, expense: Expense) -> bool:
    return bool(
        expense.afm
        and expense.expense_amount
        and expense.expense_currency
        and expense.index
        and expense.sponsored
    )


def undertaking_expense(record: DecisionRecord, expense: Expense) -> bool:
    return bool(
        expense.afm
        and expense.kae
        and expense.expense_amount
        and expense.expense_currency
        and expense.kae_budget_remainder
        and expense.kae_credit_remainder
        and expense.index
        and expense.afm_type
        and expense.sponsored
    )


def payment_expense(record: DecisionRecord, expense: Expense) -> bool:
    identified = (expense.afm and expense.afm_type and expense.name) or record.reason_multiple_afm_ignorance
    return bool(identified and expense.expense_amount and expense.expense_currency)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def write_fek(ctx: GenerationContext, block: TripleBlock) -> None:
    """Gazette reference; written only when number, issue and year are all known."""
    record = ctx.record
    if record.fek_number and record.fek_issue and record.fek_year:
        block.add("ont:fek_number", record.fek_number, greek=False)
        block.add("ont:fek_issue", record.fek_issue)
        block.add("ont:fek_year", record.fek_year, greek=False)


def write_normative_type(ctx: GenerationContext, block: TripleBlock) -> None:
    # Gated on the normative number, not on the type itself.
    if ctx.record.normative_number:
        block.add("ont:normative_type", ctx.record.normative_type)


FEK = Rule(_always, write_fek)
NORMATIVE_TYPE = Rule(_always, write_normative_type)


def _emit_approval_for_org(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    if record.is_balance_account_approval_for_org:
        block.add("ont:is_balance_account_approval_for_org", True, Range.BOOLEAN)
        block.add("ont:has_related_institution", record.has_related_institution, greek=False)
    else:
        block.add("ont:is_balance_account_approval_for_org", False, Range.BOOLEAN)


APPROVAL_FOR_ORG = Rule(_always, _emit_approval_for_org)


def _emit_collegial_decision(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    block.add("ont:collegial_body_decision_type", record.collegial_body_decision_type)
    if record.collegial_body_refund and record.expense_currency:
        block.add("ont:collegial_body_refund", record.collegial_body_refund, greek=False)
        block.add("ont:collegial_body_currency", record.expense_currency)


def _emit_contract(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    kind = record.contract_decision_type
    block.add("ont:contract_decision_type", kind)
    if record.number_employees:
        block.add("ont:number_employees", record.number_employees, Range.INTEGER)
    if kind == OPEN_ENDED_PRIVATE_CONTRACT:
        return
    block.add("ont:contract_is_co_funded", record.contract_is_co_funded, Range.BOOLEAN)
    if kind == WORK_CONTRACT:
        if has_sponsored_amount(record):
            block.add("ont:has_expense", "Expense/1", Range.ENTITY)
        block.add("ont:contract_start", record.contract_start, Range.DATE)
        block.add("ont:contract_end", record.contract_end, Range.DATE)


def _emit_municipality(ctx: GenerationContext, block: TripleBlock) -> None:
    iri = ctx.municipalities.get(ctx.record.municipality)
    if iri:
        block.add("ont:has_municipality", iri, Range.ENTITY)
    else:
        log.debug("Municipality %r not in lookup table", ctx.record.municipality)


def _emit_ownership_transfer(ctx: GenerationContext, block: TripleBlock) -> None:
    block.add("ont:has_expense", "Expense/1", Range.ENTITY)
    block.add("ont:asset_name", ctx.record.asset_name)


def _emit_afm_ignorance(ctx: GenerationContext, block: TripleBlock) -> None:
    record = ctx.record
    block.add("ont:reason_multiple_afm_ignorance", record.reason_multiple_afm_ignorance)
    if record.multiple_afm_ignorance_text:
        block.add("ont:multiple_afm_ignorance_text", record.multiple_afm_ignorance_text)


def _emit_payment_expenses(ctx: GenerationContext, block: TripleBlock) -> None:
    for i, expense in enumerate(ctx.record.expense):
        if payment_expense(ctx.record, expense):
            block.add("ont:has_expense", f"Expense/{i + 1}", Range.ENTITY)


def _published_in_fek(record: DecisionRecord) -> bool:
    return record.publish_via == PUBLISHED_IN_FEK


_OTHER_DECISIONS = (
    NORMATIVE_TYPE,
    scalar("publish_via"),
    Rule(_published_in_fek, write_fek),
)


TYPE_RULES: dict[DecisionType, tuple[Rule, ...]] = {
    DecisionType.NORMATIVE: (
        NORMATIVE_TYPE,
        scalar("normative_number", greek=False),
        FEK,
    ),
    DecisionType.CIRCULAR: (
        scalar("circular_number", greek=False),
    ),
    DecisionType.APPOINTMENT: (
        scalar("number_employees", Range.INTEGER),
        scalar("appointment_employer_org", greek=False),
        FEK,
    ),
    DecisionType.AWARD: (
        single_expense(has_sponsored_amount),
        related_decision("has_related_declaration_summary"),
    ),
    DecisionType.LEGISLATIVE_DECREE: (
        scalar("legislative_decree_number", greek=False),
        FEK,
    ),
    DecisionType.OTHER_DECISIONS: _OTHER_DECISIONS,
    DecisionType.OTHER_DEVELOPMENT_LAW: _OTHER_DECISIONS,
    DecisionType.SERVICE_CHANGE: (
        scalar("service_change_decision_type"),
        FEK,
    ),
    DecisionType.OCCUPATION_INVITATION: (
        scalar("vacancy_opening_type"),
        related_decision("has_related_undertaking"),
    ),
    DecisionType.RECORDS: (
        scalar("record_subject"),
        scalar("record_number", greek=False),
    ),
    DecisionType.BALANCE_ACCOUNT: (
        scalar("balance_account_type"),
        scalar("balance_account_time_period"),
        scalar("financial_year", greek=False),
        APPROVAL_FOR_ORG,
    ),
    DecisionType.BUDGET_APPROVAL: (
        scalar("budget_type"),
        scalar("budget_category"),
        scalar("financial_year", greek=False),
        APPROVAL_FOR_ORG,
    ),
    DecisionType.COLLEGIAL_BODY: (
        scalar("collegial_body_party_type"),
        Rule(_present("collegial_body_decision_type"), _emit_collegial_decision),
        FEK,
    ),
    # ExpenseWithKae/N by position; the entities are numbered by index.
    DecisionType.COMMISION_WARRANT: (
        each_expense("ont:has_expense_with_kae", "ExpenseWithKae", commision_warrant_expense),
        scalar("primary_officer"),
        scalar("secondary_officer"),
        scalar("budget_category"),
        scalar("financial_year", greek=False),
    ),
    DecisionType.CONTRACT: (
        Rule(_present("contract_decision_type"), _emit_contract),
    ),
    DecisionType.DECLARATION_SUMMARY: (
        single_expense(has_amount_and_currency),
        scalar("tendering_procedure"),
        scalar("selection_criterion"),
        scalar("contract_type"),
        scalar("government_institution_budget_code"),
    ),
    DecisionType.DONATION_GRANT: (
        scalar("donation_type"),
        scalar("kae", greek=False),
        each_expense("ont:has_expense", "Expense", donation_expense),
    ),
    DecisionType.SPATIAL_PLANNING: (
        Rule(_present("municipality"), _emit_municipality),
        scalar("spatial_planning_decision_type"),
    ),
    # Expense/N by position; the entities are numbered by index.
    DecisionType.EXPENDITURE_APPROVAL: (
        each_expense("ont:has_expense", "Expense", expenditure_expense),
        related_decision("has_related_undertaking"),
    ),
    DecisionType.MONOCRATIC_BODY: (
        single_expense(has_amount_and_currency),
        scalar("position"),
        scalar("position_decision_type"),
        scalar("position_org"),
    ),
    DecisionType.OWNERSHIP_TRANSFER: (
        Rule(ownership_transfer_qualifies, _emit_ownership_transfer),
    ),
    DecisionType.RUNNER_UP_LIST: (
        related_decision("has_related_occupation_invitation"),
    ),
    # ExpenseWithKae/N by position; the entities are numbered by index.
    DecisionType.UNDERTAKING: (
        scalar("financial_year", greek=False),
        scalar("budget_category"),
        scalar("entry_number", greek=False),
        flag("partialead"),
        flag("recalled_expense"),
        each_expense("ont:has_expense_with_kae", "ExpenseWithKae", undertaking_expense),
    ),
    DecisionType.WORK_ASSIGNMENT: (
        scalar("work_assignment_etc_category"),
        related_decision("has_related_undertaking"),
        single_expense(work_assignment_qualifies),
    ),
    DecisionType.OPINION: (
        scalar("opinion_question_number"),
        scalar("opinion_summary"),
        scalar("opinion_history"),
        scalar("opinion_analysis"),
        scalar("opinion_conclusion"),
        scalar("opinion_government_institution_type"),
    ),
    DecisionType.PAYMENT_FINALISATION: (
        scalar("payment_number", greek=False),
        scalar("financial_year", greek=False),
        Rule(_present("reason_multiple_afm_ignorance"), _emit_afm_ignorance),
        Rule(lambda record: record.has_organization_sponsor, _emit_payment_expenses),
    ),
}


def apply_type_rules(ctx: GenerationContext, block: TripleBlock) -> None:
    """Run the selected decision type's rules against the root block."""
    kind = ctx.record.kind
    if kind is None:
        message = f"Unrecognised decision type {ctx.record.decision_type!r}; no type-specific triples written"
        log.warning(message)
        ctx.warn(message)
        return
    before = len(block.triples)
    for rule in TYPE_RULES[kind]:
        if rule.when(ctx.record):
            rule.emit(ctx, block)
    log.debug("%s rules wrote %d triples", kind, len(block.triples) - before)
