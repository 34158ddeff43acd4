"""Decision record model, as submitted by the decision editor form."""

from __future__ import annotations

from pydantic import Field

from diavgeia.models.entries import (
    BodyEntry,
    Flag,
    FormModel,
    Present,
    Recipient,
    Scalar,
    Signer,
    VerificationGroup,
)
from diavgeia.models.enums import DecisionType
from diavgeia.models.expense import Expense


class DecisionRecord(FormModel):
    """A public-administration decision to be serialized as N3.

    Field names follow the editor form. Type-specific fields are flat on the
    record; which of them matter depends on ``decision_type``.
    """

    decision_type: str = Field(description="Decision type tag, see DecisionType")

    # Identity
    iun: str = Field(description="Unique decision identifier (IUN)")
    version: int | str = Field(description="Decision version")
    organization_id: str = Field(default="", alias="organizationId")
    unit_ids: list[str] = Field(default_factory=list, alias="unitIds")

    # Core
    title: str = ""
    protocol_number: Scalar = ""
    has_private_data: Flag = False
    government_institution_name: str = ""
    government_institution_general_administration: str = ""
    government_institution_department: str = ""
    government_institution_address: str = ""
    government_institution_postalcode: Scalar = ""
    government_institution_phone: Scalar = ""
    government_institution_fax: Scalar = ""
    government_institution_website: str = ""
    government_institution_email: str = ""
    government_institution_information: str = ""
    decision_call: str = ""
    thematic_category: list[str] = Field(default_factory=list)

    # Narrative
    preconsideration: str = ""
    considerations: list[BodyEntry] = Field(default_factory=list)
    decisions: list[BodyEntry] = Field(default_factory=list)
    afterconsideration: str = ""

    # Parties
    internal_distr: list[Recipient] = Field(default_factory=list)
    recipient_for_share: list[Recipient] = Field(default_factory=list)
    recipient: list[Recipient] = Field(default_factory=list)
    signer: list[Signer] = Field(default_factory=list)
    present: list[Present] = Field(default_factory=list)
    verification: list[VerificationGroup] = Field(default_factory=list)

    # Gazette (FEK) and normative acts
    fek_number: Scalar = ""
    fek_issue: Scalar = ""
    fek_year: Scalar = ""
    normative_type: str = ""
    normative_number: Scalar = ""
    publish_via: str = ""
    legislative_decree_number: Scalar = ""
    circular_number: Scalar = ""

    # Staffing
    number_employees: Scalar = ""
    appointment_employer_org: str = ""
    service_change_decision_type: str = ""
    vacancy_opening_type: str = ""
    position: str = ""
    position_decision_type: str = ""
    position_org: str = ""

    # Related decisions (IUNs)
    has_related_declaration_summary: str = ""
    has_related_undertaking: str = ""
    has_related_occupation_invitation: str = ""

    # Records, budgets and accounts
    record_subject: str = ""
    record_number: Scalar = ""
    balance_account_type: str = ""
    balance_account_time_period: str = ""
    financial_year: Scalar = ""
    is_balance_account_approval_for_org: Flag = False
    has_related_institution: str = ""
    budget_type: str = ""
    budget_category: str = ""
    entry_number: Scalar = ""
    partialead: Flag = False
    recalled_expense: Flag = False

    # Collegial bodies and commission warrants
    collegial_body_party_type: str = ""
    collegial_body_decision_type: str = ""
    collegial_body_refund: Scalar = ""
    primary_officer: str = ""
    secondary_officer: str = ""

    # Contracts and procurement
    contract_decision_type: str = ""
    contract_is_co_funded: Flag = False
    contract_start: str = ""
    contract_end: str = ""
    tendering_procedure: str = ""
    selection_criterion: str = ""
    contract_type: str = ""
    government_institution_budget_code: Scalar = ""
    work_assignment_etc_category: str = ""
    cpv: Scalar = ""

    # Expenses and sponsors
    expense_amount: Scalar = ""
    expense_currency: Scalar = ""
    expense: list[Expense] = Field(default_factory=list)
    kae: Scalar = ""
    donation_type: str = ""
    sponsor_afm: Scalar = ""
    sponsor_afm_type: Scalar = ""
    sponsor_name: Scalar = ""
    asset_name: str = ""

    # Spatial planning
    municipality: str = ""
    spatial_planning_decision_type: str = ""

    # Opinions
    opinion_question_number: Scalar = ""
    opinion_summary: str = ""
    opinion_history: str = ""
    opinion_analysis: str = ""
    opinion_conclusion: str = ""
    opinion_government_institution_type: str = ""

    # Payment finalisation
    payment_number: Scalar = ""
    reason_multiple_afm_ignorance: str = ""
    multiple_afm_ignorance_text: str = ""
    organization_sponsor_afm: Scalar = Field(default="", alias="organizationSponsorAfm")
    organization_sponsor_afm_type: Scalar = Field(
        default="", alias="organizationSponsorAfmType"
    )
    organization_sponsor_name: Scalar = Field(default="", alias="organizationSponsorName")

    @property
    def kind(self) -> DecisionType | None:
        """The decision type as an enum member, or None when unrecognised."""
        try:
            return DecisionType(self.decision_type)
        except ValueError:
            return None

    @property
    def first_expense(self) -> Expense:
        """The first expense row, or an empty row when the table is empty."""
        return self.expense[0] if self.expense else Expense()

    @property
    def has_organization_sponsor(self) -> bool:
        return bool(
            self.organization_sponsor_afm
            and self.organization_sponsor_afm_type
            and self.organization_sponsor_name
        )
