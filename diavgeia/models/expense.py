"""Expense entries attached to financial decision types."""

from __future__ import annotations

from pydantic import Field

from diavgeia.models.entries import FormModel, Scalar


class Withholding(FormModel):
    withholding_text: Scalar = ""
    withholding_expense: Scalar = ""
    withholding_expense_currency: Scalar = ""

    @property
    def is_complete(self) -> bool:
        return bool(
            self.withholding_text
            and self.withholding_expense
            and self.withholding_expense_currency
        )


class KaeSubExpense(FormModel):
    """Part of a payment charged to a single budget line (KAE)."""

    kae: Scalar = ""
    expense_amount: Scalar = ""
    expense_amount_currency: Scalar = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.kae and self.expense_amount and self.expense_amount_currency)


class Expense(FormModel):
    """One row of the form's expense table.

    Depending on the decision type the same row describes a sponsored party
    (``afm``, ``afm_type``, ``name``/``sponsored``), an amount charged to a
    budget line (``kae`` and its remainders) or a payment with withholdings.
    """

    afm: Scalar = Field(default="", description="Tax identification number (AFM)")
    afm_type: Scalar = ""
    name: Scalar = ""
    sponsored: Scalar = Field(default="", description="Name of the sponsored party")
    index: Scalar = ""
    expense_amount: Scalar = ""
    expense_currency: Scalar = ""
    kae: Scalar = Field(default="", description="Budget line code (KAE)")
    kae_budget_remainder: Scalar = ""
    kae_credit_remainder: Scalar = ""
    cpv: Scalar = ""
    payment_reason: Scalar = ""
    payment_with_withholdings: Scalar = ""
    payment_with_withholdings_currency: Scalar = ""
    document: list[str] = Field(default_factory=list)
    withholding: list[Withholding] = Field(default_factory=list)
    with_kae_sub_expense: list[KaeSubExpense] = Field(
        default_factory=list, alias="withKaeSubExpense"
    )

    @property
    def has_sponsored_party(self) -> bool:
        return bool(self.afm and self.afm_type and self.sponsored)
