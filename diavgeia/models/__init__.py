"""Data models for decision records and the publishing index."""

from diavgeia.models.decision import DecisionRecord
from diavgeia.models.entries import (
    BodyEntry,
    Present,
    Recipient,
    Signer,
    VerificationGroup,
    VerifierSlot,
)
from diavgeia.models.enums import DecisionType, Range
from diavgeia.models.expense import Expense, KaeSubExpense, Withholding
from diavgeia.models.index import DecisionIndexEntry, ErrorEntry

__all__ = [
    "BodyEntry",
    "DecisionIndexEntry",
    "DecisionRecord",
    "DecisionType",
    "ErrorEntry",
    "Expense",
    "KaeSubExpense",
    "Present",
    "Range",
    "Recipient",
    "Signer",
    "VerificationGroup",
    "VerifierSlot",
    "Withholding",
]
