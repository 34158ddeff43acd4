"""Narrative and party entries of a decision record."""

from __future__ import annotations

import re
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def _form_scalar(value: Any) -> Any:
    # JSON numbers such as 1.0 are the integer 1 on the form side.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _form_flag(value: Any) -> Any:
    return value if value else False


Scalar = Annotated[str | int | float, BeforeValidator(_form_scalar)]
Flag = Annotated[bool, BeforeValidator(_form_flag)]

# Keys whose leading characters parse as an integer address a signer slot.
_NUMERIC_KEY = re.compile(r"^\s*[-+]?\d", re.ASCII)
_MAX_ARRAY_INDEX = 2**32 - 2


class FormModel(BaseModel):
    """Base for models fed by the editor form.

    The form posts ``null`` for fields left blank; those keys are dropped so
    the field keeps its empty default.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class BodyEntry(FormModel):
    """One consideration or decision paragraph, optionally linked to legislation."""

    text: str = Field(default="", description="Paragraph text (Greek)")
    index: Scalar = Field(default="", description="Explicit paragraph number")
    legislation_type: str = Field(
        default="",
        alias="type",
        description="Legislation kind, or 'dvg' for a prior Diavgeia decision",
    )
    year: Scalar = ""
    number: Scalar = ""
    article: Scalar = ""
    paragraph: Scalar = ""
    iun: Scalar = Field(default="", alias="IUN", description="IUN of the referenced decision")


class Recipient(FormModel):
    name: str = ""


class Signer(FormModel):
    """A signer of the decision.

    ``text`` is what the form uses to decide whether the signer is
    referenced from the decision; ``name`` decides whether the signer entity
    itself is written.
    """

    text: str = ""
    name: str = ""
    job: str = ""
    index: Scalar = ""


class Present(FormModel):
    """A party present at a collegial body session."""

    text: str = ""
    name: str = ""
    role: str = ""
    index: Scalar = ""


class VerifierSlot(FormModel):
    signer_name: Scalar = ""
    signer_job: Scalar = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.signer_name and self.signer_job)


def _is_array_index(key: str) -> bool:
    return key.isascii() and key.isdigit() and str(int(key)) == key and int(key) <= _MAX_ARRAY_INDEX


class VerificationGroup(FormModel):
    """A verification statement with its numbered signer slots.

    The form posts slots as sibling keys of ``has_text`` and ``index``
    (``{"has_text": ..., "index": 1, "0": {...}, "1": {...}}``), so any
    extra key is kept and numeric-looking keys are read as slots.
    """

    has_text: str = ""
    index: Scalar = ""

    model_config = ConfigDict(extra="allow")

    @property
    def is_listed(self) -> bool:
        """Whether the group carries both its text and its index."""
        return bool(self.has_text and self.index)

    def slot_keys(self) -> list[str]:
        """Return slot keys in form enumeration order.

        Canonical integer keys come first in ascending order, followed by
        the other numeric-prefixed keys in the order they were posted.
        """
        extra = self.model_extra or {}
        indices = sorted((k for k in extra if _is_array_index(k)), key=int)
        rest = [k for k in extra if not _is_array_index(k) and _NUMERIC_KEY.match(k)]
        return indices + rest

    def slots(self) -> list[tuple[str, VerifierSlot]]:
        """Return ``(key, slot)`` pairs, skipping values that are not mappings."""
        extra = self.model_extra or {}
        result: list[tuple[str, VerifierSlot]] = []
        for key in self.slot_keys():
            value = extra[key]
            if isinstance(value, dict):
                result.append((key, VerifierSlot.model_validate(value)))
        return result

    def complete_slots(self) -> list[VerifierSlot]:
        return [slot for _, slot in self.slots() if slot.is_complete]
