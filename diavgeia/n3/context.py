"""Per-call generation state."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime

from diavgeia.models.decision import DecisionRecord
from diavgeia.n3.document import N3Document


@dataclass
class GenerationContext:
    """Everything one serialization call reads and writes.

    A context belongs to exactly one call of ``generate_n3``; the verifier
    counter numbers ``Verifier/N`` entities across all verification groups
    of that one document.
    """

    record: DecisionRecord
    benchmark: bool = False
    now: datetime = field(default_factory=lambda: datetime.now(UTC))
    municipalities: Mapping[str, str] = field(default_factory=dict)
    document: N3Document = field(default_factory=N3Document)
    verifier_counter: int = 1

    def next_verifier(self) -> int:
        number = self.verifier_counter
        self.verifier_counter += 1
        return number

    def warn(self, message: str) -> None:
        self.document.warnings.append(message)
