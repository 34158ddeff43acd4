"""Ordered N3 document made of a prologue and triple blocks."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from diavgeia.models.enums import Range
from diavgeia.n3.literals import encode_object, terminate

ROOT = ""

# Relative IRIs such as <Expense/1>; absolute ones carry a scheme.
_LOCAL_REF = re.compile(r"^<([^:>]*)>$")


@dataclass
class Triple:
    predicate: str
    object: str


@dataclass
class TripleBlock:
    """All statements about one subject.

    ``subject`` is the local name relative to the document base; the empty
    string is the decision itself (``<>``).
    """

    subject: str
    rdf_type: str
    triples: list[Triple] = field(default_factory=list)

    def add(self, predicate: str, value: Any, range_: Range | str = Range.STRING, *, greek: bool = True) -> None:
        self.triples.append(Triple(predicate, encode_object(value, range_, greek=greek)))

    def add_raw(self, predicate: str, rendered_object: str) -> None:
        """Append a statement whose object is already rendered (IRIs, qualified names)."""
        self.triples.append(Triple(predicate, rendered_object))

    def render(self) -> str:
        head = f"<{self.subject}> a ont:{self.rdf_type}"
        if not self.triples:
            return terminate(head, last=True)
        lines = [terminate(head)]
        last = len(self.triples) - 1
        for i, triple in enumerate(self.triples):
            lines.append(terminate(f"\t{triple.predicate} {triple.object}", last=i == last))
        return "".join(lines)


@dataclass
class N3Document:
    prologue: list[str] = field(default_factory=list)
    blocks: list[TripleBlock] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def block(self, subject: str, rdf_type: str) -> TripleBlock:
        """Start a new block at the end of the document and return it."""
        new = TripleBlock(subject, rdf_type)
        self.blocks.append(new)
        return new

    @property
    def root(self) -> TripleBlock | None:
        return next((b for b in self.blocks if b.subject == ROOT), None)

    @property
    def subjects(self) -> list[str]:
        return [b.subject for b in self.blocks]

    def find(self, subject: str) -> TripleBlock | None:
        return next((b for b in self.blocks if b.subject == subject), None)

    def references(self) -> list[tuple[str, str, str]]:
        """Return ``(subject, predicate, target)`` for every local IRI object."""
        refs: list[tuple[str, str, str]] = []
        for b in self.blocks:
            for t in b.triples:
                match = _LOCAL_REF.match(t.object)
                if match:
                    refs.append((b.subject, t.predicate, match.group(1)))
        return refs

    def unresolved_references(self) -> list[tuple[str, str, str]]:
        """Local references that no block in the document defines."""
        defined = set(self.subjects)
        return [ref for ref in self.references() if ref[2] not in defined]

    def render(self) -> str:
        return "".join(self.prologue) + "".join(b.render() for b in self.blocks)

    @property
    def text(self) -> str:
        return self.render()
