"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from diavgeia.config import PublisherConfig
from diavgeia.models.decision import DecisionRecord
from diavgeia.n3.context import GenerationContext
from diavgeia.n3.document import N3Document
from diavgeia.n3.generator import generate_n3

ATHENS = "http://geo.linkedopendata.gr/gag/id/9186"


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 3, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def municipalities() -> dict[str, str]:
    return {"ΔΗΜΟΣ ΑΘΗΝΑΙΩΝ": ATHENS}


@pytest.fixture
def make_record() -> Callable[..., DecisionRecord]:
    """Build a record with the identity fields filled in."""

    def factory(decision_type: str = "Circular", **fields: Any) -> DecisionRecord:
        data: dict[str, Any] = {
            "decision_type": decision_type,
            "iun": "ABC123",
            "version": 1,
            "title": "Τίτλος",
        }
        data.update(fields)
        return DecisionRecord.model_validate(data)

    return factory


@pytest.fixture
def make_context(
    now: datetime, municipalities: dict[str, str],
) -> Callable[[DecisionRecord], GenerationContext]:
    def factory(record: DecisionRecord, *, benchmark: bool = False) -> GenerationContext:
        return GenerationContext(
            record=record, benchmark=benchmark, now=now, municipalities=municipalities,
        )

    return factory


@pytest.fixture
def generate(now: datetime, municipalities: dict[str, str]) -> Callable[..., N3Document]:
    def factory(record: DecisionRecord, **kwargs: Any) -> N3Document:
        return generate_n3(record, now=now, municipalities=municipalities, **kwargs)

    return factory


@pytest.fixture
def publisher_config(tmp_path: Path) -> PublisherConfig:
    return PublisherConfig(
        decisions_dir=tmp_path / "decisions",
        index_path=tmp_path / "decisions.jsonl",
        errors_path=tmp_path / "errors.jsonl",
        loader_executable="s-post",
        sparql_endpoint_url="http://localhost:3030",
        dataset="diavgeia",
        graph="default",
        loader_timeout=5.0,
        loader_retries=2,
        municipalities_file=None,
    )


@pytest.fixture
def award_data() -> dict[str, Any]:
    """An Award decision as posted by the editor form."""
    return {
        "decision_type": "Award",
        "iun": "6Ω2Λ46ΜΤΛ6-ΑΒΓ",
        "version": 2,
        "title": "Κατακύρωση προμήθειας",
        "organizationId": "50001",
        "unitIds": ["100", "200"],
        "protocol_number": "1234/2024",
        "government_institution_name": "Δήμος Αθηναίων",
        "considerations": [
            {"text": "Τις διατάξεις του νόμου", "index": 1, "type": "law", "year": 2010, "number": 3852},
        ],
        "decisions": [{"text": "Κατακυρώνουμε", "index": 1}],
        "signer": [{"text": "Ο Δήμαρχος", "name": "Γιάννης", "job": "Δήμαρχος", "index": 1}],
        "expense_amount": "1000",
        "expense_currency": "EUR",
        "expense": [
            {"afm": "123456789", "afm_type": "ΕΛ", "name": "Προμηθευτής Α", "index": 1},
        ],
    }
