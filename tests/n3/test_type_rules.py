"""Tests for the type rule engine, one class per decision type."""

from __future__ import annotations

import logging

import pytest

from diavgeia.models.enums import DecisionType
from diavgeia.n3.literals import XSD_DATE, XSD_INTEGER
from diavgeia.n3.type_rules import (
    OPEN_ENDED_PRIVATE_CONTRACT,
    PUBLISHED_IN_FEK,
    TYPE_RULES,
    WORK_CONTRACT,
    apply_type_rules,
)

ATHENS = "http://geo.linkedopendata.gr/gag/id/9186"
DS_IRI = "<http://diavgeia.gov.gr/eli/decision/DS1/>"
UND_IRI = "<http://diavgeia.gov.gr/eli/decision/UND1/>"
FEK = {"fek_number": "100", "fek_issue": "Β", "fek_year": "2020"}
FEK_PAIRS = [
    ("ont:fek_number", '"100"'),
    ("ont:fek_issue", '"Β"@el'),
    ("ont:fek_year", '"2020"'),
]


@pytest.fixture
def rules(make_record, make_context):
    """Apply one type's rules to an empty root block and return its pairs."""

    def run(decision_type: str, **fields) -> list[tuple[str, str]]:
        record = make_record(decision_type, **fields)
        ctx = make_context(record)
        block = ctx.document.block("", record.decision_type)
        apply_type_rules(ctx, block)
        return [(t.predicate, t.object) for t in block.triples]

    return run


def test_every_type_has_rules() -> None:
    assert set(TYPE_RULES) == set(DecisionType)


def test_unknown_type(make_record, make_context, caplog: pytest.LogCaptureFixture) -> None:
    ctx = make_context(make_record("Mystery", circular_number="1"))
    block = ctx.document.block("", "Mystery")
    with caplog.at_level(logging.WARNING, logger="diavgeia.n3.type_rules"):
        apply_type_rules(ctx, block)
    assert block.triples == []
    assert len(ctx.document.warnings) == 1
    assert "Mystery" in ctx.document.warnings[0]
    assert "Mystery" in caplog.text


def test_no_optional_fields_means_no_triples(rules) -> None:
    assert rules("Opinion") == []
    assert rules("Records") == []


class TestNormative:
    def test_full(self, rules) -> None:
        pairs = rules("Normative", normative_type="Υπουργική Απόφαση", normative_number="12", **FEK)
        assert pairs == [
            ("ont:normative_type", '"Υπουργική Απόφαση"@el'),
            ("ont:normative_number", '"12"'),
            *FEK_PAIRS,
        ]

    def test_type_gated_on_number(self, rules) -> None:
        assert rules("Normative", normative_type="Υπουργική Απόφαση") == []

    def test_partial_fek_omitted(self, rules) -> None:
        assert rules("Normative", fek_number="100", fek_issue="Β") == []


class TestCircular:
    def test_number(self, rules) -> None:
        assert rules("Circular", circular_number="123") == [("ont:circular_number", '"123"')]


class TestAppointment:
    def test_full(self, rules) -> None:
        pairs = rules("Appointment", number_employees=3, appointment_employer_org="50001", **FEK)
        assert pairs == [
            ("ont:number_employees", f'"3"^^<{XSD_INTEGER}>'),
            ("ont:appointment_employer_org", '"50001"'),
            *FEK_PAIRS,
        ]


class TestAward:
    def test_expense_and_related(self, rules) -> None:
        pairs = rules(
            "Award",
            expense_amount="1000",
            expense=[{"afm": "123456789"}],
            has_related_declaration_summary="DS1",
        )
        assert pairs == [
            ("ont:has_expense", "<Expense/1>"),
            ("ont:has_related_declaration_summary", DS_IRI),
        ]

    def test_no_sponsored_afm(self, rules) -> None:
        assert rules("Award", expense_amount="1000") == []


class TestLegislativeDecree:
    def test_number_and_fek(self, rules) -> None:
        assert rules("LegislativeDecree", legislative_decree_number="7", **FEK) == [
            ("ont:legislative_decree_number", '"7"'),
            *FEK_PAIRS,
        ]


class TestOtherDecisions:
    @pytest.mark.parametrize("decision_type", ["OtherDecisions", "OtherDevelopmentLaw"])
    def test_published_in_fek(self, rules, decision_type: str) -> None:
        pairs = rules(decision_type, normative_number="5", normative_type="ΚΥΑ", publish_via=PUBLISHED_IN_FEK, **FEK)
        assert pairs == [
            ("ont:normative_type", '"ΚΥΑ"@el'),
            ("ont:publish_via", f'"{PUBLISHED_IN_FEK}"@el'),
            *FEK_PAIRS,
        ]

    def test_fek_needs_publish_via(self, rules) -> None:
        assert rules("OtherDecisions", publish_via="Διαδίκτυο", **FEK) == [
            ("ont:publish_via", '"Διαδίκτυο"@el'),
        ]


class TestServiceChange:
    def test_type_and_fek(self, rules) -> None:
        assert rules("ServiceChange", service_change_decision_type="Μετάταξη", **FEK) == [
            ("ont:service_change_decision_type", '"Μετάταξη"@el'),
            *FEK_PAIRS,
        ]


class TestOccupationInvitation:
    def test_full(self, rules) -> None:
        assert rules("OccupationInvitation", vacancy_opening_type="Προκήρυξη", has_related_undertaking="UND1") == [
            ("ont:vacancy_opening_type", '"Προκήρυξη"@el'),
            ("ont:has_related_undertaking", UND_IRI),
        ]


class TestRecords:
    def test_full(self, rules) -> None:
        assert rules("Records", record_subject="Πρακτικό", record_number="4") == [
            ("ont:record_subject", '"Πρακτικό"@el'),
            ("ont:record_number", '"4"'),
        ]


class TestBalanceAccount:
    def test_for_org(self, rules) -> None:
        pairs = rules(
            "BalanceAccount",
            balance_account_type="Ισολογισμός",
            balance_account_time_period="Ετήσιος",
            financial_year="2023",
            is_balance_account_approval_for_org=True,
            has_related_institution="50002",
        )
        assert pairs == [
            ("ont:balance_account_type", '"Ισολογισμός"@el'),
            ("ont:balance_account_time_period", '"Ετήσιος"@el'),
            ("ont:financial_year", '"2023"'),
            ("ont:is_balance_account_approval_for_org", "true"),
            ("ont:has_related_institution", '"50002"'),
        ]

    def test_flag_always_written(self, rules) -> None:
        assert rules("BalanceAccount") == [("ont:is_balance_account_approval_for_org", "false")]


class TestBudgetApproval:
    def test_full(self, rules) -> None:
        assert rules("BudgetApproval", budget_type="Προϋπολογισμός", budget_category="Τακτικός") == [
            ("ont:budget_type", '"Προϋπολογισμός"@el'),
            ("ont:budget_category", '"Τακτικός"@el'),
            ("ont:is_balance_account_approval_for_org", "false"),
        ]


class TestCollegialBody:
    def test_refund_needs_currency(self, rules) -> None:
        pairs = rules(
            "CollegialBodyCommisionWorkingGroup",
            collegial_body_party_type="Επιτροπή",
            collegial_body_decision_type="Αποζημίωση",
            collegial_body_refund="200",
            expense_currency="EUR",
        )
        assert pairs == [
            ("ont:collegial_body_party_type", '"Επιτροπή"@el'),
            ("ont:collegial_body_decision_type", '"Αποζημίωση"@el'),
            ("ont:collegial_body_refund", '"200"'),
            ("ont:collegial_body_currency", '"EUR"@el'),
        ]

    def test_refund_without_decision_type(self, rules) -> None:
        pairs = rules("CollegialBodyCommisionWorkingGroup", collegial_body_refund="200", expense_currency="EUR")
        assert pairs == []


class TestCommisionWarrant:
    def test_references_by_position(self, rules) -> None:
        row = {"kae": "0711", "expense_amount": "50", "expense_currency": "EUR"}
        pairs = rules(
            "CommisionWarrant",
            expense=[{**row, "index": 3}, {**row, "kae": ""}, {**row, "index": 7}],
            primary_officer="Α",
            secondary_officer="Β",
            budget_category="Τακτικός",
            financial_year="2024",
        )
        assert pairs == [
            ("ont:has_expense_with_kae", "<ExpenseWithKae/1>"),
            ("ont:has_expense_with_kae", "<ExpenseWithKae/3>"),
            ("ont:primary_officer", '"Α"@el'),
            ("ont:secondary_officer", '"Β"@el'),
            ("ont:budget_category", '"Τακτικός"@el'),
            ("ont:financial_year", '"2024"'),
        ]


class TestContract:
    def test_open_ended(self, rules) -> None:
        pairs = rules("Contract", contract_decision_type=OPEN_ENDED_PRIVATE_CONTRACT, number_employees=2)
        assert pairs == [
            ("ont:contract_decision_type", f'"{OPEN_ENDED_PRIVATE_CONTRACT}"@el'),
            ("ont:number_employees", f'"2"^^<{XSD_INTEGER}>'),
        ]

    def test_work_contract(self, rules) -> None:
        pairs = rules(
            "Contract",
            contract_decision_type=WORK_CONTRACT,
            contract_is_co_funded=True,
            expense_amount="900",
            expense=[{"afm": "1"}],
            contract_start="2024-01-01",
            contract_end="2024-12-31",
        )
        assert pairs == [
            ("ont:contract_decision_type", f'"{WORK_CONTRACT}"@el'),
            ("ont:contract_is_co_funded", "true"),
            ("ont:has_expense", "<Expense/1>"),
            ("ont:contract_start", f'"2024-01-01"^^<{XSD_DATE}>'),
            ("ont:contract_end", f'"2024-12-31"^^<{XSD_DATE}>'),
        ]

    def test_other_contract(self, rules) -> None:
        assert rules("Contract", contract_decision_type="Σύμβαση Ορισμένου Χρόνου") == [
            ("ont:contract_decision_type", '"Σύμβαση Ορισμένου Χρόνου"@el'),
            ("ont:contract_is_co_funded", "false"),
        ]

    def test_no_decision_type(self, rules) -> None:
        assert rules("Contract", number_employees=2) == []


class TestDeclarationSummary:
    def test_full(self, rules) -> None:
        pairs = rules(
            "DeclarationSummary",
            expense_amount="500",
            expense_currency="EUR",
            tendering_procedure="Ανοικτός",
            selection_criterion="Χαμηλότερη τιμή",
            contract_type="Προμήθεια",
            government_institution_budget_code="1234",
        )
        assert pairs == [
            ("ont:has_expense", "<Expense/1>"),
            ("ont:tendering_procedure", '"Ανοικτός"@el'),
            ("ont:selection_criterion", '"Χαμηλότερη τιμή"@el'),
            ("ont:contract_type", '"Προμήθεια"@el'),
            ("ont:government_institution_budget_code", '"1234"@el'),
        ]

    def test_amount_needs_currency(self, rules) -> None:
        assert rules("DeclarationSummary", expense_amount="500") == []


class TestDonationGrant:
    def test_expense_per_row(self, rules) -> None:
        pairs = rules(
            "DonationGrant",
            donation_type="Δωρεά",
            kae="5111",
            sponsor_afm="999",
            sponsor_name="Ίδρυμα",
            expense=[
                {"expense_amount": "10", "expense_currency": "EUR"},
                {"expense_amount": "20"},
                {"expense_amount": "30", "expense_currency": "EUR"},
            ],
        )
        assert pairs == [
            ("ont:donation_type", '"Δωρεά"@el'),
            ("ont:kae", '"5111"'),
            ("ont:has_expense", "<Expense/1>"),
            ("ont:has_expense", "<Expense/3>"),
        ]

    def test_needs_sponsor(self, rules) -> None:
        assert rules("DonationGrant", expense=[{"expense_amount": "10", "expense_currency": "EUR"}]) == []


class TestSpatialPlanning:
    def test_known_municipality(self, rules) -> None:
        pairs = rules(
            "SpatialPlanningDecisions", municipality="ΔΗΜΟΣ ΑΘΗΝΑΙΩΝ", spatial_planning_decision_type="Ρυμοτομία",
        )
        assert pairs == [
            ("ont:has_municipality", f"<{ATHENS}>"),
            ("ont:spatial_planning_decision_type", '"Ρυμοτομία"@el'),
        ]

    def test_unknown_municipality(self, rules) -> None:
        assert rules("SpatialPlanningDecisions", municipality="ΔΗΜΟΣ ΑΤΛΑΝΤΙΔΑΣ") == []


class TestExpenditureApproval:
    def test_references_by_position(self, rules) -> None:
        row = {"afm": "1", "expense_amount": "10", "expense_currency": "EUR", "sponsored": "Α"}
        pairs = rules(
            "ExpenditureApproval",
            expense=[{**row, "index": 4}, {**row, "sponsored": ""}, {**row, "index": 9}],
            has_related_undertaking="UND1",
        )
        assert pairs == [
            ("ont:has_expense", "<Expense/1>"),
            ("ont:has_expense", "<Expense/3>"),
            ("ont:has_related_undertaking", UND_IRI),
        ]


class TestMonocraticBody:
    def test_full(self, rules) -> None:
        pairs = rules(
            "GeneralSpecialSecretaryMonocraticBody",
            expense_amount="300",
            expense_currency="EUR",
            position="Γενικός Γραμματέας",
            position_decision_type="Διορισμός",
            position_org="Υπουργείο",
        )
        assert pairs == [
            ("ont:has_expense", "<Expense/1>"),
            ("ont:position", '"Γενικός Γραμματέας"@el'),
            ("ont:position_decision_type", '"Διορισμός"@el'),
            ("ont:position_org", '"Υπουργείο"@el'),
        ]


class TestOwnershipTransfer:
    FIELDS = {
        "sponsor_afm": "999",
        "sponsor_afm_type": "ΕΛ",
        "sponsor_name": "Δήμος",
        "asset_name": "Οικόπεδο",
        "expense": [{"afm": "1", "afm_type": "ΕΛ", "index": 1}],
    }

    def test_full(self, rules) -> None:
        assert rules("OwnershipTransferOfAssets", **self.FIELDS) == [
            ("ont:has_expense", "<Expense/1>"),
            ("ont:asset_name", '"Οικόπεδο"@el'),
        ]

    def test_needs_asset(self, rules) -> None:
        assert rules("OwnershipTransferOfAssets", **{**self.FIELDS, "asset_name": ""}) == []


class TestRunnerUpList:
    def test_related(self, rules) -> None:
        assert rules("SuccessfulAppointedRunnerUpList", has_related_occupation_invitation="UND1") == [
            ("ont:has_related_occupation_invitation", UND_IRI),
        ]


class TestUndertaking:
    def test_full(self, rules) -> None:
        row = {
            "afm": "1",
            "afm_type": "ΕΛ",
            "sponsored": "Α",
            "kae": "0711",
            "expense_amount": "10",
            "expense_currency": "EUR",
            "kae_budget_remainder": "100",
            "kae_credit_remainder": "50",
            "index": 1,
        }
        pairs = rules(
            "Undertaking",
            financial_year="2024",
            budget_category="Τακτικός",
            entry_number="77",
            recalled_expense=True,
            expense=[row, {**row, "kae_credit_remainder": ""}],
        )
        assert pairs == [
            ("ont:financial_year", '"2024"'),
            ("ont:budget_category", '"Τακτικός"@el'),
            ("ont:entry_number", '"77"'),
            ("ont:partialead", "false"),
            ("ont:recalled_expense", "true"),
            ("ont:has_expense_with_kae", "<ExpenseWithKae/1>"),
        ]


class TestWorkAssignment:
    def test_full(self, rules) -> None:
        pairs = rules(
            "WorkAssignmentSupplyServicesStudies",
            work_assignment_etc_category="Υπηρεσίες",
            has_related_undertaking="UND1",
            expense_amount="400",
            expense_currency="EUR",
            expense=[{"afm": "1", "afm_type": "ΕΛ", "sponsored": "Α", "index": 1}],
        )
        assert pairs == [
            ("ont:work_assignment_etc_category", '"Υπηρεσίες"@el'),
            ("ont:has_related_undertaking", UND_IRI),
            ("ont:has_expense", "<Expense/1>"),
        ]

    def test_needs_currency(self, rules) -> None:
        pairs = rules(
            "WorkAssignmentSupplyServicesStudies",
            expense_amount="400",
            expense=[{"afm": "1", "afm_type": "ΕΛ", "sponsored": "Α", "index": 1}],
        )
        assert pairs == []


class TestOpinion:
    def test_full(self, rules) -> None:
        pairs = rules(
            "Opinion",
            opinion_question_number="15",
            opinion_summary="Περίληψη",
            opinion_history="Ιστορικό",
            opinion_analysis="Ανάλυση",
            opinion_conclusion="Συμπέρασμα",
            opinion_government_institution_type="ΝΣΚ",
        )
        assert [p for p, _ in pairs] == [
            "ont:opinion_question_number",
            "ont:opinion_summary",
            "ont:opinion_history",
            "ont:opinion_analysis",
            "ont:opinion_conclusion",
            "ont:opinion_government_institution_type",
        ]
        assert pairs[0] == ("ont:opinion_question_number", '"15"@el')


class TestPaymentFinalisation:
    SPONSOR = {
        "organizationSponsorAfm": "090000045",
        "organizationSponsorAfmType": "ΕΛ",
        "organizationSponsorName": "Δήμος",
    }

    def test_identified_payees(self, rules) -> None:
        pairs = rules(
            "PaymentFinalisation",
            payment_number="55",
            financial_year="2024",
            expense=[
                {"afm": "1", "afm_type": "ΕΛ", "name": "Α", "expense_amount": "10", "expense_currency": "EUR"},
                {"afm": "2", "afm_type": "ΕΛ", "expense_amount": "20", "expense_currency": "EUR"},
            ],
            **self.SPONSOR,
        )
        assert pairs == [
            ("ont:payment_number", '"55"'),
            ("ont:financial_year", '"2024"'),
            ("ont:has_expense", "<Expense/1>"),
        ]

    def test_ignorance_reason_covers_missing_afm(self, rules) -> None:
        pairs = rules(
            "PaymentFinalisation",
            reason_multiple_afm_ignorance="Πολλοί δικαιούχοι",
            multiple_afm_ignorance_text="Λεπτομέρειες",
            expense=[{"expense_amount": "20", "expense_currency": "EUR"}],
            **self.SPONSOR,
        )
        assert pairs == [
            ("ont:reason_multiple_afm_ignorance", '"Πολλοί δικαιούχοι"@el'),
            ("ont:multiple_afm_ignorance_text", '"Λεπτομέρειες"@el'),
            ("ont:has_expense", "<Expense/1>"),
        ]

    def test_needs_organization_sponsor(self, rules) -> None:
        pairs = rules(
            "PaymentFinalisation",
            expense=[{"afm": "1", "afm_type": "ΕΛ", "name": "Α", "expense_amount": "10", "expense_currency": "EUR"}],
        )
        assert pairs == []
