"""Enums for decision models."""

from enum import StrEnum


class DecisionType(StrEnum):
    """Closed set of Diavgeia decision types handled by the serializer."""

    NORMATIVE = "Normative"
    CIRCULAR = "Circular"
    APPOINTMENT = "Appointment"
    AWARD = "Award"
    LEGISLATIVE_DECREE = "LegislativeDecree"
    OTHER_DECISIONS = "OtherDecisions"
    OTHER_DEVELOPMENT_LAW = "OtherDevelopmentLaw"
    SERVICE_CHANGE = "ServiceChange"
    OCCUPATION_INVITATION = "OccupationInvitation"
    RECORDS = "Records"
    BALANCE_ACCOUNT = "BalanceAccount"
    BUDGET_APPROVAL = "BudgetApproval"
    COLLEGIAL_BODY = "CollegialBodyCommisionWorkingGroup"
    COMMISION_WARRANT = "CommisionWarrant"
    CONTRACT = "Contract"
    DECLARATION_SUMMARY = "DeclarationSummary"
    DONATION_GRANT = "DonationGrant"
    SPATIAL_PLANNING = "SpatialPlanningDecisions"
    EXPENDITURE_APPROVAL = "ExpenditureApproval"
    MONOCRATIC_BODY = "GeneralSpecialSecretaryMonocraticBody"
    OWNERSHIP_TRANSFER = "OwnershipTransferOfAssets"
    RUNNER_UP_LIST = "SuccessfulAppointedRunnerUpList"
    UNDERTAKING = "Undertaking"
    WORK_ASSIGNMENT = "WorkAssignmentSupplyServicesStudies"
    OPINION = "Opinion"
    PAYMENT_FINALISATION = "PaymentFinalisation"


class Range(StrEnum):
    """Literal encodings understood by the N3 literal encoder."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DATE = "date"
    ENTITY = "entity"
