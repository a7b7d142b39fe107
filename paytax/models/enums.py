"""Enumerations for the payroll tax engine."""

from enum import StrEnum


class TaxType(StrEnum):
    FEDERAL = "federal"
    STATE = "state"
    LOCAL = "local"
    SOCIAL_SECURITY = "social_security"
    MEDICARE = "medicare"


class FilingStatus(StrEnum):
    SINGLE = "single"
    MARRIED_JOINT = "married_joint"
    MARRIED_SEPARATE = "married_separate"
    HEAD_OF_HOUSEHOLD = "head_of_household"


class PayPeriod(StrEnum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"

    @property
    def periods_per_year(self) -> int:
        return {"weekly": 52, "biweekly": 26, "semimonthly": 24, "monthly": 12}[self.value]
