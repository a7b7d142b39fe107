"""Tax configuration records: bracket rows and employee tax profiles."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator, model_validator

from paytax.models.enums import TaxType


class TaxBracket(BaseModel):
    """One income band of a jurisdiction's schedule for one tax type.

    ``tax_rate`` is a percentage (22 means 22%). ``max_income`` of None
    marks the unbounded top band.
    """

    id: str | None = None
    business_id: str | None = None
    country: str
    tax_type: TaxType
    min_income: Decimal = Field(ge=0)
    max_income: Decimal | None = None
    tax_rate: Decimal = Field(ge=0)
    fixed_amount: Decimal | None = Field(default=None, ge=0)
    effective_date: date
    end_date: date | None = None
    is_active: bool = True

    @field_validator("country")
    @classmethod
    def _normalize_country(cls, value: str) -> str:
        return value.strip().upper()

    @model_validator(mode="after")
    def _check_band(self) -> "TaxBracket":
        if self.max_income is not None and self.max_income < self.min_income:
            raise ValueError(
                f"max_income {self.max_income} is below min_income {self.min_income}"
            )
        return self

    @property
    def width(self) -> Decimal | None:
        """Band width, or None for an unbounded band."""
        if self.max_income is None:
            return None
        return self.max_income - self.min_income

    def is_effective(self, on: date) -> bool:
        if self.effective_date > on:
            return False
        return self.end_date is None or on <= self.end_date


class EmployeeTaxProfile(BaseModel):
    employee_id: str
    country: str | None = None
    tax_id: str | None = None  # SSN, TIN, etc.
    filing_status: str = "single"
    allowances: int = Field(default=0, ge=0)
    additional_withholding: Decimal = Field(default=Decimal("0"), ge=0)
    exempt_from_federal: bool = False
    exempt_from_state: bool = False
    exempt_from_local: bool = False

    @field_validator("country", mode="before")
    @classmethod
    def _normalize_country(cls, value: str | None) -> str | None:
        if value is None or not str(value).strip():
            return None
        return str(value).strip().upper()

    @field_validator("filing_status", mode="before")
    @classmethod
    def _normalize_filing_status(cls, value: str | None) -> str:
        if value is None:
            return "single"
        return str(value).strip().lower()

    def is_exempt(self, tax_type: TaxType) -> bool:
        """Whether the profile opts out of the given tax type."""
        if tax_type == TaxType.FEDERAL:
            return self.exempt_from_federal
        if tax_type == TaxType.STATE:
            return self.exempt_from_state
        if tax_type == TaxType.LOCAL:
            return self.exempt_from_local
        return False
