"""Engine configuration."""

import json
from decimal import Decimal
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from paytax import constants


class TaxEngineConfig(BaseModel):
    """Constants the calculators read instead of embedding literals.

    Defaults are the 2024 reference values. ``legacy_period_scaling``
    switches annualization to ``gross × 12 / periods`` (and its inverse),
    as older payroll runs were computed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    standard_deductions: dict[str, Decimal] = Field(
        default_factory=lambda: dict(constants.STANDARD_DEDUCTION)
    )
    default_standard_deduction: Decimal = Field(
        default=constants.DEFAULT_STANDARD_DEDUCTION, ge=0
    )
    allowance_value: Decimal = Field(default=constants.ALLOWANCE_VALUE, ge=0)
    additional_withholding_periods: int = Field(
        default=constants.ADDITIONAL_WITHHOLDING_PERIODS, ge=0
    )
    social_security_rate: Decimal = Field(default=constants.SOCIAL_SECURITY_RATE, ge=0, le=1)
    social_security_wage_base: Decimal = Field(
        default=constants.SOCIAL_SECURITY_WAGE_BASE, gt=0
    )
    medicare_rate: Decimal = Field(default=constants.MEDICARE_RATE, ge=0, le=1)
    additional_medicare_rate: Decimal = Field(
        default=constants.ADDITIONAL_MEDICARE_RATE, ge=0, le=1
    )
    additional_medicare_threshold: Decimal = Field(
        default=constants.ADDITIONAL_MEDICARE_THRESHOLD, ge=0
    )
    default_country: str = constants.DEFAULT_COUNTRY
    legacy_period_scaling: bool = False

    def standard_deduction_for(self, filing_status: str) -> Decimal:
        return self.standard_deductions.get(
            filing_status.lower(), self.default_standard_deduction
        )

    @classmethod
    def from_file(cls, path: Path) -> "TaxEngineConfig":
        """Load overrides from a JSON file; omitted keys keep their defaults."""
        data = json.loads(Path(path).read_text())
        return cls.model_validate(data)
