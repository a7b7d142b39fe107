"""Tax rule variants registered per (country, tax type).

A rule says *how* a tax type is computed for a jurisdiction:

- ``BracketRule``: progressive brackets on annualized income; the result is
  annual and is de-annualized by the orchestrator.
- ``FixedRateRule``: a flat rate on period gross with an optional wage-base
  cliff and an optional surtax above an annual threshold; the result is
  already per period.
"""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class BracketRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["bracket"] = "bracket"
    standard_deduction: bool = False
    allowances: bool = False
    additional_withholding: bool = False


class FixedRateRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed_rate"] = "fixed_rate"
    rate: Decimal = Field(ge=0, le=1)
    wage_base: Decimal | None = Field(default=None, gt=0)
    surtax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1)
    surtax_threshold: Decimal | None = Field(default=None, ge=0)


TaxRule = Annotated[BracketRule | FixedRateRule, Field(discriminator="kind")]
