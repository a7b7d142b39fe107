"""Per-period payroll tax orchestration.

Runs every tax type through the rule its jurisdiction registers:
  - Bracket rules on annualized gross, de-annualized back to the period
  - Fixed-rate rules directly on the period gross
Every component is rounded half-up to cents; the total is the sum of the
rounded components.
"""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from paytax.engines.calculators import (
    bracket_rule_tax,
    federal_tax,
    fixed_rate_tax,
    medicare_tax,
    social_security_tax,
    state_or_local_tax,
)
from paytax.engines.jurisdictions import JurisdictionRegistry
from paytax.engines.periods import annualize, deannualize, resolve_pay_period
from paytax.engines.sources import BracketSource, BracketTable, ProfileSource
from paytax.exceptions import DataValidationError
from paytax.models.config import TaxEngineConfig
from paytax.models.enums import PayPeriod, TaxType
from paytax.models.results import TaxResult
from paytax.models.rules import BracketRule
from paytax.models.tax_config import EmployeeTaxProfile, TaxBracket

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def validate_gross_pay(gross_pay: Decimal | int | float | str) -> Decimal:
    """Convert gross pay to Decimal, rejecting non-finite or negative values."""
    if isinstance(gross_pay, bool):
        raise DataValidationError("gross_pay", f"expected a number, got {gross_pay!r}")
    try:
        amount = Decimal(str(gross_pay))
    except (InvalidOperation, ValueError) as exc:
        raise DataValidationError("gross_pay", f"not a number: {gross_pay!r}") from exc
    if not amount.is_finite():
        raise DataValidationError("gross_pay", f"must be finite, got {gross_pay!r}")
    if amount < 0:
        raise DataValidationError("gross_pay", f"must be non-negative, got {gross_pay!r}")
    return amount


class PayrollTaxCalculator:
    """Computes one pay period's withholding for an employee."""

    def __init__(
        self,
        brackets: BracketSource,
        config: TaxEngineConfig | None = None,
        registry: JurisdictionRegistry | None = None,
    ) -> None:
        self.brackets = brackets
        self.config = config or TaxEngineConfig()
        self.registry = registry or JurisdictionRegistry.default(self.config)

    def calculate_taxes(
        self,
        profile: EmployeeTaxProfile | None,
        gross_pay: Decimal | int | float | str,
        pay_period: str,
        as_of: date | None = None,
    ) -> TaxResult:
        """Compute every tax type for one period.

        An employee without a profile owes nothing. Only brackets effective
        on ``as_of`` (the pay date, today when omitted) are applied.

        Raises:
            DataValidationError: ``gross_pay`` is not a finite non-negative number.
        """
        gross = validate_gross_pay(gross_pay)

        if profile is None:
            logger.info("No tax profile; returning zero taxes")
            return TaxResult.zero()

        if as_of is None:
            as_of = date.today()
        country = profile.country or self.config.default_country
        period = resolve_pay_period(pay_period)
        annual_gross = annualize(gross, period, self.config.legacy_period_scaling)

        amounts: dict[TaxType, Decimal] = {}
        for tax_type in TaxType:
            period_tax = self._period_tax(
                tax_type, profile, country, gross, annual_gross, period, as_of
            )
            amounts[tax_type] = round_cents(max(period_tax, Decimal("0")))
            logger.debug(
                "%s %s tax for %s: %s", country, tax_type.value, profile.employee_id,
                amounts[tax_type],
            )

        return TaxResult(
            federal_tax=amounts[TaxType.FEDERAL],
            state_tax=amounts[TaxType.STATE],
            local_tax=amounts[TaxType.LOCAL],
            social_security_tax=amounts[TaxType.SOCIAL_SECURITY],
            medicare_tax=amounts[TaxType.MEDICARE],
            total_tax=sum(amounts.values(), Decimal("0.00")),
        )

    def calculate_for_employee(
        self,
        employee_id: str,
        gross_pay: Decimal | int | float | str,
        pay_period: str,
        profiles: ProfileSource,
        as_of: date | None = None,
    ) -> TaxResult:
        """Look up the employee's profile and compute their taxes."""
        profile = profiles.get_profile(employee_id)
        if profile is None:
            logger.info("No tax profile for employee %s", employee_id)
        return self.calculate_taxes(profile, gross_pay, pay_period, as_of=as_of)

    def _period_tax(
        self,
        tax_type: TaxType,
        profile: EmployeeTaxProfile,
        country: str,
        gross: Decimal,
        annual_gross: Decimal,
        pay_period: PayPeriod,
        as_of: date,
    ) -> Decimal:
        rule = self.registry.rule_for(country, tax_type)
        if rule is None:
            return Decimal("0")

        legacy = self.config.legacy_period_scaling
        if isinstance(rule, BracketRule):
            if profile.is_exempt(tax_type):
                return Decimal("0")
            brackets = self.brackets.get_active_brackets(country, tax_type, as_of)
            if tax_type == TaxType.FEDERAL:
                annual_tax = federal_tax(profile, annual_gross, brackets, self.config, rule=rule)
            elif tax_type in (TaxType.STATE, TaxType.LOCAL):
                annual_tax = state_or_local_tax(
                    tax_type, profile, annual_gross, brackets, self.config, rule=rule
                )
            else:
                annual_tax = bracket_rule_tax(
                    rule, tax_type, profile, annual_gross, brackets, self.config
                )
            return deannualize(annual_tax, pay_period, legacy)

        if tax_type == TaxType.SOCIAL_SECURITY:
            return social_security_tax(
                gross, pay_period, country, self.config,
                annual_gross_pay=annual_gross, registry=self.registry,
            )
        if tax_type == TaxType.MEDICARE:
            return medicare_tax(
                gross, pay_period, country, annual_gross, self.config, registry=self.registry
            )
        return fixed_rate_tax(
            rule, gross, pay_period, annual_gross_pay=annual_gross, legacy=legacy
        )


def calculate_taxes(
    profile: EmployeeTaxProfile | None,
    gross_pay: Decimal | int | float | str,
    pay_period: str,
    brackets: Iterable[TaxBracket] = (),
    config: TaxEngineConfig | None = None,
    as_of: date | None = None,
) -> TaxResult:
    """One-call entry point over an in-memory bracket list."""
    calculator = PayrollTaxCalculator(BracketTable(brackets), config=config)
    return calculator.calculate_taxes(profile, gross_pay, pay_period, as_of=as_of)
