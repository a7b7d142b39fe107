"""Per-tax-type calculators.

Bracket-based calculators work on annual income and return an annual
figure. Fixed-rate calculators work on the period gross and return the
period figure directly.
"""

from decimal import Decimal

from paytax.engines.evaluator import evaluate_brackets
from paytax.engines.jurisdictions import FEDERAL_RULE, STATE_LOCAL_RULE, JurisdictionRegistry
from paytax.engines.periods import annualize, deannualize
from paytax.models.config import TaxEngineConfig
from paytax.models.enums import PayPeriod, TaxType
from paytax.models.rules import BracketRule, FixedRateRule
from paytax.models.tax_config import EmployeeTaxProfile, TaxBracket


def bracket_rule_tax(
    rule: BracketRule,
    tax_type: TaxType,
    profile: EmployeeTaxProfile,
    annual_income: Decimal,
    brackets: list[TaxBracket],
    config: TaxEngineConfig,
) -> Decimal:
    """Annual tax for a bracket-based tax type.

    Exempt profiles and jurisdictions without brackets owe nothing. The
    rule decides whether the standard deduction, allowance reduction and
    additional withholding apply.
    """
    if profile.is_exempt(tax_type):
        return Decimal("0")
    if not brackets:
        return Decimal("0")

    income = annual_income
    if rule.standard_deduction:
        deduction = config.standard_deduction_for(profile.filing_status)
        income = max(annual_income - deduction, Decimal("0"))

    tax = evaluate_brackets(brackets, income)

    if rule.allowances:
        allowance_reduction = profile.allowances * config.allowance_value
        tax = max(tax - allowance_reduction, Decimal("0"))

    if rule.additional_withholding:
        tax += profile.additional_withholding * config.additional_withholding_periods

    return tax


def federal_tax(
    profile: EmployeeTaxProfile,
    annual_income: Decimal,
    brackets: list[TaxBracket],
    config: TaxEngineConfig,
    rule: BracketRule = FEDERAL_RULE,
) -> Decimal:
    """Annual federal income tax after deduction, allowances and extra withholding."""
    return bracket_rule_tax(rule, TaxType.FEDERAL, profile, annual_income, brackets, config)


def state_or_local_tax(
    tax_type: TaxType,
    profile: EmployeeTaxProfile,
    annual_income: Decimal,
    brackets: list[TaxBracket],
    config: TaxEngineConfig,
    rule: BracketRule = STATE_LOCAL_RULE,
) -> Decimal:
    """Annual state or local tax: brackets applied directly to annual income."""
    return bracket_rule_tax(rule, tax_type, profile, annual_income, brackets, config)


def fixed_rate_tax(
    rule: FixedRateRule,
    gross_pay: Decimal,
    pay_period: str | PayPeriod,
    annual_gross_pay: Decimal | None = None,
    legacy: bool = False,
) -> Decimal:
    """Period tax for a flat-rate tax type.

    Once annual gross exceeds the wage base the period owes nothing at all
    (no partial cap). The surtax applies to the period share of annual
    gross above the threshold.
    """
    if annual_gross_pay is None:
        annual_gross_pay = annualize(gross_pay, pay_period, legacy)

    if rule.wage_base is not None and annual_gross_pay > rule.wage_base:
        return Decimal("0")

    tax = gross_pay * rule.rate

    threshold = rule.surtax_threshold
    if threshold is not None and rule.surtax_rate > 0 and annual_gross_pay > threshold:
        excess = annual_gross_pay - threshold
        excess_period = deannualize(excess, pay_period, legacy)
        tax += excess_period * rule.surtax_rate

    return tax


def _registered_tax(
    tax_type: TaxType,
    gross_pay: Decimal,
    pay_period: str | PayPeriod,
    country: str,
    annual_gross_pay: Decimal | None,
    config: TaxEngineConfig,
    registry: JurisdictionRegistry | None,
) -> Decimal:
    registry = registry or JurisdictionRegistry.default(config)
    rule = registry.rule_for(country, tax_type)
    if not isinstance(rule, FixedRateRule):
        return Decimal("0")
    return fixed_rate_tax(
        rule,
        gross_pay,
        pay_period,
        annual_gross_pay=annual_gross_pay,
        legacy=config.legacy_period_scaling,
    )


def social_security_tax(
    gross_pay: Decimal,
    pay_period: str | PayPeriod,
    country: str,
    config: TaxEngineConfig,
    annual_gross_pay: Decimal | None = None,
    registry: JurisdictionRegistry | None = None,
) -> Decimal:
    """Period social security tax with the wage-base cliff.

    Countries without a registered fixed-rate social security rule owe
    nothing; the default registry registers one for the US only.
    """
    return _registered_tax(
        TaxType.SOCIAL_SECURITY, gross_pay, pay_period, country, annual_gross_pay, config, registry
    )


def medicare_tax(
    gross_pay: Decimal,
    pay_period: str | PayPeriod,
    country: str,
    annual_gross_pay: Decimal,
    config: TaxEngineConfig,
    registry: JurisdictionRegistry | None = None,
) -> Decimal:
    """Period medicare tax including the additional medicare surtax."""
    return _registered_tax(
        TaxType.MEDICARE, gross_pay, pay_period, country, annual_gross_pay, config, registry
    )
