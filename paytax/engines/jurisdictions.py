"""Jurisdiction registry: which rule computes each (country, tax type).

Lookups try the exact country first, then the ``"*"`` wildcard. A pair with
no rule owes no tax. New jurisdictions register rules here without touching
the orchestrator.
"""

from paytax.models.config import TaxEngineConfig
from paytax.models.enums import TaxType
from paytax.models.rules import BracketRule, FixedRateRule

ANY_COUNTRY = "*"

FEDERAL_RULE = BracketRule(standard_deduction=True, allowances=True, additional_withholding=True)
STATE_LOCAL_RULE = BracketRule()


def social_security_rule(config: TaxEngineConfig) -> FixedRateRule:
    return FixedRateRule(
        rate=config.social_security_rate,
        wage_base=config.social_security_wage_base,
    )


def medicare_rule(config: TaxEngineConfig) -> FixedRateRule:
    return FixedRateRule(
        rate=config.medicare_rate,
        surtax_rate=config.additional_medicare_rate,
        surtax_threshold=config.additional_medicare_threshold,
    )


class JurisdictionRegistry:
    """Maps ``(country, tax_type)`` to a ``BracketRule`` or ``FixedRateRule``."""

    def __init__(self) -> None:
        self._rules: dict[tuple[str, TaxType], BracketRule | FixedRateRule] = {}

    def register(
        self, country: str, tax_type: TaxType, rule: BracketRule | FixedRateRule
    ) -> None:
        self._rules[(_country_key(country), TaxType(tax_type))] = rule

    def unregister(self, country: str, tax_type: TaxType) -> None:
        self._rules.pop((_country_key(country), TaxType(tax_type)), None)

    def rule_for(self, country: str, tax_type: TaxType) -> BracketRule | FixedRateRule | None:
        rule = self._rules.get((_country_key(country), tax_type))
        if rule is None:
            rule = self._rules.get((ANY_COUNTRY, tax_type))
        return rule

    @classmethod
    def default(cls, config: TaxEngineConfig | None = None) -> "JurisdictionRegistry":
        """Income taxes everywhere; social security and medicare in the US only."""
        config = config or TaxEngineConfig()
        registry = cls()
        registry.register(ANY_COUNTRY, TaxType.FEDERAL, FEDERAL_RULE)
        registry.register(ANY_COUNTRY, TaxType.STATE, STATE_LOCAL_RULE)
        registry.register(ANY_COUNTRY, TaxType.LOCAL, STATE_LOCAL_RULE)
        registry.register("US", TaxType.SOCIAL_SECURITY, social_security_rule(config))
        registry.register("US", TaxType.MEDICARE, medicare_rule(config))
        return registry


def _country_key(country: str) -> str:
    return country.strip().upper()
