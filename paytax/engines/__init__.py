"""Tax computation engines."""

from paytax.engines.evaluator import evaluate_brackets, sort_schedule
from paytax.engines.jurisdictions import JurisdictionRegistry
from paytax.engines.orchestrator import PayrollTaxCalculator, calculate_taxes
from paytax.engines.periods import annualize, deannualize, period_multiplier
from paytax.engines.sources import BracketSource, BracketTable, ProfileDirectory, ProfileSource

__all__ = [
    "BracketSource",
    "BracketTable",
    "JurisdictionRegistry",
    "PayrollTaxCalculator",
    "ProfileDirectory",
    "ProfileSource",
    "annualize",
    "calculate_taxes",
    "deannualize",
    "evaluate_brackets",
    "period_multiplier",
    "sort_schedule",
]
