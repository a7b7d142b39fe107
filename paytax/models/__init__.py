"""Data models for PayTax."""

from paytax.models.config import TaxEngineConfig
from paytax.models.enums import FilingStatus, PayPeriod, TaxType
from paytax.models.results import TaxLineItem, TaxResult
from paytax.models.rules import BracketRule, FixedRateRule, TaxRule
from paytax.models.tax_config import EmployeeTaxProfile, TaxBracket

__all__ = [
    "BracketRule",
    "EmployeeTaxProfile",
    "FilingStatus",
    "FixedRateRule",
    "PayPeriod",
    "TaxBracket",
    "TaxEngineConfig",
    "TaxLineItem",
    "TaxResult",
    "TaxRule",
    "TaxType",
]
