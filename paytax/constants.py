"""Reference payroll tax constants.

2024 reference values used as the defaults of ``TaxEngineConfig``. Keyed by
filing status where the value varies. Never hardcode these in computation
functions; read them from the config the calculator receives.

Sources:
  - Standard deductions: IRS Rev. Proc. 2023-34
  - FICA rates: IRC Sections 3101(a), 3101(b)
"""

from decimal import Decimal


# ---------------------------------------------------------------------------
# Federal standard deduction (subtracted before bracket evaluation)
# ---------------------------------------------------------------------------
STANDARD_DEDUCTION: dict[str, Decimal] = {
    "single": Decimal("14600"),
    "married_joint": Decimal("29200"),
    "married_separate": Decimal("14600"),
    "head_of_household": Decimal("21900"),
}
DEFAULT_STANDARD_DEDUCTION = Decimal("14600")

# Annual tax reduction per W-4 style allowance
ALLOWANCE_VALUE = Decimal("4300")

# Per-period additional withholding is annualized with this factor
ADDITIONAL_WITHHOLDING_PERIODS = 12

# ---------------------------------------------------------------------------
# Social Security: rate applies below the wage base, nothing above it
# ---------------------------------------------------------------------------
SOCIAL_SECURITY_RATE = Decimal("0.062")
SOCIAL_SECURITY_WAGE_BASE = Decimal("160200")

# ---------------------------------------------------------------------------
# Medicare: flat rate plus a surtax on annual wages over the threshold.
# Threshold is the single-filer amount for every filing status.
# ---------------------------------------------------------------------------
MEDICARE_RATE = Decimal("0.0145")
ADDITIONAL_MEDICARE_RATE = Decimal("0.009")
ADDITIONAL_MEDICARE_THRESHOLD = Decimal("200000")

DEFAULT_COUNTRY = "US"
