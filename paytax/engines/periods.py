"""Pay period normalization.

Converts per-period amounts to their annual equivalent and back. Unknown
period labels fall back to monthly; this is a compatibility rule, not an
error.
"""

import logging
from decimal import Decimal

from paytax.models.enums import PayPeriod

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

PERIOD_ALIASES: dict[str, PayPeriod] = {
    "weekly": PayPeriod.WEEKLY,
    "bi-weekly": PayPeriod.BIWEEKLY,
    "biweekly": PayPeriod.BIWEEKLY,
    "semi-monthly": PayPeriod.SEMIMONTHLY,
    "semimonthly": PayPeriod.SEMIMONTHLY,
    "monthly": PayPeriod.MONTHLY,
}


def resolve_pay_period(pay_period: str | PayPeriod) -> PayPeriod:
    """Map a pay period label (case-insensitive) to its canonical cadence.

    Already-resolved ``PayPeriod`` values pass through without a lookup.
    """
    if isinstance(pay_period, PayPeriod):
        return pay_period
    period = PERIOD_ALIASES.get(pay_period.strip().lower())
    if period is None:
        logger.warning("Unrecognized pay period %r, treating as monthly", pay_period)
        return PayPeriod.MONTHLY
    return period


def period_multiplier(pay_period: str | PayPeriod) -> int:
    """Number of pay periods per year for a label."""
    return resolve_pay_period(pay_period).periods_per_year


def annualize(
    period_amount: Decimal, pay_period: str | PayPeriod, legacy: bool = False
) -> Decimal:
    """Annual equivalent of a per-period amount.

    With ``legacy`` the amount is scaled by ``12 / periods`` instead of by
    the number of periods.
    """
    periods = period_multiplier(pay_period)
    if legacy:
        return period_amount * MONTHS_PER_YEAR / periods
    return period_amount * periods


def deannualize(
    annual_amount: Decimal, pay_period: str | PayPeriod, legacy: bool = False
) -> Decimal:
    """Per-period share of an annual amount; the inverse of ``annualize``."""
    periods = period_multiplier(pay_period)
    if legacy:
        return annual_amount / MONTHS_PER_YEAR * periods
    return annual_amount / periods
