"""Progressive bracket evaluation."""

from collections.abc import Iterable
from decimal import Decimal

from paytax.exceptions import BracketScheduleError
from paytax.models.tax_config import TaxBracket


def sort_schedule(brackets: Iterable[TaxBracket] | None) -> list[TaxBracket]:
    """Sort brackets by ``min_income`` and check that bands do not overlap.

    Raises:
        BracketScheduleError: two bands overlap, or a band ends before it
            starts.
    """
    ordered = sorted(brackets or [], key=lambda b: b.min_income)
    for lower, upper in zip(ordered, ordered[1:]):
        if lower.max_income is None:
            raise BracketScheduleError(
                f"unbounded band starting at {lower.min_income} is followed by "
                f"a band starting at {upper.min_income}"
            )
        if upper.min_income < lower.max_income:
            raise BracketScheduleError(
                f"band {lower.min_income}-{lower.max_income} overlaps band "
                f"starting at {upper.min_income}"
            )
    for bracket in ordered:
        if bracket.max_income is not None and bracket.max_income < bracket.min_income:
            raise BracketScheduleError(
                f"band {bracket.min_income}-{bracket.max_income} is inverted"
            )
    return ordered


def evaluate_brackets(
    brackets: Iterable[TaxBracket] | None, annual_income: Decimal
) -> Decimal:
    """Apply a progressive bracket schedule to an annual income.

    Income fills the bands in ascending order. A band is skipped when the
    income does not exceed its floor. Each band reached contributes
    ``taxable × rate / 100`` plus its fixed amount in full.
    """
    tax = Decimal("0")
    remaining = annual_income

    for bracket in sort_schedule(brackets):
        if remaining <= 0:
            break
        if annual_income <= bracket.min_income:
            continue

        width = bracket.width
        taxable_in_bracket = remaining if width is None else min(remaining, width)

        if bracket.tax_rate > 0:
            tax += taxable_in_bracket * bracket.tax_rate / 100
        if bracket.fixed_amount:
            tax += bracket.fixed_amount

        remaining -= taxable_in_bracket

    return tax
