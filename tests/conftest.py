"""Shared test fixtures for PayTax."""

from datetime import date
from decimal import Decimal

import pytest

from paytax.models.config import TaxEngineConfig
from paytax.models.enums import TaxType
from paytax.models.tax_config import EmployeeTaxProfile, TaxBracket


def make_bracket(
    tax_type: TaxType,
    min_income: str,
    max_income: str | None,
    rate: str,
    fixed: str | None = None,
    country: str = "US",
    **kwargs,
) -> TaxBracket:
    return TaxBracket(
        country=country,
        tax_type=tax_type,
        min_income=Decimal(min_income),
        max_income=Decimal(max_income) if max_income is not None else None,
        tax_rate=Decimal(rate),
        fixed_amount=Decimal(fixed) if fixed is not None else None,
        effective_date=kwargs.pop("effective_date", date(2024, 1, 1)),
        **kwargs,
    )


@pytest.fixture
def config() -> TaxEngineConfig:
    return TaxEngineConfig()


@pytest.fixture
def single_profile() -> EmployeeTaxProfile:
    return EmployeeTaxProfile(
        employee_id="emp-001",
        country="US",
        filing_status="single",
        allowances=0,
        additional_withholding=Decimal("0"),
    )


@pytest.fixture
def flat_federal_bracket() -> TaxBracket:
    """One 22% federal band covering $0 to $1M."""
    return make_bracket(TaxType.FEDERAL, "0", "1000000", "22", "0")


@pytest.fixture
def progressive_federal_brackets() -> list[TaxBracket]:
    """2024 single-filer schedule expressed as contiguous bands."""
    return [
        make_bracket(TaxType.FEDERAL, "0", "11600", "10"),
        make_bracket(TaxType.FEDERAL, "11600", "47150", "12"),
        make_bracket(TaxType.FEDERAL, "47150", "100525", "22"),
        make_bracket(TaxType.FEDERAL, "100525", "191950", "24"),
        make_bracket(TaxType.FEDERAL, "191950", "243725", "32"),
        make_bracket(TaxType.FEDERAL, "243725", "609350", "35"),
        make_bracket(TaxType.FEDERAL, "609350", None, "37"),
    ]


@pytest.fixture
def state_brackets() -> list[TaxBracket]:
    return [
        make_bracket(TaxType.STATE, "0", "50000", "4"),
        make_bracket(TaxType.STATE, "50000", None, "6"),
    ]


@pytest.fixture
def local_brackets() -> list[TaxBracket]:
    return [make_bracket(TaxType.LOCAL, "0", None, "1")]


@pytest.fixture
def bracket_factory():
    return make_bracket
