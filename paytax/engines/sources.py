"""Read accessors the engine consumes for brackets and profiles."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from paytax.models.enums import TaxType
from paytax.models.tax_config import EmployeeTaxProfile, TaxBracket


class BracketSource(ABC):
    """Provides a jurisdiction's active brackets for one tax type."""

    @abstractmethod
    def get_active_brackets(
        self, country: str, tax_type: TaxType, as_of: date | None = None
    ) -> list[TaxBracket]:
        """Active brackets for ``(country, tax_type)``, ascending by ``min_income``.

        When ``as_of`` is given, only brackets effective on that date.
        """


class ProfileSource(ABC):
    """Provides at most one tax profile per employee."""

    @abstractmethod
    def get_profile(self, employee_id: str) -> EmployeeTaxProfile | None:
        """The employee's profile, or None when no tax setup exists."""


class BracketTable(BracketSource):
    """In-memory bracket source, optionally bound to one business."""

    def __init__(self, brackets: Iterable[TaxBracket] = (), business_id: str | None = None):
        self.brackets = list(brackets)
        self.business_id = business_id

    def get_active_brackets(
        self, country: str, tax_type: TaxType, as_of: date | None = None
    ) -> list[TaxBracket]:
        country = country.strip().upper()
        matches = [
            b
            for b in self.brackets
            if b.is_active
            and b.country == country
            and b.tax_type == tax_type
            and (self.business_id is None or b.business_id == self.business_id)
            and (as_of is None or b.is_effective(as_of))
        ]
        return sorted(matches, key=lambda b: b.min_income)


class ProfileDirectory(ProfileSource):
    """In-memory profile source keyed by employee id."""

    def __init__(self, profiles: Iterable[EmployeeTaxProfile] = ()):
        self.profiles = {p.employee_id: p for p in profiles}

    def get_profile(self, employee_id: str) -> EmployeeTaxProfile | None:
        return self.profiles.get(employee_id)
