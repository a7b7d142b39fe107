"""Engine output models."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from paytax.models.enums import TaxType

ZERO = Decimal("0.00")

LINE_ITEM_LABELS: dict[TaxType, tuple[str, str]] = {
    TaxType.FEDERAL: ("Federal Tax", "Federal income tax"),
    TaxType.STATE: ("State Tax", "State income tax"),
    TaxType.LOCAL: ("Local Tax", "Local income tax"),
    TaxType.SOCIAL_SECURITY: ("Social Security Tax", "Social Security tax"),
    TaxType.MEDICARE: ("Medicare Tax", "Medicare tax"),
}


class TaxLineItem(BaseModel):
    """A tax deduction line as attached to a payroll record."""

    model_config = ConfigDict(frozen=True)

    tax_type: TaxType
    name: str
    description: str
    amount: Decimal


class TaxResult(BaseModel):
    """Per-period withholding for one employee, rounded to cents."""

    model_config = ConfigDict(frozen=True)

    federal_tax: Decimal = Field(default=ZERO, ge=0)
    state_tax: Decimal = Field(default=ZERO, ge=0)
    local_tax: Decimal = Field(default=ZERO, ge=0)
    social_security_tax: Decimal = Field(default=ZERO, ge=0)
    medicare_tax: Decimal = Field(default=ZERO, ge=0)
    total_tax: Decimal = Field(default=ZERO, ge=0)

    @classmethod
    def zero(cls) -> "TaxResult":
        return cls()

    def amount_for(self, tax_type: TaxType) -> Decimal:
        return getattr(self, f"{tax_type.value}_tax")

    def line_items(self) -> list[TaxLineItem]:
        """Deduction lines for every non-zero component, in tax type order."""
        items = []
        for tax_type in TaxType:
            amount = self.amount_for(tax_type)
            if amount > 0:
                name, description = LINE_ITEM_LABELS[tax_type]
                items.append(
                    TaxLineItem(
                        tax_type=tax_type,
                        name=name,
                        description=description,
                        amount=amount,
                    )
                )
        return items
