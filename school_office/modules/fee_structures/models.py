from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from school_office.core.store.base import Record
from school_office.shared.utils.money import sum_money


class FeeItem(BaseModel):
    """One fee line of a fee structure."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: str  # FeeCategory value
    description: str
    amount: Decimal
    is_optional: bool = False


class FeeStructure(Record):
    """
    Template of fee lines for one class in one term of an academic year.

    Used to seed invoices. Deactivated structures stay listed as historical.
    """

    academic_year: str
    class_name: str
    term: str
    fees: list[FeeItem] = Field(default_factory=list)
    is_active: bool = True
    created_date: date = Field(default_factory=date.today)

    @property
    def total_amount(self) -> Decimal:
        return sum_money(fee.amount for fee in self.fees)

    @property
    def mandatory_amount(self) -> Decimal:
        return sum_money(fee.amount for fee in self.fees if not fee.is_optional)
