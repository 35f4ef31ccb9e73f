# dashboard/models/invoices.py

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

InvoiceStatus = Literal["pending", "paid"]

# Largest amount whose cents still fit a signed 64-bit INTEGER column.
MAX_AMOUNT = Decimal("92233720368547758.07")


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceFields(BaseModel):
    """
    The mutable fields of an invoice, as submitted by the invoice form.

    Field names follow the form (``customerId``); ``amount`` is in whole
    currency units and is coerced from its string form.
    """

    customer_id: str = Field(alias="customerId", min_length=1)
    amount: Decimal = Field(gt=0, le=MAX_AMOUNT, allow_inf_nan=False)
    status: InvoiceStatus

    class Config:
        populate_by_name = True
        frozen = True

    @field_validator("amount")
    @classmethod
    def amount_at_least_one_cent(cls, value: Decimal) -> Decimal:
        if to_cents(value) < 1:
            raise ValueError("amount rounds to less than one cent")
        return value

    @property
    def amount_in_cents(self) -> int:
        return to_cents(self.amount)


class FormState(BaseModel):
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    message: Optional[str] = None


class InvoiceOut(BaseModel):
    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: date

    class Config:
        from_attributes = True


class InvoiceListItem(BaseModel):
    id: str
    customer_id: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    amount: int
    status: InvoiceStatus
    date: date


class InvoiceListResponse(BaseModel):
    items: List[InvoiceListItem]
    total: int
