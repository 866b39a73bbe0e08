"""Request/response schemas for invoice endpoints."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

NUMBER_MAX_LENGTH = 11
STATUS_MAX_LENGTH = 32
DESCRIPTION_MAX_LENGTH = 2_000
# ISO 8601 calendar date, e.g. 2024-03-31
DATE_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])$"


def format_euro(amount: Decimal | None) -> str | None:
    """Render an amount as a Euro string with thousands separators, e.g. €1,234.56."""
    if amount is None:
        return None
    return f"€{amount:,.2f}"


class InvoiceIn(BaseModel):
    """Invoice fields accepted on create and update."""

    model_config = ConfigDict(populate_by_name=True)

    number: str = Field(..., min_length=1, max_length=NUMBER_MAX_LENGTH)
    date: str | None = Field(default=None, pattern=DATE_PATTERN, description="YYYY-MM-DD")
    status: str | None = Field(default=None, max_length=STATUS_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    total_amount: Decimal | None = Field(
        default=None, alias="totalAmount", ge=0, max_digits=12, decimal_places=2
    )
    customer_id: int = Field(..., alias="customerId", ge=1)


class InvoiceOut(BaseModel):
    """Invoice as returned by the API; totalAmount is a formatted Euro string."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    number: str
    date: str | None = None
    status: str | None = None
    description: str | None = None
    total_amount: Decimal | None = Field(default=None, alias="totalAmount")
    customer_id: int = Field(..., alias="customerId")

    @field_serializer("total_amount", when_used="json")
    def serialize_total_amount(self, value: Decimal | None) -> str | None:
        return format_euro(value)
