"""Request/response schemas for customer endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 32
PHONE_PATTERN = r"^\d{10}$"
VAT_NUMBER_PATTERN = r"^\d{9}$"


class CustomerIn(BaseModel):
    """Customer fields accepted on create and update."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN, description="10 digits")
    email: EmailStr | None = None
    vat_number: str = Field(
        ..., alias="vatNumber", pattern=VAT_NUMBER_PATTERN, description="9-digit VAT number"
    )


class CustomerOut(BaseModel):
    """Customer as returned by the API."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    name: str
    phone: str | None = None
    email: str | None = None
    vat_number: str = Field(..., alias="vatNumber")
