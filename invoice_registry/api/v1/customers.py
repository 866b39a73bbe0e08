"""Customer CRUD; any user or admin."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from invoice_registry.api.access import require_user_or_admin
from invoice_registry.api.errors import raise_for_failure
from invoice_registry.core.database import get_db
from invoice_registry.core.errors import Failure
from invoice_registry.schemas.customer import CustomerIn, CustomerOut
from invoice_registry.services import customers as customer_service

router = APIRouter(dependencies=[Depends(require_user_or_admin)])


@router.get("", response_model=list[CustomerOut])
def list_customers(db: Annotated[Session, Depends(get_db)]) -> list[CustomerOut]:
    return [CustomerOut.model_validate(c) for c in customer_service.list_customers(db)]


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int, db: Annotated[Session, Depends(get_db)]) -> CustomerOut:
    result = customer_service.get_customer(db, customer_id)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return CustomerOut.model_validate(result)


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(body: CustomerIn, db: Annotated[Session, Depends(get_db)]) -> CustomerOut:
    """Create a customer. 409 if the VAT number is already registered."""
    result = customer_service.create_customer(db, body)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return CustomerOut.model_validate(result)


@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: int,
    body: CustomerIn,
    db: Annotated[Session, Depends(get_db)],
) -> CustomerOut:
    result = customer_service.update_customer(db, customer_id, body)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return CustomerOut.model_validate(result)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: int, db: Annotated[Session, Depends(get_db)]) -> Response:
    """Delete a customer. 409 while invoices still reference it."""
    failure = customer_service.delete_customer(db, customer_id)
    if failure is not None:
        raise_for_failure(failure)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
