"""Invoice CRUD: reads for users and admins, writes for admins only."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from invoice_registry.api.access import require_admin, require_user_or_admin
from invoice_registry.api.errors import raise_for_failure
from invoice_registry.core.database import get_db
from invoice_registry.core.errors import Failure
from invoice_registry.schemas.invoice import InvoiceIn, InvoiceOut
from invoice_registry.services import invoices as invoice_service

router = APIRouter()


@router.get("", response_model=list[InvoiceOut], dependencies=[Depends(require_user_or_admin)])
def list_invoices(db: Annotated[Session, Depends(get_db)]) -> list[InvoiceOut]:
    return [InvoiceOut.model_validate(i) for i in invoice_service.list_invoices(db)]


@router.get(
    "/{invoice_id}", response_model=InvoiceOut, dependencies=[Depends(require_user_or_admin)]
)
def get_invoice(invoice_id: int, db: Annotated[Session, Depends(get_db)]) -> InvoiceOut:
    result = invoice_service.get_invoice(db, invoice_id)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return InvoiceOut.model_validate(result)


@router.post(
    "",
    response_model=InvoiceOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_invoice(body: InvoiceIn, db: Annotated[Session, Depends(get_db)]) -> InvoiceOut:
    """
    Create an invoice for an existing customer (admin only).
    409 if the invoice number exists; 404 if the customer does not.
    """
    result = invoice_service.create_invoice(db, body)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return InvoiceOut.model_validate(result)


@router.put("/{invoice_id}", response_model=InvoiceOut, dependencies=[Depends(require_admin)])
def update_invoice(
    invoice_id: int,
    body: InvoiceIn,
    db: Annotated[Session, Depends(get_db)],
) -> InvoiceOut:
    result = invoice_service.update_invoice(db, invoice_id, body)
    if isinstance(result, Failure):
        raise_for_failure(result)
    return InvoiceOut.model_validate(result)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_invoice(invoice_id: int, db: Annotated[Session, Depends(get_db)]) -> Response:
    failure = invoice_service.delete_invoice(db, invoice_id)
    if failure is not None:
        raise_for_failure(failure)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
