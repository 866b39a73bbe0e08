"""Invoice records: create, read, update, delete."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invoice_registry.core.errors import ErrorKind, Failure
from invoice_registry.models import Customer, Invoice
from invoice_registry.schemas.invoice import InvoiceIn

logger = logging.getLogger(__name__)


def _number_taken(db: Session, number: str, exclude_id: int | None = None) -> bool:
    query = db.query(Invoice.id).filter(Invoice.number == number)
    if exclude_id is not None:
        query = query.filter(Invoice.id != exclude_id)
    return query.first() is not None


def _already_exists(number: str) -> Failure:
    return Failure(ErrorKind.ALREADY_EXISTS, f"Invoice {number} already exists")


def _apply(invoice: Invoice, data: InvoiceIn) -> None:
    invoice.number = data.number
    invoice.date = data.date
    invoice.status = data.status
    invoice.description = data.description
    invoice.total_amount = data.total_amount
    invoice.customer_id = data.customer_id


def _save(db: Session, invoice: Invoice) -> Invoice | Failure:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return _already_exists(invoice.number)
    db.refresh(invoice)
    return invoice


def list_invoices(db: Session) -> list[Invoice]:
    return db.query(Invoice).order_by(Invoice.id).all()


def get_invoice(db: Session, invoice_id: int) -> Invoice | Failure:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        return Failure(ErrorKind.NOT_FOUND, f"Invoice with id {invoice_id} not found")
    return invoice


def create_invoice(db: Session, data: InvoiceIn) -> Invoice | Failure:
    """Insert an invoice; ALREADY_EXISTS on a duplicate number, NOT_FOUND if the customer is missing."""
    if _number_taken(db, data.number):
        return _already_exists(data.number)
    if db.get(Customer, data.customer_id) is None:
        return Failure(ErrorKind.NOT_FOUND, f"Customer with id {data.customer_id} not found")
    invoice = Invoice()
    _apply(invoice, data)
    db.add(invoice)
    result = _save(db, invoice)
    if not isinstance(result, Failure):
        logger.info("Invoice inserted", extra={"invoice_id": result.id})
    return result


def update_invoice(db: Session, invoice_id: int, data: InvoiceIn) -> Invoice | Failure:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        return Failure(ErrorKind.NOT_FOUND, f"Invoice with id {invoice_id} not found")
    if db.get(Customer, data.customer_id) is None:
        return Failure(ErrorKind.NOT_FOUND, f"Customer with id {data.customer_id} not found")
    if _number_taken(db, data.number, exclude_id=invoice_id):
        return _already_exists(data.number)
    _apply(invoice, data)
    result = _save(db, invoice)
    if not isinstance(result, Failure):
        logger.info("Invoice updated", extra={"invoice_id": invoice_id})
    return result


def delete_invoice(db: Session, invoice_id: int) -> Failure | None:
    invoice = db.get(Invoice, invoice_id)
    if invoice is None:
        return Failure(ErrorKind.NOT_FOUND, f"Invoice with id {invoice_id} not found")
    db.delete(invoice)
    db.commit()
    logger.info("Invoice deleted", extra={"invoice_id": invoice_id})
    return None
