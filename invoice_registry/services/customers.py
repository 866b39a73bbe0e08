"""Customer records: create, read, update, delete."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from invoice_registry.core.errors import ErrorKind, Failure
from invoice_registry.models import Customer, Invoice
from invoice_registry.schemas.customer import CustomerIn

logger = logging.getLogger(__name__)


def _not_found(customer_id: int) -> Failure:
    return Failure(ErrorKind.NOT_FOUND, f"Customer with id {customer_id} not found")


def _vat_taken(db: Session, vat_number: str, exclude_id: int | None = None) -> bool:
    query = db.query(Customer.id).filter(Customer.vat_number == vat_number)
    if exclude_id is not None:
        query = query.filter(Customer.id != exclude_id)
    return query.first() is not None


def _commit(db: Session, vat_number: str) -> Failure | None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return Failure(ErrorKind.ALREADY_EXISTS, f"Customer with VAT number {vat_number} already exists")
    return None


def list_customers(db: Session) -> list[Customer]:
    return db.query(Customer).order_by(Customer.id).all()


def get_customer(db: Session, customer_id: int) -> Customer | Failure:
    customer = db.get(Customer, customer_id)
    if customer is None:
        return _not_found(customer_id)
    return customer


def create_customer(db: Session, data: CustomerIn) -> Customer | Failure:
    """Insert a customer; ALREADY_EXISTS if the VAT number is taken."""
    if _vat_taken(db, data.vat_number):
        return Failure(
            ErrorKind.ALREADY_EXISTS, f"Customer with VAT number {data.vat_number} already exists"
        )
    customer = Customer(
        name=data.name,
        phone=data.phone,
        email=data.email,
        vat_number=data.vat_number,
    )
    db.add(customer)
    failure = _commit(db, data.vat_number)
    if failure is not None:
        return failure
    db.refresh(customer)
    logger.info("Customer inserted", extra={"customer_id": customer.id})
    return customer


def update_customer(db: Session, customer_id: int, data: CustomerIn) -> Customer | Failure:
    """Replace a customer's fields; NOT_FOUND or ALREADY_EXISTS (VAT number of another customer)."""
    customer = db.get(Customer, customer_id)
    if customer is None:
        return _not_found(customer_id)
    if _vat_taken(db, data.vat_number, exclude_id=customer_id):
        return Failure(
            ErrorKind.ALREADY_EXISTS, f"Customer with VAT number {data.vat_number} already exists"
        )
    customer.name = data.name
    customer.phone = data.phone
    customer.email = data.email
    customer.vat_number = data.vat_number
    failure = _commit(db, data.vat_number)
    if failure is not None:
        return failure
    db.refresh(customer)
    logger.info("Customer updated", extra={"customer_id": customer_id})
    return customer


def delete_customer(db: Session, customer_id: int) -> Failure | None:
    """Delete a customer; CONFLICT while any invoice references it."""
    customer = db.get(Customer, customer_id)
    if customer is None:
        return _not_found(customer_id)
    invoice_count = db.query(Invoice.id).filter(Invoice.customer_id == customer_id).count()
    if invoice_count > 0:
        logger.warning(
            "Cannot delete customer with existing invoices",
            extra={"customer_id": customer_id, "invoice_count": invoice_count},
        )
        return Failure(ErrorKind.CONFLICT, "Customer has existing invoices")
    db.delete(customer)
    db.commit()
    logger.info("Customer deleted", extra={"customer_id": customer_id})
    return None
