"""ORM model for invoices."""

from sqlalchemy import Column, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from invoice_registry.models.base import Base


class Invoice(Base):
    """
    Invoice issued to a customer.

    number is unique. date is stored as the ISO string (YYYY-MM-DD) it was
    submitted with. A customer cannot be deleted while invoices reference it.
    """

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    number = Column(String(11), nullable=False, unique=True, index=True)
    date = Column(String(10), nullable=True)
    status = Column(String(32), nullable=True)
    description = Column(Text, nullable=True)
    total_amount = Column(Numeric(12, 2), nullable=True)
    customer_id = Column(
        Integer,
        ForeignKey("customers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    customer = relationship("Customer")
