"""ORM model for customers that invoices are issued to."""

from sqlalchemy import Column, Integer, String

from invoice_registry.models.base import Base


class Customer(Base):
    """Customer record; vat_number is the natural key."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(32), nullable=False)
    phone = Column(String(10), nullable=True)
    email = Column(String(255), nullable=True)
    vat_number = Column(String(9), nullable=False, unique=True, index=True)
