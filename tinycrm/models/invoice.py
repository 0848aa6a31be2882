import uuid

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, Numeric, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from tinycrm.database import Base
from tinycrm.services import invoice_math


class Invoice(Base):
    """Invoice issued by one company to a client.

    Totals are never stored; they are derived from the lines and the
    current product prices every time they are read.
    """

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(Uuid, default=uuid.uuid4, nullable=False, unique=True)
    number = Column(Integer, default=0)
    additional_information = Column(Text)

    discount = Column(Numeric(10, 2), default=0, nullable=False)
    penalty = Column(Numeric(10, 2), default=0, nullable=False)
    paid = Column(Boolean, default=False, nullable=False)

    # Dates
    issue_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)

    remit_information_id = Column(
        Integer, ForeignKey("remit_information.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Relationships
    remit_information = relationship("RemitInformation")
    company = relationship("Company", foreign_keys=[company_id])
    client = relationship("Company", foreign_keys=[client_id])
    invoice_lines = relationship(
        "InvoiceLine",
        back_populates="invoice",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="InvoiceLine.id",
    )

    def __repr__(self):
        return f"<Invoice {self.id} ({self.uuid})>"

    @property
    def subtotal(self):
        return invoice_math.subtotal(self)

    @property
    def total(self):
        return invoice_math.total(self)

    @property
    def identification(self) -> str:
        return invoice_math.identification(self)

    @property
    def display_name(self) -> str:
        return invoice_math.display_name(self)

    @property
    def due_month(self) -> str:
        return invoice_math.due_month_label(self)


class InvoiceLine(Base):
    __tablename__ = "invoice_lines"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)
    quantity = Column(Integer, default=1, nullable=False)
    description = Column(String(255))

    invoice = relationship("Invoice", back_populates="invoice_lines")
    product = relationship("Product")

    def __repr__(self):
        return f"<InvoiceLine {self.id}: product {self.product_id} x{self.quantity}>"

    @property
    def total(self):
        return invoice_math.line_total(self)
