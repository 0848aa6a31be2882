"""Remittance (bank) information printed on invoices.

A RemitInformation is a named, ordered list of key/value lines, e.g.
``bank: Banco do Brasil``, ``account: 12345-6``.
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from tinycrm.database import Base


class RemitInformation(Base):
    __tablename__ = "remit_information"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    lines = relationship(
        "RemitInformationLine",
        back_populates="remit_information",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RemitInformationLine.id",
    )

    def __repr__(self):
        return f"<RemitInformation {self.id}: {self.name}>"


class RemitInformationLine(Base):
    __tablename__ = "remit_information_lines"

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(255), nullable=False)
    value = Column(String(255), nullable=False)
    remit_information_id = Column(
        Integer,
        ForeignKey("remit_information.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    remit_information = relationship("RemitInformation", back_populates="lines")

    def __repr__(self):
        return f"<RemitInformationLine {self.key}={self.value}>"
