from sqlalchemy import Column, Integer, String, Text
from tinycrm.database import Base


class Company(Base):
    """A business party: issues invoices, receives them, or both."""

    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    document = Column(String(30), nullable=False)  # tax ID
    address = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Company {self.id}: {self.name}>"
