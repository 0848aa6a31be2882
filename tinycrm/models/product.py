from sqlalchemy import Column, Integer, String, Text, Numeric
from tinycrm.database import Base


class Product(Base):
    """A billable product or service with a unit price."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)

    def __repr__(self):
        return f"<Product {self.id}: {self.name} ${self.price}>"
