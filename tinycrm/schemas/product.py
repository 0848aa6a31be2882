from pydantic import BaseModel, Field
from typing import Optional

from tinycrm.schemas.types import NonNegativeMoney


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: NonNegativeMoney


class ProductCreate(ProductBase):
    pass


class ProductUpdate(ProductBase):
    pass


class ProductResponse(ProductBase):
    id: int

    model_config = {"from_attributes": True}
