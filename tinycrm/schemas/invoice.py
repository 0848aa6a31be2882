from pydantic import BaseModel, Field
from decimal import Decimal
from typing import Optional
from uuid import UUID

from tinycrm.schemas.types import Money, NonNegativeMoney, UTCDateTime
from tinycrm.schemas.company import CompanyResponse
from tinycrm.schemas.product import ProductResponse
from tinycrm.schemas.remit import RemitInformationResponse


class InvoiceLineIn(BaseModel):
    """Invoice line as submitted."""
    product_id: int
    quantity: int = Field(1, ge=1)
    description: Optional[str] = Field(None, max_length=255)


class InvoiceIn(BaseModel):
    """Create/update body.

    Updates are full replacements: the submitted ``invoice_lines`` become the
    invoice's only lines. Omitting ``uuid`` (or sending the all-zero UUID)
    keeps the existing identifier, or generates one on create.
    """
    uuid: Optional[UUID] = None
    number: Optional[int] = None
    additional_information: Optional[str] = None
    discount: NonNegativeMoney = Decimal("0")
    penalty: NonNegativeMoney = Decimal("0")
    paid: bool = False
    issue_date: Optional[UTCDateTime] = None
    due_date: UTCDateTime
    remit_information_id: int
    company_id: int
    client_id: int
    invoice_lines: list[InvoiceLineIn] = []


class InvoiceLineResponse(BaseModel):
    id: int
    invoice_id: int
    product_id: int
    product: ProductResponse
    quantity: int
    description: Optional[str] = None
    total: Money

    model_config = {"from_attributes": True}


class InvoiceResponse(BaseModel):
    """Fully resolved invoice aggregate with its derived values."""
    id: int
    uuid: UUID
    number: Optional[int] = None
    additional_information: Optional[str] = None
    discount: Money
    penalty: Money
    paid: bool
    issue_date: UTCDateTime
    due_date: UTCDateTime
    remit_information_id: int
    remit_information: RemitInformationResponse
    company_id: int
    company: CompanyResponse
    client_id: int
    client: CompanyResponse
    invoice_lines: list[InvoiceLineResponse] = []

    # Derived, recomputed on every read
    subtotal: Money
    total: Money
    identification: str
    display_name: str
    due_month: str

    model_config = {"from_attributes": True}
