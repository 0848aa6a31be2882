from tinycrm.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from tinycrm.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from tinycrm.schemas.remit import (
    RemitInformationIn,
    RemitInformationLineIn,
    RemitInformationResponse,
    RemitInformationLineResponse,
)
from tinycrm.schemas.invoice import InvoiceIn, InvoiceLineIn, InvoiceResponse, InvoiceLineResponse

__all__ = [
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "RemitInformationIn",
    "RemitInformationLineIn",
    "RemitInformationResponse",
    "RemitInformationLineResponse",
    "InvoiceIn",
    "InvoiceLineIn",
    "InvoiceResponse",
    "InvoiceLineResponse",
]
