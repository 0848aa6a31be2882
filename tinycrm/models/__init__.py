from tinycrm.models.company import Company
from tinycrm.models.product import Product
from tinycrm.models.remit import RemitInformation, RemitInformationLine
from tinycrm.models.invoice import Invoice, InvoiceLine
from tinycrm.models.user import User

__all__ = [
    "Company",
    "Product",
    "RemitInformation",
    "RemitInformationLine",
    "Invoice",
    "InvoiceLine",
    "User",
]
