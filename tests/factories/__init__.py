"""
Test factories for generating realistic request payloads.

Uses factory_boy for declarative test data generation.
"""

from .company import CompanyFactory
from .product import ProductFactory
from .remit import RemitInformationFactory, RemitLineFactory
from .invoice import InvoiceFactory, InvoiceLineFactory

__all__ = [
    "CompanyFactory",
    "ProductFactory",
    "RemitInformationFactory",
    "RemitLineFactory",
    "InvoiceFactory",
    "InvoiceLineFactory",
]
