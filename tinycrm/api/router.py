from fastapi import APIRouter
from tinycrm.api import (
    auth,
    companies,
    products,
    remit,
    invoices,
    templates,
)

api_router = APIRouter()

api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(remit.router, prefix="/remit", tags=["remit"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(templates.router, tags=["invoices"])
api_router.include_router(auth.router, tags=["auth"])
