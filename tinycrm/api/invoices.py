from fastapi import APIRouter, status, Response, Query
from fastapi.responses import HTMLResponse
from typing import Optional
import logging

from tinycrm.api.deps import Repo, Renderer, CurrentUser, InvoiceId
from tinycrm.exceptions import BadRequestError
from tinycrm.schemas.invoice import InvoiceIn, InvoiceResponse
from tinycrm.schemas.errors import COLLECTION_RESPONSES, RECORD_RESPONSES

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=list[InvoiceResponse], responses=COLLECTION_RESPONSES)
async def list_invoices(repo: Repo, current_user: CurrentUser):
    """List invoices, each fully resolved (lines, products, remit, companies)."""
    return await repo.list_invoices()


@router.post(
    "",
    response_model=InvoiceResponse,
    status_code=status.HTTP_201_CREATED,
    responses=COLLECTION_RESPONSES,
)
async def create_invoice(body: InvoiceIn, repo: Repo, current_user: CurrentUser):
    """Create an invoice and its lines; returns the re-read aggregate."""
    return await repo.create_invoice(body)


@router.get("/{invoice_id}", response_model=InvoiceResponse, responses=RECORD_RESPONSES)
async def get_invoice(invoice_id: InvoiceId, repo: Repo, current_user: CurrentUser):
    return await repo.get_invoice(invoice_id)


@router.put("/{invoice_id}", response_model=InvoiceResponse, responses=RECORD_RESPONSES)
async def update_invoice(
    invoice_id: InvoiceId,
    body: InvoiceIn,
    repo: Repo,
    current_user: CurrentUser,
):
    """Replace every field; the submitted lines become the only lines."""
    return await repo.update_invoice(invoice_id, body)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=RECORD_RESPONSES,
)
async def delete_invoice(invoice_id: InvoiceId, repo: Repo, current_user: CurrentUser):
    await repo.delete_invoice(invoice_id)


@router.get(
    "/{invoice_id}/open",
    response_class=HTMLResponse,
    responses=RECORD_RESPONSES,
)
async def open_invoice(
    invoice_id: InvoiceId,
    repo: Repo,
    renderer: Renderer,
    current_user: CurrentUser,
    template: Optional[str] = Query(None, description="Template file name"),
):
    """Render an invoice through one of the HTML templates."""
    if not template:
        raise BadRequestError("template query parameter is required")
    invoice = await repo.get_invoice(invoice_id)
    html = renderer.render(invoice, template)
    logger.info("Rendered invoice %s with template %s", invoice_id, template)
    return HTMLResponse(html)
