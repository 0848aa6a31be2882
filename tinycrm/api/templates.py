from fastapi import APIRouter

from tinycrm.api.deps import Renderer, CurrentUser
from tinycrm.schemas.errors import COLLECTION_RESPONSES

router = APIRouter()


@router.get("/list_invoice_templates", response_model=list[str], responses=COLLECTION_RESPONSES)
async def list_invoice_templates(renderer: Renderer, current_user: CurrentUser):
    """Names of the templates usable with ``/invoices/{id}/open``."""
    return renderer.list_templates()
