"""Company CRUD endpoints."""

from fastapi import APIRouter, status, Response

from tinycrm.api.deps import Repo, CurrentUser, CompanyId
from tinycrm.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from tinycrm.schemas.errors import COLLECTION_RESPONSES, RECORD_RESPONSES

router = APIRouter()


@router.get("", response_model=list[CompanyResponse], responses=COLLECTION_RESPONSES)
async def list_companies(repo: Repo, current_user: CurrentUser):
    """List all companies."""
    return await repo.list_companies()


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    responses=COLLECTION_RESPONSES,
)
async def create_company(body: CompanyCreate, repo: Repo, current_user: CurrentUser):
    return await repo.create_company(body)


@router.get("/{company_id}", response_model=CompanyResponse, responses=RECORD_RESPONSES)
async def get_company(company_id: CompanyId, repo: Repo, current_user: CurrentUser):
    return await repo.get_company(company_id)


@router.put("/{company_id}", response_model=CompanyResponse, responses=RECORD_RESPONSES)
async def update_company(
    company_id: CompanyId,
    body: CompanyUpdate,
    repo: Repo,
    current_user: CurrentUser,
):
    """Replace every field of a company."""
    return await repo.update_company(company_id, body)


@router.delete(
    "/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=RECORD_RESPONSES,
)
async def delete_company(company_id: CompanyId, repo: Repo, current_user: CurrentUser):
    """Delete a company. Refused while any invoice references it."""
    await repo.delete_company(company_id)
