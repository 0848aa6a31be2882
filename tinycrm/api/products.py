"""Product CRUD endpoints."""

from fastapi import APIRouter, status, Response

from tinycrm.api.deps import Repo, CurrentUser, ProductId
from tinycrm.schemas.product import ProductCreate, ProductUpdate, ProductResponse
from tinycrm.schemas.errors import COLLECTION_RESPONSES, RECORD_RESPONSES

router = APIRouter()


@router.get("", response_model=list[ProductResponse], responses=COLLECTION_RESPONSES)
async def list_products(repo: Repo, current_user: CurrentUser):
    return await repo.list_products()


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses=COLLECTION_RESPONSES,
)
async def create_product(body: ProductCreate, repo: Repo, current_user: CurrentUser):
    return await repo.create_product(body)


@router.get("/{product_id}", response_model=ProductResponse, responses=RECORD_RESPONSES)
async def get_product(product_id: ProductId, repo: Repo, current_user: CurrentUser):
    return await repo.get_product(product_id)


@router.put("/{product_id}", response_model=ProductResponse, responses=RECORD_RESPONSES)
async def update_product(
    product_id: ProductId,
    body: ProductUpdate,
    repo: Repo,
    current_user: CurrentUser,
):
    return await repo.update_product(product_id, body)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=RECORD_RESPONSES,
)
async def delete_product(product_id: ProductId, repo: Repo, current_user: CurrentUser):
    """Delete a product. Refused while any invoice line uses it."""
    await repo.delete_product(product_id)
