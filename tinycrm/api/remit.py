"""Remit (bank) information endpoints."""

from fastapi import APIRouter, status, Response

from tinycrm.api.deps import Repo, CurrentUser, RemitId
from tinycrm.schemas.remit import RemitInformationIn, RemitInformationResponse
from tinycrm.schemas.errors import COLLECTION_RESPONSES, RECORD_RESPONSES

router = APIRouter()


@router.get("", response_model=list[RemitInformationResponse], responses=COLLECTION_RESPONSES)
async def list_remit_information(repo: Repo, current_user: CurrentUser):
    """List remit information records with their lines."""
    return await repo.list_remit_information()


@router.post(
    "",
    response_model=RemitInformationResponse,
    status_code=status.HTTP_201_CREATED,
    responses=COLLECTION_RESPONSES,
)
async def create_remit_information(body: RemitInformationIn, repo: Repo, current_user: CurrentUser):
    return await repo.create_remit_information(body)


@router.get("/{remit_id}", response_model=RemitInformationResponse, responses=RECORD_RESPONSES)
async def get_remit_information(remit_id: RemitId, repo: Repo, current_user: CurrentUser):
    return await repo.get_remit_information(remit_id)


@router.put("/{remit_id}", response_model=RemitInformationResponse, responses=RECORD_RESPONSES)
async def update_remit_information(
    remit_id: RemitId,
    body: RemitInformationIn,
    repo: Repo,
    current_user: CurrentUser,
):
    """Replace the name and the whole line set."""
    return await repo.update_remit_information(remit_id, body)


@router.delete(
    "/{remit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=RECORD_RESPONSES,
)
async def delete_remit_information(remit_id: RemitId, repo: Repo, current_user: CurrentUser):
    """Delete a record and all of its lines."""
    await repo.delete_remit_information(remit_id)
