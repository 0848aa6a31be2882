"""Pydantic schemas for RemitInformation and its key/value lines."""

from pydantic import BaseModel, Field


class RemitInformationLineIn(BaseModel):
    """A line as submitted; ids and parent ids are assigned by the server."""
    key: str = Field(..., max_length=255)
    value: str = Field(..., max_length=255)


class RemitInformationIn(BaseModel):
    """Create/update body. On update the line set is replaced wholesale."""
    name: str = Field(..., min_length=1, max_length=255)
    lines: list[RemitInformationLineIn] = []


class RemitInformationLineResponse(BaseModel):
    id: int
    key: str
    value: str
    remit_information_id: int

    model_config = {"from_attributes": True}


class RemitInformationResponse(BaseModel):
    id: int
    name: str
    lines: list[RemitInformationLineResponse] = []

    model_config = {"from_attributes": True}
