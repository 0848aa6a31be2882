from pydantic import BaseModel, Field


class CompanyBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    document: str = Field(..., min_length=1, max_length=30)
    address: str = Field(..., min_length=1)


class CompanyCreate(CompanyBase):
    pass


class CompanyUpdate(CompanyBase):
    """Full replacement: every field is required."""
    pass


class CompanyResponse(CompanyBase):
    id: int

    model_config = {"from_attributes": True}
