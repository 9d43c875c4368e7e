from pydantic import BaseModel, Field

from ledger.schemas.common import CamelModel


class LoginRequest(BaseModel):
    # No length limits here: every bad login must fail the same way (401).
    username: str
    password: str


class AccountResponse(BaseModel):
    id: int
    username: str

    model_config = {"from_attributes": True}


class CredentialsUpdate(CamelModel):
    username: str = Field(..., min_length=1, max_length=100)
    new_password: str = Field(..., min_length=1, max_length=100)
    # Only checked when REQUIRE_CURRENT_PASSWORD is on.
    current_password: str | None = None


class CredentialsResponse(BaseModel):
    username: str
