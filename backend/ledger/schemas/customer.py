from datetime import datetime

from pydantic import Field

from ledger.schemas.common import CamelModel


class CustomerWrite(CamelModel):
    name: str = Field("", max_length=200)
    contact: str = Field("", max_length=100)
    phone: str = Field("", max_length=50)


class CustomerResponse(CamelModel):
    id: str
    name: str
    contact: str
    phone: str
    created_at: datetime
