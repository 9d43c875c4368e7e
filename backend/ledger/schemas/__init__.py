from ledger.schemas.account import (
    AccountResponse,
    CredentialsResponse,
    CredentialsUpdate,
    LoginRequest,
)
from ledger.schemas.common import CamelModel, ErrorResponse, SuccessResponse
from ledger.schemas.customer import CustomerResponse, CustomerWrite
from ledger.schemas.payment import (
    IntegrityReport,
    PaymentCreate,
    PaymentResponse,
    PaymentUpdate,
    VerifyRequest,
)
from ledger.schemas.sheet import SheetLoadResponse, SheetSaveRequest

__all__ = [
    "AccountResponse",
    "CredentialsResponse",
    "CredentialsUpdate",
    "LoginRequest",
    "CamelModel",
    "ErrorResponse",
    "SuccessResponse",
    "CustomerResponse",
    "CustomerWrite",
    "IntegrityReport",
    "PaymentCreate",
    "PaymentResponse",
    "PaymentUpdate",
    "VerifyRequest",
    "SheetLoadResponse",
    "SheetSaveRequest",
]
