from ledger.models.account import Account
from ledger.models.customer import Customer
from ledger.models.payment import Payment, PaymentStatus
from ledger.models.sheet_data import SheetData

__all__ = [
    "Account",
    "Customer",
    "Payment",
    "PaymentStatus",
    "SheetData",
]
