from typing import Any

from ledger.schemas.common import CamelModel


class SheetSaveRequest(CamelModel):
    sheet_data: Any = None


class SheetLoadResponse(CamelModel):
    data: Any = None
