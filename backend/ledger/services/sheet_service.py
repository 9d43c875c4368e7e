import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ledger.config import settings
from ledger.database import store_errors
from ledger.models.sheet_data import SheetData

logger = logging.getLogger(__name__)


async def save_sheet(db: AsyncSession, document: Any) -> None:
    """Replace the stored sheet document wholesale. Last writer wins."""
    payload = json.dumps(document, ensure_ascii=False)
    now = datetime.now(timezone.utc)

    async with store_errors(db, "Failed to save sheet data"):
        sheet = await db.get(SheetData, settings.SHEET_SLOT_ID)
        if sheet is None:
            sheet = SheetData(id=settings.SHEET_SLOT_ID, data=payload, updated_at=now)
            db.add(sheet)
        else:
            sheet.data = payload
            sheet.updated_at = now
        await db.commit()

    logger.info("Sheet data saved (%d bytes)", len(payload))


async def load_sheet(db: AsyncSession) -> Any | None:
    """Return the stored document, or None if nothing usable is stored.

    A payload that is not valid JSON is treated as empty so the client can
    start a fresh sheet.
    """
    async with store_errors(db, "Failed to load sheet data"):
        sheet = await db.get(SheetData, settings.SHEET_SLOT_ID)
    if sheet is None:
        return None
    try:
        return json.loads(sheet.data)
    except (TypeError, ValueError):
        logger.warning("Stored sheet data is not valid JSON; returning no data")
        return None
