"""Persisted dashboard state: quote requests, reservations and portfolio.

The whole state is a single JSON document stored under ``settings.STORAGE_KEY``.
Writers always replace the document; readers get a fresh dict each time.
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from gtraf_admin.core.config import settings
from gtraf_admin.models.state import DashboardState

logger = logging.getLogger(__name__)

STATE_SECTIONS = ("devis", "reservations", "portfolio")


def empty_state() -> dict:
    return {section: [] for section in STATE_SECTIONS}


async def _get_row(db: AsyncSession) -> Optional[DashboardState]:
    res = await db.execute(select(DashboardState).where(DashboardState.key == settings.STORAGE_KEY))
    return res.scalars().first()


async def load_state(db: AsyncSession) -> dict:
    row = await _get_row(db)
    if row is None:
        return empty_state()

    try:
        data = json.loads(row.payload)
    except ValueError as e:
        logger.error(f"Stored dashboard state is unreadable, starting empty: {e}")
        return empty_state()

    if not isinstance(data, dict):
        logger.error("Stored dashboard state is not an object, starting empty")
        return empty_state()

    for section in STATE_SECTIONS:
        if not isinstance(data.get(section), list):
            data[section] = []
    return data


async def save_state(db: AsyncSession, data: dict) -> dict:
    payload = json.dumps(data, ensure_ascii=False, default=str)
    row = await _get_row(db)
    if row is None:
        row = DashboardState(key=settings.STORAGE_KEY, payload=payload)
    else:
        row.payload = payload
    db.add(row)
    await db.commit()
    return data


async def save_section(db: AsyncSession, section: str, records: list) -> dict:
    """Replace one section, e.g. with the last records fetched upstream."""
    data = await load_state(db)
    return await save_state(db, {**data, section: list(records)})


async def import_state(db: AsyncSession, imported: dict) -> dict:
    """Merge top-level sections of an exported document over the current state."""
    current = await load_state(db)
    return await save_state(db, {**current, **imported})


async def reset_state(db: AsyncSession) -> dict:
    return await save_state(db, empty_state())


def state_counts(data: dict) -> dict:
    return {
        section: len(data[section]) if isinstance(data.get(section), list) else 0
        for section in STATE_SECTIONS
    }


async def list_portfolio(db: AsyncSession) -> list:
    data = await load_state(db)
    return data["portfolio"]


async def get_portfolio_item(db: AsyncSession, item_id: str) -> Optional[dict]:
    for item in await list_portfolio(db):
        if item.get("id") == item_id:
            return item
    return None


async def add_portfolio_item(db: AsyncSession, values: dict) -> dict:
    data = await load_state(db)
    item = {
        **values,
        "id": uuid.uuid4().hex,
        "date_creation": datetime.now(timezone.utc).isoformat(),
    }
    await save_state(db, {**data, "portfolio": [*data["portfolio"], item]})
    return item


async def update_portfolio_item(db: AsyncSession, item_id: str, values: dict) -> Optional[dict]:
    data = await load_state(db)
    updated = None
    items = []
    for item in data["portfolio"]:
        if item.get("id") == item_id:
            updated = {**values, "id": item_id, "date_creation": item.get("date_creation")}
            items.append(updated)
        else:
            items.append(item)

    if updated is not None:
        await save_state(db, {**data, "portfolio": items})
    return updated


async def delete_portfolio_item(db: AsyncSession, item_id: str) -> bool:
    data = await load_state(db)
    items = [item for item in data["portfolio"] if item.get("id") != item_id]
    if len(items) == len(data["portfolio"]):
        return False
    await save_state(db, {**data, "portfolio": items})
    return True
