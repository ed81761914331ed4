"""Home tab: headline counts and latest activity"""
import asyncio
from fastapi import APIRouter, Depends

from gtraf_admin.schemas.dashboard import StatsOut, RecentOut
from gtraf_admin.core.security import get_current_user
from gtraf_admin.core.config import settings
from gtraf_admin.core.response_builders import build_devis_record_list, build_reservation_record_list
from gtraf_admin.services.api_client import GtrafApiClient, get_api_client, CONTACT, RESERVATION, PORTFOLIO

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=StatsOut)
async def stats(
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    devis, reservations, portfolio = await asyncio.gather(
        client.count(CONTACT),
        client.count(RESERVATION),
        client.count(PORTFOLIO),
    )
    return StatsOut(devis=devis, reservations=reservations, portfolio=portfolio)


@router.get("/recent", response_model=RecentOut)
async def recent(
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    devis, reservations = await asyncio.gather(
        client.list_items(CONTACT, limit=settings.RECENT_FETCH_LIMIT),
        client.list_items(RESERVATION, limit=settings.RECENT_FETCH_LIMIT),
    )
    return {
        "devis": build_devis_record_list(devis[:settings.RECENT_SHOWN]),
        "reservations": build_reservation_record_list(reservations[:settings.RECENT_SHOWN]),
    }
