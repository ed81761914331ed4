from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from gtraf_admin.db.session import get_db
from gtraf_admin.schemas.reservation import ReservationCreate, ReservationDraft, ReservationOut
from gtraf_admin.schemas.quote import EstimateResponse
from gtraf_admin.core.security import get_current_user
from gtraf_admin.core.enums import VehicleClass, AuditAction
from gtraf_admin.core.audit_decorator import audit_log
from gtraf_admin.core.rate_limit import check_rate_limit
from gtraf_admin.core.redis import cache_get, cache_put
from gtraf_admin.core.config import settings
from gtraf_admin.core.metrics import estimates_computed, exports_generated
from gtraf_admin.core.response_builders import build_reservation_record_list, build_reservation_payload
from gtraf_admin.services.api_client import GtrafApiClient, get_api_client, RESERVATION
from gtraf_admin.services.pricing import calculate_estimate
from gtraf_admin.services.query_view import view, apply_filters
from gtraf_admin.services.storage import save_section
from gtraf_admin.services.export import to_csv
from gtraf_admin.utils.hashing import cache_key
from gtraf_admin.api.deps import ViewParams, view_params

router = APIRouter(prefix="/reservations", tags=["reservations"])


async def _fetch_reservations(db: AsyncSession, client: GtrafApiClient) -> list:
    records = build_reservation_record_list(await client.list_items(RESERVATION))
    await save_section(db, "reservations", records)
    return records


@router.get("/", response_model=List[ReservationOut])
async def list_reservations(
    vehicle_type: Optional[VehicleClass] = Query(None),
    params: ViewParams = Depends(view_params),
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    records = await _fetch_reservations(db, client)
    records = apply_filters(records, {"vehicle_type": vehicle_type})
    return view(records, params.q, params.sort, params.direction)


@router.get("/export.csv")
async def export_reservations(
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    records = await _fetch_reservations(db, client)
    exports_generated.labels(section="reservations", format="csv").inc()
    return Response(
        content=to_csv(records),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="reservations.csv"'}
    )


@router.post("/estimate", response_model=EstimateResponse)
async def estimate_reservation(
    draft: ReservationDraft,
    current_user=Depends(get_current_user)
):
    """Live price preview for a reservation form, cached in Redis when available"""
    key = cache_key("price", draft.model_dump(mode="json"))

    cached = await cache_get("price", key)
    if cached is not None:
        return EstimateResponse(**cached)

    result = calculate_estimate(draft)
    estimates_computed.labels(vehicle_type=draft.vehicle_type or "unknown").inc()
    await cache_put("price", key, result.model_dump_json(), settings.PRICE_CACHE_TTL)
    return result


@router.post("/")
@audit_log(AuditAction.CREATE_RESERVATION)
async def create_reservation(
    payload: ReservationCreate,
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    result = await client.create(RESERVATION, build_reservation_payload(payload))
    return {"saved": True, "data": result.get("data")}


@router.put("/{item_id}")
@audit_log(AuditAction.UPDATE_RESERVATION)
async def update_reservation(
    item_id: str,
    payload: ReservationCreate,
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    result = await client.update(RESERVATION, item_id, build_reservation_payload(payload))
    return {"saved": True, "data": result.get("data")}


@router.delete("/{item_id}")
@audit_log(AuditAction.DELETE_RESERVATION)
async def delete_reservation(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    await client.delete(RESERVATION, item_id)
    return {"deleted": True}
