from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from gtraf_admin.db.session import get_db
from gtraf_admin.schemas.devis import DevisCreate, DevisOut
from gtraf_admin.core.security import get_current_user
from gtraf_admin.core.enums import ProjectType, Budget, AuditAction
from gtraf_admin.core.audit_decorator import audit_log
from gtraf_admin.core.rate_limit import check_rate_limit
from gtraf_admin.core.metrics import exports_generated
from gtraf_admin.core.response_builders import build_devis_record_list, build_devis_payload
from gtraf_admin.services.api_client import GtrafApiClient, get_api_client, CONTACT
from gtraf_admin.services.query_view import view, apply_filters
from gtraf_admin.services.storage import save_section
from gtraf_admin.services.export import to_csv
from gtraf_admin.api.deps import ViewParams, view_params

router = APIRouter(prefix="/devis", tags=["devis"])


async def _fetch_devis(db: AsyncSession, client: GtrafApiClient) -> list:
    records = build_devis_record_list(await client.list_items(CONTACT))
    await save_section(db, "devis", records)
    return records


@router.get("/", response_model=List[DevisOut])
async def list_devis(
    project_type: Optional[ProjectType] = Query(None),
    budget: Optional[Budget] = Query(None),
    params: ViewParams = Depends(view_params),
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    records = await _fetch_devis(db, client)
    records = apply_filters(records, {"project_type": project_type, "budget": budget})
    return view(records, params.q, params.sort, params.direction)


@router.get("/export.csv")
async def export_devis(
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    records = await _fetch_devis(db, client)
    exports_generated.labels(section="devis", format="csv").inc()
    return Response(
        content=to_csv(records),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="devis.csv"'}
    )


@router.post("/")
@audit_log(AuditAction.CREATE_DEVIS)
async def create_devis(
    payload: DevisCreate,
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    result = await client.create(CONTACT, build_devis_payload(payload))
    return {"saved": True, "data": result.get("data")}


@router.put("/{item_id}")
@audit_log(AuditAction.UPDATE_DEVIS)
async def update_devis(
    item_id: str,
    payload: DevisCreate,
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    result = await client.update(CONTACT, item_id, build_devis_payload(payload))
    return {"saved": True, "data": result.get("data")}


@router.delete("/{item_id}")
@audit_log(AuditAction.DELETE_DEVIS)
async def delete_devis(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    client: GtrafApiClient = Depends(get_api_client),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    await client.delete(CONTACT, item_id)
    return {"deleted": True}
