"""Settings tab: global export/import, reset and data summary"""
import json
import logging
from pydantic import ValidationError
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from gtraf_admin.db.session import get_db
from gtraf_admin.schemas.dashboard import StatsOut, SummaryOut, ImportDocument, ImportResult
from gtraf_admin.core.security import get_current_user
from gtraf_admin.core.config import settings
from gtraf_admin.core.enums import AuditAction
from gtraf_admin.core.audit_log import log_audit
from gtraf_admin.core.audit_decorator import audit_log
from gtraf_admin.core.rate_limit import check_rate_limit
from gtraf_admin.core.metrics import exports_generated
from gtraf_admin.services import storage
from gtraf_admin.services.export import to_json

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/summary", response_model=SummaryOut)
async def summary(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    data = await storage.load_state(db)
    return SummaryOut(
        counts=StatsOut(**storage.state_counts(data)),
        version=f"{settings.API_TITLE} v{settings.API_VERSION}",
        storage=settings.DATABASE_URL.split(":", 1)[0],
    )


@router.get("/export")
async def export_all(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    data = await storage.load_state(db)
    exports_generated.labels(section="all", format="json").inc()
    return Response(
        content=to_json(data),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="gtraf-dashboard-complete.json"'}
    )


@router.post("/import", response_model=ImportResult)
async def import_all(
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    content = await file.read()
    try:
        imported = json.loads(content)
    except ValueError as e:
        logger.warning(f"Rejected import {file.filename}: {e}")
        raise HTTPException(status_code=400, detail="Import failed: file is not valid JSON")
    if not isinstance(imported, dict):
        raise HTTPException(status_code=400, detail="Import failed: expected a JSON object")
    try:
        document = ImportDocument.model_validate(imported)
    except ValidationError as e:
        logger.warning(f"Rejected import {file.filename}: {e.error_count()} invalid entries")
        raise HTTPException(status_code=400, detail="Import failed: unexpected dashboard data")

    data = await storage.import_state(db, document.model_dump(exclude_unset=True))
    await log_audit(db, current_user.id, AuditAction.IMPORT_DATA, imported)

    return ImportResult(
        imported_keys=sorted(imported),
        counts=StatsOut(**storage.state_counts(data)),
    )


@router.post("/reset", response_model=StatsOut)
@audit_log(AuditAction.RESET_DATA)
async def reset_all(
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    data = await storage.reset_state(db)
    return StatsOut(**storage.state_counts(data))
