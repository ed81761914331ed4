"""Audit trail entries for dashboard mutations"""
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from gtraf_admin.models.audit import Audit
from gtraf_admin.core.enums import AuditAction
from gtraf_admin.core.metrics import audit_logs_created
from gtraf_admin.utils.hashing import payload_hash

logger = logging.getLogger(__name__)


async def log_audit(
    db: AsyncSession,
    user_id: str,
    action: AuditAction,
    payload=None
) -> None:

    try:
        if hasattr(payload, "model_dump"):
            payload_dict = payload.model_dump(exclude_unset=True)
        elif isinstance(payload, dict):
            payload_dict = payload
        elif payload is not None:
            payload_dict = {"id": payload}
        else:
            payload_dict = {}

        audit_record = Audit(
            user_id=str(user_id),
            endpoint=str(action),
            payload_hash=payload_hash(payload_dict),
        )

        db.add(audit_record)
        await db.flush()
        audit_logs_created.labels(action=str(action)).inc()

    except Exception as e:
        logger.error(f"Audit logging failed for action {action}: {e}", exc_info=True)


async def log_login(db: AsyncSession, user_id: str, username: str) -> None:
    await log_audit(db, user_id, AuditAction.LOGIN, {"username": username})
