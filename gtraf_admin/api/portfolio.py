from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional, List

from gtraf_admin.db.session import get_db
from gtraf_admin.schemas.portfolio import PortfolioCreate, PortfolioOut
from gtraf_admin.core.security import get_current_user
from gtraf_admin.core.enums import PortfolioCategory, AuditAction
from gtraf_admin.core.audit_decorator import audit_log
from gtraf_admin.core.rate_limit import check_rate_limit
from gtraf_admin.core.lookups import get_or_404
from gtraf_admin.services import storage
from gtraf_admin.services.query_view import view, apply_filters
from gtraf_admin.api.deps import ViewParams, view_params

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/", response_model=List[PortfolioOut])
async def list_portfolio(
    categorie: Optional[PortfolioCategory] = Query(None),
    params: ViewParams = Depends(view_params),
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    records = apply_filters(await storage.list_portfolio(db), {"categorie": categorie})
    return view(records, params.q, params.sort, params.direction)


@router.get("/{item_id}", response_model=PortfolioOut)
async def get_portfolio(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    return get_or_404(await storage.get_portfolio_item(db, item_id), "Portfolio item", item_id)


@router.post("/", response_model=PortfolioOut)
@audit_log(AuditAction.CREATE_PORTFOLIO)
async def create_portfolio(
    payload: PortfolioCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)
    return await storage.add_portfolio_item(db, payload.model_dump(mode="json"))


@router.put("/{item_id}", response_model=PortfolioOut)
@audit_log(AuditAction.UPDATE_PORTFOLIO)
async def update_portfolio(
    item_id: str,
    payload: PortfolioCreate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    """Replace a portfolio item, keeping its id and creation date"""
    await check_rate_limit(current_user.id)

    item = await storage.update_portfolio_item(db, item_id, payload.model_dump(mode="json"))
    return get_or_404(item, "Portfolio item", item_id)


@router.delete("/{item_id}")
@audit_log(AuditAction.DELETE_PORTFOLIO)
async def delete_portfolio(
    item_id: str,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user)
):
    await check_rate_limit(current_user.id)

    deleted = await storage.delete_portfolio_item(db, item_id)
    get_or_404(deleted, "Portfolio item", item_id)
    return {"deleted": True}
