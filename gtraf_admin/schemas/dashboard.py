from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List
from gtraf_admin.schemas.devis import DevisOut
from gtraf_admin.schemas.portfolio import PortfolioOut
from gtraf_admin.schemas.reservation import ReservationOut


class StatsOut(BaseModel):
    devis: int
    reservations: int
    portfolio: int


class RecentOut(BaseModel):
    devis: List[DevisOut]
    reservations: List[ReservationOut]


class SummaryOut(BaseModel):
    counts: StatsOut
    version: str
    storage: str
    response_time: str = "24 heures"


class ImportDocument(BaseModel):
    """An exported dashboard document. Known sections are checked, others pass through.

    Portfolio items must be complete records.
    """
    model_config = ConfigDict(extra="allow")

    devis: List[Dict[str, Any]] = None
    reservations: List[Dict[str, Any]] = None
    portfolio: List[PortfolioOut] = None


class ImportResult(BaseModel):
    imported_keys: List[str]
    counts: StatsOut
