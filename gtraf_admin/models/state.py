from sqlalchemy import Column, String, Text
from gtraf_admin.models.base import BaseModel

class DashboardState(BaseModel):
    """One JSON document per storage key, like a browser localStorage entry."""
    __tablename__ = "dashboard_state"

    key = Column(String(120), unique=True, nullable=False, index=True)
    payload = Column(Text, nullable=False)
