from sqlalchemy import Column, String
from gtraf_admin.models.base import BaseModel

class Audit(BaseModel):
    __tablename__ = "audits"

    user_id = Column(String(255), nullable=False, index=True)

    endpoint = Column(String(255), nullable=False)
    payload_hash = Column(String(128), nullable=False)
