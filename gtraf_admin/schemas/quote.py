from pydantic import BaseModel

class EstimateResponse(BaseModel):
    final_price: int
    price_breakdown: dict
