import re
from datetime import date, time, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from gtraf_admin.core.enums import VehicleClass, PaymentMethod

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")


class ReservationDraft(BaseModel):
    """Reservation form values as they stand while being edited."""
    model_config = ConfigDict(frozen=True)

    vehicle_type: Optional[str] = None
    start_date: Optional[date] = None
    start_time: Optional[time] = None
    end_date: Optional[date] = None
    end_time: Optional[time] = None
    with_driver: bool = False
    unlimited_mileage: bool = False
    insurances: List[str] = Field(default_factory=list)
    equipments: List[str] = Field(default_factory=list)

    @field_validator("start_date", "start_time", "end_date", "end_time", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ReservationCreate(ReservationDraft):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(min_length=1)
    email: str
    phone: Optional[str] = None
    vehicle_type: VehicleClass
    start_date: date
    start_time: time
    end_date: date
    end_time: time
    pickup_location: str = Field(min_length=1)
    dropoff_location: str = Field(min_length=1)
    payment_method: Optional[PaymentMethod] = None
    notes: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_format(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email")
        return value

    @model_validator(mode="after")
    def end_after_start(self):
        start = datetime.combine(self.start_date, self.start_time)
        end = datetime.combine(self.end_date, self.end_time)
        if end <= start:
            raise ValueError("End date must be after start date")
        return self


class ReservationOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    vehicle_type: Optional[str] = None
    start_date: str = ""
    start_time: str = ""
    end_date: str = ""
    end_time: str = ""
    pickup_location: Optional[str] = None
    dropoff_location: Optional[str] = None
    with_driver: bool = False
    unlimited_mileage: bool = False
    insurances: List[str] = Field(default_factory=list)
    equipments: List[str] = Field(default_factory=list)
    notes: str = ""
    created_at: Optional[str] = None
    estimated_price: int = 0
