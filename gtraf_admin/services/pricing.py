import math
from datetime import datetime, timedelta
from gtraf_admin.schemas.reservation import ReservationDraft
from gtraf_admin.schemas.quote import EstimateResponse
from gtraf_admin.core.enums import VehicleClass, InsuranceOption

DAILY_RATES = {
    VehicleClass.CITADINE: 80,
    VehicleClass.BERLINE: 120,
    VehicleClass.SUV_4X4: 180,
    VehicleClass.UTILITAIRE: 100,
    VehicleClass.MINIBUS: 200,
}
DEFAULT_DAILY_RATE = 120
DRIVER_DAILY = 50
UNLIMITED_MILEAGE_DAILY = 30
COMPREHENSIVE_INSURANCE_DAILY = 25
EQUIPMENT_DAILY = 10

ONE_DAY = timedelta(days=1)


def rental_days(draft: ReservationDraft) -> int:
    """Whole days between start and end, rounded up. 0 when incomplete."""
    if not (draft.start_date and draft.start_time and draft.end_date and draft.end_time):
        return 0
    start = datetime.combine(draft.start_date, draft.start_time)
    end = datetime.combine(draft.end_date, draft.end_time)
    return math.ceil((end - start) / ONE_DAY)


def daily_rate(vehicle_type) -> int:
    try:
        return DAILY_RATES[VehicleClass(vehicle_type)]
    except ValueError:
        return DEFAULT_DAILY_RATE


def price_breakdown(draft: ReservationDraft) -> dict:
    days = rental_days(draft)
    # End at or before start prices like an incomplete draft
    if days <= 0:
        days = 0
    rate = daily_rate(draft.vehicle_type)

    return {
        "days": days,
        "daily_rate": rate,
        "base": rate * days,
        "driver": DRIVER_DAILY * days if draft.with_driver else 0,
        "unlimited_mileage": UNLIMITED_MILEAGE_DAILY * days if draft.unlimited_mileage else 0,
        "insurance": (
            COMPREHENSIVE_INSURANCE_DAILY * days
            if InsuranceOption.TOUS_RISQUES.value in draft.insurances
            else 0
        ),
        "equipment": EQUIPMENT_DAILY * len(draft.equipments) * days,
    }


PRICE_COMPONENTS = ("base", "driver", "unlimited_mileage", "insurance", "equipment")


def estimate(draft: ReservationDraft) -> int:
    breakdown = price_breakdown(draft)
    return sum(breakdown[component] for component in PRICE_COMPONENTS)


def calculate_estimate(draft: ReservationDraft) -> EstimateResponse:
    breakdown = price_breakdown(draft)
    final_price = sum(breakdown[component] for component in PRICE_COMPONENTS)
    return EstimateResponse(final_price=final_price, price_breakdown=breakdown)
