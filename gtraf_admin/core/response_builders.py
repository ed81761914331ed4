"""Translation between upstream API payloads and dashboard records"""
import logging
from typing import Optional
from pydantic import ValidationError
from gtraf_admin.core.enums import InsuranceOption, EquipmentOption, ReservationExtra
from gtraf_admin.schemas.devis import DevisCreate
from gtraf_admin.schemas.reservation import ReservationCreate, ReservationDraft
from gtraf_admin.services.pricing import estimate
from gtraf_admin.services.query_view import display_value

INSURANCE_VALUES = [option.value for option in InsuranceOption]
EQUIPMENT_VALUES = [option.value for option in EquipmentOption]

logger = logging.getLogger(__name__)


def _text(value) -> Optional[str]:
    """Upstream scalar as display text; None stays None."""
    return None if value is None else display_value(value)


def _split_datetime(value: Optional[str]) -> tuple:
    if not value:
        return "", ""
    day, _, clock = str(value).replace(" ", "T", 1).partition("T")
    return day, clock[:5]


def build_devis_record(item: dict) -> dict:
    return {
        "id": _text(item.get("id")),
        "name": _text(item.get("nom")),
        "email": _text(item.get("email")),
        "phone": _text(item.get("telephone")),
        "project_type": _text(item.get("project_type")),
        "budget": _text(item.get("budget")),
        "message": _text(item.get("message")),
        "created_at": _text(item.get("date_creation")),
    }


def build_reservation_record(item: dict) -> dict:
    options = item.get("options") if isinstance(item.get("options"), list) else []
    start_date, start_time = _split_datetime(item.get("date_heure_depart"))
    end_date, end_time = _split_datetime(item.get("date_heure_retour"))

    record = {
        "id": _text(item.get("id")),
        "name": _text(item.get("nom_client")),
        "email": _text(item.get("email")),
        "phone": _text(item.get("telephone")),
        "vehicle_type": _text(item.get("type_modele_voiture")),
        "start_date": start_date,
        "start_time": start_time,
        "end_date": end_date,
        "end_time": end_time,
        "pickup_location": _text(item.get("lieu_prise_en_charge")),
        "dropoff_location": _text(item.get("lieu_restitution")),
        "with_driver": ReservationExtra.DRIVER.value in options,
        "unlimited_mileage": ReservationExtra.UNLIMITED_MILEAGE.value in options,
        "insurances": [opt for opt in options if opt in INSURANCE_VALUES],
        "equipments": [opt for opt in options if opt in EQUIPMENT_VALUES],
        "notes": _text(item.get("commentaires")) or "",
        "created_at": _text(item.get("date_heure_depart")),
    }
    record["estimated_price"] = _estimate_record(record)
    return record


def _estimate_record(record: dict) -> int:
    try:
        draft = ReservationDraft(**{key: record[key] for key in ReservationDraft.model_fields})
    except ValidationError as e:
        logger.warning(f"Cannot price reservation {record['id']}: {e.error_count()} invalid fields")
        return 0
    return estimate(draft)


def build_devis_payload(payload: DevisCreate) -> dict:
    return {
        "nom": payload.name,
        "email": payload.email,
        "telephone": payload.phone or None,
        "project_type": str(payload.project_type),
        "budget": str(payload.budget) if payload.budget else None,
        "message": payload.message,
    }


def build_reservation_payload(payload: ReservationCreate) -> dict:
    options = [*payload.insurances, *payload.equipments]
    if payload.with_driver:
        options.append(ReservationExtra.DRIVER.value)
    if payload.unlimited_mileage:
        options.append(ReservationExtra.UNLIMITED_MILEAGE.value)

    return {
        "nom_client": payload.name,
        "email": payload.email,
        "telephone": payload.phone or None,
        "type_modele_voiture": str(payload.vehicle_type),
        "date_heure_depart": f"{payload.start_date.isoformat()}T{payload.start_time.strftime('%H:%M')}:00",
        "date_heure_retour": f"{payload.end_date.isoformat()}T{payload.end_time.strftime('%H:%M')}:00",
        "lieu_prise_en_charge": payload.pickup_location,
        "lieu_restitution": payload.dropoff_location,
        "options": options,
        "commentaires": payload.notes or None,
    }


def _identified(items: list, resource: str) -> list:
    kept = [item for item in items if isinstance(item, dict) and item.get("id") is not None]
    if len(kept) < len(items):
        logger.warning(f"Skipped {len(items) - len(kept)} upstream {resource} rows without an id")
    return kept


def build_devis_record_list(items: list) -> list:
    return [build_devis_record(item) for item in _identified(items, "contact")]


def build_reservation_record_list(items: list) -> list:
    return [build_reservation_record(item) for item in _identified(items, "reservation")]
