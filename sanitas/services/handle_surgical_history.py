"""Surgical History Handlers — read and record the surgeries of a patient.

Invariants:
    - GET answers 404 "No surgical history found for the provided ID." for zero rows,
      unknown patients and malformed ids alike
    - POST inserts every surgery of the request in one commit
    - POST on an unknown patient → 404 before anything is inserted
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sanitas.core.domain_types import PatientId, parse_patient_id
from sanitas.core.errors import BadRequestError, ResourceNotFoundError
from sanitas.core.events import ApiEvent
from sanitas.core.mappers import map_to_api_surgical_history, map_to_db_surgical_event
from sanitas.models.patient import Patient
from sanitas.models.surgical_history import SurgicalHistory
from sanitas.schemas.surgical_history import (
    SurgicalHistoryCreate, parse_surgical_history_create,
)
from sanitas.services.handle_patient import PATIENT_NOT_FOUND

logger = logging.getLogger(__name__)

NO_SURGICAL_HISTORY = "No surgical history found for the provided ID."


async def _load_history(db: AsyncSession, patient_id: PatientId) -> list[SurgicalHistory]:
    result = await db.execute(
        select(SurgicalHistory)
        .where(SurgicalHistory.id_paciente == patient_id)
        .order_by(SurgicalHistory.id),
    )
    return list(result.scalars().all())


# ─── GET /patient/surgical-history/{id} ──────────────────────────

def parse_get_surgical_history(event: ApiEvent) -> PatientId:
    raw = event.path_param("id")
    if raw is None:
        raise BadRequestError("Invalid request: No id supplied!", field="id")
    patient_id = parse_patient_id(raw)
    if patient_id is None:
        raise ResourceNotFoundError(NO_SURGICAL_HISTORY)
    return patient_id


async def get_surgical_history(db: AsyncSession, patient_id: PatientId) -> dict:
    rows = await _load_history(db, patient_id)
    if not rows:
        raise ResourceNotFoundError(NO_SURGICAL_HISTORY)
    return map_to_api_surgical_history(patient_id, rows)


# ─── POST /patient/surgical-history ──────────────────────────────

def parse_create_surgical_history(event: ApiEvent) -> SurgicalHistoryCreate:
    return parse_surgical_history_create(event.json_body())


async def create_surgical_history(
    db: AsyncSession, data: SurgicalHistoryCreate,
) -> dict:
    patient_id = PatientId(data.patient_id)
    exists = await db.execute(select(Patient.id).where(Patient.id == patient_id))
    if exists.scalar_one_or_none() is None:
        raise ResourceNotFoundError(PATIENT_NOT_FOUND)

    db.add_all([
        SurgicalHistory(**map_to_db_surgical_event(patient_id, event))
        for event in data.surgical_event_data
    ])
    await db.commit()
    logger.info(
        f"Recorded {len(data.surgical_event_data)} surgeries for patient {patient_id}",
    )
    return map_to_api_surgical_history(patient_id, await _load_history(db, patient_id))
