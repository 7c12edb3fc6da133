"""Patient Handlers — registration, search, CUI lookup and general info.

Invariants:
    - cui uniqueness is enforced by the database; a duplicate insert becomes ConflictError("CUI ya existe.")
    - Search returns an empty list when nothing matches (not a 404)
    - Name search matches "<nombre> <apellido>" case-insensitively; LIKE wildcards in the query are literal
    - Carnet / CodigoColaborador search is an exact match on the sub-record
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sanitas.core.domain_types import Cui, PatientId, SearchType, parse_patient_id
from sanitas.core.errors import BadRequestError, ConflictError, ResourceNotFoundError
from sanitas.core.events import ApiEvent
from sanitas.core.mappers import map_to_api_patient, map_to_db_patient, map_to_search_result
from sanitas.infrastructure.database import is_unique_violation
from sanitas.models.collaborator import CollaboratorInfo
from sanitas.models.patient import Patient
from sanitas.models.student import StudentInfo
from sanitas.schemas.patient import (
    PatientCreate, SearchRequest, parse_patient_create, parse_search_request,
)

logger = logging.getLogger(__name__)

PATIENT_NOT_FOUND = "Invalid request: No patient with the given ID found."


# ─── POST /patient ───────────────────────────────────────────────

def parse_create_patient(event: ApiEvent) -> PatientCreate:
    return parse_patient_create(event.json_body())


async def create_patient(db: AsyncSession, data: PatientCreate) -> dict:
    """Insert a new patient; returns its generated id."""
    patient = Patient(**map_to_db_patient(data))
    db.add(patient)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if is_unique_violation(e):
            raise ConflictError("CUI ya existe.")
        raise
    logger.info(f"Patient {patient.id} created")
    return {"id": patient.id}


# ─── POST /patient/search ────────────────────────────────────────

def parse_search_patients(event: ApiEvent) -> SearchRequest:
    return parse_search_request(event.json_body())


def _escape_like(value: str) -> str:
    return (
        value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )


async def search_patients(db: AsyncSession, query: SearchRequest) -> list[dict]:
    term = query.request_search
    stmt = select(Patient)
    if query.search_type == SearchType.NAMES:
        full_name = Patient.nombre + " " + Patient.apellido
        stmt = stmt.where(full_name.ilike(f"%{_escape_like(term)}%", escape="\\"))
    elif query.search_type == SearchType.STUDENT_CARNET:
        stmt = stmt.join(
            StudentInfo, StudentInfo.id_paciente == Patient.id,
        ).where(StudentInfo.carnet == term)
    else:
        stmt = stmt.join(
            CollaboratorInfo, CollaboratorInfo.id_paciente == Patient.id,
        ).where(CollaboratorInfo.codigo == term)

    result = await db.execute(stmt.order_by(Patient.id))
    rows = [map_to_search_result(p) for p in result.scalars().all()]
    logger.info(
        f"{query.search_type.value} search matched {len(rows)} patients",
        extra={"row_count": len(rows)},
    )
    return rows


# ─── GET /check-cui/{cui} ────────────────────────────────────────

def parse_check_cui(event: ApiEvent) -> Cui:
    cui = event.path_param("cui")
    if not cui:
        raise BadRequestError("Invalid request: No CUI supplied!", field="cui")
    return Cui(cui)


async def check_cui(db: AsyncSession, cui: Cui) -> dict:
    result = await db.execute(
        select(Patient.id).where(Patient.cui == cui).limit(1),
    )
    return {"exists": result.scalar_one_or_none() is not None, "cui": cui}


# ─── GET /patient/general/{id} ───────────────────────────────────

def parse_general_info(event: ApiEvent) -> PatientId:
    raw = event.path_param("id")
    if raw is None:
        raise BadRequestError("Invalid request: No id supplied!", field="id")
    patient_id = parse_patient_id(raw)
    if patient_id is None:
        raise ResourceNotFoundError(PATIENT_NOT_FOUND)
    return patient_id


async def get_general_info(db: AsyncSession, patient_id: PatientId) -> dict:
    result = await db.execute(select(Patient).where(Patient.id == patient_id))
    patient = result.scalar_one_or_none()
    if patient is None:
        raise ResourceNotFoundError(PATIENT_NOT_FOUND)
    return map_to_api_patient(patient)
