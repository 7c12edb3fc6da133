"""Affiliation Handlers — student and collaborator records attached to a patient.

Invariants:
    - At most one student row and one collaborator row per patient
    - Missing id → 400; unknown or malformed id → 404 with a resource-specific message
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sanitas.core.domain_types import PatientId, parse_patient_id
from sanitas.core.errors import BadRequestError, ResourceNotFoundError
from sanitas.core.events import ApiEvent
from sanitas.core.mappers import map_to_api_collaborator_info, map_to_api_student_info
from sanitas.models.collaborator import CollaboratorInfo
from sanitas.models.student import StudentInfo

STUDENT_NOT_FOUND = "Invalid request: No student with the given ID found."
COLLABORATOR_NOT_FOUND = "Invalid request: No collaborator with the given ID found."


def _patient_id_or_raise(event: ApiEvent, not_found_message: str) -> PatientId:
    raw = event.path_param("id")
    if raw is None:
        raise BadRequestError("Invalid request: No id supplied!", field="id")
    patient_id = parse_patient_id(raw)
    if patient_id is None:
        raise ResourceNotFoundError(not_found_message)
    return patient_id


def parse_student_info(event: ApiEvent) -> PatientId:
    return _patient_id_or_raise(event, STUDENT_NOT_FOUND)


async def get_student_info(db: AsyncSession, patient_id: PatientId) -> dict:
    result = await db.execute(
        select(StudentInfo).where(StudentInfo.id_paciente == patient_id).limit(1),
    )
    student = result.scalar_one_or_none()
    if student is None:
        raise ResourceNotFoundError(STUDENT_NOT_FOUND)
    return map_to_api_student_info(student)


def parse_collaborator_info(event: ApiEvent) -> PatientId:
    return _patient_id_or_raise(event, COLLABORATOR_NOT_FOUND)


async def get_collaborator_info(db: AsyncSession, patient_id: PatientId) -> dict:
    result = await db.execute(
        select(CollaboratorInfo)
        .where(CollaboratorInfo.id_paciente == patient_id)
        .limit(1),
    )
    collaborator = result.scalar_one_or_none()
    if collaborator is None:
        raise ResourceNotFoundError(COLLABORATOR_NOT_FOUND)
    return map_to_api_collaborator_info(collaborator)
