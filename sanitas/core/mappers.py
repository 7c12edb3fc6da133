"""Data Mappers — storage rows (Spanish column names) to API JSON shapes and back.

Invariants:
    - Mappers are pure: they read attributes, never touch a session
    - API field names are camelCase English; storage names never leak into responses
    - Dates are serialized as ISO-8601 strings
"""

from typing import Any, Iterable

from sanitas.core.domain_types import PatientId


def map_to_api_patient(row: Any) -> dict:
    """`paciente` row → general patient info."""
    return {
        "id": row.id,
        "cui": row.cui,
        "isWoman": row.es_mujer,
        "names": row.nombre,
        "lastNames": row.apellido,
        "birthdate": row.fecha_nacimiento.isoformat(),
    }


def map_to_api_student_info(row: Any) -> dict:
    """`estudiante` row → student info."""
    return {
        "patientId": row.id_paciente,
        "carnet": row.carnet,
        "career": row.carrera,
    }


def map_to_api_collaborator_info(row: Any) -> dict:
    """`colaborador` row → collaborator info."""
    return {
        "patientId": row.id_paciente,
        "code": row.codigo,
        "area": row.area,
    }


def map_to_api_surgical_event(row: Any) -> dict:
    return {
        "surgeryType": row.tipo_de_cirugia,
        "surgeryYear": row.fecha,
        "complications": row.complicaciones,
    }


def map_to_api_surgical_history(patient_id: PatientId, rows: Iterable[Any]) -> dict:
    """All `antecedentes_quirurgicos` rows of one patient → surgical history."""
    events = [map_to_api_surgical_event(r) for r in rows]
    return {
        "patientId": patient_id,
        "surgicalEvent": bool(events),
        "surgicalEventData": events,
    }


def map_to_search_result(row: Any) -> dict:
    """Search row → wire preview. Clients build the display name themselves."""
    return {
        "id": row.id,
        "nombres": row.nombre,
        "apellidos": row.apellido,
    }


def map_to_db_patient(data: Any) -> dict:
    """PatientCreate → `paciente` column values."""
    return {
        "cui": data.cui,
        "nombre": data.nombres,
        "apellido": data.apellidos,
        "es_mujer": data.es_mujer,
        "fecha_nacimiento": data.fecha_nacimiento,
    }


def map_to_db_surgical_event(patient_id: PatientId, event: Any) -> dict:
    """SurgicalEvent → `antecedentes_quirurgicos` column values."""
    return {
        "id_paciente": patient_id,
        "tipo_de_cirugia": event.surgery_type,
        "fecha": event.surgery_year,
        "complicaciones": event.complications,
    }
