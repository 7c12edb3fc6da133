"""Surgical History Schemas — payload for recording surgeries of a patient.

Invariants:
    - patientId is required, positive and fits the `paciente.id` column
    - surgicalEvent=true requires at least one item in surgicalEventData
    - surgeryYear is a 4-digit year
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from sanitas.core.domain_types import MAX_PATIENT_ID
from sanitas.core.errors import BadRequestError
from sanitas.schemas.patient import first_error_message


class SurgicalEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    surgery_type: str = Field(alias="surgeryType", min_length=1, max_length=200)
    surgery_year: str = Field(alias="surgeryYear", pattern=r"^\d{4}$")
    complications: str | None = Field(None, max_length=2000)


class SurgicalHistoryCreate(BaseModel):
    """POST /patient/surgical-history payload."""
    model_config = ConfigDict(populate_by_name=True)

    patient_id: int = Field(alias="patientId", gt=0, le=MAX_PATIENT_ID)
    surgical_event: bool = Field(True, alias="surgicalEvent")
    surgical_event_data: list[SurgicalEvent] = Field(
        default_factory=list, alias="surgicalEventData",
    )

    @model_validator(mode="after")
    def validate_event_data(self):
        if self.surgical_event and not self.surgical_event_data:
            raise ValueError("surgicalEvent requires surgicalEventData")
        if not self.surgical_event and self.surgical_event_data:
            raise ValueError("surgicalEventData given but surgicalEvent is false")
        return self


def parse_surgical_history_create(payload: dict) -> SurgicalHistoryCreate:
    if payload.get("patientId") is None:
        raise BadRequestError("Invalid request: No patientId supplied!", field="patientId")
    try:
        return SurgicalHistoryCreate.model_validate(payload)
    except ValidationError as e:
        field, message = first_error_message(e)
        raise BadRequestError(message, field=field)
