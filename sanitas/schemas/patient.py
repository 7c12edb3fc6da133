"""Patient Schemas — registration and search payloads.

Invariants:
    - Required registration fields are checked in a fixed order; CUI first
    - esMujer accepts a boolean or the form's "F"/"M" letter
    - fechaNacimiento must be an ISO date (YYYY-MM-DD)
    - searchType is one of Nombres, Carnet, CodigoColaborador
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sanitas.core.domain_types import SearchType, Sex
from sanitas.core.errors import BadRequestError

_REQUIRED_PATIENT_FIELDS = (
    ("cui", "CUI es requerido."),
    ("nombres", "Nombres es requerido."),
    ("apellidos", "Apellidos es requerido."),
    ("esMujer", "Sexo es requerido."),
    ("fechaNacimiento", "Fecha de nacimiento es requerida."),
)


class PatientCreate(BaseModel):
    """Registration payload (POST /patient)."""
    model_config = ConfigDict(populate_by_name=True)

    cui: str = Field(min_length=1, max_length=20)
    nombres: str = Field(min_length=1, max_length=100)
    apellidos: str = Field(min_length=1, max_length=100)
    es_mujer: bool = Field(alias="esMujer")
    fecha_nacimiento: date = Field(alias="fechaNacimiento")

    @field_validator("cui", "nombres", "apellidos", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("es_mujer", mode="before")
    @classmethod
    def parse_sex_letter(cls, v):
        if isinstance(v, str) and v.upper() in (Sex.FEMALE.value, Sex.MALE.value):
            return v.upper() == Sex.FEMALE.value
        return v


class SearchRequest(BaseModel):
    """Search payload (POST /patient/search)."""
    model_config = ConfigDict(populate_by_name=True)

    request_search: str = Field(alias="requestSearch", min_length=1, max_length=200)
    search_type: SearchType = Field(alias="searchType")

    @field_validator("request_search", mode="before")
    @classmethod
    def strip_query(cls, v):
        return v.strip() if isinstance(v, str) else v


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def first_error_message(exc: ValidationError) -> tuple[str, str]:
    """(field, message) of the first pydantic error, for 400 bodies."""
    err = exc.errors()[0]
    field = ".".join(str(loc) for loc in err["loc"]) or "body"
    return field, f"Invalid request: {field}: {err['msg']}"


def parse_patient_create(payload: dict) -> PatientCreate:
    for key, message in _REQUIRED_PATIENT_FIELDS:
        if _is_blank(payload.get(key)):
            raise BadRequestError(message, field=key)
    try:
        return PatientCreate.model_validate(payload)
    except ValidationError as e:
        field, message = first_error_message(e)
        raise BadRequestError(message, field=field)


def parse_search_request(payload: dict) -> SearchRequest:
    if _is_blank(payload.get("requestSearch")):
        raise BadRequestError(
            "Invalid request: No search query supplied!", field="requestSearch",
        )
    if _is_blank(payload.get("searchType")):
        raise BadRequestError(
            "Invalid request: No search type supplied!", field="searchType",
        )
    try:
        return SearchRequest.model_validate(payload)
    except ValidationError as e:
        field, message = first_error_message(e)
        raise BadRequestError(message, field=field)
