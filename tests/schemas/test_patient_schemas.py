"""Patient Schemas — registration and search payload parsing.

Tests:
    - Required fields are reported one at a time, CUI first
    - esMujer accepts booleans and the form's F/M letter
    - Pydantic failures surface as BadRequestError with the field name
"""

from datetime import date

import pytest

from sanitas.core.domain_types import SearchType
from sanitas.core.errors import BadRequestError
from sanitas.schemas.patient import parse_patient_create, parse_search_request

VALID = {
    "cui": " 2990123450101 ",
    "nombres": "Juan",
    "apellidos": "Pérez",
    "esMujer": False,
    "fechaNacimiento": "1990-01-01",
}


def test_parse_valid_patient():
    data = parse_patient_create(dict(VALID))

    assert data.cui == "2990123450101"
    assert data.es_mujer is False
    assert data.fecha_nacimiento == date(1990, 1, 1)


@pytest.mark.parametrize("letter, expected", [("F", True), ("m", False)])
def test_sex_letter_is_accepted(letter, expected):
    data = parse_patient_create({**VALID, "esMujer": letter})

    assert data.es_mujer is expected


@pytest.mark.parametrize("missing, message", [
    ("cui", "CUI es requerido."),
    ("apellidos", "Apellidos es requerido."),
    ("esMujer", "Sexo es requerido."),
    ("fechaNacimiento", "Fecha de nacimiento es requerida."),
])
def test_missing_field_message(missing, message):
    payload = {k: v for k, v in VALID.items() if k != missing}

    with pytest.raises(BadRequestError) as exc:
        parse_patient_create(payload)

    assert exc.value.message == message
    assert exc.value.field == missing


def test_invalid_date_reports_field():
    with pytest.raises(BadRequestError) as exc:
        parse_patient_create({**VALID, "fechaNacimiento": "01/01/1990"})

    assert exc.value.field == "fechaNacimiento"


def test_parse_search_request():
    query = parse_search_request({"requestSearch": " Ana ", "searchType": "Nombres"})

    assert query.request_search == "Ana"
    assert query.search_type is SearchType.NAMES


def test_search_requires_type():
    with pytest.raises(BadRequestError) as exc:
        parse_search_request({"requestSearch": "Ana"})

    assert exc.value.field == "searchType"
