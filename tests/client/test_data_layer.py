"""API Client — Ok/Err normalization and record-shape checks.

Invariants:
    - Search previews carry id and "<nombres> <apellidos>"
    - A record missing id/nombres/apellidos → Err(ApiContractError), never Ok
    - HTTP status errors → Err(ApiCallError) with the status; transport errors → status None
    - submit_patient_data raises SubmitPatientError with the server's message
"""

import json

import httpx
import pytest

from sanitas.client.data_layer import PatientPreview, SanitasApiClient
from sanitas.client.result import (
    ApiCallError, ApiContractError, Err, Ok, SubmitPatientError,
)
from sanitas.config import Settings


def _client(handler) -> SanitasApiClient:
    return SanitasApiClient("http://sanitas.test", transport=httpx.MockTransport(handler))


async def test_search_maps_previews():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=[
            {"id": 1, "nombres": "Ana", "apellidos": "Ruiz"},
            {"id": 2, "nombres": "Luis", "apellidos": "Paz"},
        ])

    async with _client(handler) as api:
        outcome = await api.search_patient("Ana", "Nombres")

    assert seen == {
        "path": "/patient/search",
        "body": {"requestSearch": "Ana", "searchType": "Nombres"},
    }
    assert outcome == Ok([PatientPreview(1, "Ana Ruiz"), PatientPreview(2, "Luis Paz")])


@pytest.mark.parametrize("missing", ["id", "nombres", "apellidos"])
async def test_search_record_missing_field_is_contract_error(missing):
    record = {"id": 1, "nombres": "Ana", "apellidos": "Ruiz"}
    del record[missing]

    async with _client(lambda r: httpx.Response(200, json=[record])) as api:
        outcome = await api.search_patient("Ana", "Nombres")

    assert isinstance(outcome, Err)
    assert isinstance(outcome.error, ApiContractError)


async def test_search_non_list_is_contract_error():
    async with _client(lambda r: httpx.Response(200, json={"id": 1})) as api:
        outcome = await api.search_patient("Ana", "Nombres")

    assert isinstance(outcome.error, ApiContractError)


async def test_search_bad_request_keeps_status():
    body = {"error": {"message": "Invalid request: No search query supplied!"}}

    async with _client(lambda r: httpx.Response(400, json=body)) as api:
        outcome = await api.search_patient("", "Nombres")

    assert isinstance(outcome.error, ApiCallError)
    assert outcome.error.status_code == 400
    assert outcome.error.body == body
    assert isinstance(outcome.error.__cause__, httpx.HTTPStatusError)


async def test_transport_failure_has_no_status():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    async with _client(handler) as api:
        outcome = await api.search_patient("Ana", "Nombres")

    assert isinstance(outcome.error, ApiCallError)
    assert outcome.error.status_code is None


async def test_check_cui():
    async with _client(lambda r: httpx.Response(200, json={"exists": True, "cui": "1"})) as api:
        outcome = await api.check_cui("1")

    assert outcome == Ok({"exists": True, "cui": "1"})


async def test_check_cui_encodes_path_segment():
    seen = {}

    def handler(request):
        seen["raw_path"] = request.url.raw_path
        return httpx.Response(200, json={"exists": False, "cui": "12/3?x"})

    async with _client(handler) as api:
        outcome = await api.check_cui("12/3?x")

    assert seen["raw_path"] == b"/check-cui/12%2F3%3Fx"
    assert outcome == Ok({"exists": False, "cui": "12/3?x"})


async def test_submit_patient_data_sends_api_names():
    seen = {}

    def handler(request):
        seen.update(json.loads(request.content))
        return httpx.Response(201, json={"id": 77})

    async with _client(handler) as api:
        patient_id = await api.submit_patient_data({
            "cui": "2990123450101", "names": "Ana", "surnames": "Ruiz",
            "sex": "F", "birthDate": "2001-02-03",
        })

    assert patient_id == 77
    assert seen == {
        "cui": "2990123450101",
        "nombres": "Ana",
        "apellidos": "Ruiz",
        "esMujer": True,
        "fechaNacimiento": "2001-02-03",
    }


async def test_submit_patient_data_male_sends_false():
    seen = {}

    def handler(request):
        seen.update(json.loads(request.content))
        return httpx.Response(201, json={"id": 1})

    async with _client(handler) as api:
        await api.submit_patient_data({"cui": "1", "sex": "M"})

    assert seen["esMujer"] is False


async def test_submit_patient_data_raises_server_message():
    body = {"error": {"code": "CONFLICT", "message": "CUI ya existe."}}

    async with _client(lambda r: httpx.Response(409, json=body)) as api:
        with pytest.raises(SubmitPatientError, match="CUI ya existe."):
            await api.submit_patient_data({"cui": "1"})


async def test_submit_patient_data_without_response():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    async with _client(handler) as api:
        with pytest.raises(SubmitPatientError, match="No response was received"):
            await api.submit_patient_data({"cui": "1"})


async def test_submit_patient_data_unreadable_error_body():
    async with _client(lambda r: httpx.Response(500, text="oops")) as api:
        with pytest.raises(SubmitPatientError, match="Error registering information"):
            await api.submit_patient_data({"cui": "1"})


async def test_surgical_history_validates_events():
    body = {
        "patientId": 1,
        "surgicalEvent": True,
        "surgicalEventData": [{"surgeryType": "X"}],
    }

    async with _client(lambda r: httpx.Response(200, json=body)) as api:
        outcome = await api.get_surgical_history(1)

    assert isinstance(outcome.error, ApiContractError)


async def test_surgical_history_not_found():
    body = {"error": {"message": "No surgical history found for the provided ID."}}

    async with _client(lambda r: httpx.Response(404, json=body)) as api:
        outcome = await api.get_surgical_history(99)

    assert outcome.error.status_code == 404


async def test_student_info_ok():
    body = {"patientId": 1, "carnet": "22386", "career": "Química"}

    async with _client(lambda r: httpx.Response(200, json=body)) as api:
        outcome = await api.get_student_info(1)

    assert outcome == Ok(body)


async def test_from_settings_uses_backend_url():
    api = SanitasApiClient.from_settings(
        Settings(backend_url="http://api.example/", client_timeout_seconds=3.0),
    )

    assert api._http.base_url.host == "api.example"
    assert api._http.timeout.read == 3.0
    await api.aclose()
