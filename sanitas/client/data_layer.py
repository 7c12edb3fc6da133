"""API Client — outbound calls to the Sanitas API normalized into Ok/Err results.

Invariants:
    - Every public coroutine returns Ok | Err and never raises,
      except submit_patient_data which raises SubmitPatientError
    - Every returned record is checked for the fields the client relies on;
      a missing field yields Err(ApiContractError), never a partial Ok
    - Base URL comes from Settings.backend_url (BACKEND_URL)

Design Decisions:
    - httpx.AsyncClient injected through `transport` so tests use httpx.MockTransport
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import quote

import httpx

from sanitas.client.result import (
    ApiCallError, ApiContractError, Err, Ok, Result, SubmitPatientError,
)
from sanitas.config import Settings

logger = logging.getLogger(__name__)

SEARCH_TYPES = ("Nombres", "Carnet", "CodigoColaborador")

_PREVIEW_FIELDS = (
    ("id", "Received patient has no `id`!"),
    ("nombres", "Received patient has no `names`!"),
    ("apellidos", "Received patient has no `apellidos`!"),
)
_SURGICAL_HISTORY_FIELDS = ("patientId", "surgicalEvent", "surgicalEventData")
_SURGICAL_EVENT_FIELDS = ("surgeryType", "surgeryYear")
_STUDENT_FIELDS = ("patientId", "carnet")
_GENERAL_FIELDS = ("id", "cui", "names", "lastNames", "isWoman", "birthdate")


@dataclass(frozen=True)
class PatientPreview:
    """Minimal patient projection shown in search results."""
    id: int
    names: str


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def server_error_message(body: Any) -> str | None:
    """Extract the user-facing message from an error body."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        return error.get("message")
    if isinstance(error, str):
        return error
    return body.get("message")


def _segment(value: Any) -> str:
    """Percent-encode one URL path segment, slashes included."""
    return quote(str(value), safe="")


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _require_fields(record: Any, fields: Iterable[str], what: str) -> dict:
    if not isinstance(record, dict):
        raise ApiContractError(f"Received {what} is not an object!")
    for name in fields:
        if name not in record:
            raise ApiContractError(f"Received {what} has no `{name}`!")
    return record


class SanitasApiClient:
    """Thin async wrapper around the Sanitas REST API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "SanitasApiClient":
        return cls(settings.backend_url, settings.client_timeout_seconds, **kwargs)

    async def __aenter__(self) -> "SanitasApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Result:
        """One HTTP call → Ok(response) or Err(ApiCallError)."""
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            body = _safe_json(e.response)
            logger.warning(
                f"{method} {path} answered {e.response.status_code}",
                extra={"status_code": e.response.status_code, "path": path},
            )
            error = ApiCallError("API ERROR", e.response.status_code, body)
            error.__cause__ = e
            return Err(error)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}", extra={"path": path})
            error = ApiCallError("API ERROR")
            error.__cause__ = e
            return Err(error)
        return Ok(response)

    # ─── Search ───────────────────────────────────────────────────

    async def search_patient(
        self, query: str, search_type: str,
    ) -> Result[list[PatientPreview], Exception]:
        """Search patients; search_type is one of Nombres, Carnet, CodigoColaborador."""
        outcome = await self._request(
            "POST", "/patient/search",
            json={"requestSearch": query, "searchType": search_type},
        )
        if isinstance(outcome, Err):
            return outcome

        data = _safe_json(outcome.result)
        if not isinstance(data, list):
            return Err(ApiContractError("Received search result is not a list!"))

        previews = []
        for record in data:
            if not isinstance(record, dict):
                return Err(ApiContractError("Received patient is not an object!"))
            for name, message in _PREVIEW_FIELDS:
                if _is_missing(record.get(name)):
                    return Err(ApiContractError(message))
            previews.append(PatientPreview(
                id=record["id"],
                names=f"{record['nombres']} {record['apellidos']}",
            ))
        return Ok(previews)

    # ─── CUI ──────────────────────────────────────────────────────

    async def check_cui(self, cui: str) -> Result[dict, Exception]:
        """Ok({"exists": bool, "cui": cui})."""
        outcome = await self._request("GET", f"/check-cui/{_segment(cui)}")
        if isinstance(outcome, Err):
            return outcome
        data = _safe_json(outcome.result)
        if not isinstance(data, dict) or not isinstance(data.get("exists"), bool):
            return Err(ApiContractError("Received CUI check has no `exists`!"))
        return Ok({"exists": data["exists"], "cui": cui})

    # ─── Registration ─────────────────────────────────────────────

    async def submit_patient_data(self, patient_data: dict) -> int:
        """Register a patient and return its id.

        `patient_data` uses the form's keys: cui, names, surnames, sex ("F" | "M"),
        birthDate (YYYY-MM-DD).

        Raises:
            SubmitPatientError: with the server's message when it answered with an
                error, "No response was received" on transport failure, or
                "Error registering information" when the response is unusable.
        """
        payload = {
            "cui": patient_data.get("cui"),
            "nombres": patient_data.get("names"),
            "apellidos": patient_data.get("surnames"),
            "esMujer": patient_data.get("sex") == "F",
            "fechaNacimiento": patient_data.get("birthDate"),
        }
        outcome = await self._request("POST", "/patient", json=payload)
        if isinstance(outcome, Err):
            error = outcome.error
            if error.status_code is None:
                raise SubmitPatientError("No response was received") from error
            message = server_error_message(error.body)
            raise SubmitPatientError(
                message or "Error registering information",
            ) from error

        data = _safe_json(outcome.result)
        if not isinstance(data, dict) or _is_missing(data.get("id")):
            raise SubmitPatientError("Error registering information")
        return data["id"]

    # ─── Reads ────────────────────────────────────────────────────

    async def _get_record(
        self, path: str, fields: Iterable[str], what: str,
    ) -> Result[dict, Exception]:
        outcome = await self._request("GET", path)
        if isinstance(outcome, Err):
            return outcome
        try:
            return Ok(_require_fields(_safe_json(outcome.result), fields, what))
        except ApiContractError as e:
            return Err(e)

    async def get_general_info(self, patient_id: int) -> Result[dict, Exception]:
        return await self._get_record(
            f"/patient/general/{_segment(patient_id)}", _GENERAL_FIELDS, "patient",
        )

    async def get_student_info(self, patient_id: int) -> Result[dict, Exception]:
        return await self._get_record(
            f"/patient/student/{_segment(patient_id)}", _STUDENT_FIELDS, "student",
        )

    async def get_surgical_history(self, patient_id: int) -> Result[dict, Exception]:
        outcome = await self._get_record(
            f"/patient/surgical-history/{_segment(patient_id)}",
            _SURGICAL_HISTORY_FIELDS, "surgical history",
        )
        if isinstance(outcome, Err):
            return outcome
        events = outcome.result["surgicalEventData"]
        if not isinstance(events, list):
            return Err(ApiContractError("Received surgicalEventData is not a list!"))
        try:
            for event in events:
                _require_fields(event, _SURGICAL_EVENT_FIELDS, "surgical event")
        except ApiContractError as e:
            return Err(e)
        return outcome
