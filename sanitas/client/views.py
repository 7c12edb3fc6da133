"""View Models — headless search and registration screens.

Invariants:
    - Views keep local UI state (inputs, error message) and reach shared state via use_store
    - Client-side validation runs before any API call; the server stays the authority
    - Search errors are shown as "ERROR: <message>":
        * ApiCallError with status < 500  → bad-request message
        * ApiCallError otherwise          → internal-error message
        * anything else                   → "The API has changed!"
    - The registration form keeps digits only in the CUI and letters/spaces in names
"""

import re
from dataclasses import dataclass
from typing import Awaitable, Callable

from sanitas.client.data_layer import SEARCH_TYPES, PatientPreview
from sanitas.client.result import ApiCallError, Err, Result
from sanitas.client.store import UseStore
from sanitas.core.domain_types import CUI_LENGTH

EMPTY_QUERY_MESSAGE = "Por favor ingrese algo para buscar!"
BAD_SEARCH_MESSAGE = "Búsqueda incorrecta, por favor ingresa todos los parámetros!"
INTERNAL_ERROR_MESSAGE = "Ha ocurrido un error interno, lo sentimos."
API_CHANGED_MESSAGE = "The API has changed!"

CUI_LENGTH_MESSAGE = "El CUI debe contener exactamente 13 caracteres."
GENDER_REQUIRED_MESSAGE = "El campo de género es obligatorio."
SUBMIT_SUCCESS_MESSAGE = "¡Información registrada con éxito!"

_NON_NAME_CHARS = re.compile(r"[^a-zA-ZáéíóúÁÉÍÓÚñÑ\s]")
_NON_DIGITS = re.compile(r"\D")

SearchPatientsApiCall = Callable[[str, str], Awaitable[Result]]
SubmitPatientApiCall = Callable[[dict], Awaitable[int]]


class SearchPatientView:
    """Patient search screen."""

    def __init__(self, search_patients_api_call: SearchPatientsApiCall, use_store: UseStore):
        self._search = search_patients_api_call
        self._use_store = use_store
        self.error = ""

    @property
    def query(self) -> str:
        return self._use_store(lambda s: s.search_query.query)

    @property
    def search_type(self) -> str:
        return self._use_store(lambda s: s.search_query.type)

    @property
    def patients(self) -> list[PatientPreview]:
        return self._use_store(lambda s: s.patients)

    @property
    def empty_query(self) -> bool:
        return len(self.query.strip()) <= 0

    def set_query(self, query: str) -> None:
        self._use_store(lambda s: s.set_search_query)(query, self.search_type)

    def set_search_type(self, search_type: str) -> None:
        if search_type not in SEARCH_TYPES:
            raise ValueError(f"Unknown search type: {search_type}")
        self._use_store(lambda s: s.set_search_query)(self.query, search_type)

    def show_error_message(self, message: str) -> None:
        self.error = f"ERROR: {message}"

    def hide_error_message(self) -> None:
        self.error = ""

    async def search_btn_click(self) -> None:
        self.hide_error_message()
        if self.empty_query:
            self.show_error_message(EMPTY_QUERY_MESSAGE)
            return

        outcome = await self._search(self.query, self.search_type)
        if isinstance(outcome, Err):
            error = outcome.error
            if isinstance(error, ApiCallError):
                if error.status_code is not None and error.status_code < 500:
                    self.show_error_message(BAD_SEARCH_MESSAGE)
                else:
                    self.show_error_message(INTERNAL_ERROR_MESSAGE)
            else:
                self.show_error_message(API_CHANGED_MESSAGE)
            return

        self._use_store(lambda s: s.set_patients)(outcome.result)

    def gen_view_btn_click(self, patient_id: int) -> None:
        """Select a search result for the patient detail screen."""
        self._use_store(lambda s: s.set_selected_patient_id)(patient_id)


@dataclass
class FormOutcome:
    """What the form shows to the user after a submit attempt."""
    success: bool
    message: str


class AddPatientForm:
    """Patient registration screen."""

    REQUIRED_FIELDS = ("names", "surnames", "birthDate")

    def __init__(
        self,
        submit_patient_data: SubmitPatientApiCall,
        use_store: UseStore,
        cui: str = "",
    ):
        self._submit = submit_patient_data
        self._use_store = use_store
        self.patient_data = {
            "cui": cui,
            "names": "",
            "surnames": "",
            "sex": None,
            "birthDate": "",
        }

    @property
    def cui_is_valid(self) -> bool:
        return len(self.patient_data["cui"]) == CUI_LENGTH

    def handle_change(self, field: str, value: str) -> None:
        if field in ("names", "surnames"):
            value = _NON_NAME_CHARS.sub("", value)
        elif field == "cui":
            value = _NON_DIGITS.sub("", value)
        self.patient_data = {**self.patient_data, field: value}

    def handle_gender_change(self, sex: str) -> None:
        """sex is "F" or "M"."""
        self.patient_data = {**self.patient_data, "sex": sex}

    def validate_form_data(self) -> str | None:
        """First validation failure message, or None when the form can be sent."""
        if not self.cui_is_valid:
            return CUI_LENGTH_MESSAGE
        for field in self.REQUIRED_FIELDS:
            if not self.patient_data[field]:
                return f"El campo {field} es obligatorio y no puede estar vacío."
        if self.patient_data["sex"] not in ("F", "M"):
            return GENDER_REQUIRED_MESSAGE
        return None

    async def handle_submit(self) -> FormOutcome:
        problem = self.validate_form_data()
        if problem:
            return FormOutcome(False, problem)
        try:
            patient_id = await self._submit(dict(self.patient_data))
        except Exception as e:
            return FormOutcome(False, f"Error al enviar datos: {e}")
        self._use_store(lambda s: s.set_selected_patient_id)(patient_id)
        return FormOutcome(True, SUBMIT_SUCCESS_MESSAGE)
