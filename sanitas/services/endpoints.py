"""Endpoint Registry — every resource/action as an Endpoint for the request pipeline.

Invariants:
    - One Endpoint per (method, route); names are unique and used in logs
    - Routes use {param} placeholders matching ApiEvent.path_parameters keys
"""

from sanitas.services import handle_affiliation, handle_patient, handle_surgical_history
from sanitas.services.pipeline import Endpoint

CREATE_PATIENT = Endpoint(
    name="create-patient",
    method="POST",
    route="/patient",
    parse=handle_patient.parse_create_patient,
    run=handle_patient.create_patient,
    success_status=201,
)

SEARCH_PATIENTS = Endpoint(
    name="search-patients",
    method="POST",
    route="/patient/search",
    parse=handle_patient.parse_search_patients,
    run=handle_patient.search_patients,
)

CHECK_CUI = Endpoint(
    name="check-cui",
    method="GET",
    route="/check-cui/{cui}",
    parse=handle_patient.parse_check_cui,
    run=handle_patient.check_cui,
)

GET_GENERAL_INFO = Endpoint(
    name="get-general-patient-info",
    method="GET",
    route="/patient/general/{id}",
    parse=handle_patient.parse_general_info,
    run=handle_patient.get_general_info,
)

GET_STUDENT_INFO = Endpoint(
    name="get-general-student-info",
    method="GET",
    route="/patient/student/{id}",
    parse=handle_affiliation.parse_student_info,
    run=handle_affiliation.get_student_info,
)

GET_COLLABORATOR_INFO = Endpoint(
    name="get-collaborator-info",
    method="GET",
    route="/patient/collaborator/{id}",
    parse=handle_affiliation.parse_collaborator_info,
    run=handle_affiliation.get_collaborator_info,
)

GET_SURGICAL_HISTORY = Endpoint(
    name="get-surgical-history",
    method="GET",
    route="/patient/surgical-history/{id}",
    parse=handle_surgical_history.parse_get_surgical_history,
    run=handle_surgical_history.get_surgical_history,
)

CREATE_SURGICAL_HISTORY = Endpoint(
    name="create-surgical-history",
    method="POST",
    route="/patient/surgical-history",
    parse=handle_surgical_history.parse_create_surgical_history,
    run=handle_surgical_history.create_surgical_history,
    success_status=201,
)
