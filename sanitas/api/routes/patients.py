"""Patient Routes — HTTP adapter from FastAPI requests to the request pipeline.

Invariants:
    - Every route accepts all methods; the pipeline rejects the wrong ones (same body as Lambda)
    - Response status, headers and body are copied verbatim from the ApiResponse
    - x-request-id header propagated into logs, generated when absent
"""

from uuid import uuid4

from fastapi import APIRouter, Depends, Request, Response

from sanitas.core.events import ApiEvent
from sanitas.infrastructure.database import DatabaseSessionManager, get_db_manager
from sanitas.services import endpoints
from sanitas.services.pipeline import Endpoint, dispatch

router = APIRouter(tags=["patients"])

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def to_api_event(request: Request) -> ApiEvent:
    raw = await request.body()
    return ApiEvent(
        http_method=request.method.upper(),
        path=request.url.path,
        path_parameters={k: str(v) for k, v in request.path_params.items()},
        query_parameters=dict(request.query_params),
        body=raw.decode("utf-8", errors="replace") if raw else None,
        request_id=request.headers.get("x-request-id") or str(uuid4()),
    )


async def run_endpoint(
    endpoint: Endpoint, request: Request, db: DatabaseSessionManager,
) -> Response:
    response = await dispatch(endpoint, await to_api_event(request), db)
    return Response(
        content=response.body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type="application/json",
    )


@router.api_route("/patient", methods=_ALL_METHODS)
async def create_patient(
    request: Request, db: DatabaseSessionManager = Depends(get_db_manager),
):
    """Register a new patient chart."""
    return await run_endpoint(endpoints.CREATE_PATIENT, request, db)


@router.api_route("/patient/search", methods=_ALL_METHODS)
async def search_patients(
    request: Request, db: DatabaseSessionManager = Depends(get_db_manager),
):
    """Search patients by names, student carnet or collaborator code."""
    return await run_endpoint(endpoints.SEARCH_PATIENTS, request, db)


@router.api_route("/check-cui/{cui}", methods=_ALL_METHODS)
async def check_cui(
    cui: str, request: Request,
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    return await run_endpoint(endpoints.CHECK_CUI, request, db)


@router.api_route("/patient/general/{id}", methods=_ALL_METHODS)
async def get_general_info(
    id: str, request: Request,
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    return await run_endpoint(endpoints.GET_GENERAL_INFO, request, db)


@router.api_route("/patient/student/{id}", methods=_ALL_METHODS)
async def get_student_info(
    id: str, request: Request,
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    return await run_endpoint(endpoints.GET_STUDENT_INFO, request, db)


@router.api_route("/patient/collaborator/{id}", methods=_ALL_METHODS)
async def get_collaborator_info(
    id: str, request: Request,
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    return await run_endpoint(endpoints.GET_COLLABORATOR_INFO, request, db)


@router.api_route("/patient/surgical-history", methods=_ALL_METHODS)
async def create_surgical_history(
    request: Request, db: DatabaseSessionManager = Depends(get_db_manager),
):
    return await run_endpoint(endpoints.CREATE_SURGICAL_HISTORY, request, db)


@router.api_route("/patient/surgical-history/{id}", methods=_ALL_METHODS)
async def get_surgical_history(
    id: str, request: Request,
    db: DatabaseSessionManager = Depends(get_db_manager),
):
    return await run_endpoint(endpoints.GET_SURGICAL_HISTORY, request, db)
