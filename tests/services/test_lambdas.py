"""Lambda Entry Points — proxy-event in, {statusCode, headers, body} dict out.

Invariants:
    - Each call runs in its own event loop against a NullPool engine
    - pathParameters / body of the Lambda event reach the operation
"""

import asyncio
import json
from datetime import date
from types import SimpleNamespace

import pytest

from sanitas.config import Settings
from sanitas.db.base import Base
from sanitas.infrastructure.database import DatabaseSessionManager
from sanitas.lambdas import LambdaHandler
from sanitas.models.patient import Patient
from sanitas.services import endpoints


@pytest.fixture
def file_db(tmp_path):
    """File-backed SQLite manager usable across asyncio.run() calls."""
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'lambda.db'}", null_pool=True,
    )

    async def _setup():
        async with manager.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with manager.session() as db:
            db.add(Patient(
                cui="1111111111111", nombre="Ana", apellido="Ruiz",
                es_mujer=True, fecha_nacimiento=date(2001, 2, 3),
            ))
            await db.commit()

    asyncio.run(_setup())
    yield manager
    asyncio.run(manager.dispose())


def test_lambda_handler_returns_envelope(file_db):
    handler = LambdaHandler(endpoints.CHECK_CUI, db=file_db)

    result = handler(
        {"httpMethod": "GET", "pathParameters": {"cui": "1111111111111"}},
        SimpleNamespace(aws_request_id="req-1"),
    )

    assert result["statusCode"] == 200
    assert result["headers"]["Access-Control-Allow-Origin"] == "*"
    assert json.loads(result["body"]) == {"exists": True, "cui": "1111111111111"}


def test_lambda_handler_create_then_duplicate(file_db):
    handler = LambdaHandler(endpoints.CREATE_PATIENT, db=file_db)
    body = json.dumps({
        "cui": "1111111111111", "nombres": "Otra", "apellidos": "Persona",
        "esMujer": True, "fechaNacimiento": "1999-09-09",
    })

    result = handler({"httpMethod": "POST", "body": body})

    assert result["statusCode"] == 409
    assert json.loads(result["body"])["error"]["message"] == "CUI ya existe."


def test_lambda_handler_missing_path_parameters(file_db):
    handler = LambdaHandler(endpoints.GET_STUDENT_INFO, db=file_db)

    result = handler({"httpMethod": "GET", "pathParameters": None})

    assert result["statusCode"] == 400
    assert json.loads(result["body"])["error"]["message"] == (
        "Invalid request: No id supplied!"
    )


def test_lambda_handler_rejects_wrong_method(file_db):
    handler = LambdaHandler(endpoints.GET_SURGICAL_HISTORY, db=file_db)

    result = handler({"httpMethod": "POST", "pathParameters": {"id": "1"}})

    assert result["statusCode"] == 405


def test_lambda_handler_unusable_database_url_returns_500():
    handler = LambdaHandler(
        endpoints.CHECK_CUI, settings=Settings(postgres_url="not-a-url"),
    )

    result = handler({"httpMethod": "GET", "pathParameters": {"cui": "1"}})

    assert result["statusCode"] == 500
    assert result["headers"]["Access-Control-Allow-Origin"] == "*"
    error = json.loads(result["body"])["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["type"] == "ArgumentError"


def test_lambda_handler_malformed_event_returns_500(file_db):
    handler = LambdaHandler(endpoints.CHECK_CUI, db=file_db)

    result = handler(None)

    assert result["statusCode"] == 500
