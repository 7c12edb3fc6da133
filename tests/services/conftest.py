"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db_manager dependency overridden to use the test engine
    - db_manager module singleton patched for the readiness probe

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features such as ILIKE are emulated by SQLAlchemy)
"""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import sanitas.infrastructure.database as db_module
import sanitas.models  # noqa: F401
from sanitas.db.base import Base
from sanitas.infrastructure.database import DatabaseSessionManager, get_db_manager
from sanitas.main import app
from sanitas.models.collaborator import CollaboratorInfo
from sanitas.models.patient import Patient
from sanitas.models.student import StudentInfo
from sanitas.models.surgical_history import SurgicalHistory


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def db_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(db_manager):
    """FastAPI test client with DB dependency overridden."""
    app.dependency_overrides[get_db_manager] = lambda: db_manager

    original_manager = db_module.db_manager
    db_module.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def seed_patient(test_db):
    """Insert one patient with no sub-records."""
    patient = Patient(
        cui="2990123450101",
        nombre="Juan Carlos",
        apellido="Pérez López",
        es_mujer=False,
        fecha_nacimiento=date(1990, 1, 1),
    )
    test_db.add(patient)
    await test_db.commit()
    await test_db.refresh(patient)
    return patient


@pytest.fixture
async def seed_student(test_db, seed_patient):
    student = StudentInfo(
        id_paciente=seed_patient.id, carnet="22386", carrera="Ingeniería en Sistemas",
    )
    test_db.add(student)
    await test_db.commit()
    return student


@pytest.fixture
async def seed_collaborator(test_db):
    patient = Patient(
        cui="3001234560101",
        nombre="María",
        apellido="González",
        es_mujer=True,
        fecha_nacimiento=date(1985, 5, 5),
    )
    test_db.add(patient)
    await test_db.flush()
    collaborator = CollaboratorInfo(
        id_paciente=patient.id, codigo="C-0042", area="Biblioteca",
    )
    test_db.add(collaborator)
    await test_db.commit()
    return patient


@pytest.fixture
async def seed_surgeries(test_db, seed_patient):
    rows = [
        SurgicalHistory(
            id_paciente=seed_patient.id, tipo_de_cirugia="Appendectomy",
            fecha="2023", complicaciones="None",
        ),
        SurgicalHistory(
            id_paciente=seed_patient.id, tipo_de_cirugia="Tonsillectomy",
            fecha="2010", complicaciones=None,
        ),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows
