"""ORM Models — SQLAlchemy declarative models for the patient record schema.

Invariants:
    - All models inherit from Base (db/base.py)
    - Patient is the parent table; every sub-record is keyed by id_paciente

Design Decisions:
    - One file per table
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from sanitas.models.patient import Patient  # noqa: F401
from sanitas.models.student import StudentInfo  # noqa: F401
from sanitas.models.collaborator import CollaboratorInfo  # noqa: F401
from sanitas.models.surgical_history import SurgicalHistory  # noqa: F401
