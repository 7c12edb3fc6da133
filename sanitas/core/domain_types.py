"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - PatientId wraps the integer primary key of `paciente`; ids above MAX_PATIENT_ID are malformed
    - Search discriminants are encoded as an Enum — no raw string matching
    - CUI_LENGTH is the exact length of a national identity code
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

PatientId = NewType("PatientId", int)
Cui = NewType("Cui", str)

CUI_LENGTH = 13

# `paciente.id` is a Postgres integer column
MAX_PATIENT_ID = 2_147_483_647


# ─── Enums ───────────────────────────────────────────────────────

class SearchType(str, Enum):
    """Patient search discriminant, values as sent on the wire."""
    NAMES = "Nombres"
    STUDENT_CARNET = "Carnet"
    COLLABORATOR_CODE = "CodigoColaborador"


class Sex(str, Enum):
    """Sex as captured by the registration form."""
    FEMALE = "F"
    MALE = "M"


def parse_patient_id(raw: str | None) -> PatientId | None:
    """Parse a path parameter into a PatientId; None when malformed."""
    if raw is None:
        return None
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    if value > MAX_PATIENT_ID:
        return None
    return PatientId(value)
