"""Patient ORM — the patient chart (ficha) keyed by national identity code.

Invariants:
    - cui is unique across all patients (business key)
    - Column names keep the Spanish storage naming; API naming lives in core/mappers.py
"""

from datetime import date

from sqlalchemy import Boolean, Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sanitas.db.base import Base


class Patient(Base):
    """Patient row — parent of student, collaborator and surgical sub-records."""
    __tablename__ = "paciente"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cui: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    es_mujer: Mapped[bool] = mapped_column(Boolean, nullable=False)
    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    apellido: Mapped[str] = mapped_column(String(100), nullable=False)
    fecha_nacimiento: Mapped[date] = mapped_column(Date, nullable=False)
