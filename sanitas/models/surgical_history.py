"""Surgical History ORM — one row per surgery recorded for a patient.

Invariants:
    - Many rows per patient; zero rows is a valid state
    - fecha holds the surgery year as text, as captured by the intake form
"""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sanitas.db.base import Base


class SurgicalHistory(Base):
    __tablename__ = "antecedentes_quirurgicos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_paciente: Mapped[int] = mapped_column(
        ForeignKey("paciente.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    tipo_de_cirugia: Mapped[str] = mapped_column(String(200), nullable=False)
    fecha: Mapped[str] = mapped_column(String(10), nullable=False)
    complicaciones: Mapped[str | None] = mapped_column(Text, nullable=True)
