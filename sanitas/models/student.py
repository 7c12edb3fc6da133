"""Student ORM — university student data attached to a patient."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sanitas.db.base import Base


class StudentInfo(Base):
    __tablename__ = "estudiante"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_paciente: Mapped[int] = mapped_column(
        ForeignKey("paciente.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    carnet: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    carrera: Mapped[str | None] = mapped_column(String(100), nullable=True)
