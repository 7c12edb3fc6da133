"""Collaborator ORM — staff data attached to a patient."""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from sanitas.db.base import Base


class CollaboratorInfo(Base):
    __tablename__ = "colaborador"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id_paciente: Mapped[int] = mapped_column(
        ForeignKey("paciente.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    codigo: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    area: Mapped[str | None] = mapped_column(String(100), nullable=True)
