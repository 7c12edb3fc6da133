"""Initial schema — paciente, estudiante, colaborador, antecedentes_quirurgicos.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "paciente",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("cui", sa.String(20), nullable=False, unique=True),
        sa.Column("es_mujer", sa.Boolean, nullable=False),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("apellido", sa.String(100), nullable=False),
        sa.Column("fecha_nacimiento", sa.Date, nullable=False),
    )

    op.create_table(
        "estudiante",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "id_paciente", sa.Integer,
            sa.ForeignKey("paciente.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("carnet", sa.String(20), nullable=False, unique=True),
        sa.Column("carrera", sa.String(100), nullable=True),
    )

    op.create_table(
        "colaborador",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "id_paciente", sa.Integer,
            sa.ForeignKey("paciente.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("codigo", sa.String(20), nullable=False, unique=True),
        sa.Column("area", sa.String(100), nullable=True),
    )

    op.create_table(
        "antecedentes_quirurgicos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "id_paciente", sa.Integer,
            sa.ForeignKey("paciente.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("tipo_de_cirugia", sa.String(200), nullable=False),
        sa.Column("fecha", sa.String(10), nullable=False),
        sa.Column("complicaciones", sa.Text, nullable=True),
    )
    op.create_index(
        "ix_antecedentes_quirurgicos_id_paciente",
        "antecedentes_quirurgicos", ["id_paciente"],
    )


def downgrade() -> None:
    op.drop_index(
        "ix_antecedentes_quirurgicos_id_paciente",
        table_name="antecedentes_quirurgicos",
    )
    op.drop_table("antecedentes_quirurgicos")
    op.drop_table("colaborador")
    op.drop_table("estudiante")
    op.drop_table("paciente")
