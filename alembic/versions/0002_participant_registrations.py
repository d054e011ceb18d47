"""add_participant_registrations

Revision ID: 0002_participant_registrations
Revises: 0001_initial_schema
Create Date: 2026-10-18 14:30:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0002_participant_registrations"
down_revision: Union[str, Sequence[str], None] = "0001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Добавить таблицу анкет публичной регистрации участников."""
    op.create_table(
        "participant_registrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("college_university", sa.String(255), nullable=False),
        sa.Column("department_year", sa.String(255), nullable=True),
        sa.Column("contact_number", sa.String(50), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("team_name", sa.String(255), nullable=True),
        sa.Column("team_size", sa.Integer(), nullable=False),
        sa.Column("role_in_team", sa.String(32), nullable=False),
        sa.Column("technical_skills", sa.Text(), nullable=True),
        sa.Column("previous_experience", sa.Text(), nullable=True),
        sa.Column("agree_to_rules", sa.Boolean(), nullable=False),
        sa.Column("registered_at", sa.DateTime(), nullable=True),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("event_specific_data", sa.JSON(), nullable=True),
        sa.UniqueConstraint(
            "event_id", "email", name="uq_participant_registrations_event_email"
        ),
    )
    op.create_index(
        "ix_participant_registrations_event_id",
        "participant_registrations",
        ["event_id"],
    )
    op.create_index(
        "ix_participant_registrations_college_university",
        "participant_registrations",
        ["college_university"],
    )
    op.create_index(
        "ix_participant_registrations_email", "participant_registrations", ["email"]
    )
    op.create_index(
        "ix_participant_registrations_registered_at",
        "participant_registrations",
        ["registered_at"],
    )


def downgrade() -> None:
    """Удалить таблицу анкет участников."""
    op.drop_table("participant_registrations")
