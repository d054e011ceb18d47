"""initial schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Перечисления хранятся строками (native_enum=False)
ENUM = sa.String(32)


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("password", sa.String(255), nullable=True),
        sa.Column("role", ENUM, nullable=False),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"])

    op.create_table(
        "user_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=True),
        sa.Column("organization", sa.String(255), nullable=True),
        sa.Column("avatar", sa.String(512), nullable=True),
        sa.Column("social_links", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("max_participants", sa.Integer(), nullable=False),
        sa.Column("registration_deadline", sa.DateTime(), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        sa.Column(
            "organizer_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False
        ),
        sa.Column("requirements", sa.JSON(), nullable=True),
        sa.Column("prizes", sa.JSON(), nullable=True),
        sa.Column("banner_image", sa.String(1024), nullable=True),
        sa.Column("event_image", sa.String(1024), nullable=True),
        sa.Column("registration_fee", sa.Float(), nullable=True),
        sa.Column("payment_link", sa.String(1024), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_events_category", "events", ["category"])
    op.create_index("ix_events_status", "events", ["status"])
    op.create_index("ix_events_organizer_id", "events", ["organizer_id"])

    op.create_table(
        "event_judges",
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "judge_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "registrations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "participant_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("payment_status", ENUM, nullable=False),
        sa.Column("is_team_leader", sa.Boolean(), nullable=True),
        sa.Column("submission_data", sa.JSON(), nullable=True),
        sa.Column("registered_at", sa.DateTime(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column(
            "reviewed_by", sa.Integer(), sa.ForeignKey("users.id"), nullable=True
        ),
        sa.Column("review_notes", sa.Text(), nullable=True),
        sa.UniqueConstraint(
            "event_id", "participant_id", name="uq_registrations_event_participant"
        ),
    )
    op.create_index("ix_registrations_event_id", "registrations", ["event_id"])
    op.create_index(
        "ix_registrations_participant_id", "registrations", ["participant_id"]
    )

    op.create_table(
        "pre_qualifier_tests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("test_link", sa.String(1024), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("eligibility_criteria", sa.Text(), nullable=True),
        sa.Column("max_attempts", sa.Integer(), nullable=False),
        sa.Column("passing_score", sa.Float(), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column(
            "event_id",
            sa.Integer(),
            sa.ForeignKey("events.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("difficulty", ENUM, nullable=False),
        sa.Column("total_questions", sa.Integer(), nullable=True),
        sa.Column("test_type", ENUM, nullable=False),
    )
    op.create_index(
        "ix_pre_qualifier_tests_start_date", "pre_qualifier_tests", ["start_date"]
    )
    op.create_index(
        "ix_pre_qualifier_tests_created_by", "pre_qualifier_tests", ["created_by"]
    )
    op.create_index(
        "ix_pre_qualifier_tests_event_id", "pre_qualifier_tests", ["event_id"]
    )
    op.create_index(
        "ix_pre_qualifier_tests_active", "pre_qualifier_tests", ["is_active"]
    )

    op.create_table(
        "test_attempts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "test_id",
            sa.Integer(),
            sa.ForeignKey("pre_qualifier_tests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("participant_email", sa.String(255), nullable=False),
        sa.Column("participant_name", sa.String(255), nullable=False),
        sa.Column("attempt_number", sa.Integer(), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.Column("score", sa.Float(), nullable=True),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("time_spent", sa.Integer(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.String(512), nullable=True),
        sa.Column("responses", sa.JSON(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.UniqueConstraint(
            "test_id",
            "participant_email",
            "attempt_number",
            name="uq_test_attempts_test_participant_number",
        ),
    )
    op.create_index("ix_test_attempts_test_id", "test_attempts", ["test_id"])
    op.create_index(
        "ix_test_attempts_participant_email", "test_attempts", ["participant_email"]
    )
    op.create_index("ix_test_attempts_completed_at", "test_attempts", ["completed_at"])
    op.create_index("ix_test_attempts_status", "test_attempts", ["status"])
    op.create_index(
        "ix_test_attempts_test_participant",
        "test_attempts",
        ["test_id", "participant_email"],
    )

    op.create_table(
        "organizer_credentials",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", ENUM, nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column("organization", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=False),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.Column("password_reset_required", sa.Boolean(), nullable=True),
        sa.Column(
            "linked_user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )
    op.create_index(
        "ix_organizer_credentials_role", "organizer_credentials", ["role"]
    )

    op.create_table(
        "news_updates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", ENUM, nullable=False),
        sa.Column("image", sa.String(1024), nullable=True),
        sa.Column("video_link", sa.String(1024), nullable=True),
        sa.Column("publish_date", sa.DateTime(), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.Column("author_email", sa.String(255), nullable=False),
        sa.Column("status", ENUM, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("featured", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_news_updates_category", "news_updates", ["category"])
    op.create_index("ix_news_updates_publish_date", "news_updates", ["publish_date"])
    op.create_index("ix_news_updates_author_email", "news_updates", ["author_email"])
    op.create_index("ix_news_updates_status", "news_updates", ["status"])

    op.create_table(
        "participating_institutions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", ENUM, nullable=False),
        sa.Column("logo", sa.String(1024), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.String(1024), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("student_count", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index(
        "ix_participating_institutions_type", "participating_institutions", ["type"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("participating_institutions")
    op.drop_table("news_updates")
    op.drop_table("organizer_credentials")
    op.drop_table("test_attempts")
    op.drop_table("pre_qualifier_tests")
    op.drop_table("registrations")
    op.drop_table("event_judges")
    op.drop_table("events")
    op.drop_table("user_profiles")
    op.drop_table("users")
