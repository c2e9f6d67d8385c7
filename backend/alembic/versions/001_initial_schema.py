"""Initial schema: events and eventsregistrations with uniqueness indexes.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Events table
    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("publish_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("venue", sa.String(255), nullable=True),
        sa.Column("banner_image", sa.String(1024), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("event_type", sa.String(100), nullable=True),
        sa.Column("is_featured", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("is_gated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("always_approve", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("more_info", sa.Text(), nullable=True),
        sa.Column("more_info_text", sa.Text(), nullable=True),
        sa.Column("external_registration_link", sa.String(1024), nullable=True),
        sa.Column("rules", sa.Text(), nullable=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("typeform_config", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("slug", name="uq_events_slug"),
    )

    # Registrations table
    op.create_table(
        "eventsregistrations",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("event_id", sa.String(36), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("application_id", sa.String(36), nullable=True),
        sa.Column("registration_email", sa.String(255), nullable=True),
        sa.Column("attendance", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("is_approved", sa.Boolean(), nullable=True),
        sa.Column("is_team_entry", sa.Boolean(), nullable=True, server_default=sa.false()),
        sa.Column("details", sa.JSON(), nullable=True),
        sa.Column("ticket_id", sa.String(64), nullable=True),
        sa.Column("event_title", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_eventsregistrations_event_id", "eventsregistrations", ["event_id"])
    # One registration per application per event
    op.create_index(
        "uq_registration_event_application",
        "eventsregistrations",
        ["event_id", "application_id"],
        unique=True,
    )
    # One registration per email per event, for entries without an application
    op.create_index(
        "uq_registration_event_email",
        "eventsregistrations",
        ["event_id", "registration_email"],
        unique=True,
        postgresql_where=sa.text("application_id IS NULL"),
        sqlite_where=sa.text("application_id IS NULL"),
    )


def downgrade() -> None:
    op.drop_index("uq_registration_event_email", table_name="eventsregistrations")
    op.drop_index("uq_registration_event_application", table_name="eventsregistrations")
    op.drop_index("ix_eventsregistrations_event_id", table_name="eventsregistrations")
    op.drop_table("eventsregistrations")
    op.drop_table("events")
