"""Initial schema - users, events, guests

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00

"""
from typing import Union

import sqlalchemy as sa
import sqlalchemy_utils
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, None] = None
depends_on: Union[str, None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uuid", sqlalchemy_utils.UUIDType(), primary_key=True),
        *_timestamps(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("hashed_password", sa.String(255), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "events",
        sa.Column("uuid", sqlalchemy_utils.UUIDType(), primary_key=True),
        *_timestamps(),
        sa.Column(
            "organizer_id",
            sqlalchemy_utils.UUIDType(),
            sa.ForeignKey("users.uuid", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(500), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("rsvp_deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.CheckConstraint("max_capacity > 0", name="ck_events_max_capacity_positive"),
    )
    op.create_index("ix_events_organizer_id", "events", ["organizer_id"])
    op.create_index("ix_events_date", "events", ["date"])

    op.create_table(
        "guests",
        sa.Column("uuid", sqlalchemy_utils.UUIDType(), primary_key=True),
        *_timestamps(),
        sa.Column(
            "event_id",
            sqlalchemy_utils.UUIDType(),
            sa.ForeignKey("events.uuid", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("title", sa.String(50), nullable=True),
        sa.Column("invite_code", sa.String(32), nullable=False),
        sa.Column(
            "status",
            sa.Enum("PENDING", "YES", "NO", "MAYBE", name="guest_status_enum"),
            nullable=False,
        ),
    )
    op.create_index("ix_guests_event_id", "guests", ["event_id"])
    op.create_index("ix_guests_email", "guests", ["email"])
    op.create_index("ix_guests_invite_code", "guests", ["invite_code"], unique=True)
    op.create_index("ix_guests_event_id_status", "guests", ["event_id", "status"])


def downgrade() -> None:
    op.drop_table("guests")
    op.drop_table("events")
    op.drop_table("users")
    sa.Enum(name="guest_status_enum").drop(op.get_bind(), checkfirst=True)
