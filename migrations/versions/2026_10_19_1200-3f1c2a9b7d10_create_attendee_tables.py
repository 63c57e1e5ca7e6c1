"""create_attendee_tables

Revision ID: 3f1c2a9b7d10
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "3f1c2a9b7d10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "attendees",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("plus_one", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.Enum("pending", "accepted", "rejected", "checked_in", name="attendee_status_enum"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("qr_code_data", sa.Text(), nullable=True),
        sa.Column("invite_pending", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("invite_sent_on", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_attendees_name", "attendees", ["name"])
    op.create_index("ix_attendees_email", "attendees", ["email"])
    op.create_index("ix_attendees_status", "attendees", ["status"])

    op.create_table(
        "rsvp_logs",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("ip_address", sa.String(length=255), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("uuid"),
    )
    op.create_index("ix_rsvp_logs_email", "rsvp_logs", ["email"])

    op.create_table(
        "email_logs",
        sa.Column("uuid", sa.UUID(), nullable=False),
        sa.Column("resend_email_id", sa.String(length=255), nullable=True),
        sa.Column("to_address", sa.String(length=255), nullable=False),
        sa.Column("from_address", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("html_body", sa.Text(), nullable=True),
        sa.Column("text_body", sa.Text(), nullable=True),
        sa.Column("email_type", sa.Enum("qr_invitation", name="email_type_enum"), nullable=False),
        sa.Column("attendee_id", sa.UUID(), nullable=True),
        sa.Column(
            "status",
            sa.Enum("pending", "sent", "failed", name="email_status_enum"),
            nullable=False,
        ),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(["attendee_id"], ["attendees.uuid"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("uuid"),
        sa.UniqueConstraint("resend_email_id"),
    )
    op.create_index("ix_email_logs_resend_email_id", "email_logs", ["resend_email_id"])
    op.create_index("ix_email_logs_to_address", "email_logs", ["to_address"])
    op.create_index("ix_email_logs_email_type", "email_logs", ["email_type"])
    op.create_index("ix_email_logs_attendee_id", "email_logs", ["attendee_id"])
    op.create_index("ix_email_logs_status", "email_logs", ["status"])


def downgrade() -> None:
    op.drop_table("email_logs")
    op.drop_table("rsvp_logs")
    op.drop_table("attendees")

    sa.Enum(name="email_status_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="email_type_enum").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="attendee_status_enum").drop(op.get_bind(), checkfirst=True)
