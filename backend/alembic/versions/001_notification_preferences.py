"""Notification preferences and audit log

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # One row per (user, notification type); absence means not opted out
    op.create_table(
        "notification_preferences",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("notification_type", sa.String(50), nullable=False),
        sa.Column("opted_out", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("user_id", "notification_type"),
    )
    op.create_index(
        "idx_notification_preferences_type",
        "notification_preferences",
        ["notification_type"],
    )

    # Append-only audit trail, id generated by a sequence
    op.create_table(
        "notification_preference_audit_logs",
        sa.Column("id", sa.BigInteger(), sa.Identity(always=True), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("notification_type", sa.String(50), nullable=False),
        sa.Column("old_opted_out", sa.Boolean(), nullable=False),
        sa.Column("new_opted_out", sa.Boolean(), nullable=False),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("ip_address", sa.String(45), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_preference_audit_user_type",
        "notification_preference_audit_logs",
        ["user_id", "notification_type", "id"],
    )
    op.create_index(
        "idx_preference_audit_changed",
        "notification_preference_audit_logs",
        ["changed_at"],
    )

    # Audit entries are immutable: reject UPDATE and DELETE at the database
    op.execute(
        """
        CREATE FUNCTION reject_audit_log_mutation() RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'notification_preference_audit_logs is append-only';
        END;
        $$ LANGUAGE plpgsql
        """
    )
    op.execute(
        """
        CREATE TRIGGER trg_preference_audit_immutable
        BEFORE UPDATE OR DELETE ON notification_preference_audit_logs
        FOR EACH ROW EXECUTE FUNCTION reject_audit_log_mutation()
        """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trg_preference_audit_immutable ON notification_preference_audit_logs")
    op.execute("DROP FUNCTION IF EXISTS reject_audit_log_mutation()")
    op.drop_index("idx_preference_audit_changed", table_name="notification_preference_audit_logs")
    op.drop_index("idx_preference_audit_user_type", table_name="notification_preference_audit_logs")
    op.drop_table("notification_preference_audit_logs")
    op.drop_index("idx_notification_preferences_type", table_name="notification_preferences")
    op.drop_table("notification_preferences")
