"""Initial schema: persisted issues, issue cache entries, branches.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _issue_columns() -> list[sa.Column[object]]:
    return [
        sa.Column("component_uuid", sa.String(64), nullable=False),
        sa.Column("component_key", sa.String(400), nullable=False),
        sa.Column("rule_key", sa.String(200), nullable=False),
        sa.Column("line", sa.Integer(), nullable=True),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("line_hash", sa.String(64), nullable=True),
        sa.Column("severity", sa.String(10), nullable=False),
        sa.Column("manual_severity", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(20), nullable=True),
        sa.Column("resolution", sa.String(20), nullable=True),
        sa.Column("assignee", sa.String(255), nullable=True),
        sa.Column("tags", sa.Text(), nullable=True),
        sa.Column("attributes", sa.Text(), nullable=True),
        sa.Column("on_disabled_rule", sa.Boolean(), nullable=False),
        sa.Column("creation_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("update_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("close_date", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "issue",
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("branch", sa.String(255), nullable=False),
        *_issue_columns(),
        sa.PrimaryKeyConstraint("key", name="pk_issue"),
    )
    op.create_index("ix_issue_branch_component_uuid", "issue", ["branch", "component_uuid"])
    op.create_index("ix_issue_branch_component_key", "issue", ["branch", "component_key"])

    op.create_table(
        "issue_cache_entry",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("run_id", sa.String(64), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("key", sa.String(64), nullable=True),
        *_issue_columns(),
        sa.Column("is_new", sa.Boolean(), nullable=False),
        sa.Column("copied", sa.Boolean(), nullable=False),
        sa.Column("changed", sa.Boolean(), nullable=False),
        sa.Column("being_closed", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_issue_cache_entry"),
    )
    op.create_index(
        "ix_issue_cache_entry_run_sequence", "issue_cache_entry", ["run_id", "sequence"]
    )

    op.create_table(
        "branch",
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("long_lived", sa.Boolean(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("name", name="pk_branch"),
    )


def downgrade() -> None:
    op.drop_table("branch")
    op.drop_index("ix_issue_cache_entry_run_sequence", table_name="issue_cache_entry")
    op.drop_table("issue_cache_entry")
    op.drop_index("ix_issue_branch_component_key", table_name="issue")
    op.drop_index("ix_issue_branch_component_uuid", table_name="issue")
    op.drop_table("issue")
