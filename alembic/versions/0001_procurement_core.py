"""procurement core schema: projects, bids, contract ledger

Revision ID: 0001_procurement_core
Revises:
Create Date: 2026-10-19
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision = "0001_procurement_core"
down_revision = None
branch_labels = None
depends_on = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    # projects
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False),
        sa.Column("buyer", sa.String(length=128), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False, server_default=sa.text("'OPEN'")),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("name", name="uq_projects_name"),
    )
    op.create_index("ix_projects_buyer", "projects", ["buyer"])
    op.create_index("ix_projects_buyer_state", "projects", ["buyer", "state"])

    # bids
    op.create_table(
        "bids",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("supplier", sa.String(length=128), nullable=False),
        sa.Column("amount", sa.Numeric(20, 2), nullable=False),
        sa.Column("state", sa.String(length=16), nullable=False, server_default=sa.text("'OPEN'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            name="fk_bids_project",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("project_id", "position", name="uq_bid_project_position"),
        sa.CheckConstraint("amount > 0", name="ck_bid_amount_positive"),
    )
    op.create_index("ix_bid_supplier", "bids", ["supplier"])

    # contract ledger
    op.create_table(
        "contract_ledger_entries",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("project_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("seq", sa.Integer(), nullable=False),
        sa.Column("entry_type", sa.String(length=64), nullable=False),
        sa.Column("prev_hash", sa.String(length=128), nullable=False),
        sa.Column("entry_hash", sa.String(length=128), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("payload_json", JSON_TYPE, nullable=False),
        sa.ForeignKeyConstraint(
            ["project_id"],
            ["projects.id"],
            name="fk_contract_ledger_project",
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("project_id", "seq", name="uq_contract_ledger_seq"),
    )
    op.create_index("ix_contract_ledger_project", "contract_ledger_entries", ["project_id"])


def downgrade():
    op.drop_index("ix_contract_ledger_project", table_name="contract_ledger_entries")
    op.drop_table("contract_ledger_entries")
    op.drop_index("ix_bid_supplier", table_name="bids")
    op.drop_table("bids")
    op.drop_index("ix_projects_buyer_state", table_name="projects")
    op.drop_index("ix_projects_buyer", table_name="projects")
    op.drop_table("projects")
