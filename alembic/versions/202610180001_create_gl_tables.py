"""create general ledger tables

Revision ID: 202610180001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "202610180001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "gl_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("account_number", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("account_type", sa.String(length=20), nullable=False),
        sa.Column("sub_type", sa.String(length=100), nullable=True),
        sa.Column("parent_account_id", sa.Integer(), nullable=True),
        sa.Column("is_tax_deductible", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("tax_category", sa.String(length=100), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("account_number"),
        sa.ForeignKeyConstraint(["parent_account_id"], ["gl_account.id"], ondelete="SET NULL"),
        sa.CheckConstraint(
            "account_type IN ('asset', 'liability', 'equity', 'revenue', 'expense')",
            name="ck_gl_account_type",
        ),
    )
    op.create_index("ix_gl_account_type", "gl_account", ["account_type"])

    op.create_table(
        "gl_fiscal_period",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("period_name", sa.String(length=100), nullable=False),
        sa.Column("period_type", sa.String(length=20), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("closed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("closed_by", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("start_date <= end_date", name="ck_gl_fiscal_period_range"),
    )
    op.create_index("ix_gl_fiscal_period_range", "gl_fiscal_period", ["start_date", "end_date"])

    op.create_table(
        "gl_journal_entry",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("entry_date", sa.Date(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("reference_type", sa.String(length=50), nullable=True),
        sa.Column("reference_id", sa.Integer(), nullable=True),
        sa.Column("is_adjusting", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_closing", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("fiscal_period_id", sa.Integer(), nullable=True),
        sa.Column("created_by", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["fiscal_period_id"], ["gl_fiscal_period.id"], ondelete="RESTRICT"),
    )
    op.create_index("ix_gl_journal_entry_date", "gl_journal_entry", ["entry_date"])
    op.create_index("ix_gl_journal_entry_reference", "gl_journal_entry", ["reference_type", "reference_id"])

    op.create_table(
        "gl_journal_entry_line",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("journal_entry_id", sa.Integer(), nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("debit", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("credit", sa.Numeric(12, 2), nullable=False, server_default="0"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["journal_entry_id"], ["gl_journal_entry.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["account_id"], ["gl_account.id"], ondelete="RESTRICT"),
        sa.CheckConstraint("debit >= 0", name="ck_gl_line_debit_nonnegative"),
        sa.CheckConstraint("credit >= 0", name="ck_gl_line_credit_nonnegative"),
        sa.CheckConstraint(
            "((debit > 0 AND credit = 0) OR (credit > 0 AND debit = 0))",
            name="ck_gl_line_single_sided",
        ),
    )
    op.create_index("ix_gl_journal_entry_line_account", "gl_journal_entry_line", ["account_id"])
    op.create_index("ix_gl_journal_entry_line_entry", "gl_journal_entry_line", ["journal_entry_id"])


def downgrade() -> None:
    op.drop_index("ix_gl_journal_entry_line_entry", table_name="gl_journal_entry_line")
    op.drop_index("ix_gl_journal_entry_line_account", table_name="gl_journal_entry_line")
    op.drop_table("gl_journal_entry_line")
    op.drop_index("ix_gl_journal_entry_reference", table_name="gl_journal_entry")
    op.drop_index("ix_gl_journal_entry_date", table_name="gl_journal_entry")
    op.drop_table("gl_journal_entry")
    op.drop_index("ix_gl_fiscal_period_range", table_name="gl_fiscal_period")
    op.drop_table("gl_fiscal_period")
    op.drop_index("ix_gl_account_type", table_name="gl_account")
    op.drop_table("gl_account")
