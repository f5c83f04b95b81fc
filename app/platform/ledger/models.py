from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


ACCOUNT_TYPES = ("asset", "liability", "equity", "revenue", "expense")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "gl_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    account_type: Mapped[str] = mapped_column(String(20), nullable=False)
    sub_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    parent_account_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("gl_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    is_tax_deductible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    tax_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    lines: Mapped[list[JournalEntryLine]] = relationship("JournalEntryLine", back_populates="account")

    __table_args__ = (
        CheckConstraint(
            "account_type IN (" + ", ".join(f"'{item}'" for item in ACCOUNT_TYPES) + ")",
            name="ck_gl_account_type",
        ),
        Index("ix_gl_account_type", "account_type"),
    )


class FiscalPeriod(Base):
    __tablename__ = "gl_fiscal_period"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    period_name: Mapped[str] = mapped_column(String(100), nullable=False)
    period_type: Mapped[str] = mapped_column(String(20), nullable=False)
    start_date: Mapped[date] = mapped_column(Date(), nullable=False)
    end_date: Mapped[date] = mapped_column(Date(), nullable=False)
    is_closed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    closed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="ck_gl_fiscal_period_range"),
        Index("ix_gl_fiscal_period_range", "start_date", "end_date"),
    )


class JournalEntry(Base):
    __tablename__ = "gl_journal_entry"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    entry_date: Mapped[date] = mapped_column(Date(), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    reference_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_adjusting: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_closing: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    fiscal_period_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("gl_fiscal_period.id", ondelete="RESTRICT"),
        nullable=True,
    )
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    lines: Mapped[list[JournalEntryLine]] = relationship(
        "JournalEntryLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="JournalEntryLine.id",
    )

    __table_args__ = (
        Index("ix_gl_journal_entry_date", "entry_date"),
        Index("ix_gl_journal_entry_reference", "reference_type", "reference_id"),
    )


class JournalEntryLine(Base):
    __tablename__ = "gl_journal_entry_line"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    journal_entry_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("gl_journal_entry.id", ondelete="CASCADE"),
        nullable=False,
    )
    account_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("gl_account.id", ondelete="RESTRICT"),
        nullable=False,
    )
    debit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"), server_default="0")
    credit: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=Decimal("0"), server_default="0")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    entry: Mapped[JournalEntry] = relationship("JournalEntry", back_populates="lines")
    account: Mapped[Account] = relationship("Account", back_populates="lines")

    __table_args__ = (
        CheckConstraint("debit >= 0", name="ck_gl_line_debit_nonnegative"),
        CheckConstraint("credit >= 0", name="ck_gl_line_credit_nonnegative"),
        CheckConstraint(
            "((debit > 0 AND credit = 0) OR (credit > 0 AND debit = 0))",
            name="ck_gl_line_single_sided",
        ),
        Index("ix_gl_journal_entry_line_account", "account_id"),
        Index("ix_gl_journal_entry_line_entry", "journal_entry_id"),
    )
