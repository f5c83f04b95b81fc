from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from opentelemetry import trace
from sqlalchemy import Select, and_, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.metrics import (
    observe_ledger_entries_posted,
    observe_ledger_lines_posted,
    observe_ledger_post_failure,
)
from app.platform.ledger.errors import DatabaseError, LedgerError, NotFoundError, ValidationError
from app.platform.ledger.models import Account, FiscalPeriod, JournalEntry, JournalEntryLine
from app.platform.ledger.periods import FiscalPeriodRegistry, fiscal_period_registry
from app.platform.ledger.schemas import (
    JournalEntryCreate,
    JournalEntryPage,
    JournalEntryRead,
    JournalLineInput,
    Pagination,
)


logger = logging.getLogger("app.ledger.posting")
tracer = trace.get_tracer("app.ledger.posting")

CENT = Decimal("0.01")
# Smallest value that no longer fits Numeric(12, 2) once rounded to cents.
MAX_LINE_AMOUNT = Decimal("9999999999.995")


def to_cents(value: Decimal) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(slots=True)
class PostingService:
    """Validates and commits balanced journal entries.

    Every check runs before anything is added to the session, and the entry
    and its lines are committed in a single transaction, so a rejected or
    failed posting never leaves a partial entry behind.
    """

    period_registry: FiscalPeriodRegistry = field(default_factory=lambda: fiscal_period_registry)

    def create_journal_entry(
        self,
        session: Session,
        request: JournalEntryCreate,
        *,
        created_by: str | None = None,
    ) -> JournalEntryRead:
        """Post one balanced entry.

        Each line amount is rounded to cents (half up) before the balance
        check, so sub-cent inputs are compared as stored: three debits of
        0.005 against a credit of 0.015 become 0.03 against 0.02 and are
        rejected.
        """
        with tracer.start_as_current_span("ledger.post_entry") as span:
            span.set_attribute("ledger.line_count", len(request.lines))
            span.set_attribute("ledger.entry_date", request.entry_date.isoformat())
            try:
                entry = self._post(session, request, created_by)
            except LedgerError as exc:
                span.set_attribute("ledger.rejected", exc.message)
                raise
            span.set_attribute("ledger.journal_entry_id", entry.id)
            return entry

    def get_entry(self, session: Session, entry_id: int) -> JournalEntryRead:
        entry = session.scalar(
            select(JournalEntry).where(JournalEntry.id == entry_id).options(selectinload(JournalEntry.lines))
        )
        if entry is None:
            raise NotFoundError("Journal entry")
        return JournalEntryRead.model_validate(entry)

    def list_entries(
        self,
        session: Session,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> JournalEntryPage:
        conditions = []
        if start_date is not None:
            conditions.append(JournalEntry.entry_date >= start_date)
        if end_date is not None:
            conditions.append(JournalEntry.entry_date <= end_date)

        stmt: Select[tuple[JournalEntry]] = select(JournalEntry).options(selectinload(JournalEntry.lines))
        count_stmt = select(func.count()).select_from(JournalEntry)
        if conditions:
            stmt = stmt.where(and_(*conditions))
            count_stmt = count_stmt.where(and_(*conditions))

        rows = session.scalars(
            stmt.order_by(JournalEntry.entry_date.desc(), JournalEntry.id.desc()).limit(limit).offset(offset)
        ).all()
        total = session.scalar(count_stmt) or 0
        return JournalEntryPage(
            entries=[JournalEntryRead.model_validate(row) for row in rows],
            pagination=Pagination(limit=limit, offset=offset, total=total),
        )

    def _post(self, session: Session, request: JournalEntryCreate, created_by: str | None) -> JournalEntryRead:
        if len(request.lines) < 2:
            raise self._reject("too_few_lines", ValidationError("needs at least 2 lines", details={"line_count": len(request.lines)}))

        line_rows: list[dict[str, Any]] = []
        debit_total = Decimal("0")
        credit_total = Decimal("0")
        for index, line in enumerate(request.lines):
            if not self._within_range(line):
                raise self._reject(
                    "amount_out_of_range",
                    ValidationError("line amount out of range", details={"line_index": index}),
                )
            amounts = self._line_amounts(line)
            if amounts is None:
                raise self._reject(
                    "invalid_line_side",
                    ValidationError("line must be debit-only or credit-only", details={"line_index": index}),
                )
            debit, credit = amounts
            debit_total += debit
            credit_total += credit
            line_rows.append(
                {
                    "account_id": line.account_id,
                    "debit": debit,
                    "credit": credit,
                    "description": line.description,
                }
            )

        diff = to_cents(debit_total - credit_total)
        if diff != 0:
            raise self._reject(
                "unbalanced_entry",
                ValidationError(
                    "entry not balanced",
                    details={"diff": diff, "total_debit": debit_total, "total_credit": credit_total},
                ),
            )

        period = self._resolve_period(session, request)
        if period is not None and period.is_closed:
            raise self._reject(
                "period_closed",
                ValidationError("fiscal period is closed", details={"fiscal_period_id": period.id}),
            )

        account_ids = {row["account_id"] for row in line_rows}
        known_ids = set(session.scalars(select(Account.id).where(Account.id.in_(account_ids))).all())
        missing = sorted(account_ids - known_ids)
        if missing:
            raise self._reject("account_not_found", NotFoundError(f"Account {', '.join(str(item) for item in missing)}"))

        entry = JournalEntry(
            entry_date=request.entry_date,
            description=request.description,
            reference_type=request.reference_type,
            reference_id=request.reference_id,
            is_adjusting=request.is_adjusting,
            is_closing=request.is_closing,
            fiscal_period_id=period.id if period is not None else None,
            created_by=request.created_by or created_by,
        )
        entry.lines = [JournalEntryLine(**row) for row in line_rows]
        session.add(entry)

        try:
            session.flush()
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            if "foreign key" in str(exc.orig).lower():
                raise self._reject("account_not_found", NotFoundError("Account")) from exc
            raise self._reject("db_error", DatabaseError("failed to persist journal entry", original=exc)) from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise self._reject("db_error", DatabaseError("failed to persist journal entry", original=exc)) from exc

        posted = session.scalar(
            select(JournalEntry).where(JournalEntry.id == entry.id).options(selectinload(JournalEntry.lines))
        )
        if posted is None:
            raise self._reject("reload_error", DatabaseError("journal entry reload failed"))

        observe_ledger_entries_posted()
        observe_ledger_lines_posted(len(posted.lines))
        logger.info(
            "ledger.entry.posted",
            extra={
                "journal_entry_id": posted.id,
                "entry_date": posted.entry_date.isoformat(),
                "reference_type": posted.reference_type,
                "reference_id": posted.reference_id,
                "line_count": len(posted.lines),
                "fiscal_period_id": posted.fiscal_period_id,
            },
        )
        return JournalEntryRead.model_validate(posted)

    def _resolve_period(self, session: Session, request: JournalEntryCreate) -> FiscalPeriod | None:
        if request.fiscal_period_id is not None:
            try:
                return self.period_registry.get_period(session, request.fiscal_period_id)
            except NotFoundError as exc:
                raise self._reject("period_not_found", exc)
        return self.period_registry.find_period_covering(session, request.entry_date)

    @staticmethod
    def _within_range(line: JournalLineInput) -> bool:
        for value in (line.debit, line.credit):
            if value is not None and value.is_finite() and abs(value) >= MAX_LINE_AMOUNT:
                return False
        return True

    @staticmethod
    def _line_amounts(line: JournalLineInput) -> tuple[Decimal, Decimal] | None:
        if line.debit is None or line.credit is None:
            return None
        if not (line.debit.is_finite() and line.credit.is_finite()):
            return None
        debit = to_cents(line.debit)
        credit = to_cents(line.credit)
        if debit < 0 or credit < 0:
            return None
        if (debit > 0) == (credit > 0):
            return None
        return debit, credit

    @staticmethod
    def _reject(reason: str, exc: LedgerError) -> LedgerError:
        observe_ledger_post_failure(reason)
        logger.warning("ledger.entry.rejected", extra={"reason": reason, "error": exc.message})
        return exc


posting_service = PostingService()
