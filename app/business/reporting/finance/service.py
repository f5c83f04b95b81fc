from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from opentelemetry import trace
from sqlalchemy import ColumnElement, Subquery, func, select
from sqlalchemy.orm import Session

from app.business.reporting.finance.schemas import (
    AccountLedgerLine,
    AccountLedgerRead,
    BalanceSheetReportRead,
    BalanceSheetRow,
    BalanceSheetTotals,
    IncomeStatementReportRead,
    IncomeStatementRow,
    IncomeStatementTotals,
    LedgerQueryRead,
    StatementPeriod,
    TrialBalanceReportRead,
    TrialBalanceRow,
    TrialBalanceTotals,
)
from app.metrics import observe_ledger_report
from app.platform.ledger.accounts import AccountDirectory, account_directory
from app.platform.ledger.models import Account, JournalEntry, JournalEntryLine
from app.platform.ledger.schemas import AccountRead
from app.platform.ledger.service import to_cents


tracer = trace.get_tracer("app.ledger.reports")

_ZERO = Decimal("0")


@dataclass(slots=True)
class LedgerReportingService:
    """Read-only views derived from journal lines at query time.

    Nothing here caches or materializes balances: every report aggregates the
    committed lines as they are when the query runs.
    """

    accounts: AccountDirectory = field(default_factory=lambda: account_directory)

    def account_ledger(
        self,
        session: Session,
        account_id: int,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> AccountLedgerRead:
        """Lines posted to one account, newest first.

        ``running_balance`` accumulates ``debit - credit`` over the returned
        window only, oldest line first; it is not the account's true balance
        when the window does not start at the first posting.
        """
        with self._report("account_ledger"):
            account = self.accounts.get_account(session, account_id)

            stmt = (
                select(JournalEntryLine, JournalEntry)
                .join(JournalEntry, JournalEntry.id == JournalEntryLine.journal_entry_id)
                .where(JournalEntryLine.account_id == account_id)
            )
            if start_date is not None:
                stmt = stmt.where(JournalEntry.entry_date >= start_date)
            if end_date is not None:
                stmt = stmt.where(JournalEntry.entry_date <= end_date)

            rows = session.execute(
                stmt.order_by(JournalEntry.entry_date.desc(), JournalEntryLine.id.desc()).limit(limit).offset(offset)
            ).all()

            running = _ZERO
            chronological: list[AccountLedgerLine] = []
            for line, entry in reversed(rows):
                debit = _amount(line.debit)
                credit = _amount(line.credit)
                running += debit - credit
                chronological.append(
                    AccountLedgerLine(
                        journal_entry_id=entry.id,
                        entry_date=entry.entry_date,
                        entry_description=entry.description,
                        reference_type=entry.reference_type,
                        reference_id=entry.reference_id,
                        line_id=line.id,
                        debit=debit,
                        credit=credit,
                        line_description=line.description,
                        running_balance=to_cents(running),
                    )
                )

            return AccountLedgerRead(
                account=AccountRead.model_validate(account),
                query=LedgerQueryRead(start_date=start_date, end_date=end_date, limit=limit, offset=offset),
                lines=list(reversed(chronological)),
            )

    def trial_balance(
        self,
        session: Session,
        *,
        as_of_date: date | None = None,
        include_zero_balances: bool = False,
    ) -> TrialBalanceReportRead:
        target_date = as_of_date or date.today()
        with self._report("trial_balance"):
            totals = _line_totals(JournalEntry.entry_date <= target_date)
            records = session.execute(
                select(Account, func.coalesce(totals.c.debits, 0), func.coalesce(totals.c.credits, 0))
                .outerjoin(totals, totals.c.account_id == Account.id)
                .order_by(Account.account_number.asc())
            ).all()

            rows: list[TrialBalanceRow] = []
            debit_total = _ZERO
            credit_total = _ZERO
            for account, debits, credits in records:
                debit = _amount(debits)
                credit = _amount(credits)
                balance = debit - credit
                if balance == 0 and not include_zero_balances:
                    continue
                debit_total += debit
                credit_total += credit
                rows.append(
                    TrialBalanceRow(
                        account_id=account.id,
                        account_number=account.account_number,
                        name=account.name,
                        account_type=account.account_type,
                        sub_type=account.sub_type,
                        total_debits=debit,
                        total_credits=credit,
                        balance=balance,
                    )
                )

            return TrialBalanceReportRead(
                as_of_date=target_date,
                totals=TrialBalanceTotals(
                    total_debits=to_cents(debit_total),
                    total_credits=to_cents(credit_total),
                    difference=to_cents(debit_total - credit_total),
                ),
                accounts=rows,
            )

    def income_statement(self, session: Session, *, start_date: date, end_date: date) -> IncomeStatementReportRead:
        with self._report("income_statement"):
            totals = _line_totals(JournalEntry.entry_date >= start_date, JournalEntry.entry_date <= end_date)
            records = session.execute(
                select(Account, totals.c.debits, totals.c.credits)
                .join(totals, totals.c.account_id == Account.id)
                .where(Account.account_type.in_(("revenue", "expense")))
                .order_by(Account.account_number.asc())
            ).all()

            revenue: list[IncomeStatementRow] = []
            expenses: list[IncomeStatementRow] = []
            total_revenue = _ZERO
            total_expenses = _ZERO
            for account, debits, credits in records:
                debit, credit, net = _normal_amounts(debits, credits, credit_normal=account.account_type == "revenue")
                row = IncomeStatementRow(**_account_columns(account), debits=debit, credits=credit, net=net)
                if account.account_type == "revenue":
                    revenue.append(row)
                    total_revenue += row.net
                else:
                    expenses.append(row)
                    total_expenses += row.net

            return IncomeStatementReportRead(
                period=StatementPeriod(start_date=start_date, end_date=end_date),
                revenue=revenue,
                expenses=expenses,
                totals=IncomeStatementTotals(
                    total_revenue=to_cents(total_revenue),
                    total_expenses=to_cents(total_expenses),
                    net_income=to_cents(total_revenue - total_expenses),
                ),
            )

    def balance_sheet(self, session: Session, *, as_of_date: date) -> BalanceSheetReportRead:
        with self._report("balance_sheet"):
            totals = _line_totals(JournalEntry.entry_date <= as_of_date)
            records = session.execute(
                select(Account, func.coalesce(totals.c.debits, 0), func.coalesce(totals.c.credits, 0))
                .outerjoin(totals, totals.c.account_id == Account.id)
                .where(Account.account_type.in_(("asset", "liability", "equity")))
                .order_by(Account.account_number.asc())
            ).all()

            sections: dict[str, list[BalanceSheetRow]] = {"asset": [], "liability": [], "equity": []}
            section_totals: dict[str, Decimal] = {"asset": _ZERO, "liability": _ZERO, "equity": _ZERO}
            for account, debits, credits in records:
                debit, credit, balance = _normal_amounts(debits, credits, credit_normal=account.account_type != "asset")
                row = BalanceSheetRow(**_account_columns(account), debits=debit, credits=credit, balance=balance)
                sections[account.account_type].append(row)
                section_totals[account.account_type] += row.balance

            total_assets = section_totals["asset"]
            liabilities_plus_equity = section_totals["liability"] + section_totals["equity"]
            return BalanceSheetReportRead(
                as_of_date=as_of_date,
                assets=sections["asset"],
                liabilities=sections["liability"],
                equity=sections["equity"],
                totals=BalanceSheetTotals(
                    total_assets=to_cents(total_assets),
                    total_liabilities=to_cents(section_totals["liability"]),
                    total_equity=to_cents(section_totals["equity"]),
                    liabilities_plus_equity=to_cents(liabilities_plus_equity),
                    difference=to_cents(total_assets - liabilities_plus_equity),
                ),
            )

    @staticmethod
    @contextmanager
    def _report(name: str) -> Iterator[None]:
        started = time.perf_counter()
        with tracer.start_as_current_span(f"ledger.report.{name}"):
            try:
                yield
            finally:
                observe_ledger_report(name, time.perf_counter() - started)


def _line_totals(*conditions: ColumnElement[bool]) -> Subquery:
    return (
        select(
            JournalEntryLine.account_id.label("account_id"),
            func.coalesce(func.sum(JournalEntryLine.debit), 0).label("debits"),
            func.coalesce(func.sum(JournalEntryLine.credit), 0).label("credits"),
        )
        .join(JournalEntry, JournalEntry.id == JournalEntryLine.journal_entry_id)
        .where(*conditions)
        .group_by(JournalEntryLine.account_id)
        .subquery()
    )


def _amount(value: Any) -> Decimal:
    if value is None:
        return _ZERO
    return to_cents(Decimal(str(value)))


def _normal_amounts(debits: Any, credits: Any, *, credit_normal: bool) -> tuple[Decimal, Decimal, Decimal]:
    debit = _amount(debits)
    credit = _amount(credits)
    return debit, credit, (credit - debit if credit_normal else debit - credit)


def _account_columns(account: Account) -> dict[str, Any]:
    return {
        "account_id": account.id,
        "account_number": account.account_number,
        "name": account.name,
        "account_type": account.account_type,
    }


ledger_reporting_service = LedgerReportingService()
