from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel

from app.platform.ledger.schemas import AccountRead


class LedgerQueryRead(BaseModel):
    start_date: date | None
    end_date: date | None
    limit: int
    offset: int


class AccountLedgerLine(BaseModel):
    journal_entry_id: int
    entry_date: date
    entry_description: str
    reference_type: str | None
    reference_id: int | None
    line_id: int
    debit: Decimal
    credit: Decimal
    line_description: str | None
    running_balance: Decimal


class AccountLedgerRead(BaseModel):
    account: AccountRead
    query: LedgerQueryRead
    lines: list[AccountLedgerLine]


class TrialBalanceRow(BaseModel):
    account_id: int
    account_number: str
    name: str
    account_type: str
    sub_type: str | None
    total_debits: Decimal
    total_credits: Decimal
    balance: Decimal


class TrialBalanceTotals(BaseModel):
    total_debits: Decimal
    total_credits: Decimal
    difference: Decimal


class TrialBalanceReportRead(BaseModel):
    as_of_date: date
    totals: TrialBalanceTotals
    accounts: list[TrialBalanceRow]


class StatementRow(BaseModel):
    account_id: int
    account_number: str
    name: str
    account_type: str
    debits: Decimal
    credits: Decimal


class IncomeStatementRow(StatementRow):
    net: Decimal


class BalanceSheetRow(StatementRow):
    balance: Decimal


class StatementPeriod(BaseModel):
    start_date: date
    end_date: date


class IncomeStatementTotals(BaseModel):
    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal


class IncomeStatementReportRead(BaseModel):
    period: StatementPeriod
    revenue: list[IncomeStatementRow]
    expenses: list[IncomeStatementRow]
    totals: IncomeStatementTotals


class BalanceSheetTotals(BaseModel):
    total_assets: Decimal
    total_liabilities: Decimal
    total_equity: Decimal
    liabilities_plus_equity: Decimal
    difference: Decimal


class BalanceSheetReportRead(BaseModel):
    as_of_date: date
    assets: list[BalanceSheetRow]
    liabilities: list[BalanceSheetRow]
    equity: list[BalanceSheetRow]
    totals: BalanceSheetTotals
