from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.business.reporting.finance.schemas import (
    BalanceSheetReportRead,
    IncomeStatementReportRead,
    TrialBalanceReportRead,
)
from app.business.reporting.finance.service import ledger_reporting_service
from app.core.database import get_db


router = APIRouter(prefix="/ledger/reports", tags=["ledger-reports"])


@router.get("/trial-balance", response_model=TrialBalanceReportRead)
def trial_balance(
    as_of_date: date | None = Query(default=None),
    include_zero_balances: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> TrialBalanceReportRead:
    return ledger_reporting_service.trial_balance(
        db,
        as_of_date=as_of_date,
        include_zero_balances=include_zero_balances,
    )


@router.get("/income-statement", response_model=IncomeStatementReportRead)
def income_statement(
    start_date: date = Query(),
    end_date: date = Query(),
    db: Session = Depends(get_db),
) -> IncomeStatementReportRead:
    return ledger_reporting_service.income_statement(db, start_date=start_date, end_date=end_date)


@router.get("/balance-sheet", response_model=BalanceSheetReportRead)
def balance_sheet(
    as_of_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
) -> BalanceSheetReportRead:
    return ledger_reporting_service.balance_sheet(db, as_of_date=as_of_date or date.today())
