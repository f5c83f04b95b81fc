from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.business.reporting.finance.schemas import AccountLedgerRead
from app.business.reporting.finance.service import ledger_reporting_service
from app.core.auth import AuthUser, get_current_user
from app.core.config import get_settings
from app.core.database import get_db
from app.platform.ledger.accounts import account_directory
from app.platform.ledger.errors import ValidationError
from app.platform.ledger.periods import fiscal_period_registry
from app.platform.ledger.schemas import (
    AccountIdRead,
    AccountRead,
    AccountType,
    FiscalPeriodCreate,
    FiscalPeriodRead,
    JournalEntryCreate,
    JournalEntryPage,
    JournalEntryRead,
)
from app.platform.ledger.service import posting_service


router = APIRouter(prefix="/ledger", tags=["ledger"])


def page_size(limit: int | None) -> int:
    settings = get_settings()
    if limit is None:
        return settings.ledger_default_page_size
    if limit > settings.ledger_max_page_size:
        raise ValidationError(
            f"limit must be at most {settings.ledger_max_page_size}",
            details={"limit": limit},
        )
    return limit


@router.post("/journal-entries", response_model=JournalEntryRead, status_code=status.HTTP_201_CREATED)
def post_journal_entry(
    payload: JournalEntryCreate,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
) -> JournalEntryRead:
    return posting_service.create_journal_entry(db, payload, created_by=user.actor)


@router.get("/journal-entries", response_model=JournalEntryPage)
def list_journal_entries(
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> JournalEntryPage:
    return posting_service.list_entries(
        db,
        start_date=start_date,
        end_date=end_date,
        limit=page_size(limit),
        offset=offset,
    )


@router.get("/journal-entries/{entry_id}", response_model=JournalEntryRead)
def get_journal_entry(entry_id: int, db: Session = Depends(get_db)) -> JournalEntryRead:
    return posting_service.get_entry(db, entry_id)


@router.get("/accounts", response_model=list[AccountRead])
def list_accounts(
    account_type: AccountType | None = Query(default=None),
    include_inactive: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> list[AccountRead]:
    return account_directory.list_accounts(db, account_type=account_type, active_only=not include_inactive)


@router.get("/accounts/by-number/{account_number}", response_model=AccountIdRead)
def resolve_account(account_number: str, db: Session = Depends(get_db)) -> AccountIdRead:
    account_id = account_directory.resolve_account_id(db, account_number)
    return AccountIdRead(account_number=account_number, account_id=account_id)


@router.get("/accounts/{account_id}/ledger", response_model=AccountLedgerRead)
def account_ledger(
    account_id: int,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> AccountLedgerRead:
    return ledger_reporting_service.account_ledger(
        db,
        account_id,
        start_date=start_date,
        end_date=end_date,
        limit=page_size(limit),
        offset=offset,
    )


@router.post("/seeds/chart-of-accounts", response_model=list[AccountRead])
def seed_chart_of_accounts(db: Session = Depends(get_db)) -> list[AccountRead]:
    return account_directory.seed_chart_of_accounts(db)


@router.post("/periods", response_model=FiscalPeriodRead, status_code=status.HTTP_201_CREATED)
def open_period(payload: FiscalPeriodCreate, db: Session = Depends(get_db)) -> FiscalPeriodRead:
    return fiscal_period_registry.open_period(db, payload)


@router.get("/periods", response_model=list[FiscalPeriodRead])
def list_periods(db: Session = Depends(get_db)) -> list[FiscalPeriodRead]:
    return fiscal_period_registry.list_periods(db)


@router.get("/periods/{period_id}", response_model=FiscalPeriodRead)
def get_period(period_id: int, db: Session = Depends(get_db)) -> FiscalPeriodRead:
    return FiscalPeriodRead.model_validate(fiscal_period_registry.get_period(db, period_id))


@router.post("/periods/{period_id}/close", response_model=FiscalPeriodRead)
def close_period(
    period_id: int,
    db: Session = Depends(get_db),
    user: AuthUser = Depends(get_current_user),
) -> FiscalPeriodRead:
    return fiscal_period_registry.close(db, period_id, closed_by=user.actor)


@router.post("/periods/{period_id}/reopen", response_model=FiscalPeriodRead)
def reopen_period(period_id: int, db: Session = Depends(get_db)) -> FiscalPeriodRead:
    return fiscal_period_registry.reopen(db, period_id)
