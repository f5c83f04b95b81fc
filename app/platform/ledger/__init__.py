from app.platform.ledger.accounts import AccountDirectory, account_directory
from app.platform.ledger.errors import DatabaseError, LedgerError, NotFoundError, ValidationError
from app.platform.ledger.models import Account, FiscalPeriod, JournalEntry, JournalEntryLine
from app.platform.ledger.periods import FiscalPeriodRegistry, fiscal_period_registry
from app.platform.ledger.schemas import (
    AccountRead,
    FiscalPeriodCreate,
    FiscalPeriodRead,
    JournalEntryCreate,
    JournalEntryRead,
    JournalLineInput,
)
from app.platform.ledger.service import PostingService, posting_service

__all__ = [
    "Account",
    "FiscalPeriod",
    "JournalEntry",
    "JournalEntryLine",
    "AccountRead",
    "FiscalPeriodCreate",
    "FiscalPeriodRead",
    "JournalEntryCreate",
    "JournalEntryRead",
    "JournalLineInput",
    "LedgerError",
    "ValidationError",
    "NotFoundError",
    "DatabaseError",
    "AccountDirectory",
    "account_directory",
    "FiscalPeriodRegistry",
    "fiscal_period_registry",
    "PostingService",
    "posting_service",
]
