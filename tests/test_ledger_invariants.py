from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from decimal import Decimal

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.business.reporting.finance.service import ledger_reporting_service
from app.core.database import Base
from app.platform.ledger.accounts import account_directory
from app.platform.ledger.errors import ValidationError
from app.platform.ledger.models import JournalEntry
from app.platform.ledger.schemas import JournalEntryCreate
from app.platform.ledger.service import posting_service


amounts = st.decimals(
    min_value=Decimal("0.01"),
    max_value=Decimal("99999.99"),
    places=2,
    allow_nan=False,
    allow_infinity=False,
)

EXPENSE_ACCOUNTS = ("5000", "5010", "6000", "7000", "9200")
BALANCE_SHEET_ACCOUNTS = ("1000", "1200", "1500", "2000", "2500", "3000", "3100")


@contextmanager
def ledger_session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    account_directory.seed_chart_of_accounts(session)
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _entry(session: Session, lines: list[tuple[str, str, Decimal]]) -> JournalEntryCreate:
    return JournalEntryCreate.model_validate(
        {
            "entry_date": date(2024, 3, 1),
            "description": "generated",
            "lines": [
                {"account_id": account_directory.resolve_account_id(session, number), side: amount}
                for number, side, amount in lines
            ],
        }
    )


def _entry_count(session: Session) -> int:
    return session.scalar(select(func.count()).select_from(JournalEntry)) or 0


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(debits=st.lists(st.tuples(st.sampled_from(EXPENSE_ACCOUNTS), amounts), min_size=1, max_size=6))
def test_balanced_entries_keep_trial_balance_even(debits: list[tuple[str, Decimal]]) -> None:
    total = sum((amount for _, amount in debits), Decimal("0"))
    lines = [(number, "debit", amount) for number, amount in debits] + [("1000", "credit", total)]

    with ledger_session() as session:
        posting_service.create_journal_entry(session, _entry(session, lines))
        report = ledger_reporting_service.trial_balance(session, as_of_date=date(2024, 3, 1))

    assert report.totals.total_debits == total
    assert report.totals.total_credits == total
    assert report.totals.difference == Decimal("0.00")


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(amount=amounts, skew=st.integers(min_value=1, max_value=500).map(lambda cents: Decimal(cents) / 100))
def test_unbalanced_entries_never_persist(amount: Decimal, skew: Decimal) -> None:
    lines = [("1000", "debit", amount), ("4000", "credit", amount + skew)]

    with ledger_session() as session:
        with pytest.raises(ValidationError) as exc_info:
            posting_service.create_journal_entry(session, _entry(session, lines))
        assert _entry_count(session) == 0

    assert exc_info.value.details["diff"] == -skew


@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(debit=amounts, credit=amounts)
def test_double_sided_lines_are_rejected(debit: Decimal, credit: Decimal) -> None:
    with ledger_session() as session:
        request = JournalEntryCreate.model_validate(
            {
                "entry_date": date(2024, 3, 1),
                "description": "generated",
                "lines": [
                    {"account_id": account_directory.resolve_account_id(session, "1000"), "debit": debit, "credit": credit},
                    {"account_id": account_directory.resolve_account_id(session, "4000"), "credit": debit},
                ],
            }
        )
        with pytest.raises(ValidationError):
            posting_service.create_journal_entry(session, request)
        assert _entry_count(session) == 0


@settings(max_examples=20, deadline=None, suppress_health_check=[HealthCheck.too_slow])
@given(
    postings=st.lists(
        st.tuples(st.sampled_from(BALANCE_SHEET_ACCOUNTS), st.sampled_from(BALANCE_SHEET_ACCOUNTS), amounts),
        min_size=1,
        max_size=5,
    )
)
def test_balance_sheet_only_postings_always_balance(postings: list[tuple[str, str, Decimal]]) -> None:
    with ledger_session() as session:
        for debit_account, credit_account, amount in postings:
            posting_service.create_journal_entry(
                session,
                _entry(session, [(debit_account, "debit", amount), (credit_account, "credit", amount)]),
            )
        report = ledger_reporting_service.balance_sheet(session, as_of_date=date(2024, 3, 31))

    assert report.totals.difference == Decimal("0.00")
