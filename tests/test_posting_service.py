from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base
from app.platform.ledger.accounts import account_directory
from app.platform.ledger.errors import DatabaseError, NotFoundError, ValidationError
from app.platform.ledger.models import JournalEntry, JournalEntryLine
from app.platform.ledger.periods import fiscal_period_registry
from app.platform.ledger.schemas import FiscalPeriodCreate, JournalEntryCreate
from app.platform.ledger.service import PostingService


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
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


@pytest.fixture()
def service() -> PostingService:
    return PostingService()


def _account(session: Session, number: str) -> int:
    return account_directory.resolve_account_id(session, number)


def _cash_sale(session: Session, amount: str = "100", credit: str | None = None, **overrides) -> JournalEntryCreate:
    payload = {
        "entry_date": date(2024, 3, 1),
        "description": "Lunch service",
        "lines": [
            {"account_id": _account(session, "1000"), "debit": amount},
            {"account_id": _account(session, "4000"), "credit": credit or amount},
        ],
    }
    payload.update(overrides)
    return JournalEntryCreate.model_validate(payload)


def _entry_count(session: Session) -> tuple[int, int]:
    entries = session.scalar(select(func.count()).select_from(JournalEntry)) or 0
    lines = session.scalar(select(func.count()).select_from(JournalEntryLine)) or 0
    return entries, lines


def test_posts_balanced_entry_with_lines(db_session: Session, service: PostingService) -> None:
    posted = service.create_journal_entry(db_session, _cash_sale(db_session))

    assert posted.id > 0
    assert posted.entry_date == date(2024, 3, 1)
    assert [line.debit for line in posted.lines] == [Decimal("100.00"), Decimal("0.00")]
    assert [line.credit for line in posted.lines] == [Decimal("0.00"), Decimal("100.00")]
    assert posted.fiscal_period_id is None
    assert _entry_count(db_session) == (1, 2)


def test_rejects_unbalanced_entry_with_diff(db_session: Session, service: PostingService) -> None:
    with pytest.raises(ValidationError) as exc_info:
        service.create_journal_entry(db_session, _cash_sale(db_session, "100", credit="99.99"))

    assert exc_info.value.message == "entry not balanced"
    assert exc_info.value.details["diff"] == Decimal("0.01")
    assert _entry_count(db_session) == (0, 0)


@pytest.mark.parametrize("amount", ["1e30", "10000000000", "9999999999.995"])
def test_rejects_amounts_beyond_storage_range(db_session: Session, service: PostingService, amount: str) -> None:
    with pytest.raises(ValidationError) as exc_info:
        service.create_journal_entry(db_session, _cash_sale(db_session, amount))

    assert exc_info.value.message == "line amount out of range"
    assert exc_info.value.details == {"line_index": 0}
    assert _entry_count(db_session) == (0, 0)


def test_largest_storable_amount_posts(db_session: Session, service: PostingService) -> None:
    posted = service.create_journal_entry(db_session, _cash_sale(db_session, "9999999999.99"))

    assert posted.lines[0].debit == Decimal("9999999999.99")


def test_sub_cent_lines_are_rounded_before_balancing(db_session: Session, service: PostingService) -> None:
    request = JournalEntryCreate.model_validate(
        {
            "entry_date": date(2024, 3, 1),
            "description": "Split tips",
            "lines": [
                {"account_id": _account(db_session, "5000"), "debit": "0.005"},
                {"account_id": _account(db_session, "5010"), "debit": "0.005"},
                {"account_id": _account(db_session, "5000"), "debit": "0.005"},
                {"account_id": _account(db_session, "1000"), "credit": "0.015"},
            ],
        }
    )

    with pytest.raises(ValidationError) as exc_info:
        service.create_journal_entry(db_session, request)

    assert exc_info.value.details["total_debit"] == Decimal("0.03")
    assert exc_info.value.details["total_credit"] == Decimal("0.02")
    assert exc_info.value.details["diff"] == Decimal("0.01")


def test_posts_three_line_entry(db_session: Session, service: PostingService) -> None:
    request = JournalEntryCreate.model_validate(
        {
            "entry_date": date(2024, 3, 1),
            "description": "Produce delivery",
            "lines": [
                {"account_id": _account(db_session, "5000"), "debit": "60"},
                {"account_id": _account(db_session, "5010"), "debit": "40"},
                {"account_id": _account(db_session, "1000"), "credit": "100"},
            ],
        }
    )

    posted = service.create_journal_entry(db_session, request)

    assert len(posted.lines) == 3
    assert sum(line.debit for line in posted.lines) == sum(line.credit for line in posted.lines) == Decimal("100.00")


def test_rejects_posting_into_closed_period(db_session: Session, service: PostingService) -> None:
    period = fiscal_period_registry.open_period(
        db_session,
        FiscalPeriodCreate(period_type="month", start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)),
    )
    fiscal_period_registry.close(db_session, period.id, closed_by="controller")

    with pytest.raises(ValidationError, match="fiscal period is closed"):
        service.create_journal_entry(db_session, _cash_sale(db_session))

    assert _entry_count(db_session) == (0, 0)


def test_open_covering_period_is_stamped_on_entry(db_session: Session, service: PostingService) -> None:
    period = fiscal_period_registry.open_period(
        db_session,
        FiscalPeriodCreate(period_type="month", start_date=date(2024, 3, 1), end_date=date(2024, 3, 31)),
    )

    posted = service.create_journal_entry(db_session, _cash_sale(db_session))

    assert posted.fiscal_period_id == period.id


def test_explicit_period_is_checked_instead_of_date(db_session: Session, service: PostingService) -> None:
    february = fiscal_period_registry.open_period(
        db_session,
        FiscalPeriodCreate(period_type="month", start_date=date(2024, 2, 1), end_date=date(2024, 2, 29)),
    )
    fiscal_period_registry.close(db_session, february.id)

    with pytest.raises(ValidationError, match="fiscal period is closed"):
        service.create_journal_entry(db_session, _cash_sale(db_session, fiscal_period_id=february.id))

    with pytest.raises(NotFoundError, match="Fiscal period not found"):
        service.create_journal_entry(db_session, _cash_sale(db_session, fiscal_period_id=9999))


@pytest.mark.parametrize(
    "lines",
    [
        [],
        [{"debit": "10"}],
    ],
)
def test_rejects_fewer_than_two_lines(db_session: Session, service: PostingService, lines: list[dict]) -> None:
    cash_id = _account(db_session, "1000")
    request = JournalEntryCreate.model_validate(
        {
            "entry_date": date(2024, 3, 1),
            "description": "Short entry",
            "lines": [{"account_id": cash_id, **line} for line in lines],
        }
    )

    with pytest.raises(ValidationError, match="needs at least 2 lines"):
        service.create_journal_entry(db_session, request)


@pytest.mark.parametrize(
    ("debit", "credit"),
    [
        ("10", "10"),
        ("0", "0"),
        ("-10", "0"),
        (None, "10"),
        ("0.004", "0"),
    ],
)
def test_rejects_lines_that_are_not_single_sided(
    db_session: Session,
    service: PostingService,
    debit: str | None,
    credit: str | None,
) -> None:
    request = JournalEntryCreate.model_validate(
        {
            "entry_date": date(2024, 3, 1),
            "description": "Bad line",
            "lines": [
                {"account_id": _account(db_session, "1000"), "debit": debit, "credit": credit},
                {"account_id": _account(db_session, "4000"), "credit": "10"},
            ],
        }
    )

    with pytest.raises(ValidationError) as exc_info:
        service.create_journal_entry(db_session, request)

    assert exc_info.value.details == {"line_index": 0}
    assert _entry_count(db_session) == (0, 0)


def test_amounts_are_rounded_to_cents_before_balancing(db_session: Session, service: PostingService) -> None:
    posted = service.create_journal_entry(db_session, _cash_sale(db_session, "10.005", credit="10.01"))

    assert posted.lines[0].debit == Decimal("10.01")
    assert posted.lines[1].credit == Decimal("10.01")


def test_rejects_unknown_account_before_writing(db_session: Session, service: PostingService) -> None:
    request = JournalEntryCreate.model_validate(
        {
            "entry_date": date(2024, 3, 1),
            "description": "Ghost account",
            "lines": [
                {"account_id": 99999, "debit": "5"},
                {"account_id": _account(db_session, "4000"), "credit": "5"},
            ],
        }
    )

    with pytest.raises(NotFoundError) as exc_info:
        service.create_journal_entry(db_session, request)

    assert exc_info.value.resource == "Account 99999"
    assert _entry_count(db_session) == (0, 0)


def test_store_failure_rolls_back_whole_entry(
    db_session: Session,
    service: PostingService,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def failing_flush(*args, **kwargs) -> None:
        raise OperationalError("INSERT INTO gl_journal_entry_line", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "flush", failing_flush)

    with pytest.raises(DatabaseError) as exc_info:
        service.create_journal_entry(db_session, _cash_sale(db_session))

    assert isinstance(exc_info.value.original, OperationalError)
    monkeypatch.undo()
    assert _entry_count(db_session) == (0, 0)


def test_foreign_key_violation_maps_to_not_found(
    db_session: Session,
    service: PostingService,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def failing_flush(*args, **kwargs) -> None:
        raise IntegrityError("INSERT INTO gl_journal_entry_line", {}, Exception("FOREIGN KEY constraint failed"))

    monkeypatch.setattr(db_session, "flush", failing_flush)

    with pytest.raises(NotFoundError):
        service.create_journal_entry(db_session, _cash_sale(db_session))

    monkeypatch.undo()
    assert _entry_count(db_session) == (0, 0)


def test_created_by_prefers_request_value(db_session: Session, service: PostingService) -> None:
    from_actor = service.create_journal_entry(db_session, _cash_sale(db_session), created_by="pos-sync")
    from_request = service.create_journal_entry(
        db_session,
        _cash_sale(db_session, created_by="night-manager"),
        created_by="pos-sync",
    )

    assert from_actor.created_by == "pos-sync"
    assert from_request.created_by == "night-manager"


def test_reference_and_flags_are_persisted(db_session: Session, service: PostingService) -> None:
    posted = service.create_journal_entry(
        db_session,
        _cash_sale(db_session, reference_type="daily_sales", reference_id=42, is_adjusting=True),
    )

    fetched = service.get_entry(db_session, posted.id)
    assert fetched.reference_type == "daily_sales"
    assert fetched.reference_id == 42
    assert fetched.is_adjusting is True
    assert fetched.is_closing is False


def test_get_entry_raises_for_unknown_id(db_session: Session, service: PostingService) -> None:
    with pytest.raises(NotFoundError, match="Journal entry not found"):
        service.get_entry(db_session, 12345)


def test_list_entries_newest_first_with_pagination(db_session: Session, service: PostingService) -> None:
    for day in (1, 2, 3):
        service.create_journal_entry(db_session, _cash_sale(db_session, entry_date=date(2024, 3, day)))

    page = service.list_entries(db_session, limit=2, offset=0)
    assert [entry.entry_date.day for entry in page.entries] == [3, 2]
    assert page.pagination.total == 3

    filtered = service.list_entries(db_session, start_date=date(2024, 3, 2), end_date=date(2024, 3, 2))
    assert [entry.entry_date.day for entry in filtered.entries] == [2]
    assert filtered.pagination.total == 1


def test_posting_logs_entry_id(db_session: Session, service: PostingService, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    posted = service.create_journal_entry(db_session, _cash_sale(db_session, reference_type="daily_sales", reference_id=7))

    records = [record for record in caplog.records if record.getMessage() == "ledger.entry.posted"]
    assert records
    assert getattr(records[-1], "journal_entry_id", None) == posted.id
    assert getattr(records[-1], "line_count", None) == 2
    assert getattr(records[-1], "reference_type", None) == "daily_sales"


def test_rejection_logs_reason(db_session: Session, service: PostingService, caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)

    with pytest.raises(ValidationError):
        service.create_journal_entry(db_session, _cash_sale(db_session, "100", credit="99.99"))

    assert any(
        record.getMessage() == "ledger.entry.rejected" and getattr(record, "reason", None) == "unbalanced_entry"
        for record in caplog.records
    )
